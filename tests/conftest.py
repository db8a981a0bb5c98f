from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from mmdb_writer import MMDBWriter
from netaddr import IPSet

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path


@pytest.fixture
def mmdb_factory(tmp_path: Path) -> Callable[..., Path]:
    """Write a small source database and return its path."""

    def factory(
        name: str,
        networks: Mapping[str, Any],
        *,
        ip_version: int = 6,
        database_type: str = "Test-DB",
    ) -> Path:
        writer = MMDBWriter(
            ip_version=ip_version,
            database_type=database_type,
            languages=["en"],
            description=f"{name} test database",
            ipv4_compatible=ip_version == 6,
        )
        for cidr, record in networks.items():
            writer.insert_network(IPSet([cidr]), record)
        path = tmp_path / name
        writer.to_db_file(str(path))
        return path

    return factory
