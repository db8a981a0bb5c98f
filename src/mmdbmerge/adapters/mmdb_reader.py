"""Read side of the MaxMind DB format, backed by ``maxminddb``."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

import maxminddb
from maxminddb import InvalidDatabaseError

from mmdbmerge.domain.errors import SourceOpenError, SourceReadError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from maxminddb.reader import Reader

    from mmdbmerge.domain.ports.database import NetworkRecord

log = logging.getLogger(__name__)


@contextmanager
def open_mmdb(path: Path) -> Iterator[Iterator[NetworkRecord]]:
    """Open ``path`` and yield a forward-only stream of its networks.

    IPv4 networks stored in an IPv6 tree are reported as IPv4 networks by
    ``maxminddb``; aliased subtrees are not repeated.
    """

    try:
        reader = maxminddb.open_database(str(path))
    except (OSError, ValueError, InvalidDatabaseError) as exc:
        raise SourceOpenError(path, exc) from exc

    metadata = reader.metadata()
    log.debug(
        "Opened MMDB file: %s (type=%s, ip_version=%s, nodes=%s)",
        path,
        metadata.database_type,
        metadata.ip_version,
        metadata.node_count,
    )
    try:
        yield _iter_networks(reader, path)
    finally:
        reader.close()


def _iter_networks(reader: Reader, path: Path) -> Iterator[NetworkRecord]:
    try:
        yield from reader
    except (InvalidDatabaseError, ValueError) as exc:
        raise SourceReadError(path, exc) from exc


__all__ = ["open_mmdb"]
