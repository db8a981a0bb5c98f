"""Ports for the trie-backed network database.

The merge core never sees the binary format. It reads sources as a lazy,
forward-only stream of ``(network, record)`` pairs and writes into a target
that only knows how to insert one network and serialise itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from ipaddress import IPv4Network, IPv6Network
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from contextlib import AbstractContextManager
    from pathlib import Path

Network = IPv4Network | IPv6Network
NetworkRecord = tuple[Network, Any]


@dataclass(frozen=True, slots=True)
class TreeOptions:
    """Settings for a freshly created target database."""

    database_type: str
    description: str
    languages: tuple[str, ...] = ("en",)
    ip_version: int = 6
    include_reserved_networks: bool = False


@runtime_checkable
class NetworkDatabase(Protocol):
    """Mutable, insertable target database.

    ``insert`` overwrites any record already stored for the same network and
    raises :class:`~mmdbmerge.domain.errors.ReservedNetworkError` when the
    database applies its own reserved-space policy, or
    :class:`~mmdbmerge.domain.errors.NetworkInsertError` for anything else.
    """

    def insert(self, network: Network, record: Mapping[str, Any]) -> None: ...

    def write(self, path: Path) -> int:
        """Serialise the database to ``path`` and return the bytes written."""
        ...


@runtime_checkable
class SourceOpener(Protocol):
    """Callable port opening a serialised database for reading."""

    def __call__(self, path: Path) -> AbstractContextManager[Iterable[NetworkRecord]]: ...


class TargetFactory(Protocol):
    def __call__(self, options: TreeOptions) -> NetworkDatabase: ...


__all__ = [
    "Network",
    "NetworkDatabase",
    "NetworkRecord",
    "SourceOpener",
    "TargetFactory",
    "TreeOptions",
]
