"""Write side of the MaxMind DB format, backed by ``mmdb_writer``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Final

from mmdb_writer import MMDBWriter
from netaddr import AddrFormatError, IPNetwork, IPSet

from mmdbmerge.domain.errors import NetworkInsertError, ReservedNetworkError, SerializationError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from mmdbmerge.domain.ports.database import Network, TreeOptions

log = logging.getLogger(__name__)

# IANA special-purpose space the writer refuses to store. A supernet that
# swallows any of these is stored without the reserved part.
WRITER_RESERVED_NETWORKS: Final[tuple[str, ...]] = (
    "0.0.0.0/8",
    "10.0.0.0/8",
    "100.64.0.0/10",
    "127.0.0.0/8",
    "169.254.0.0/16",
    "172.16.0.0/12",
    "192.0.0.0/29",
    "192.0.2.0/24",
    "192.88.99.0/24",
    "192.168.0.0/16",
    "198.18.0.0/15",
    "198.51.100.0/24",
    "203.0.113.0/24",
    "224.0.0.0/4",
    "240.0.0.0/4",
    "::/128",
    "::1/128",
    "100::/64",
    "2001::/23",
    "2001:db8::/32",
    "fc00::/7",
    "fe80::/10",
    "ff00::/8",
)


class MmdbTreeDatabase:
    """In-memory search tree that serialises to a ``.mmdb`` file.

    IPv4 networks are stored in the IPv4-compatible ``::/96`` subtree of the
    IPv6 tree. Re-inserting a network replaces its record, so the last source
    to supply a prefix wins.
    """

    def __init__(self, options: TreeOptions) -> None:
        self.options = options
        self._writer = MMDBWriter(
            ip_version=options.ip_version,
            database_type=options.database_type,
            languages=list(options.languages),
            description={language: options.description for language in options.languages},
            ipv4_compatible=options.ip_version == 6,
        )
        self._reserved: IPSet | None = None
        if not options.include_reserved_networks:
            self._reserved = IPSet(WRITER_RESERVED_NETWORKS)
        self.inserted = 0

    @classmethod
    def create(cls, options: TreeOptions) -> MmdbTreeDatabase:
        log.debug(
            "Creating writer: type=%s, description=%r, ip_version=%s",
            options.database_type,
            options.description,
            options.ip_version,
        )
        return cls(options)

    def insert(self, network: Network, record: Mapping[str, Any]) -> None:
        try:
            cidr = IPNetwork(str(network))
        except AddrFormatError as exc:
            raise NetworkInsertError(f"invalid network {network}: {exc}") from exc

        networks = IPSet([cidr])
        if self._reserved is not None:
            networks = networks - self._reserved
            if not networks:
                raise ReservedNetworkError(f"{network} lies inside reserved space")
            if networks.size != cidr.size:
                log.debug("Storing routable part of %s only", network)

        try:
            self._writer.insert_network(networks, dict(record))
        except ValueError as exc:
            raise NetworkInsertError(str(exc)) from exc
        self.inserted += 1

    def write(self, path: Path) -> int:
        try:
            self._writer.to_db_file(str(path))
            written = path.stat().st_size
        except (OSError, ValueError) as exc:
            raise SerializationError(path, exc) from exc
        log.debug("Wrote %d bytes to %s", written, path)
        return written


__all__ = ["WRITER_RESERVED_NETWORKS", "MmdbTreeDatabase"]
