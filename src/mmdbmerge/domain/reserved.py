"""Reserved (non-routable) address space."""

from __future__ import annotations

from ipaddress import IPv4Address, IPv6Address, ip_network
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from mmdbmerge.domain.ports.database import Network

RESERVED_NETWORKS: Final = (
    ip_network("10.0.0.0/8"),  # RFC1918 private
    ip_network("172.16.0.0/12"),  # RFC1918 private
    ip_network("192.168.0.0/16"),  # RFC1918 private
    ip_network("fc00::/7"),  # RFC4193 unique local
    ip_network("fe80::/10"),  # link local
    ip_network("127.0.0.0/8"),  # loopback
    ip_network("::1/128"),  # loopback
    ip_network("169.254.0.0/16"),  # link local
    ip_network("0.0.0.0/8"),  # RFC1122 "this host on this network"
    ip_network("::/128"),  # unspecified
    ip_network("100.64.0.0/10"),  # RFC6598 shared address space
    ip_network("192.0.0.0/24"),  # RFC6890 IETF protocol assignments
    ip_network("192.0.2.0/24"),  # RFC5737 TEST-NET-1
    ip_network("198.51.100.0/24"),  # RFC5737 TEST-NET-2
    ip_network("203.0.113.0/24"),  # RFC5737 TEST-NET-3
    ip_network("224.0.0.0/4"),  # multicast
    ip_network("ff00::/8"),  # multicast
)


def is_reserved(address: IPv4Address | IPv6Address) -> bool:
    """Return ``True`` if ``address`` falls inside any reserved block."""

    if isinstance(address, IPv6Address) and address.ipv4_mapped is not None:
        address = address.ipv4_mapped
    return any(address in block for block in RESERVED_NETWORKS)


def is_reserved_network(network: Network) -> bool:
    """Classify ``network`` by its base address only.

    A prefix that merely overlaps a reserved block (a supernet whose base is
    routable) is not detected here.
    """

    return is_reserved(network.network_address)


__all__ = ["RESERVED_NETWORKS", "is_reserved", "is_reserved_network"]
