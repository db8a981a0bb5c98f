"""Address-space accounting for merged networks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from mmdbmerge.domain.ports.database import Network

# Counts are reported as unsigned 64-bit values; anything this large or larger
# is recorded as 0 ("unknown") instead.
COUNT_LIMIT_BITS: Final[int] = 64


def address_count(prefix_length: int, bits: int) -> int:
    """Number of addresses covered by a ``/prefix_length`` in a ``bits``-wide family.

    Returns ``0`` when the block holds ``2**64`` addresses or more. A zero for a
    non-degenerate prefix therefore means "too large to count", not "empty".
    """

    if not 0 <= prefix_length <= bits:
        raise ValueError(f"Prefix length {prefix_length} out of range for {bits}-bit family")
    host_bits = bits - prefix_length
    if host_bits >= COUNT_LIMIT_BITS:
        return 0
    return 1 << host_bits


def network_address_count(network: Network) -> int:
    return address_count(network.prefixlen, network.max_prefixlen)


@dataclass(slots=True)
class IngestionStats:
    """Running counters for one source, or for a whole run once summed."""

    networks_retained: int = 0
    networks_skipped: int = 0
    addresses_covered: int = 0

    @property
    def networks_seen(self) -> int:
        return self.networks_retained + self.networks_skipped

    def record_retained(self, network: Network) -> None:
        self.networks_retained += 1
        self.addresses_covered += network_address_count(network)

    def record_skipped(self) -> None:
        self.networks_skipped += 1

    def __add__(self, other: IngestionStats) -> IngestionStats:
        if not isinstance(other, IngestionStats):
            return NotImplemented
        return IngestionStats(
            networks_retained=self.networks_retained + other.networks_retained,
            networks_skipped=self.networks_skipped + other.networks_skipped,
            addresses_covered=self.addresses_covered + other.addresses_covered,
        )


__all__ = ["COUNT_LIMIT_BITS", "IngestionStats", "address_count", "network_address_count"]
