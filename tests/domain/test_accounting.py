from __future__ import annotations

from ipaddress import ip_network

import pytest

from mmdbmerge.domain.accounting import IngestionStats, address_count, network_address_count


@pytest.mark.parametrize("prefix_length", range(33))
def test_ipv4_counts_are_exact(prefix_length: int) -> None:
    assert address_count(prefix_length, 32) == 2 ** (32 - prefix_length)


@pytest.mark.parametrize("prefix_length", [0, 1, 32, 48, 63, 64])
def test_large_ipv6_blocks_count_as_unknown(prefix_length: int) -> None:
    assert address_count(prefix_length, 128) == 0


@pytest.mark.parametrize("prefix_length", [65, 96, 120, 127, 128])
def test_small_ipv6_blocks_are_counted(prefix_length: int) -> None:
    assert address_count(prefix_length, 128) == 2 ** (128 - prefix_length)


def test_prefix_outside_family_is_rejected() -> None:
    with pytest.raises(ValueError, match="out of range"):
        address_count(33, 32)


def test_network_address_count_uses_family_width() -> None:
    assert network_address_count(ip_network("1.1.1.0/24")) == 256
    assert network_address_count(ip_network("2001:db8::/120")) == 256
    assert network_address_count(ip_network("2001:db8::/32")) == 0


def test_stats_accumulate_and_sum() -> None:
    first = IngestionStats()
    first.record_retained(ip_network("1.1.1.0/24"))
    first.record_skipped()
    second = IngestionStats()
    second.record_retained(ip_network("8.8.8.8/32"))

    total = first + second

    assert total == IngestionStats(networks_retained=2, networks_skipped=1, addresses_covered=257)
    assert total.networks_seen == 3
    assert first.networks_retained == 1
