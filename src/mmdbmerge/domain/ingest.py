"""Ingest one source database into the merge target."""

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

from mmdbmerge.domain.accounting import IngestionStats
from mmdbmerge.domain.errors import IngestionError, NetworkInsertError, ReservedNetworkError
from mmdbmerge.domain.reserved import is_reserved_network

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mmdbmerge.domain.ports.database import NetworkDatabase, NetworkRecord

DEFAULT_PROGRESS_INTERVAL = 10_000
PROVENANCE_KEY = "from"
MMDB_SUFFIX = ".mmdb"

log = logging.getLogger(__name__)


def source_label(path: str | PurePath) -> str:
    """Provenance label for an input file: its basename without ``.mmdb``."""

    name = PurePath(path).name
    if name.endswith(MMDB_SUFFIX) and len(name) > len(MMDB_SUFFIX):
        return name[: -len(MMDB_SUFFIX)]
    return name


def annotate(label: str, *, provenance_key: str = PROVENANCE_KEY) -> dict[str, Any]:
    """Record attached to every network retained from ``label``."""

    return {provenance_key: label}


def ingest_source(
    networks: Iterable[NetworkRecord],
    *,
    label: str,
    target: NetworkDatabase,
    logger: logging.Logger | None = None,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    provenance_key: str = PROVENANCE_KEY,
) -> IngestionStats:
    """Copy every non-reserved network from ``networks`` into ``target``.

    ``networks`` is consumed once, front to back. The source's own records are
    discarded; each retained network is tagged with ``label`` instead. Networks
    whose base address is reserved, or which the target refuses as reserved,
    are counted as skipped. Any other insertion failure aborts with an
    :class:`IngestionError` naming the network and the source.
    """

    if progress_interval < 1:
        raise ValueError(f"progress_interval must be positive, got {progress_interval}")

    active_log = logger or log
    stats = IngestionStats()
    record = annotate(label, provenance_key=provenance_key)

    for network, _source_record in networks:
        if is_reserved_network(network):
            active_log.warning("Skipping reserved network: %s (from %s)", network, label)
            stats.record_skipped()
            continue

        try:
            target.insert(network, record)
        except ReservedNetworkError as exc:
            active_log.warning(
                "Target rejected reserved network: %s (from %s): %s", network, label, exc
            )
            stats.record_skipped()
            continue
        except NetworkInsertError as exc:
            raise IngestionError(network, label, exc) from exc

        stats.record_retained(network)
        if stats.networks_retained % progress_interval == 0:
            active_log.debug("Processed %d networks from %s", stats.networks_retained, label)

    active_log.info(
        "Stats: %s networks: %d (IPs: %d, skipped: %d)",
        label,
        stats.networks_retained,
        stats.addresses_covered,
        stats.networks_skipped,
    )
    return stats


__all__ = ["PROVENANCE_KEY", "annotate", "ingest_source", "source_label"]
