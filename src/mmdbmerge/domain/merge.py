"""Merge several source databases into one target, in order."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mmdbmerge.domain.accounting import IngestionStats
from mmdbmerge.domain.ingest import (
    DEFAULT_PROGRESS_INTERVAL,
    PROVENANCE_KEY,
    ingest_source,
    source_label,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from mmdbmerge.domain.ports.database import NetworkDatabase, SourceOpener

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MergeSource:
    """One input database and the provenance label its networks receive."""

    label: str
    path: Path

    @classmethod
    def from_path(cls, path: Path) -> MergeSource:
        return cls(label=source_label(path), path=path)


@dataclass(slots=True)
class SourceResult:
    source: MergeSource
    stats: IngestionStats


@dataclass(slots=True)
class MergeResult:
    """Outcome of a completed merge: per-source and summed statistics."""

    per_source: list[SourceResult] = field(default_factory=list)

    @property
    def totals(self) -> IngestionStats:
        return sum((result.stats for result in self.per_source), IngestionStats())


def sources_from_paths(paths: Iterable[Path]) -> list[MergeSource]:
    return [MergeSource.from_path(path) for path in paths]


def merge_sources(
    sources: Sequence[MergeSource],
    *,
    target: NetworkDatabase,
    opener: SourceOpener,
    logger: logging.Logger | None = None,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    provenance_key: str = PROVENANCE_KEY,
) -> MergeResult:
    """Ingest ``sources`` into ``target`` one after another.

    Order matters only for overlapping prefixes: the target keeps whichever
    record was inserted last, so later sources win. The first fatal error
    propagates as-is and no result is produced for the sources already done.
    """

    active_log = logger or log
    result = MergeResult()

    for source in sources:
        active_log.debug("Processing file: %s (source name: %s)", source.path, source.label)
        with opener(source.path) as networks:
            stats = ingest_source(
                networks,
                label=source.label,
                target=target,
                logger=active_log,
                progress_interval=progress_interval,
                provenance_key=provenance_key,
            )
        result.per_source.append(SourceResult(source=source, stats=stats))

    return result


__all__ = ["MergeResult", "MergeSource", "SourceResult", "merge_sources", "sources_from_paths"]
