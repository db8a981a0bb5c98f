"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from mmdbmerge.adapters.mmdb_reader import open_mmdb
from mmdbmerge.adapters.mmdb_tree import MmdbTreeDatabase
from mmdbmerge.config import MergeConfig, get_merge_config
from mmdbmerge.domain.errors import InputValidationError
from mmdbmerge.domain.merge import MergeResult, merge_sources, sources_from_paths
from mmdbmerge.domain.ports.database import TreeOptions
from mmdbmerge.domain.verify import VerificationResult, report_verification, verify_output

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mmdbmerge.domain.ports.database import SourceOpener, TargetFactory

MIN_INPUT_FILES = 2

log = getLogger(__name__)


@dataclass(slots=True)
class MergeReport:
    """Everything a successful run reports back to the operator."""

    output_path: Path
    merge: MergeResult
    verification: VerificationResult
    bytes_written: int

    @property
    def verified(self) -> bool:
        return self.verification.matches(self.merge.totals)


def validate_inputs(paths: Sequence[str | Path]) -> list[Path]:
    """Check the input list before any database is opened."""

    if len(paths) < MIN_INPUT_FILES:
        raise InputValidationError(f"At least {MIN_INPUT_FILES} input files are required")
    resolved = [Path(path) for path in paths]
    for path in resolved:
        if not path.is_file():
            raise InputValidationError(f"File not found: {path}")
        log.info("Valid file: %s", path)
    return resolved


def build_tree_options(config: MergeConfig, labels: list[str]) -> TreeOptions:
    description = config.describe(labels)
    log.debug("Creating writer with description: %s", description)
    return TreeOptions(
        database_type=config.database_type,
        description=description,
        languages=config.languages,
        ip_version=config.ip_version,
        include_reserved_networks=config.include_reserved_networks,
    )


def merge_databases(
    inputs: Sequence[str | Path],
    *,
    output_path: Path | None = None,
    config: MergeConfig | None = None,
    opener: SourceOpener | None = None,
    target_factory: TargetFactory | None = None,
) -> MergeReport:
    """Merge ``inputs`` into one database, write it, and verify the result."""

    effective_config = config or get_merge_config()
    effective_output = output_path or effective_config.output_path
    effective_opener = opener or open_mmdb
    effective_factory = target_factory or MmdbTreeDatabase.create

    paths = validate_inputs(inputs)
    log.debug("Processing input files: %s", ", ".join(str(path) for path in paths))
    sources = sources_from_paths(paths)
    target = effective_factory(
        build_tree_options(effective_config, [source.label for source in sources])
    )

    result = merge_sources(
        sources,
        target=target,
        opener=effective_opener,
        progress_interval=effective_config.progress_interval,
        provenance_key=effective_config.provenance_key,
    )

    log.debug("Writing output to: %s", effective_output)
    bytes_written = target.write(effective_output)

    totals = result.totals
    log.info(
        "Final Stats: Total networks: %d (IPs: %d, skipped: %d)",
        totals.networks_retained,
        totals.addresses_covered,
        totals.networks_skipped,
    )

    verification = verify_output(effective_output, opener=effective_opener)
    report_verification(verification, totals, path=effective_output)

    return MergeReport(
        output_path=effective_output,
        merge=result,
        verification=verification,
        bytes_written=bytes_written,
    )


__all__ = [
    "MIN_INPUT_FILES",
    "MergeReport",
    "build_tree_options",
    "merge_databases",
    "validate_inputs",
]
