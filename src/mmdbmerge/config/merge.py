"""Merge run defaults and their environment overrides."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from mmdbmerge.domain.ingest import DEFAULT_PROGRESS_INTERVAL, PROVENANCE_KEY

from .env import env_flag, env_int, optional_env_var

DEFAULT_OUTPUT_FILENAME: Final[str] = "combined.mmdb"
DEFAULT_DATABASE_TYPE: Final[str] = "Combined-DB"
DEFAULT_LANGUAGES: Final[tuple[str, ...]] = ("en",)
DEFAULT_IP_VERSION: Final[int] = 6


@dataclass(frozen=True, slots=True)
class MergeConfig:
    output_path: Path = Path(DEFAULT_OUTPUT_FILENAME)
    database_type: str = DEFAULT_DATABASE_TYPE
    languages: tuple[str, ...] = DEFAULT_LANGUAGES
    ip_version: int = DEFAULT_IP_VERSION
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL
    provenance_key: str = PROVENANCE_KEY
    include_reserved_networks: bool = False

    def describe(self, labels: list[str]) -> str:
        return f"Combined {', '.join(labels)}"

def get_merge_config() -> MergeConfig:
    output = optional_env_var("MMDBMERGE_OUTPUT")
    return MergeConfig(
        output_path=Path(output) if output else Path(DEFAULT_OUTPUT_FILENAME),
        database_type=optional_env_var("MMDBMERGE_DATABASE_TYPE") or DEFAULT_DATABASE_TYPE,
        progress_interval=env_int(
            "MMDBMERGE_PROGRESS_INTERVAL", DEFAULT_PROGRESS_INTERVAL, minimum=1
        ),
        include_reserved_networks=env_flag("MMDBMERGE_INCLUDE_RESERVED", default=False),
    )
