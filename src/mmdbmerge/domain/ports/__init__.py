"""Domain port definitions for adapters."""

from __future__ import annotations

from .database import (
    Network,
    NetworkDatabase,
    NetworkRecord,
    SourceOpener,
    TargetFactory,
    TreeOptions,
)

__all__ = [
    "Network",
    "NetworkDatabase",
    "NetworkRecord",
    "SourceOpener",
    "TargetFactory",
    "TreeOptions",
]
