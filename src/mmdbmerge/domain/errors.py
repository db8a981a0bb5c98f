"""Error taxonomy for a merge run.

Every fatal condition derives from :class:`MergeError` so the command line can
report it uniformly. Insert-side failures raised by a target database are kept
separate (:class:`NetworkInsertError`); the ingestor decides which of those are
recoverable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from mmdbmerge.domain.ports.database import Network


class MergeError(RuntimeError):
    """Base class for conditions that abort a merge run."""


class InputValidationError(MergeError, ValueError):
    """Raised before any database I/O when the inputs are unusable."""


class SourceOpenError(MergeError):
    """Raised when an input database cannot be opened."""

    def __init__(self, path: Path, reason: object) -> None:
        super().__init__(f"Error opening {path}: {reason}")
        self.path = path


class SourceReadError(MergeError):
    """Raised when an opened input database turns out to be unreadable."""

    def __init__(self, path: Path, reason: object) -> None:
        super().__init__(f"Error reading {path}: {reason}")
        self.path = path


class IngestionError(MergeError):
    """A non-skippable insertion failure, naming the network and its source."""

    def __init__(self, network: Network, label: str, reason: object) -> None:
        super().__init__(f"Error processing {label}: inserting network {network}: {reason}")
        self.network = network
        self.label = label


class SerializationError(MergeError):
    def __init__(self, path: Path, reason: object) -> None:
        super().__init__(f"Error writing database {path}: {reason}")
        self.path = path


class VerificationError(MergeError):
    def __init__(self, path: Path, reason: object) -> None:
        super().__init__(f"Error opening output file {path}: {reason}")
        self.path = path


class NetworkInsertError(RuntimeError):
    """Raised by a target database when a network cannot be inserted."""


class ReservedNetworkError(NetworkInsertError):
    """The target refused the network because it lies in reserved space."""


__all__ = [
    "IngestionError",
    "InputValidationError",
    "MergeError",
    "NetworkInsertError",
    "ReservedNetworkError",
    "SerializationError",
    "SourceOpenError",
    "SourceReadError",
    "VerificationError",
]
