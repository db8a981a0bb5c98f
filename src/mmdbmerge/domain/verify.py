"""Re-read a written database and recount what it holds."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mmdbmerge.domain.accounting import network_address_count
from mmdbmerge.domain.errors import SourceOpenError, SourceReadError, VerificationError

if TYPE_CHECKING:
    from pathlib import Path

    from mmdbmerge.domain.accounting import IngestionStats
    from mmdbmerge.domain.ports.database import SourceOpener

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VerificationResult:
    networks: int = 0
    addresses_covered: int = 0

    def matches(self, totals: IngestionStats) -> bool:
        return (
            self.networks == totals.networks_retained
            and self.addresses_covered == totals.addresses_covered
        )


def verify_output(path: Path, *, opener: SourceOpener) -> VerificationResult:
    """Reopen ``path`` from disk and count its networks and addresses.

    Failing to open or read the file back raises :class:`VerificationError`:
    a database that cannot be read is a failed run even if bytes were written.
    """

    networks = 0
    addresses = 0
    try:
        with opener(path) as reader:
            for network, _record in reader:
                networks += 1
                addresses += network_address_count(network)
    except (SourceOpenError, SourceReadError) as exc:
        raise VerificationError(path, exc) from exc
    return VerificationResult(networks=networks, addresses_covered=addresses)


def report_verification(
    verified: VerificationResult,
    totals: IngestionStats,
    *,
    path: Path,
    logger: logging.Logger | None = None,
) -> bool:
    """Log the recounted totals next to the running ones.

    A mismatch is only a warning. The target may consolidate overlapping
    prefixes, in which case the recount is the authoritative figure.
    """

    active_log = logger or log
    active_log.info(
        "Output: %s contains %d networks (IPs: %d)",
        path,
        verified.networks,
        verified.addresses_covered,
    )
    if verified.matches(totals):
        return True
    active_log.warning(
        "Output totals differ from merge totals: networks %d vs %d, IPs %d vs %d",
        verified.networks,
        totals.networks_retained,
        verified.addresses_covered,
        totals.addresses_covered,
    )
    return False


__all__ = ["VerificationResult", "report_verification", "verify_output"]
