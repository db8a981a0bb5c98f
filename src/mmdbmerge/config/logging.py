"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with a terse CLI format.

    Diagnostics from the merge run (skipped networks, per-source statistics,
    verification results) all flow through here. Pass ``debug``-level to see the
    progress lines emitted while large sources are ingested, and ``force=True``
    to reconfigure from tests.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
