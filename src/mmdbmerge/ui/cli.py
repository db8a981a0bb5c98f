from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, NoReturn

from dotenv import load_dotenv

from mmdbmerge.app import MIN_INPUT_FILES, merge_databases
from mmdbmerge.config import ConfigurationError, configure_logging, get_merge_config
from mmdbmerge.domain.errors import InputValidationError, MergeError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """Parser whose usage errors exit 1 like every other validation failure."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="mmdbmerge",
        description="Merge multiple MMDB files into one, tagging each network with its source",
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        metavar="INPUT",
        type=Path,
        help=f"Input MMDB files (minimum {MIN_INPUT_FILES})",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output MMDB file (default: $MMDBMERGE_OUTPUT or combined.mmdb)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parser = _build_parser()
    if not args_list:
        parser.print_help()
        sys.exit(0)

    parsed_args = parser.parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.debug else logging.INFO)

    try:
        config = get_merge_config()
        report = merge_databases(
            parsed_args.inputs,
            output_path=parsed_args.output,
            config=config,
        )
    except InputValidationError as exc:
        log.error("%s", exc)  # noqa: TRY400
        parser.print_usage(sys.stderr)
        sys.exit(1)
    except (ConfigurationError, MergeError) as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during merge")
        sys.exit(1)

    log.info("Merged %d sources into %s", len(report.merge.per_source), report.output_path)
    sys.exit(0)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(1)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
