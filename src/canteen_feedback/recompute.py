"""Command line entry point for recomputing a stored weekly report."""

import argparse
import logging
import sys

from canteen_feedback.app_logging import configure_logging
from canteen_feedback.containers import AppContainer, build_container
from canteen_feedback.domain.errors import InvalidArgumentError, StoreUnavailableError

EXIT_INVALID_ARGUMENT = 1
EXIT_STORE_UNAVAILABLE = 2

_logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the recompute command."""
    parser = argparse.ArgumentParser(
        prog="canteen-recompute",
        description="Recompute and store the weekly rating report of a canteen.",
    )
    parser.add_argument("canteen_id", help="Canteen identifier, e.g. canteen_01")
    parser.add_argument(
        "week_start",
        nargs="?",
        default=None,
        help="Monday of the week as YYYY-MM-DD (default: current week)",
    )
    return parser


def main(argv: list[str] | None = None, container: AppContainer | None = None) -> int:
    """Run the recompute command and return its exit code."""
    args = build_parser().parse_args(argv)
    configure_logging()
    resolved = container or build_container()
    try:
        report = resolved.report_service.recompute_and_persist(
            args.canteen_id, args.week_start
        )
    except InvalidArgumentError as exc:
        _logger.error("Invalid arguments: %s", exc)
        return EXIT_INVALID_ARGUMENT
    except StoreUnavailableError as exc:
        _logger.error("Weekly report not saved: %s", exc)
        return EXIT_STORE_UNAVAILABLE
    _logger.info(
        "Weekly report recomputed and saved for %s %s (%s ratings)",
        report.canteen_id,
        report.week_start,
        report.total_ratings,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
