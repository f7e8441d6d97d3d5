"""Command Line Interface for the ratings pipeline.

Provides CLI entry point with argument parsing and command handling
for a full run and configuration display.
"""

import argparse
import json
import sys
import traceback
from pathlib import Path

from cartelera.etl.aggregation.coverage import badge_text
from cartelera.etl.aggregation.schemas import MediaType
from cartelera.etl.pipeline.orchestrator import PipelineOptions, PipelineResult, run_pipeline
from cartelera.etl.pipeline.output import write_latest
from cartelera.etl.utils import setup_logger
from cartelera.settings import ConfigurationError, get_masked_settings, settings, sources_status

logger = setup_logger("etl.pipeline.cli")


# =============================================================================
# ARGUMENT PARSING
# =============================================================================


def _positive_int(value: str) -> int:
    """Argparse type for counts >= 1."""
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from e
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cartelera",
        description="Top movies and series of the moment, rated across several sources",
    )

    parser.add_argument(
        "--top",
        type=_positive_int,
        default=None,
        help=f"Items per media type (default: {settings.matching.top_n})",
    )

    parser.add_argument(
        "--only",
        choices=["movies", "series"],
        default=None,
        help="Rank a single media type",
    )

    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help=f"JSON output file (default: {settings.paths.output_file})",
    )

    parser.add_argument(
        "--platform",
        nargs="+",
        default=[],
        help="Keep items available on any of these platforms",
    )

    parser.add_argument(
        "--genre",
        nargs="+",
        default=[],
        help="Keep items with any of these genres",
    )

    parser.add_argument(
        "--no-rt",
        action="store_true",
        help="Skip Rotten Tomatoes audience scores",
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Print the configuration (secrets masked) and exit",
    )

    return parser


def options_from_args(args: argparse.Namespace) -> PipelineOptions:
    """Map parsed arguments to run options."""
    only = {"movies": MediaType.MOVIE, "series": MediaType.SERIES}.get(args.only) if args.only else None
    return PipelineOptions(
        top_n=args.top,
        only=only,
        platforms=list(args.platform),
        genres=list(args.genre),
        use_rt=not args.no_rt,
    )


# =============================================================================
# COMMAND HANDLERS
# =============================================================================


def _handle_show_config() -> None:
    """Handle --show-config command."""
    print(json.dumps(get_masked_settings(), indent=2, default=str))
    print("\n📡 Sources:")
    for name, configured in sources_status():
        print(f"  {'✅' if configured else '❌'} {name}")


def _print_summary(result: PipelineResult) -> None:
    """Print the ranked lists."""
    for label, ranked in (("Movies", result.movies), ("Series", result.series)):
        print(f"\n{label}:")
        if not ranked:
            print("  (none)")
        for entry in ranked:
            badge = badge_text(entry.completeness.status)
            print(f"  {entry.rank}. {entry.item.label} - {entry.score:.2f} [{entry.coverage}/6] {badge}")


def _handle_pipeline_execution(args: argparse.Namespace) -> None:
    """Handle a full run.

    Args:
        args: Parsed arguments.
    """
    result = run_pipeline(options_from_args(args))
    output = args.output or settings.paths.output_file
    write_latest(result, Path(output))
    _print_summary(result)


def _handle_fatal_error(error: Exception) -> int:
    """Report an unexpected failure.

    Args:
        error: Exception that caused the failure.

    Returns:
        Exit status 1.
    """
    print(f"\n❌ FATAL ERROR: {error}", file=sys.stderr)
    traceback.print_exc()
    logger.error(f"❌ Pipeline failed: {error}")
    return 1


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Arguments, sys.argv when omitted.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)

    if args.show_config:
        _handle_show_config()
        return 0

    try:
        _handle_pipeline_execution(args)
    except ConfigurationError as e:
        logger.error(f"❌ Configuration error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("⚠️ Pipeline interrupted by user")
        return 130
    except Exception as e:
        return _handle_fatal_error(e)

    return 0


if __name__ == "__main__":
    sys.exit(main())
