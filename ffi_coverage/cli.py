"""Command-line interface for ffi-coverage."""

import argparse
import logging
import sys
from pathlib import Path

from ffi_coverage.config import CoverageConfig, DeclarationMacros
from ffi_coverage.coverage_differ import build_registry, run_coverage
from ffi_coverage.errors import CoverageError, format_error_chain
from ffi_coverage.report_renderer import render_report

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="ffi-coverage",
        description="Report how much of the native FMOD C API the safe wrapper covers",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    coverage_parser = subparsers.add_parser(
        "coverage",
        help="Compare header declarations against the wrapper's bindings",
    )
    coverage_parser.add_argument(
        "-I",
        "--api-dir",
        required=True,
        type=Path,
        help="API root containing core/inc and studio/inc",
    )
    coverage_parser.add_argument(
        "-p",
        "--print",
        dest="print_full",
        action="store_true",
        help="Print per-module counts and per-category breakdowns",
    )
    coverage_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="List every missing function and warning (implies --print)",
    )
    coverage_parser.add_argument(
        "--bindings-dir",
        type=Path,
        default=None,
        help="Rebuild the binding registry from the wrapper's Rust sources",
    )
    coverage_parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="NAME",
        help="Function to leave out of the totals (repeatable)",
    )
    coverage_parser.add_argument(
        "--assume-covered",
        action="append",
        default=[],
        metavar="NAME",
        help="Function to treat as covered (repeatable)",
    )
    coverage_parser.add_argument(
        "--api-macro",
        action="append",
        default=[],
        metavar="NAME",
        help="Extra calling-convention macro to ignore in declarations (repeatable)",
    )
    coverage_parser.add_argument(
        "--workers",
        "-j",
        type=int,
        default=4,
        help="Headers parsed in parallel (default: 4, 1 disables threading)",
    )

    return parser


def build_config(parsed: argparse.Namespace) -> CoverageConfig:
    macros = DeclarationMacros()
    if parsed.api_macro:
        macros = macros.with_api_macros(parsed.api_macro)
    return CoverageConfig(
        api_dir=parsed.api_dir,
        print_full=parsed.print_full,
        verbose=parsed.verbose,
        workers=max(1, parsed.workers),
        exclude=frozenset(parsed.exclude),
        assume_covered=frozenset(parsed.assume_covered),
        bindings_dir=parsed.bindings_dir,
        macros=macros,
    )


def run_coverage_command(config: CoverageConfig) -> int:
    """Run the coverage command.

    Returns:
        0 when a report was written (missing functions do not fail the
        run), 1 when the run was aborted.
    """
    try:
        registry = build_registry(config)
        results = run_coverage(config, registry)
    except CoverageError as e:
        logger.debug("Coverage run aborted", exc_info=True)
        print(format_error_chain(e), file=sys.stderr)
        return 1

    sys.stdout.write(render_report(results, config.print_full, config.verbose))
    return 0


def run_cli(args: list) -> int:
    """Run the CLI with the given arguments.

    Args:
        args: Command-line arguments (without program name)

    Returns:
        Exit code (0 for success, non-zero for fatal errors)
    """
    parser = create_parser()
    try:
        parsed = parser.parse_args(args)
    except SystemExit as e:
        # --help exits 0, usage errors exit 2
        return e.code if isinstance(e.code, int) else 1

    if parsed.command is None:
        parser.print_help(sys.stderr)
        return 1

    setup_logging(getattr(parsed, "verbose", False))

    if parsed.command == "coverage":
        return run_coverage_command(build_config(parsed))

    return 1


def main():
    """Entry point for the CLI."""
    sys.exit(run_cli(sys.argv[1:]))


if __name__ == "__main__":
    main()
