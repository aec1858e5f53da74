"""Report Renderer: coverage results to plain text."""

from typing import List, Sequence

from ffi_coverage.coverage_differ import CoverageResult


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def summary_line(result: CoverageResult) -> str:
    line = f"{result.module.value}: {result.percentage:.2f}%"
    if result.warnings:
        line += f" ({_plural(len(result.warnings), 'warning')})"
    return line


def render_report(
    results: Sequence[CoverageResult],
    print_full: bool = False,
    verbose: bool = False,
) -> str:
    """Render coverage results.

    Default: one summary line per module.  ``print_full`` adds per-module
    counts and per-category breakdowns.  ``verbose`` (implies
    ``print_full``) also lists every missing function and every warning.
    """
    print_full = print_full or verbose
    lines: List[str] = [summary_line(r) for r in results]
    if not print_full:
        return "\n".join(lines) + "\n"

    for result in results:
        lines.append("")
        lines.append(
            f"{result.module.value}: {result.total} total, "
            f"{result.covered_count} covered, {result.missing_count} missing"
        )
        for category in result.categories:
            lines.append(f"  {category.name}: {category.covered}/{category.total}")

        if verbose:
            for sig in result.missing:
                lines.append(f"  - {sig.name}: {sig.canonical()} [{sig.source_header}]")
            for warning in result.warnings:
                lines.append(f"  ! {warning.kind}: {warning.location}: {warning.message}")
        elif result.warnings:
            lines.append(
                f"  {_plural(len(result.warnings), 'warning')} (use --verbose for details)"
            )

    return "\n".join(lines) + "\n"
