"""
Coverage Differ: partitions declared functions into covered / missing.

``run_coverage`` drives the whole pipeline for both modules:

    Collector → Parser (one task per header, thread pool) → sort → Differ

Per-header parsing is independent, so headers are parsed concurrently.
Partial results are sorted by ``(module, source_header, declaration_order)``
before they are reduced, which keeps the report identical from run to run
whatever order the workers finish in.
"""

import logging
import concurrent.futures
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from ffi_coverage.binding_registry import BindingRegistry
from ffi_coverage.config import CoverageConfig, DeclarationMacros
from ffi_coverage.declaration_parser import DeclarationStream
from ffi_coverage.errors import DirectoryNotFound, HeaderReadFailure
from ffi_coverage.header_collector import (
    collect_headers, display_path, module_include_dir, read_header,
)
from ffi_coverage.signature import FunctionSignature, Module, normalize_signature

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════
#  Result models
# ═══════════════════════════════════════════════════════════════════════

class ParseWarning(BaseModel):
    """A non-fatal problem: a skipped header or a skipped declaration."""
    model_config = ConfigDict(frozen=True)

    kind: str                      # "HeaderReadFailure" | "ParseFailure"
    header: str
    line: Optional[int] = None
    message: str

    @property
    def location(self) -> str:
        return f"{self.header}:{self.line}" if self.line else self.header


class CategoryCoverage(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    covered: int
    total: int


class CoverageResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    module: Module
    total: int
    covered: FrozenSet[str]
    missing: Tuple[FunctionSignature, ...]
    warnings: Tuple[ParseWarning, ...] = ()
    categories: Tuple[CategoryCoverage, ...] = ()
    headers_scanned: int = 0

    @property
    def covered_count(self) -> int:
        return len(self.covered)

    @property
    def missing_count(self) -> int:
        return len(self.missing)

    @property
    def percentage(self) -> float:
        return coverage_percentage(self.covered_count, self.total)

    def missing_names(self) -> List[str]:
        return [sig.name for sig in self.missing]


def coverage_percentage(covered: int, total: int) -> float:
    """``covered / total * 100`` truncated (not rounded) to two decimals.

    Defined as 0.0 when there is nothing to cover.
    """
    if total == 0:
        return 0.0
    return (covered * 10000 // total) / 100


# ═══════════════════════════════════════════════════════════════════════
#  Differ
# ═══════════════════════════════════════════════════════════════════════

def diff_module(
    module: Module,
    signatures: Iterable[FunctionSignature],
    registry: BindingRegistry,
    warnings: Sequence[ParseWarning] = (),
    headers_scanned: int = 0,
) -> CoverageResult:
    """Partition one module's signatures by ``registry.is_covered``.

    ``signatures`` must already be in declaration order; ``missing`` keeps
    that order.
    """
    covered = set()
    missing: List[FunctionSignature] = []
    categories: Dict[str, List[int]] = {}
    total = 0

    for sig in signatures:
        total += 1
        counts = categories.setdefault(sig.category, [0, 0])
        counts[1] += 1
        if registry.is_covered(sig.name):
            covered.add(sig.name)
            counts[0] += 1
        else:
            missing.append(sig)

    return CoverageResult(
        module=module,
        total=total,
        covered=frozenset(covered),
        missing=tuple(missing),
        warnings=tuple(warnings),
        categories=tuple(
            CategoryCoverage(name=name, covered=c, total=t)
            for name, (c, t) in categories.items()
        ),
        headers_scanned=headers_scanned,
    )


# ═══════════════════════════════════════════════════════════════════════
#  Pipeline
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class _HeaderResult:
    module: Module
    header: str
    signatures: List[FunctionSignature] = field(default_factory=list)
    warnings: List[ParseWarning] = field(default_factory=list)


def parse_header_file(
    path: Path, header: str, module: Module, macros: DeclarationMacros
) -> _HeaderResult:
    """Parse one header.  Never raises for read or parse problems."""
    result = _HeaderResult(module=module, header=header)
    try:
        text = read_header(path)
    except HeaderReadFailure as e:
        logger.warning("Skipping header %s: %s", header, e.reason)
        result.warnings.append(ParseWarning(kind="HeaderReadFailure", header=header, message=e.reason))
        return result

    stream = DeclarationStream(text, header, module, macros)
    result.signatures = [normalize_signature(sig) for sig in stream]
    for failure in stream.failures:
        result.warnings.append(ParseWarning(
            kind="ParseFailure", header=header, line=failure.line, message=failure.reason,
        ))
    logger.debug(
        "%s: %d declaration(s), %d failure(s)",
        header, len(result.signatures), len(stream.failures),
    )
    return result


def _parse_all(
    jobs: List[Tuple[Path, str, Module]], macros: DeclarationMacros, workers: int
) -> List[_HeaderResult]:
    if workers <= 1 or len(jobs) <= 1:
        return [parse_header_file(path, header, module, macros) for path, header, module in jobs]

    results = []
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(parse_header_file, path, header, module, macros)
            for path, header, module in jobs
        ]
        for future in concurrent.futures.as_completed(futures):
            results.append(future.result())
    return results


def build_registry(config: CoverageConfig) -> BindingRegistry:
    """The registry for one run: compiled-in (or rebuilt) plus assumed names."""
    if config.bindings_dir is not None:
        registry = BindingRegistry.from_wrapper_sources(config.bindings_dir)
    else:
        registry = BindingRegistry.default()
    if config.assume_covered:
        registry = registry.with_names(config.assume_covered)
    return registry


def run_coverage(
    config: CoverageConfig, registry: Optional[BindingRegistry] = None
) -> List[CoverageResult]:
    """Compute coverage for every module below ``config.api_dir``.

    Raises DirectoryNotFound if the API root or a module's include
    directory is missing; every other problem becomes a warning.
    """
    api_dir = Path(config.api_dir)
    if not api_dir.is_dir():
        raise DirectoryNotFound(api_dir, "is not an API directory" if api_dir.exists() else "does not exist")
    if registry is None:
        registry = build_registry(config)

    jobs: List[Tuple[Path, str, Module]] = []
    headers_per_module: Dict[Module, int] = {}
    for module in Module:
        headers = collect_headers(module_include_dir(api_dir, module))
        headers_per_module[module] = len(headers)
        jobs.extend((path, display_path(path, api_dir), module) for path in headers)

    logger.info("Parsing %d header(s) with %d worker(s)", len(jobs), config.workers)
    partials = _parse_all(jobs, config.macros, config.workers)

    signatures = sorted(
        (sig for partial in partials for sig in partial.signatures),
        key=lambda sig: sig.sort_key,
    )
    warnings = sorted(
        (w for partial in partials for w in partial.warnings),
        key=lambda w: (w.header, w.line or 0),
    )
    header_module = {header: module for _, header, module in jobs}

    by_module: Dict[Module, List[FunctionSignature]] = {module: [] for module in Module}
    seen = set()
    for sig in signatures:
        if sig.name in config.exclude:
            continue
        if sig.name in seen:
            logger.debug("Duplicate declaration of %s in %s ignored", sig.name, sig.source_header)
            continue
        seen.add(sig.name)
        by_module[sig.module].append(sig)

    results = []
    for module in Module:
        result = diff_module(
            module,
            by_module[module],
            registry,
            warnings=[w for w in warnings if header_module.get(w.header) == module],
            headers_scanned=headers_per_module[module],
        )
        logger.info(
            "%s: %d/%d covered (%.2f%%), %d warning(s)",
            module.value, result.covered_count, result.total,
            result.percentage, len(result.warnings),
        )
        results.append(result)
    return results
