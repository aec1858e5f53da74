"""
FFI Coverage - MCP Server

Exposes the binding coverage audit via the Model Context Protocol:

  1. coverage_report: per-module coverage of the native API (text report)
  2. list_missing: unbound functions of one module with signatures
  3. check_binding: is a single native function covered by the wrapper?
"""

from mcp.server.fastmcp import FastMCP
import os
import sys
import json

# Ensure the package is importable when run from a checkout
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from ffi_coverage.binding_registry import BindingRegistry
from ffi_coverage.config import CoverageConfig
from ffi_coverage.coverage_differ import build_registry, run_coverage
from ffi_coverage.errors import CoverageError, format_error_chain
from ffi_coverage.report_renderer import render_report
from ffi_coverage.signature import Module, category_of

# ═══════════════════════════════════════════════════════════════════════
#  Server Setup
# ═══════════════════════════════════════════════════════════════════════

mcp = FastMCP("FFI Coverage")

# The compiled-in registry never changes while the server runs.
registry = BindingRegistry.default()


def _config(api_dir: str, bindings_dir: str = "", **kwargs) -> CoverageConfig:
    return CoverageConfig(
        api_dir=api_dir,
        bindings_dir=bindings_dir or None,
        **kwargs,
    )


def _registry_for(config: CoverageConfig) -> BindingRegistry:
    if config.bindings_dir is None:
        return registry
    return build_registry(config)


# ═══════════════════════════════════════════════════════════════════════
#  Tool 1: Coverage Report
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def coverage_report(api_dir: str, print_full: bool = False, verbose: bool = False,
                    bindings_dir: str = "") -> str:
    """
    Computes how much of the native API the safe wrapper covers.

    Args:
        api_dir:      API root containing core/inc and studio/inc.
        print_full:   Include per-module counts and per-category breakdowns.
        verbose:      Also list every missing function and warning.
        bindings_dir: Optional path to the wrapper's Rust sources; when set
                      the registry is rebuilt from them instead of using
                      the compiled-in list.
    """
    if not os.path.exists(api_dir):
        return f"Error: API directory not found at {api_dir}"

    try:
        config = _config(api_dir, bindings_dir, print_full=print_full, verbose=verbose)
        results = run_coverage(config, _registry_for(config))
    except CoverageError as e:
        return format_error_chain(e)

    return render_report(results, print_full=print_full, verbose=verbose)


# ═══════════════════════════════════════════════════════════════════════
#  Tool 2: Missing Functions
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def list_missing(api_dir: str, module: str = "Core", bindings_dir: str = "") -> str:
    """
    Lists the native functions of one module that have no wrapper yet,
    as JSON in declaration order.

    Args:
        api_dir:      API root containing core/inc and studio/inc.
        module:       "Core" or "Studio".
        bindings_dir: Optional path to the wrapper's Rust sources.
    """
    try:
        wanted = Module(module.strip().capitalize())
    except ValueError:
        return f"Error: unknown module '{module}'. Use one of: {', '.join(m.value for m in Module)}"

    try:
        config = _config(api_dir, bindings_dir)
        results = run_coverage(config, _registry_for(config))
    except CoverageError as e:
        return format_error_chain(e)

    result = next(r for r in results if r.module == wanted)
    payload = {
        "module": wanted.value,
        "total": result.total,
        "covered": result.covered_count,
        "percentage": result.percentage,
        "missing": [
            {
                "name": sig.name,
                "signature": sig.canonical(),
                "header": sig.source_header,
                "line": sig.line,
                "category": sig.category,
                "deprecated": sig.deprecated,
            }
            for sig in result.missing
        ],
        "warnings": [w.model_dump() for w in result.warnings],
    }
    return json.dumps(payload, indent=2)


# ═══════════════════════════════════════════════════════════════════════
#  Tool 3: Single Function Lookup
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def check_binding(name: str) -> str:
    """
    Reports whether a native function is covered by the wrapper.

    Args:
        name: Native function name, e.g. FMOD_System_Create.
    """
    name = name.strip()
    if not name:
        return "Error: empty function name"

    if name in registry.all_known_names():
        return f"`{name}` ({category_of(name)}) is covered by the wrapper."
    if registry.is_covered(name):
        return f"`{name}` ({category_of(name)}) is covered through a shared binding."
    return f"`{name}` ({category_of(name)}) is NOT covered by the wrapper."


if __name__ == "__main__":
    mcp.run()
