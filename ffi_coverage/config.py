"""
Run configuration.

There is no configuration file: a ``CoverageConfig`` is built once per run
by the CLI (or by the MCP tool) and passed down explicitly.
"""

from pathlib import Path
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field


# Calling-convention / export macros that sit between the return type and
# the function name, e.g. ``FMOD_RESULT F_API FMOD_System_Create(...)``.
DEFAULT_API_MACROS = frozenset({
    "F_API", "F_CALL", "F_CALLBACK", "F_STDCALL",
    "F_EXPORT", "F_DECLSPEC", "F_DLLEXPORT",
    "__cdecl", "__stdcall",
})

# Prefix/suffix annotations that carry no type information.  When followed
# by a parenthesised group (``__attribute__((deprecated))``) the group is
# discarded as well.
DEFAULT_ANNOTATION_MACROS = frozenset({
    "extern", "F_DEPRECATED", "FMOD_DEPRECATED", "DEPRECATED",
    "__declspec", "__attribute__",
})

# Macros that wrap a whole declaration: ``F_DEPRECATED(decl, "message")``.
DEFAULT_WRAPPER_MACROS = frozenset({
    "F_DEPRECATED", "FMOD_DEPRECATED", "DEPRECATED",
})


class DeclarationMacros(BaseModel):
    """Macro names the declaration grammar knows how to discard."""
    model_config = ConfigDict(frozen=True)

    api: FrozenSet[str] = DEFAULT_API_MACROS
    annotations: FrozenSet[str] = DEFAULT_ANNOTATION_MACROS
    wrappers: FrozenSet[str] = DEFAULT_WRAPPER_MACROS

    def with_api_macros(self, names) -> "DeclarationMacros":
        return self.model_copy(update={"api": self.api | frozenset(names)})


class CoverageConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_dir: Path
    print_full: bool = False
    verbose: bool = False
    workers: int = Field(default=4, ge=1)
    exclude: FrozenSet[str] = frozenset()
    assume_covered: FrozenSet[str] = frozenset()
    bindings_dir: Optional[Path] = None
    macros: DeclarationMacros = DeclarationMacros()

    @property
    def full_report(self) -> bool:
        """``--verbose`` implies ``--print``."""
        return self.print_full or self.verbose
