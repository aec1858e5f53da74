"""
Function signatures and their canonical form.

A ``FunctionSignature`` is what the declaration parser produces for every
function it finds in a header.  Identity is the function name: the native
API guarantees that names are unique across all of its headers, so two
signatures denote the same function iff their names are equal.  Types are
kept in canonical spelling (``char *`` and ``char*`` compare equal) so that
signatures render identically however the header happened to format them.
"""

import re
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ffi_coverage.preprocessor import tokenize


# ═══════════════════════════════════════════════════════════════════════
#  Enumerations
# ═══════════════════════════════════════════════════════════════════════

class Module(str, Enum):
    """The two independently tracked API surfaces."""
    CORE = "Core"
    STUDIO = "Studio"

    @property
    def include_subdir(self) -> Tuple[str, str]:
        """Location of the module's headers below the API root."""
        return (self.value.lower(), "inc")

    @property
    def order(self) -> int:
        return _MODULE_ORDER[self]


_MODULE_ORDER = {Module.CORE: 0, Module.STUDIO: 1}


class ParameterKind(str, Enum):
    FIXED = "fixed"
    VARIADIC = "variadic"


# ═══════════════════════════════════════════════════════════════════════
#  Models
# ═══════════════════════════════════════════════════════════════════════

class Parameter(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    name: Optional[str] = None
    kind: ParameterKind = ParameterKind.FIXED

    def display(self) -> str:
        if self.name:
            return f"{self.type} {self.name}"
        return self.type


# FMOD_<Family>_... or FMOD_Studio_<Family>_...
_CATEGORY_RE = re.compile(r"FMOD_(Studio_)?([A-Za-z0-9]*)_.*$")


def category_of(name: str) -> str:
    """Object family of a function, e.g. ``System`` or ``Studio Bank``."""
    m = _CATEGORY_RE.match(name)
    if not m:
        return "Unknown"
    if m.group(1):
        return f"Studio {m.group(2)}"
    return m.group(2)


class FunctionSignature(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    return_type: str
    parameters: Tuple[Parameter, ...] = ()
    source_header: str
    module: Module
    declaration_order: int
    line: int = 0
    deprecated: bool = False

    @property
    def category(self) -> str:
        return category_of(self.name)

    @property
    def is_variadic(self) -> bool:
        return bool(self.parameters) and self.parameters[-1].kind == ParameterKind.VARIADIC

    @property
    def sort_key(self) -> Tuple[int, str, int]:
        return (self.module.order, self.source_header, self.declaration_order)

    def parameter_types(self) -> Tuple[str, ...]:
        return tuple(p.type for p in self.parameters)

    def canonical(self) -> str:
        """``RET NAME(T1, T2)``; parameter names are not part of the canonical form."""
        return f"{self.return_type} {self.name}({', '.join(self.parameter_types())})"

    def display(self) -> str:
        """Like :meth:`canonical` but keeps parameter names."""
        params = ", ".join(p.display() for p in self.parameters)
        return f"{self.return_type} {self.name}({params})"


# ═══════════════════════════════════════════════════════════════════════
#  Normalizer
# ═══════════════════════════════════════════════════════════════════════

_WORD_RE = re.compile(r"^[A-Za-z0-9_]")


def _is_word(value: str) -> bool:
    return value == "..." or bool(_WORD_RE.match(value))


def join_type_tokens(values: Iterable[str]) -> str:
    """Join type tokens into canonical spelling.

    Words are separated by one space, ``*`` is glued to whatever precedes
    it, a word following a ``*`` gets one space (``char* const``), commas
    are followed by one space and brackets/parentheses take no padding.
    """
    out: List[str] = []
    prev: Optional[str] = None
    for value in values:
        if prev is not None:
            if (
                (_is_word(prev) and _is_word(value))
                or (prev == "*" and _is_word(value))
                or prev == ","
            ):
                out.append(" ")
        out.append(value)
        prev = value
    return "".join(out)


def normalize_type(text: str) -> str:
    """Canonical spelling of a C type string.  Idempotent."""
    return join_type_tokens(tok.value for tok in tokenize(text))


def normalize_signature(signature: FunctionSignature) -> FunctionSignature:
    """Return ``signature`` with every type in canonical spelling.

    Parameter names are retained for display.  Applying this to an already
    normalized signature returns an equal signature.
    """
    params = tuple(
        p if p.kind == ParameterKind.VARIADIC
        else p.model_copy(update={"type": normalize_type(p.type)})
        for p in signature.parameters
    )
    return signature.model_copy(update={
        "return_type": normalize_type(signature.return_type),
        "parameters": params,
    })


def same_function(a: FunctionSignature, b: FunctionSignature) -> bool:
    """Two signatures denote the same native function iff their names match."""
    return a.name == b.name
