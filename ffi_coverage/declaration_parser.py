"""
Declaration Parser: extracts function declarations from header text.

The headers scanned here follow one narrow declaration style::

    FMOD_RESULT F_API FMOD_System_Create(FMOD_SYSTEM **system, unsigned int headerversion);

so instead of a general C parser we use a small closed grammar:

    declaration      := wrapper '(' declaration-core (',' …)? ')' annotation*
                      | annotation* declaration-core
    declaration-core := type-token+ api-macro? IDENT '(' parameter-list ')' annotation*
    parameter-list   := 'void' | ε | parameter (',' parameter)*
    parameter        := '...' | type-token+ fn-pointer-suffix? array-suffix*

Pipeline for one header:
  1. comments and inactive ``#if`` branches removed (preprocessor.clean_header)
  2. pcpp tokenization
  3. statement splitting on ``;`` (multi-line declarations join naturally;
     ``extern "C" {`` blocks and brace bodies are handled here)
  4. typedef / struct / enum / variable statements skipped
  5. everything else matched by ``_DeclarationMatcher``

A statement that looks like a function declaration but does not match the
grammar becomes a ``ParseFailure``: it is recorded on the stream and the
rest of the header is still parsed.
"""

import re
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from ffi_coverage.config import DeclarationMacros
from ffi_coverage.errors import ParseFailure
from ffi_coverage.preprocessor import Token, clean_header, tokenize
from ffi_coverage.signature import (
    FunctionSignature, Module, Parameter, ParameterKind, join_type_tokens,
)

logger = logging.getLogger(__name__)

_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_NUMBER_RE = re.compile(r"^[0-9][A-Za-z0-9_.]*$")

# Words that can only be part of a type, never a parameter or function name.
_TYPE_KEYWORDS = frozenset({
    "void", "char", "short", "int", "long", "float", "double",
    "signed", "unsigned", "const", "volatile", "restrict", "_Bool", "bool",
    "_Complex", "struct", "union", "enum",
})

_TAG_KEYWORDS = frozenset({"struct", "union", "enum"})

_SKIPPED_LEADERS = frozenset({"typedef", "static", "static_assert", "_Static_assert"})

_OPENERS = {"(": ")", "[": "]", "{": "}"}


def _is_identifier(value: str) -> bool:
    return bool(_IDENT_RE.match(value))


class _NoMatch(Exception):
    """Internal: the statement does not fit the declaration grammar."""


# ═══════════════════════════════════════════════════════════════════════
#  Statement splitting
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class _Statement:
    tokens: List[Token]
    line: int
    has_body: bool = False
    terminated: bool = True

    @property
    def text(self) -> str:
        return " ".join(t.value for t in self.tokens)


def _matching_close(tokens: List[Token], start: int) -> int:
    """Index just past the bracket that closes ``tokens[start]``."""
    opener = tokens[start].value
    closer = _OPENERS[opener]
    depth = 0
    for i in range(start, len(tokens)):
        value = tokens[i].value
        if value == opener:
            depth += 1
        elif value == closer:
            depth -= 1
            if depth == 0:
                return i + 1
    return len(tokens)


def _split_statements(tokens: List[Token]) -> Iterator[_Statement]:
    """Group tokens into top-level statements terminated by ``;``."""
    current: List[Token] = []
    has_body = False
    depth = 0
    i = 0
    n = len(tokens)

    while i < n:
        tok = tokens[i]
        value = tok.value

        if not current:
            # extern "C" { ... }  /  extern "C" <declaration>;
            if value == "extern" and i + 1 < n and tokens[i + 1].value.startswith('"'):
                i += 3 if i + 2 < n and tokens[i + 2].value == "{" else 2
                continue
            # closing brace of an extern "C" block
            if value == "}":
                i += 1
                continue

        if value == "{" and depth == 0:
            end = _matching_close(tokens, i)
            current.extend(tokens[i:end])
            has_body = True
            i = end
            leader = current[0].value
            if leader not in _TAG_KEYWORDS and leader != "typedef":
                # inline function definition: the body ends the statement
                yield _Statement(current, current[0].line, has_body=True)
                current, has_body = [], False
                if i < n and tokens[i].value == ";":
                    i += 1
            continue

        if value in ("(", "["):
            depth += 1
        elif value in (")", "]"):
            depth = max(0, depth - 1)

        if value == ";" and depth == 0:
            if current:
                yield _Statement(current, current[0].line, has_body=has_body)
            current, has_body, depth = [], False, 0
        else:
            current.append(tok)
        i += 1

    if current:
        yield _Statement(current, current[0].line, has_body=has_body, terminated=False)


def _is_candidate(statement: _Statement) -> bool:
    """Only direct function declarations are matched; everything else is skipped."""
    if statement.has_body:
        return False
    if statement.tokens[0].value in _SKIPPED_LEADERS:
        return False
    return any(t.value == "(" for t in statement.tokens)


# ═══════════════════════════════════════════════════════════════════════
#  Recursive-descent matcher
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class _RawDeclaration:
    name: str
    return_type: str
    parameters: Tuple[Parameter, ...]
    deprecated: bool


class _DeclarationMatcher:
    """Matches one statement's tokens against the declaration grammar."""

    def __init__(self, tokens: List[Token], macros: DeclarationMacros):
        self.tokens = tokens
        self.macros = macros
        self.pos = 0
        self.deprecated = False

    # ── cursor helpers ──

    def _peek(self, offset: int = 0) -> Optional[str]:
        i = self.pos + offset
        return self.tokens[i].value if i < len(self.tokens) else None

    def _advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def _at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def _group(self) -> List[Token]:
        """Consume a balanced ``( ... )`` group and return its inner tokens."""
        if self._peek() != "(":
            raise _NoMatch(f"expected '(' but found {self._peek()!r}")
        end = _matching_close(self.tokens, self.pos)
        if self.tokens[end - 1].value != ")":
            raise _NoMatch("unbalanced parentheses")
        inner = self.tokens[self.pos + 1:end - 1]
        self.pos = end
        return inner

    def _note_deprecation(self, name: str, group: List[Token] = ()):
        if "DEPRECATED" in name.upper() or any(t.value == "deprecated" for t in group):
            self.deprecated = True

    def _at_wrapper(self) -> bool:
        return self._peek() in self.macros.wrappers and self._peek(1) == "("

    def _skip_annotations(self):
        while not self._at_end():
            value = self._peek()
            if value not in self.macros.annotations or self._at_wrapper():
                return
            self._advance()
            group: List[Token] = []
            if self._peek() == "(":
                group = self._group()
            self._note_deprecation(value, group)

    # ── grammar ──

    def match(self) -> _RawDeclaration:
        self._skip_annotations()
        if self._at_wrapper():
            wrapper = self._advance().value
            self._note_deprecation(wrapper)
            inner = self._group()
            self._skip_annotations()
            if not self._at_end():
                raise _NoMatch(f"unexpected {self._peek()!r} after {wrapper}(...)")
            declaration = _first_argument(inner)
            if not declaration:
                raise _NoMatch(f"empty {wrapper}(...) wrapper")
            nested = _DeclarationMatcher(declaration, self.macros)
            raw = nested.match()
            raw.deprecated = True
            return raw
        return self._declaration_core()

    def _declaration_core(self) -> _RawDeclaration:
        specifiers: List[str] = []
        while True:
            self._skip_annotations()
            value = self._peek()
            if value is None:
                raise _NoMatch("missing parameter list")
            if value == "(":
                break
            if self._at_wrapper():
                raise _NoMatch(f"{value}(...) wrapper inside a declaration")
            if not (_is_identifier(value) or value == "*"):
                raise _NoMatch(f"unexpected token {value!r} before parameter list")
            specifiers.append(self._advance().value)

        if not specifiers:
            raise _NoMatch("missing return type and function name")
        name = specifiers.pop()
        if (
            not _is_identifier(name)
            or name in self.macros.api
            or name in _TYPE_KEYWORDS
        ):
            raise _NoMatch(f"missing function name before '(' (found {name!r})")

        type_tokens = [v for v in specifiers if v not in self.macros.api]
        if not type_tokens:
            raise _NoMatch(f"missing return type for {name}")
        if type_tokens[-1] in _TAG_KEYWORDS:
            raise _NoMatch(f"incomplete return type for {name}")

        parameter_tokens = self._group()
        self._skip_annotations()
        if not self._at_end():
            raise _NoMatch(f"unexpected {self._peek()!r} after parameter list of {name}")

        return _RawDeclaration(
            name=name,
            return_type=join_type_tokens(type_tokens),
            parameters=self._parameters(name, parameter_tokens),
            deprecated=self.deprecated,
        )

    def _parameters(self, function: str, tokens: List[Token]) -> Tuple[Parameter, ...]:
        pieces = _split_top_level(tokens)
        if not pieces:
            return ()
        if len(pieces) == 1 and [t.value for t in pieces[0]] == ["void"]:
            return ()

        params: List[Parameter] = []
        for index, piece in enumerate(pieces):
            values = [t.value for t in piece]
            if not values:
                raise _NoMatch(f"empty parameter {index + 1} in {function}")
            if values == ["..."]:
                if index != len(pieces) - 1:
                    raise _NoMatch(f"variadic marker is not the last parameter of {function}")
                params.append(Parameter(type="...", kind=ParameterKind.VARIADIC))
                continue
            params.append(self._parameter(function, index, values))
        return tuple(params)

    def _parameter(self, function: str, index: int, values: List[str]) -> Parameter:
        values = [
            v for i, v in enumerate(values)
            if v not in self.macros.api
            and not (v in self.macros.annotations and (i + 1 >= len(values) or values[i + 1] != "("))
        ]
        for v in values:
            if not (
                _is_identifier(v) or _NUMBER_RE.match(v)
                or v in ("*", "(", ")", "[", "]", ",", "...")
            ):
                raise _NoMatch(f"unsupported token {v!r} in parameter {index + 1} of {function}")

        # function pointer: type ( * name ) ( args )
        if "(" in values:
            open_at = values.index("(")
            close_at = open_at + _close_offset(values[open_at:])
            inner = values[open_at + 1:close_at - 1]
            names = [(open_at + 1 + i, v) for i, v in enumerate(inner) if _is_identifier(v)]
            if names:
                at, name = names[-1]
                return Parameter(type=join_type_tokens(values[:at] + values[at + 1:]), name=name)
            return Parameter(type=join_type_tokens(values))

        # array suffixes stay attached to the type: float matrix[16] -> float[16]
        suffix: List[str] = []
        while values and values[-1] == "]":
            start = len(values) - 1 - values[::-1].index("[")
            suffix = values[start:] + suffix
            values = values[:start]

        name = None
        if (
            len(values) > 1
            and _is_identifier(values[-1])
            and values[-1] not in _TYPE_KEYWORDS
            and values[-2] not in _TAG_KEYWORDS
        ):
            name = values[-1]
            values = values[:-1]
        if not values:
            raise _NoMatch(f"parameter {index + 1} of {function} has no type")
        return Parameter(type=join_type_tokens(values + suffix), name=name)


def _close_offset(values: List[str]) -> int:
    depth = 0
    for i, v in enumerate(values):
        if v in _OPENERS:
            depth += 1
        elif v in (")", "]", "}"):
            depth -= 1
            if depth == 0:
                return i + 1
    raise _NoMatch("unbalanced parentheses in parameter")


def _split_top_level(tokens: List[Token]) -> List[List[Token]]:
    """Split on commas that are not nested inside brackets."""
    if not tokens:
        return []
    pieces: List[List[Token]] = [[]]
    depth = 0
    for tok in tokens:
        if tok.value in _OPENERS:
            depth += 1
        elif tok.value in (")", "]", "}"):
            depth -= 1
        if tok.value == "," and depth == 0:
            pieces.append([])
        else:
            pieces[-1].append(tok)
    return pieces


def _first_argument(tokens: List[Token]) -> List[Token]:
    return _split_top_level(tokens)[0] if tokens else []


# ═══════════════════════════════════════════════════════════════════════
#  Public API
# ═══════════════════════════════════════════════════════════════════════

class DeclarationStream:
    """Lazy, restartable sequence of the function signatures in one header.

    Every iteration re-parses the text from the start.  ``failures`` holds
    the ``ParseFailure``s of the most recent pass and is complete once that
    pass has been exhausted.
    """

    def __init__(
        self,
        text: str,
        header: str,
        module: Module,
        macros: Optional[DeclarationMacros] = None,
    ):
        self.text = text
        self.header = header
        self.module = module
        self.macros = macros or DeclarationMacros()
        self.failures: List[ParseFailure] = []

    def __iter__(self) -> Iterator[FunctionSignature]:
        self.failures = []
        tokens = tokenize(clean_header(self.text))
        order = 0

        for statement in _split_statements(tokens):
            if not _is_candidate(statement):
                continue
            try:
                if not statement.terminated:
                    raise _NoMatch("missing terminating ';'")
                raw = _DeclarationMatcher(statement.tokens, self.macros).match()
            except _NoMatch as e:
                failure = ParseFailure(self.header, statement.line, str(e), text=statement.text)
                logger.info("Skipping declaration at %s:%d: %s", self.header, statement.line, e)
                self.failures.append(failure)
                continue

            yield FunctionSignature(
                name=raw.name,
                return_type=raw.return_type,
                parameters=raw.parameters,
                source_header=self.header,
                module=self.module,
                declaration_order=order,
                line=statement.line,
                deprecated=raw.deprecated,
            )
            order += 1

    def parse_all(self) -> List[FunctionSignature]:
        """Run one full pass and return its signatures."""
        return list(self)


def parse_declarations(
    text: str,
    header: str = "<memory>",
    module: Module = Module.CORE,
    macros: Optional[DeclarationMacros] = None,
) -> DeclarationStream:
    return DeclarationStream(text, header, module, macros)
