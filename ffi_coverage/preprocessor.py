"""
Header preprocessing and tokenization.

Headers are never run through a real preprocessor: we do not expand macros
and we do not evaluate conditional chains against a build configuration.
Instead the text is reduced to its *default* shape, the one a compiler sees
with no macros defined:

  • comments are removed (line numbers are preserved)
  • directive lines are blanked
  • each ``#if`` chain keeps only the branch taken with nothing defined,
    its conditions evaluated by pcpp

The remaining text is then tokenized with the pcpp C lexer.
"""

import re
import bisect
import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

from pcpp import Preprocessor

logger = logging.getLogger(__name__)


class _QuietPreprocessor(Preprocessor):
    """A pcpp Preprocessor used for its lexer and ``#if`` evaluator.

    pcpp reports problems through ``on_error()`` which prints to stderr;
    route them to ``logging`` at DEBUG level instead.  Expressions are
    evaluated with no macros defined, so unknown identifiers are answered
    here instead of being passed through.
    """

    def __init__(self):
        super().__init__()
        # drop pcpp's predefined __DATE__, __TIME__, __PCPP__
        self.macros.clear()

    def on_error(self, file, line, msg):
        logger.debug("pcpp: %s:%s: %s", file, line, msg)

    def on_unknown_macro_in_defined_expr(self, tok):
        return False

    def on_unknown_macro_in_expr(self, ident):
        return 0


# pcpp lexers keep state between inputs, so every thread gets its own host.
_local = threading.local()


def _lexer_host() -> _QuietPreprocessor:
    host = getattr(_local, "host", None)
    if host is None:
        host = _QuietPreprocessor()
        _local.host = host
    return host


@dataclass(frozen=True)
class Token:
    """A significant (non-whitespace) token and the 1-indexed line it starts on."""
    value: str
    line: int


# ═══════════════════════════════════════════════════════════════════════
#  Comments
# ═══════════════════════════════════════════════════════════════════════

# String/char literals are matched first so that "//" inside a literal
# is not mistaken for a comment.
_COMMENT_RE = re.compile(
    r'("(?:\\.|[^"\\\n])*"|\'(?:\\.|[^\'\\\n])*\')'
    r'|//[^\n]*'
    r'|/\*.*?(?:\*/|\Z)',
    re.DOTALL,
)


def strip_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments, keeping every newline."""
    def _replace(m: re.Match) -> str:
        if m.group(1) is not None:
            return m.group(1)
        return " " + "\n" * m.group(0).count("\n")

    return _COMMENT_RE.sub(_replace, text)


# ═══════════════════════════════════════════════════════════════════════
#  Conditional compilation
# ═══════════════════════════════════════════════════════════════════════

_DIRECTIVE_RE = re.compile(r'^#\s*(\w+)\s*(.*)$', re.DOTALL)


@dataclass
class _Branch:
    parent_active: bool
    taken: bool
    active: bool


def evaluate_default_condition(kind: str, expression: str) -> bool:
    """Evaluate a conditional directive with no macros defined.

    ``#ifdef`` is never taken, ``#ifndef`` always is.  ``#if`` and
    ``#elif`` expressions are evaluated by pcpp with every identifier
    undefined (so it reads as ``0``).  An expression pcpp cannot fully
    evaluate, such as a call to an unknown function-like macro, counts as
    false so that the ``#else`` branch, if any, becomes the default.
    """
    if kind == "ifdef":
        return False
    if kind == "ifndef":
        return True

    host = _lexer_host()
    tokens = host.tokenize(expression.strip())
    if not tokens:
        logger.debug("Empty #%s expression treated as false", kind)
        return False
    value, rewritten = host.evalexpr(tokens)
    if rewritten is not None:
        logger.debug("Cannot evaluate #%s %s; treated as false", kind, expression.strip())
        return False
    return value != 0


def select_default_branches(text: str) -> str:
    """Blank out directive lines and every line of an inactive branch.

    The result has exactly as many lines as the input.
    """
    lines = text.split("\n")
    stack: List[_Branch] = []

    def active() -> bool:
        return stack[-1].active if stack else True

    i = 0
    while i < len(lines):
        stripped = lines[i].strip()
        if not stripped.startswith("#"):
            if not active():
                lines[i] = ""
            i += 1
            continue

        # Join backslash continuations into one directive.
        directive = stripped
        end = i
        while directive.endswith("\\") and end + 1 < len(lines):
            end += 1
            directive = directive[:-1] + " " + lines[end].strip()
        for k in range(i, end + 1):
            lines[k] = ""
        i = end + 1

        m = _DIRECTIVE_RE.match(directive)
        if not m:
            continue
        kind, expression = m.group(1), m.group(2)

        if kind in ("if", "ifdef", "ifndef"):
            parent = active()
            cond = evaluate_default_condition(kind, expression)
            stack.append(_Branch(parent_active=parent, taken=cond, active=parent and cond))
        elif kind == "elif":
            if not stack:
                logger.debug("Unbalanced #elif ignored")
                continue
            branch = stack[-1]
            if branch.taken:
                branch.active = False
            else:
                cond = evaluate_default_condition("if", expression)
                branch.taken = cond
                branch.active = branch.parent_active and cond
        elif kind == "else":
            if not stack:
                logger.debug("Unbalanced #else ignored")
                continue
            branch = stack[-1]
            branch.active = branch.parent_active and not branch.taken
            branch.taken = True
        elif kind == "endif":
            if stack:
                stack.pop()
            else:
                logger.debug("Unbalanced #endif ignored")
        # define / undef / include / pragma / error: nothing to do

    if stack:
        logger.debug("%d conditional block(s) left open at end of header", len(stack))
    return "\n".join(lines)


def clean_header(text: str) -> str:
    """Reduce raw header text to the declarations of its default branch."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return select_default_branches(strip_comments(text))


# ═══════════════════════════════════════════════════════════════════════
#  Tokenizer
# ═══════════════════════════════════════════════════════════════════════

def tokenize(text: str) -> List[Token]:
    """Split C text into significant tokens using the pcpp lexer.

    Whitespace and line continuations are dropped, and the three ``.``
    tokens of a variadic marker are merged into a single ``...`` token.
    """
    newlines = [i for i, ch in enumerate(text) if ch == "\n"]
    raw = _lexer_host().tokenize(text)

    tokens: List[Token] = []
    last_pos: Optional[int] = None
    for tok in raw:
        value = tok.value
        if not value.strip() or value.strip() == "\\":
            last_pos = None
            continue
        pos = tok.lexpos
        if (
            value == "."
            and last_pos == pos - 1
            and tokens
            and tokens[-1].value in (".", "..")
        ):
            tokens[-1] = Token(tokens[-1].value + ".", tokens[-1].line)
        else:
            tokens.append(Token(value, bisect.bisect_left(newlines, pos) + 1))
        last_pos = pos + len(value) - 1
    return tokens
