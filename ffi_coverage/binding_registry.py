"""
Binding Registry: the closed set of native functions the wrapper covers.

The registry is an immutable value built once at process start and passed
into the differ.  It normally comes from the compiled-in list in
``known_bindings.py``; ``from_wrapper_sources`` can rebuild it from a
checkout of the Rust wrapper crate by walking each source file's syntax
tree (tree-sitter) and collecting every referenced ``FMOD_*`` identifier.

Usage:
    registry = BindingRegistry.default()
    registry.is_covered("FMOD_System_Create")  # -> True
"""

import os
import re
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterable, Iterator, Optional, Set, Tuple, Union

import tree_sitter_rust as tsrust
from tree_sitter import Language, Parser, Node

from ffi_coverage.errors import DirectoryNotFound
from ffi_coverage.known_bindings import KNOWN_BINDINGS

logger = logging.getLogger(__name__)

RUST_LANGUAGE = Language(tsrust.language())
_parser = Parser(RUST_LANGUAGE)

# Native function names are CamelCase after the prefix; enum constants and
# macros (FMOD_OK, FMOD_INIT_NORMAL) are all caps and are not collected.
_FUNCTION_NAME_RE = re.compile(r"^FMOD_[A-Za-z0-9_]*[a-z][A-Za-z0-9_]*$")


# ═══════════════════════════════════════════════════════════════════════
#  Aliases
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AliasRule:
    """A name is covered when its rewritten form is covered.

    The wrapper binds ``FMOD_ChannelControl_*`` once for both channels and
    channel groups, so ``FMOD_Channel_SetPan`` counts as covered when
    ``FMOD_ChannelControl_SetPan`` is.
    """
    pattern: str
    replacement: str

    def target(self, name: str) -> Optional[str]:
        m = re.match(self.pattern, name)
        if not m:
            return None
        return m.expand(self.replacement)


DEFAULT_ALIASES: Tuple[AliasRule, ...] = (
    AliasRule(r"^FMOD_(?:Channel|ChannelGroup)_(.+)$", r"FMOD_ChannelControl_\1"),
)


# ═══════════════════════════════════════════════════════════════════════
#  Registry
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class BindingRegistry:
    names: FrozenSet[str]
    aliases: Tuple[AliasRule, ...] = DEFAULT_ALIASES

    @classmethod
    def from_names(
        cls, names: Iterable[str], aliases: Tuple[AliasRule, ...] = DEFAULT_ALIASES
    ) -> "BindingRegistry":
        return cls(frozenset(names), tuple(aliases))

    @classmethod
    def default(cls) -> "BindingRegistry":
        """Registry built from the compiled-in wrapper surface."""
        return cls.from_names(KNOWN_BINDINGS)

    @classmethod
    def from_wrapper_sources(
        cls, root: Union[str, Path], aliases: Tuple[AliasRule, ...] = DEFAULT_ALIASES
    ) -> "BindingRegistry":
        """Scan every ``.rs`` file below ``root`` for referenced native functions."""
        root = Path(root)
        if not root.is_dir():
            raise DirectoryNotFound(root, "is not a wrapper source directory")

        names: Set[str] = set()
        files = _discover_rust_files(root)
        for path in files:
            try:
                source = path.read_bytes()
            except OSError as e:
                logger.warning("Cannot read %s: %s", path, e)
                continue
            found = collect_referenced_functions(source)
            logger.debug("%s references %d native function(s)", path, len(found))
            names |= found

        logger.info(
            "Binding registry rebuilt from %d Rust file(s): %d function(s)",
            len(files), len(names),
        )
        return cls(frozenset(names), tuple(aliases))

    def with_names(self, extra: Iterable[str]) -> "BindingRegistry":
        """A new registry that additionally covers ``extra``."""
        return BindingRegistry(self.names | frozenset(extra), self.aliases)

    def is_covered(self, name: str) -> bool:
        if name in self.names:
            return True
        for rule in self.aliases:
            target = rule.target(name)
            if target is not None and target in self.names:
                return True
        return False

    def all_known_names(self) -> FrozenSet[str]:
        return self.names

    def __len__(self) -> int:
        return len(self.names)


# ═══════════════════════════════════════════════════════════════════════
#  Wrapper source scanning
# ═══════════════════════════════════════════════════════════════════════

def _discover_rust_files(root: Path) -> list:
    files = []
    for dirpath, dirs, filenames in os.walk(root):
        dirs[:] = [d for d in dirs if d not in {".git", "target"}]
        for fname in filenames:
            if fname.endswith(".rs"):
                files.append(Path(dirpath) / fname)
    return sorted(files)


def _walk_type(node: Node, type_name: str) -> Iterator[Node]:
    """Yield all descendant nodes of a given type."""
    cursor = node.walk()
    visited = False
    while True:
        if not visited and cursor.node.type == type_name:
            yield cursor.node
        if not visited and cursor.goto_first_child():
            visited = False
            continue
        if cursor.goto_next_sibling():
            visited = False
            continue
        if cursor.goto_parent():
            visited = True
            continue
        break


def collect_referenced_functions(source: bytes) -> Set[str]:
    """Native function names referenced anywhere in Rust source.

    Identifiers in calls, paths (``ffi::FMOD_System_Create``) and inside
    macro invocations all surface as ``identifier`` nodes.  Doc comments are
    comment nodes, so names mentioned only in documentation do not count.
    """
    tree = _parser.parse(source)
    names = set()
    for node in _walk_type(tree.root_node, "identifier"):
        text = source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
        if _FUNCTION_NAME_RE.match(text):
            names.add(text)
    return names
