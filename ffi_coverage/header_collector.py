"""Header Collector: finds the header files of one API module."""

import os
import logging
from pathlib import Path
from typing import List, Union

from ffi_coverage.errors import DirectoryNotFound, HeaderReadFailure
from ffi_coverage.signature import Module

logger = logging.getLogger(__name__)

# File extensions we treat as headers
_HEADER_EXTENSIONS = {".h", ".hh", ".hpp"}


def _norm_path(p: str) -> str:
    """Normalise a path to forward slashes for cross-platform consistency."""
    return p.replace("\\", "/")


def module_include_dir(api_dir: Union[str, Path], module: Module) -> Path:
    """``<api_dir>/core/inc`` or ``<api_dir>/studio/inc``."""
    return Path(api_dir).joinpath(*module.include_subdir)


def collect_headers(include_dir: Union[str, Path]) -> List[Path]:
    """All headers below ``include_dir``, sorted by their relative POSIX path.

    Raises DirectoryNotFound if the directory is missing; without a header
    set there is nothing to compute coverage over.
    """
    root = Path(include_dir)
    if not root.exists():
        raise DirectoryNotFound(root)
    if not root.is_dir():
        raise DirectoryNotFound(root, "is not a directory")

    found = []
    for dirpath, dirs, filenames in os.walk(root):
        dirs[:] = [d for d in dirs if not d.startswith(".")]
        for fname in filenames:
            if os.path.splitext(fname)[1].lower() in _HEADER_EXTENSIONS:
                full = Path(dirpath) / fname
                found.append((_norm_path(os.path.relpath(full, root)), full))

    found.sort(key=lambda item: item[0])
    logger.info("Found %d header(s) in %s", len(found), root)
    return [full for _, full in found]


def display_path(path: Path, api_dir: Union[str, Path]) -> str:
    """Path of a header relative to the API root, with forward slashes."""
    try:
        return _norm_path(os.path.relpath(path, api_dir))
    except ValueError:
        # different drive on Windows
        return _norm_path(str(path))


def read_header(path: Union[str, Path]) -> str:
    """Read a header as text.  Undecodable bytes are replaced."""
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise HeaderReadFailure(path, e.strerror or str(e)) from e

    # Skip binary
    if b"\x00" in data[:8192]:
        raise HeaderReadFailure(path, "file looks binary")

    return data.decode("utf-8", errors="replace")
