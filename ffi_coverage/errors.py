"""
Error kinds raised by the coverage pipeline.

Only ``DirectoryNotFound`` aborts a run.  ``HeaderReadFailure`` and
``ParseFailure`` are caught per header and turned into ``ParseWarning``
records so that the report can still be rendered.
"""

from pathlib import Path
from typing import Optional, Union


class CoverageError(Exception):
    """Base class for every error raised by ffi_coverage."""


class DirectoryNotFound(CoverageError):
    """An include directory (or the API root) is missing."""

    def __init__(self, path: Union[str, Path], reason: str = "does not exist"):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"header directory {self.path} {reason}")


class HeaderReadFailure(CoverageError):
    """A single header could not be opened or decoded."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot read {self.path}: {reason}")


class ParseFailure(CoverageError):
    """A declaration inside a header did not match the declaration grammar."""

    def __init__(self, header: Union[str, Path], line: Optional[int], reason: str, text: str = ""):
        self.header = Path(header)
        self.line = line
        self.reason = reason
        self.text = text
        where = f"{self.header}:{line}" if line else str(self.header)
        super().__init__(f"{where}: {reason}")


def format_error_chain(error: BaseException) -> str:
    """Render an exception and its ``__cause__`` / ``__context__`` chain."""
    lines = [f"Error: {error}"]
    seen = {id(error)}
    current = error.__cause__ or error.__context__
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        lines.append(f"  caused by: {type(current).__name__}: {current}")
        current = current.__cause__ or current.__context__
    return "\n".join(lines)
