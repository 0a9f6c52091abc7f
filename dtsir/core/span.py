"""
Lightweight source span representation used by diagnostics.

A Span can wrap whatever location object the parser provides via the `raw`
field (a lark exception, an AST `Located`) while also carrying optional
file/line/column info when available.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
    """Represents a source span (best-effort file/line/column plus raw parser loc)."""

    file: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    raw: Any = None

    @classmethod
    def from_loc(cls, loc: Any, file: Optional[str] = None) -> "Span":
        """
        Construct a Span from an existing parser/location object.

        If `loc` is already a Span, it is returned unchanged; otherwise the
        location object is stored in `raw`.
        """
        if loc is None:
            return cls(file=file)
        if isinstance(loc, cls):
            return loc
        return cls(
            file=file or getattr(loc, "file", None) or getattr(loc, "filename", None),
            line=getattr(loc, "line", None),
            column=getattr(loc, "column", None),
            raw=loc,
        )

    def format(self) -> str:
        line = self.line if self.line is not None else "?"
        column = self.column if self.column is not None else "?"
        return f"{self.file or '<input>'}:{line}:{column}"


__all__ = ["Span"]
