"""
Common diagnostic structure for the parser and the driver.

A message plus severity, phase and span. Conversion warnings are plain strings
in the IR hand-off; the driver wraps them into `Diagnostic`s only to render
them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .span import Span


@dataclass
class Diagnostic:
    """Represents a parser/driver diagnostic (error/warning)."""

    message: str
    severity: str = "error"
    # "parser" for syntax errors, "convert" for conversion warnings, "io" for
    # unreadable input.
    phase: str | None = None
    span: Span = field(default_factory=Span)
    notes: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.span is None:  # type: ignore[unreachable]
            self.span = Span()

    def format_human(self) -> str:
        return f"{self.span.format()}: {self.severity}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.phase,
            "message": self.message,
            "severity": self.severity,
            "file": self.span.file,
            "line": self.span.line,
            "column": self.span.column,
            "notes": list(self.notes),
        }
