"""
Declaration-file front end: lark grammar + AST builder.

`parse_source` is the entry point used by the driver. It collects syntax
errors as diagnostics instead of raising, so callers can branch on success or
failure without handling lark's exception hierarchy themselves.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from lark.exceptions import UnexpectedInput

from dtsir.core.diagnostics import Diagnostic
from dtsir.core.span import Span

from . import ast
from .ast import DeclarationSourceFile
from .parser import AstBuildError, parse_declarations


def parse_source(source: str, filename: str = "<input>") -> Tuple[Optional[DeclarationSourceFile], List[Diagnostic]]:
    """
    Parse declaration source text.

    Returns `(source_file, [])` on success and `(None, [diagnostic])` on a
    syntax error; never raises for malformed input.
    """
    try:
        return parse_declarations(source), []
    except AstBuildError as err:
        span = Span.from_loc(err.loc, file=filename)
        return None, [Diagnostic(message=str(err), severity="error", phase="parser", span=span)]
    except UnexpectedInput as err:
        # UnexpectedEOF reports -1 for both line and column.
        line = getattr(err, "line", None)
        column = getattr(err, "column", None)
        if line is not None and line < 0:
            line, column = None, None
        span = Span(file=filename, line=line, column=column, raw=err)
        return None, [Diagnostic(message=str(err).strip(), severity="error", phase="parser", span=span)]


__all__ = ["ast", "AstBuildError", "DeclarationSourceFile", "parse_declarations", "parse_source"]
