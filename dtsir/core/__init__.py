from .diagnostics import Diagnostic
from .span import Span

__all__ = ["Diagnostic", "Span"]
