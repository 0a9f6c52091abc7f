from __future__ import annotations

from dataclasses import dataclass

# The parsed AST is rendered to the diagnostic channel when verbosity exceeds this.
AST_DUMP_VERBOSITY = 1


@dataclass(frozen=True)
class ConvertOptions:
    verbosity: int = 0
    filename: str = "<input>"

    @property
    def dump_ast(self) -> bool:
        return self.verbosity > AST_DUMP_VERBOSITY
