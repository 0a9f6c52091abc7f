"""
dtsir driver: declaration source -> parser -> IR.

`convert_source` is the library entry point. It never raises for malformed
input: a parse failure is reported through `emit` and yields `([], [])`.
`main` wraps it in a small command line tool.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, List, Optional

from .core.diagnostics import Diagnostic
from .core.span import Span
from .ir import Class
from .lower import convert_declarations
from .lower.ambient import ConvertResult
from .options import ConvertOptions
from .parser import parse_source
from .printer import format_classes, format_source_file

Emit = Callable[[str], None]


def _stderr(line: str) -> None:
    print(line, file=sys.stderr)


def convert_source(options: ConvertOptions, source: str, emit: Optional[Emit] = None) -> ConvertResult:
    """Parse `source` and convert it to `(warnings, classes)`."""
    if emit is None:
        emit = _stderr
    warnings, classes, diagnostics = _convert(options, source, emit)
    for diag in diagnostics:
        emit(diag.format_human())
    return warnings, classes


def convert_file(path: Path, options: Optional[ConvertOptions] = None, emit: Optional[Emit] = None) -> ConvertResult:
    if options is None:
        options = ConvertOptions(filename=str(path))
    return convert_source(options, Path(path).read_text(), emit=emit)


def _convert(options: ConvertOptions, source: str, emit: Emit) -> tuple[List[str], List[Class], List[Diagnostic]]:
    source_file, diagnostics = parse_source(source, options.filename)
    if source_file is None:
        return [], [], diagnostics
    if options.dump_ast:
        emit(f"== AST for {options.filename} ==")
        emit(format_source_file(source_file))
    warnings, classes = convert_declarations(source_file, options)
    return warnings, classes, diagnostics


def _warning_diagnostics(warnings: List[str], filename: str) -> List[Diagnostic]:
    return [
        Diagnostic(message=w, severity="warning", phase="convert", span=Span(file=filename))
        for w in warnings
    ]


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="dtsir", description="dtsir: TypeScript declaration file -> IR converter")
    ap.add_argument("source", type=Path, help="Declaration source file (.d.ts)")
    ap.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-vv prints the parsed declaration AST to stderr)",
    )
    ap.add_argument("--json", action="store_true", help="Emit the IR and diagnostics as JSON")
    ap.add_argument("-o", "--output", type=Path, default=None, help="Write the IR to this file instead of stdout")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    source_path: Path = args.source
    options = ConvertOptions(verbosity=args.verbose, filename=str(source_path))

    try:
        source = source_path.read_text()
    except OSError as err:
        diag = Diagnostic(
            message=f"cannot read source: {err.strerror or err}",
            severity="error",
            phase="io",
            span=Span(file=str(source_path)),
        )
        if args.json:
            print(json.dumps({"exit_code": 1, "diagnostics": [diag.to_dict()]}))
        else:
            _stderr(diag.format_human())
        return 1

    warnings, classes, diagnostics = _convert(options, source, _stderr)
    exit_code = 1 if any(d.severity == "error" for d in diagnostics) else 0
    diagnostics = diagnostics + _warning_diagnostics(warnings, options.filename)

    if args.json:
        payload = {
            "exit_code": exit_code,
            "diagnostics": [d.to_dict() for d in diagnostics],
            "warnings": list(warnings),
            "classes": [cls.to_dict() for cls in classes],
        }
        text = json.dumps(payload, indent=2)
    else:
        for diag in diagnostics:
            _stderr(diag.format_human())
        text = format_classes(classes)

    if exit_code:
        if args.json:
            print(text)
        return exit_code
    if args.output is not None:
        args.output.write_text(text + "\n" if text else "")
    elif text:
        print(text)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
