from __future__ import annotations

import json
from pathlib import Path

from dtsir.driver import convert_file, convert_source, main
from dtsir.ir import Class, ClassTag, Method, Type
from dtsir.options import AST_DUMP_VERBOSITY, ConvertOptions

SAMPLE = """
declare module Geometry.Shapes {
    export class Circle {
        constructor(radius: number);
        constructor(diameter: string);
        area(): number;
    }
}
interface Named { name(): string }
"""


def test_convert_source_success():
    lines: list[str] = []
    warnings, classes = convert_source(ConvertOptions(), SAMPLE, emit=lines.append)
    assert warnings == ["Too many constructors"]
    assert classes == [
        Class(
            name="Circle",
            module_name="Geometry.Shapes",
            exported=True,
            methods=(Method("area", (), None, Type("number")),),
            constructor=Method("constructor", (("radius", Type("number")),), None, None),
            tag=ClassTag.CLASS,
        ),
        Class(
            name="Named",
            module_name=None,
            exported=False,
            methods=(Method("name", (), None, Type("string")),),
            constructor=None,
            tag=ClassTag.INTERFACE,
        ),
    ]
    assert lines == []


def test_parse_failure_yields_empty_result_and_reports():
    lines: list[str] = []
    result = convert_source(ConvertOptions(filename="bad.d.ts"), "declare class {", emit=lines.append)
    assert result == ([], [])
    assert len(lines) == 1
    assert lines[0].startswith("bad.d.ts:")
    assert ": error: " in lines[0]


def test_ast_dump_only_above_threshold():
    quiet: list[str] = []
    convert_source(ConvertOptions(verbosity=AST_DUMP_VERBOSITY), "interface I {}", emit=quiet.append)
    assert quiet == []

    loud: list[str] = []
    convert_source(ConvertOptions(verbosity=AST_DUMP_VERBOSITY + 1, filename="x.d.ts"), "interface I {}", emit=loud.append)
    assert loud == ["== AST for x.d.ts ==", "interface I"]


def test_convert_file(tmp_path: Path):
    src = tmp_path / "lib.d.ts"
    src.write_text("declare class A { run(): void }")
    warnings, classes = convert_file(src)
    assert warnings == []
    assert [cls.name for cls in classes] == ["A"]


def test_cli_text_output(tmp_path: Path, capsys):
    src = tmp_path / "lib.d.ts"
    src.write_text(SAMPLE)
    assert main([str(src)]) == 0
    captured = capsys.readouterr()
    assert captured.out.splitlines() == [
        "export class Geometry.Shapes.Circle",
        "  constructor(radius: number)",
        "  area(): number",
        "interface Named",
        "  name(): string",
    ]
    assert f"{src}:?:?: warning: Too many constructors" in captured.err


def test_cli_json_output_file(tmp_path: Path, capsys):
    src = tmp_path / "lib.d.ts"
    src.write_text("interface I { f(x): void }")
    out = tmp_path / "ir.json"
    assert main([str(src), "--json", "-o", str(out)]) == 0
    assert capsys.readouterr().out == ""
    payload = json.loads(out.read_text())
    assert payload["exit_code"] == 0
    assert payload["warnings"] == []
    assert payload["classes"][0]["name"] == "I"
    assert payload["classes"][0]["methods"][0]["params"] == [
        {"name": "x", "type": {"name": "string", "args": []}}
    ]


def test_cli_parse_error(tmp_path: Path, capsys):
    src = tmp_path / "bad.d.ts"
    src.write_text("interface {")
    assert main([str(src)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert f"{src}:1:" in captured.err
    assert ": error: " in captured.err


def test_cli_parse_error_json(tmp_path: Path, capsys):
    src = tmp_path / "bad.d.ts"
    src.write_text("interface {")
    assert main([str(src), "--json"]) == 1
    payload = json.loads(capsys.readouterr().out)
    assert payload["exit_code"] == 1
    assert payload["classes"] == []
    assert payload["diagnostics"][0]["phase"] == "parser"
    assert payload["diagnostics"][0]["file"] == str(src)


def test_cli_missing_file(tmp_path: Path, capsys):
    assert main([str(tmp_path / "missing.d.ts")]) == 1
    assert "cannot read source" in capsys.readouterr().err


def test_cli_verbose_dumps_ast(tmp_path: Path, capsys):
    src = tmp_path / "lib.d.ts"
    src.write_text("declare var x: number;")
    assert main([str(src), "-vv"]) == 0
    captured = capsys.readouterr()
    assert "declare var x: number" in captured.err
    assert captured.out == ""
