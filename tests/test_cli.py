"""Tests for the run_converter command line."""

import json

import pytest
from astnodes import cls, enum, unit

from run_converter import main


def write_ast(tmp_path, ast, name="unit.json"):
    path = tmp_path / name
    path.write_text(json.dumps(ast), encoding="utf-8")
    return path


def test_json_ast_to_stdout(tmp_path, capsys):
    path = write_ast(tmp_path, unit(enum("Color", "Red", "Green")))
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out == "public class Color\n{\n    public static Red = 0;\n    public static Green = 1;\n}\n"


def test_json_ast_to_file(tmp_path):
    path = write_ast(tmp_path, unit(cls("A")))
    out_ts = tmp_path / "a.ts"
    assert main([str(path), str(out_ts)]) == 0
    assert out_ts.read_text(encoding="utf-8") == "export  class A\n{\n}\n"


def test_ast_json_flag_without_suffix(tmp_path, capsys):
    path = write_ast(tmp_path, unit(cls("A")), name="unit.ast")
    assert main([str(path), "--ast-json"]) == 0
    assert capsys.readouterr().out.startswith("export  class A")


def test_strict_failure_exit_code(tmp_path, capsys):
    path = write_ast(tmp_path, unit({"type": "StructDeclaration", "children": []}))
    assert main([str(path), "--strict"]) == 1
    assert "StructDeclaration" in capsys.readouterr().err


def test_report_goes_to_stderr(tmp_path, capsys):
    path = write_ast(tmp_path, unit({"type": "StructDeclaration", "children": [cls("A")]}))
    assert main([str(path), "--report"]) == 0
    captured = capsys.readouterr()
    assert "StructDeclaration: 1" in captured.err
    assert captured.out == "export  class A\n{\n}\n"


def test_missing_input_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.json")]) == 1
    assert capsys.readouterr().err.startswith("error:")


def test_csharp_source_input(tmp_path, capsys):
    pytest.importorskip("tree_sitter_c_sharp")
    src = tmp_path / "Color.cs"
    src.write_text("public enum Color { Red, Blue }\n", encoding="utf-8")
    assert main([str(src)]) == 0
    assert "    public static Blue = 1;" in capsys.readouterr().out
