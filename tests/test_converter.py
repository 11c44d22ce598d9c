"""Tests for dispatch, unhandled-kind reporting and the driver."""

import json
import logging

import pytest
from astnodes import block, catch, cls, declarator, enum, expr, field, local, method, param, try_, unit, var

from cs2ts.converter import Converter, UnhandledNodeError, load_ast, translate


def interface_with_field():
    return {
        "type": "InterfaceDeclaration",
        "name": "IThing",
        "children": [field("int", declarator("x"))],
    }


def test_unhandled_kind_descends_without_output():
    conv = Converter(unit(interface_with_field()))
    assert conv.run() == "private x: number;"
    assert conv.unhandled == {"InterfaceDeclaration": 1}


def test_unhandled_kinds_are_counted_and_logged_once(caplog):
    loop = {"type": "ForStatement", "children": [block(expr("Step();"))]}
    conv = Converter(method("Run", "void", body=block(loop, loop)))
    with caplog.at_level(logging.WARNING, logger="cs2ts.converter"):
        text = conv.run()
    assert text.split("\n")[2:4] == ["    Step();", "    Step();"]
    assert conv.unhandled == {"ForStatement": 2}
    warnings = [r for r in caplog.records if "ForStatement" in r.getMessage()]
    assert len(warnings) == 1


def test_strict_mode_raises_on_unhandled_kind():
    with pytest.raises(UnhandledNodeError) as excinfo:
        Converter(unit(interface_with_field()), strict=True).run()
    assert excinfo.value.kind == "InterfaceDeclaration"


def test_container_kinds_are_not_unhandled():
    conv = Converter(unit(method("Run", "void", body=block(local("int", var("x", "= 1"))))))
    conv.run()
    assert conv.unhandled == {}


def test_scopes_unwind_when_strict_aborts():
    conv = Converter(unit(cls("A", method("Run", "void", body=block({"type": "ForStatement"})))), strict=True)
    with pytest.raises(UnhandledNodeError):
        conv.run()
    assert conv.out.indent == 0
    stripped = [line.strip() for line in conv.out.lines]
    assert stripped.count("{") == stripped.count("}") == 2


def test_non_dict_nodes_are_ignored():
    conv = Converter(unit(None, "text", cls("A")))
    assert conv.run() == "export  class A\n{\n}"


def test_translate_matches_converter():
    ast = unit(cls("A", field("bool", declarator("on"))))
    assert translate(ast) == Converter(ast).run()


def test_report_lists_unhandled_and_coverage():
    conv = Converter(unit(interface_with_field()))
    conv.run()
    report = conv.report()
    assert "unhandled node kinds:" in report
    assert "  InterfaceDeclaration: 1" in report
    assert "FieldDeclaration: 1 -> FieldConverter.convert" in report


def test_report_credits_kinds_handled_by_parent():
    ast = unit(
        enum("E", "A", "B"),
        method("Run", "void", params=(param("n", "int"),), body=block(
            local("int", var("x"), var("y", "= 2")),
            try_(block(expr("Go();")), catch("e")),
        )),
    )
    conv = Converter(ast)
    conv.run()
    report = conv.report()
    assert "EnumMemberDeclaration: 2 -> TopClassConverter.convert (via EnumDeclaration)" in report
    assert "VariableDeclarator: 2 -> ControlConverter.convert (via VariableDeclaration)" in report
    assert "CatchClause: 1 -> ControlConverter.convert (via TryStatement)" in report
    assert "UNHANDLED" not in report
    assert "int: " not in report


def test_load_ast_reads_json(tmp_path):
    ast = unit(cls("Saved"))
    path = tmp_path / "ast.json"
    path.write_text(json.dumps(ast), encoding="utf-8")
    assert translate(load_ast(str(path))) == "export  class Saved\n{\n}"
