from __future__ import annotations

import collections
import json
import logging
import time
from collections import defaultdict
from typing import Any, Dict

from cs2ts.basic_structure import ProjectConverter, NamespaceConverter, ImportConverter
from cs2ts.classes import TopClassConverter
from cs2ts.fields import FieldConverter
from cs2ts.methods import MethodConverter
from cs2ts.control import ControlConverter
from cs2ts.emitter import Emitter
from cs2ts.util import children, node_type

logger = logging.getLogger("cs2ts.converter")

# 仅做递归、本身不输出的容器节点，不计入 unhandled
TRANSPARENT_TYPES = {"CompilationUnit", "LocalDeclarationStatement"}

# 由父节点的转换器直接处理，不经过分发表
PARENT_HANDLED_TYPES = {
    "EnumMemberDeclaration": "EnumDeclaration",
    "VariableDeclarator": "VariableDeclaration",
    "AccessorDeclaration": "PropertyDeclaration",
    "CatchClause": "TryStatement",
}

class TranslationError(Exception):
    """Base class for errors surfaced to callers of the translator."""

class UnhandledNodeError(TranslationError):
    def __init__(self, kind: str):
        super().__init__(f"no translator for node kind {kind!r}")
        self.kind = kind

class Converter:
    """主分发 + 统计：深度优先、先序遍历 AST，经 Emitter 输出 TypeScript 文本"""

    def __init__(self, ast, strict: bool = False):
        self.ast = ast
        self.strict = strict
        self.out = Emitter()
        self.project_conv = ProjectConverter(self)
        self.ns_conv = NamespaceConverter(self)
        self.imp_conv = ImportConverter(self)
        self.top_cls_conv = TopClassConverter(self)
        self.field_conv = FieldConverter(self)
        self.method_conv = MethodConverter(self)
        self.ctrl_conv = ControlConverter(self)
        self.stats = {
            "visited": 0,
            "converted": 0,
            "unhandled_by_type": defaultdict(int),
        }
        self.handlers = self._build_dispatch()
        self.ast_type_counts = collections.Counter()
        self.timing = {
            "elapsed_ms": 0.0,
            "lines": 0,
        }

    # ---------------- Dispatch helpers ----------------

    def _build_dispatch(self):
        handlers = {}

        def bind(types, fn):
            for tp in types:
                handlers[tp] = fn

        bind(("CompilationUnit",), self.project_conv.convert)
        bind(("NamespaceDeclaration",), self.ns_conv.convert)
        bind(("UsingDirective",), self.imp_conv.convert)
        bind(("Comment",), self._convert_comment)
        bind(("ClassDeclaration", "EnumDeclaration"), self.top_cls_conv.convert)
        bind(("FieldDeclaration", "PropertyDeclaration"), self.field_conv.convert)
        bind(("MethodDeclaration", "ConstructorDeclaration"), self.method_conv.convert)
        bind(("IfStatement", "WhileStatement", "TryStatement", "LocalDeclarationStatement",
              "VariableDeclaration", "ExpressionStatement", "ReturnStatement", "Block"),
             self.ctrl_conv.convert)
        return handlers

    def emit(self, template: str, *args) -> None:
        self.out.emit(template, *args)

    def scope(self, requires_braces: bool = True):
        return self.out.scope(requires_braces)

    def scope_for(self, node):
        return self.out.scope(node_type(node) == "Block")

    def _convert_comment(self, node) -> None:
        text = node.get("text") or ""
        if text:
            self.emit(text)

    def convert_children(self, node) -> None:
        for ch in children(node):
            self.convert_node(ch)

    def _record_unhandled(self, t: str) -> None:
        if self.strict:
            raise UnhandledNodeError(t)
        if t not in self.stats["unhandled_by_type"]:
            logger.warning("unhandled node kind %s; descending into children without output", t)
        self.stats["unhandled_by_type"][t] += 1

    def convert_node(self, node) -> None:
        if not node or not isinstance(node, dict):
            return
        t = node_type(node)
        self.stats["visited"] += 1

        handler = self.handlers.get(t)
        if handler:
            if t not in TRANSPARENT_TYPES:
                self.stats["converted"] += 1
            handler(node)
            return

        self._record_unhandled(t)
        self.convert_children(node)

    @property
    def unhandled(self) -> Dict[str, int]:
        return dict(self.stats["unhandled_by_type"])

    # ---------------- Reporting ----------------

    def _snapshot_stats(self) -> Dict[str, Any]:
        return {
            "visited": self.stats["visited"],
            "converted": self.stats["converted"],
            "unhandled_by_type": dict(self.stats["unhandled_by_type"]),
        }

    def _collect_ast_type_counts(self, node):
        counts = collections.Counter()

        # 只统计节点：attrs 中的类型字符串和参数表不是节点
        def walk(n):
            if isinstance(n, dict):
                t = n.get("type")
                if t:
                    counts[t] += 1
                walk(n.get("children"))
                for k, v in (n.get("attrs") or {}).items():
                    if k != "parameters" and isinstance(v, (dict, list)):
                        walk(v)
            elif isinstance(n, list):
                for item in n:
                    if isinstance(item, dict):
                        walk(item)

        walk(node)
        return counts

    def _handler_name_for_type(self, t: str) -> str:
        handler = self.handlers.get(t)
        if handler:
            return getattr(handler, "__qualname__", getattr(handler, "__name__", str(handler)))
        parent = PARENT_HANDLED_TYPES.get(t)
        if parent:
            return f"{self._handler_name_for_type(parent)} (via {parent})"
        return "UNHANDLED"

    def report(self) -> str:
        lines = ["------ conversion report ------"]
        lines.append(f"nodes visited:      {self.stats['visited']}")
        lines.append(f"nodes converted:    {self.stats['converted']}")
        lines.append(f"lines emitted:      {self.timing['lines']}")
        lines.append(f"elapsed:            {self.timing['elapsed_ms']:.1f} ms")
        unhandled = self.stats["unhandled_by_type"]
        if unhandled:
            lines.append("unhandled node kinds:")
            for k, v in sorted(unhandled.items(), key=lambda x: (-x[1], x[0])):
                lines.append(f"  {k}: {v}")
        if self.ast_type_counts:
            lines.append("------ AST coverage ------")
            for t, count in sorted(self.ast_type_counts.items(), key=lambda x: (-x[1], x[0])):
                lines.append(f"{t}: {count} -> {self._handler_name_for_type(t)}")
        lines.append("-------------------------------")
        return "\n".join(lines)

    # ---------------- Driver ----------------

    def run(self) -> str:
        start = time.perf_counter()
        self.ast_type_counts = self._collect_ast_type_counts(self.ast)
        self.convert_node(self.ast)
        content = self.out.to_text()
        self.timing["elapsed_ms"] = (time.perf_counter() - start) * 1000
        self.timing["lines"] = len(self.out.lines)
        if self.stats["unhandled_by_type"]:
            logger.info("%d unhandled node kind(s) dropped from output", len(self.stats["unhandled_by_type"]))
        return content

def translate(ast, strict: bool = False) -> str:
    return Converter(ast, strict=strict).run()

def load_ast(path: str):
    with open(path, encoding="utf-8") as f:
        return json.load(f)
