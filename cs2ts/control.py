from typing import List
from cs2ts.mappings import map_type
from cs2ts.util import all_children_of_type, children, get_attr

INFERRED_TYPE = "var"

class ControlConverter:
    def __init__(self, root):
        self.root = root

    def _emit_branch(self, stmt) -> None:
        # 只有 Block 才加花括号；单条语句仅缩进
        with self.root.scope_for(stmt):
            self.root.convert_node(stmt)

    def _emit_comments(self, node, key="comments") -> None:
        # 语句内部（子句之间）的注释，提到语句头之前输出
        for c in get_attr(node, key) or []:
            self.root.convert_node(c)

    def convert_block(self, node) -> None:
        for ch in children(node):
            self.root.convert_node(ch)

    def convert_if(self, node) -> None:
        self._emit_comments(node)
        self.root.emit("if ({0})", get_attr(node, "condition") or "")
        self._emit_branch(get_attr(node, "statement"))

        else_part = get_attr(node, "else")
        if else_part is not None:
            self.root.emit("else")
            self._emit_branch(else_part)

    def convert_while(self, node) -> None:
        self._emit_comments(node)
        self.root.emit("while ({0})", get_attr(node, "condition") or "")
        self._emit_branch(get_attr(node, "statement"))

    def convert_try(self, node) -> None:
        self._emit_comments(node)
        self.root.emit("try")
        with self.root.scope():
            self.root.convert_node(get_attr(node, "block"))

        for c in get_attr(node, "catches") or []:
            identifier = get_attr(c, "identifier")
            arguments = f" ({identifier})" if identifier else ""
            self._emit_comments(c)
            self.root.emit("catch" + arguments)
            with self.root.scope():
                self.root.convert_node(get_attr(c, "block"))

        finally_body = get_attr(node, "finally")
        if finally_body is not None:
            self._emit_comments(node, "finally_comments")
            self.root.emit("finally")
            with self.root.scope():
                self.root.convert_node(finally_body)

    def convert_local_declaration(self, node) -> None:
        for ch in children(node):
            self.root.convert_node(ch)

    def convert_variable_declaration(self, node) -> None:
        vtype = get_attr(node, "type") or ""
        mapped = map_type(vtype) if vtype != INFERRED_TYPE else ""
        type_decl = ": " + mapped if mapped else ""
        declarators: List[dict] = all_children_of_type(node, ("VariableDeclarator",))
        if not declarators:
            return

        # 多个声明符时只有最后一个带类型和初值
        last = declarators[-1]
        init = get_attr(last, "initializer")
        initializer = " " + init if init else ""

        if len(declarators) == 1:
            self.root.emit(f"var {last.get('name', '')}{type_decl}{initializer};")
            return

        prefix = "var "
        separator = ",\n" + self.root.out.indentation() + " " * len(prefix)
        names = separator.join(d.get("name", "") for d in declarators)
        self.root.emit(f"{prefix}{names}{type_decl}{initializer};")

    def convert_verbatim(self, node) -> None:
        # 表达式/return 语句原样输出，不改写子表达式
        self.root.emit(node.get("text") or "")

    def convert(self, node) -> None:
        t = node.get("type", "")
        if t == "IfStatement":
            return self.convert_if(node)
        if t == "WhileStatement":
            return self.convert_while(node)
        if t == "TryStatement":
            return self.convert_try(node)
        if t == "LocalDeclarationStatement":
            return self.convert_local_declaration(node)
        if t == "VariableDeclaration":
            return self.convert_variable_declaration(node)
        if t in ("ExpressionStatement", "ReturnStatement"):
            return self.convert_verbatim(node)
        if t == "Block":
            return self.convert_block(node)
