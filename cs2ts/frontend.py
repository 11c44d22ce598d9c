import logging
from typing import Dict, List, Optional

import tree_sitter_c_sharp as tscsharp
from tree_sitter import Language, Node, Parser

from cs2ts.converter import TranslationError, translate

logger = logging.getLogger("cs2ts.frontend")

CS_LANGUAGE = Language(tscsharp.language())

_NAME_TYPES = ("identifier", "qualified_name", "generic_name", "alias_qualified_name")
_ACCESSOR_KEYWORDS = ("get", "set", "init", "add", "remove")

class CSharpParseError(TranslationError):
    """Raised when tree-sitter reports ERROR or MISSING nodes."""

    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} at line {line}, column {column}")
        self.line = line
        self.column = column

def pascal_case(ts_type: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in ts_type.split("_") if part)

class CSharpFrontend:
    """
    C# 源码 -> AST dict（type / name / text / attrs / children）。
    只重塑转换器认识的节点；其余 tree-sitter 节点保留命名子节点，
    类型名转为 PascalCase，交给 walker 递归并计入 unhandled。

    Usage:
        ast = CSharpFrontend().parse(source_code)
        text = Converter(ast).run()
    """

    def __init__(self):
        self.parser = Parser(CS_LANGUAGE)
        self._source = b""

    def parse(self, source_code: str) -> Dict:
        self._source = bytes(source_code, "utf8")
        tree = self.parser.parse(self._source)
        root = tree.root_node
        if root.has_error:
            bad = self._first_error(root)
            row, col = bad.start_point if bad is not None else root.start_point
            kind = "missing token" if bad is not None and bad.is_missing else "syntax error"
            raise CSharpParseError(kind, row + 1, col + 1)
        return self.convert(root)

    # ---------------- helpers ----------------

    def _first_error(self, node: Node) -> Optional[Node]:
        if node.type == "ERROR" or node.is_missing:
            return node
        for child in node.children:
            if child.has_error or child.is_missing:
                found = self._first_error(child)
                if found is not None:
                    return found
        return None

    def _text(self, node: Optional[Node]) -> str:
        if node is None:
            return ""
        return self._source[node.start_byte:node.end_byte].decode("utf8")

    def _child_of_type(self, node: Node, *types: str) -> Optional[Node]:
        for child in node.children:
            if child.type in types:
                return child
        return None

    def _name(self, node: Node) -> str:
        name_node = node.child_by_field_name("name") or self._child_of_type(node, *_NAME_TYPES)
        return self._text(name_node)

    def _modifiers(self, node: Node) -> List[str]:
        return [self._text(c) for c in node.children if c.type == "modifier"]

    def _body(self, node: Node, *fallback_types: str) -> Optional[Node]:
        return node.child_by_field_name("body") or self._child_of_type(node, *fallback_types)

    def _equals_value(self, node: Node) -> Optional[str]:
        """Initializer text including the leading '=' ('= 5'), or None."""
        clause = self._child_of_type(node, "equals_value_clause")
        if clause is not None:
            return self._text(clause)
        for child in node.children:
            if child.type == "=":
                return self._source[child.start_byte:node.end_byte].decode("utf8")
        return None

    def _convert_all(self, nodes) -> List[Dict]:
        return [self.convert(n) for n in nodes if n.is_named]

    def _members(self, node: Optional[Node]) -> List[Dict]:
        if node is None:
            return []
        return self._convert_all(node.children)

    # ---------------- dispatch ----------------

    def convert(self, node: Node) -> Dict:
        handler = getattr(self, f"_convert_{node.type}", None)
        if handler is not None:
            return handler(node)
        return {
            "type": pascal_case(node.type),
            "text": self._text(node),
            "children": self._convert_all(node.children),
        }

    def _convert_compilation_unit(self, node):
        members: List[Dict] = []
        namespace = None
        for child in node.named_children:
            converted = self.convert(child)
            if namespace is not None:
                # file-scoped namespace 之后的兄弟节点都属于该 namespace
                namespace["children"].append(converted)
                continue
            members.append(converted)
            if child.type == "file_scoped_namespace_declaration":
                namespace = converted
        return {"type": "CompilationUnit", "children": members}

    def _convert_comment(self, node):
        return {"type": "Comment", "text": self._text(node)}

    def _convert_using_directive(self, node):
        names = [c for c in node.named_children if c.type in _NAME_TYPES]
        return {"type": "UsingDirective", "name": self._text(names[-1]) if names else "", "text": self._text(node)}

    def _convert_namespace_declaration(self, node):
        return {
            "type": "NamespaceDeclaration",
            "name": self._name(node),
            "children": self._members(self._body(node, "declaration_list")),
        }

    def _convert_file_scoped_namespace_declaration(self, node):
        name_node = node.child_by_field_name("name")
        members = [c for c in node.named_children if c != name_node]
        return {"type": "NamespaceDeclaration", "name": self._text(name_node), "children": self._convert_all(members)}

    def _convert_class_declaration(self, node):
        base_list = self._child_of_type(node, "base_list")
        bases = [self._text(c) for c in base_list.named_children if c.type != "comment"] if base_list else []
        return {
            "type": "ClassDeclaration",
            "name": self._name(node),
            "attrs": {"modifiers": self._modifiers(node), "bases": bases},
            "children": self._members(self._body(node, "declaration_list")),
        }

    def _convert_enum_declaration(self, node):
        return {
            "type": "EnumDeclaration",
            "name": self._name(node),
            "attrs": {"modifiers": self._modifiers(node)},
            "children": self._members(self._body(node, "enum_member_declaration_list")),
        }

    def _convert_enum_member_declaration(self, node):
        return {
            "type": "EnumMemberDeclaration",
            "name": self._name(node),
            "attrs": {"equals_value": self._equals_value(node)},
        }

    def _convert_variable_declarator(self, node):
        return {
            "type": "VariableDeclarator",
            "name": self._name(node),
            "text": self._text(node),
            "attrs": {"initializer": self._equals_value(node)},
        }

    def _convert_variable_declaration(self, node):
        declarators = [c for c in node.named_children if c.type == "variable_declarator"]
        return {
            "type": "VariableDeclaration",
            "attrs": {"type": self._text(node.child_by_field_name("type"))},
            "children": self._convert_all(declarators),
        }

    def _convert_field_declaration(self, node):
        declaration = self._child_of_type(node, "variable_declaration")
        converted = self._convert_variable_declaration(declaration) if declaration else {"attrs": {}, "children": []}
        return {
            "type": "FieldDeclaration",
            "attrs": {"modifiers": self._modifiers(node), "type": converted["attrs"].get("type")},
            "children": converted["children"],
        }

    def _convert_property_declaration(self, node):
        accessor_list = node.child_by_field_name("accessors") or self._child_of_type(node, "accessor_list")
        accessors = []
        if accessor_list is not None:
            accessors = [self._convert_accessor(a) for a in accessor_list.named_children
                         if a.type == "accessor_declaration"]
        return {
            "type": "PropertyDeclaration",
            "name": self._name(node),
            "attrs": {"modifiers": self._modifiers(node), "type": self._text(node.child_by_field_name("type"))},
            "children": accessors,
        }

    def _convert_accessor(self, node):
        keyword = node.child_by_field_name("name")
        if keyword is None:
            keyword = self._child_of_type(node, *_ACCESSOR_KEYWORDS)
        body = self._body(node, "block")
        return {
            "type": "AccessorDeclaration",
            "attrs": {
                "keyword": self._text(keyword),
                "body": self.convert(body) if body is not None and body.type == "block" else None,
            },
        }

    def _parameters(self, node):
        params_node = node.child_by_field_name("parameters") or self._child_of_type(node, "parameter_list")
        if params_node is None:
            return []
        return [
            {"name": self._name(p), "type": self._text(p.child_by_field_name("type"))}
            for p in params_node.named_children if p.type == "parameter"
        ]

    def _method_body(self, node):
        body = self._body(node, "block")
        if body is None or body.type != "block":
            return None
        return self.convert(body)

    def _convert_method_declaration(self, node):
        returns = node.child_by_field_name("returns") or node.child_by_field_name("type")
        return {
            "type": "MethodDeclaration",
            "name": self._name(node),
            "attrs": {
                "modifiers": self._modifiers(node),
                "return_type": self._text(returns),
                "parameters": self._parameters(node),
                "body": self._method_body(node),
            },
        }

    def _convert_constructor_declaration(self, node):
        return {
            "type": "ConstructorDeclaration",
            "name": self._name(node),
            "attrs": {
                "modifiers": self._modifiers(node),
                "parameters": self._parameters(node),
                "body": self._method_body(node),
            },
        }

    def _convert_block(self, node):
        return {"type": "Block", "children": self._convert_all(node.children)}

    def _comments(self, node: Optional[Node]) -> List[Dict]:
        """Comments sitting directly inside a statement, between its clauses."""
        if node is None:
            return []
        return [self._convert_comment(c) for c in node.children if c.type == "comment"]

    def _convert_if_statement(self, node):
        alternative = node.child_by_field_name("alternative")
        return {
            "type": "IfStatement",
            "attrs": {
                "condition": self._text(node.child_by_field_name("condition")),
                "statement": self.convert(node.child_by_field_name("consequence")),
                "else": self.convert(alternative) if alternative is not None else None,
                "comments": self._comments(node),
            },
        }

    def _convert_while_statement(self, node):
        return {
            "type": "WhileStatement",
            "attrs": {
                "condition": self._text(node.child_by_field_name("condition")),
                "statement": self.convert(node.child_by_field_name("body")),
                "comments": self._comments(node),
            },
        }

    def _convert_try_statement(self, node):
        finally_clause = self._child_of_type(node, "finally_clause")
        finally_block = self._child_of_type(finally_clause, "block") if finally_clause is not None else None
        return {
            "type": "TryStatement",
            "attrs": {
                "block": self.convert(self._body(node, "block")),
                "catches": [self._convert_catch(c) for c in node.named_children if c.type == "catch_clause"],
                "finally": self.convert(finally_block) if finally_block is not None else None,
                "finally_comments": self._comments(finally_clause),
                "comments": self._comments(node),
            },
        }

    def _convert_catch(self, node):
        declaration = self._child_of_type(node, "catch_declaration")
        identifier = declaration.child_by_field_name("name") if declaration is not None else None
        return {
            "type": "CatchClause",
            "attrs": {
                "identifier": self._text(identifier) if identifier is not None else None,
                "block": self.convert(self._body(node, "block")),
                "comments": self._comments(node) + self._comments(declaration),
            },
        }

    def _convert_local_declaration_statement(self, node):
        declaration = self._child_of_type(node, "variable_declaration")
        return {
            "type": "LocalDeclarationStatement",
            "text": self._text(node),
            "children": [self.convert(declaration)] if declaration is not None else [],
        }

    def _convert_expression_statement(self, node):
        return {"type": "ExpressionStatement", "text": self._text(node)}

    def _convert_return_statement(self, node):
        return {"type": "ReturnStatement", "text": self._text(node)}

def parse_csharp(source_code: str) -> Dict:
    return CSharpFrontend().parse(source_code)

def transpile(source_code: str, strict: bool = False) -> str:
    """Parse one C# compilation unit and return its TypeScript rendering."""
    ast = parse_csharp(source_code)
    logger.debug("parsed compilation unit with %d top-level node(s)", len(ast.get("children", [])))
    return translate(ast, strict=strict)
