from cs2ts.mappings import map_type
from cs2ts.util import format_parameters, get_attr, visibility

class MethodConverter:
    def __init__(self, root):
        self.root = root

    def _emit_body(self, node) -> None:
        body = get_attr(node, "body")
        if body is None:
            return
        with self.root.scope():
            self.root.convert_node(body)

    def convert_method(self, node) -> None:
        params = format_parameters(get_attr(node, "parameters"), map_type)
        signature = f"{node.get('name', '')}({params}):"
        self.root.emit(" ".join([visibility(node), signature, map_type(get_attr(node, "return_type"))]))
        self._emit_body(node)

    def convert_constructor(self, node) -> None:
        params = format_parameters(get_attr(node, "parameters"), map_type)
        self.root.emit(f"constructor({params})")
        self._emit_body(node)

    def convert(self, node) -> None:
        if node.get("type") == "ConstructorDeclaration":
            return self.convert_constructor(node)
        return self.convert_method(node)
