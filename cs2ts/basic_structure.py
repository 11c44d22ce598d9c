from cs2ts.util import children
from cs2ts.mappings import is_suppressed_namespace

class ProjectConverter:
    """CompilationUnit 入口：扁平递归"""
    def __init__(self, root):
        self.root = root

    def convert(self, node) -> None:
        self.root.convert_children(node)

class NamespaceConverter:
    """namespace A.B { ... } -> module A.B { ... }"""
    def __init__(self, root):
        self.root = root

    def convert(self, node) -> None:
        self.root.emit("module {0}", node.get("name", ""))
        with self.root.scope():
            for ch in children(node):
                self.root.convert_node(ch)

class ImportConverter:
    """using -> import；平台/第三方命名空间直接丢弃"""
    def __init__(self, root):
        self.root = root

    def convert(self, node) -> None:
        name = str(node.get("name", ""))
        if is_suppressed_namespace(name):
            return
        self.root.emit("import " + name + ";")
