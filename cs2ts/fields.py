# cs2ts/fields.py
from cs2ts.mappings import map_type
from cs2ts.util import all_children_of_type, get_attr, visibility

class FieldConverter:
    """
    处理 FieldDeclaration / PropertyDeclaration：
      - 字段：每个 declarator 一行，按原文中第一个 '=' 的位置切分名字与初值（空白不做裁剪）
      - 自动属性：退化为字段行
      - 带实现的属性：每个有 body 的 accessor 输出 get/set 签名 + 块
    """
    def __init__(self, root):
        self.root = root

    def convert_field(self, node) -> None:
        vis = visibility(node)
        mapped = map_type(get_attr(node, "type"))
        for v in all_children_of_type(node, ("VariableDeclarator",)):
            text = v.get("text") or v.get("name", "")
            index = text.find("=")
            if index != -1:
                prop = text[:index]
                val = text[index + 1:]
                line = f"{vis} {prop}: {mapped} = {val};"
            else:
                line = f"{vis} {text}: {mapped};"
            self.root.emit(line)

    def convert_property(self, node) -> None:
        mapped = map_type(get_attr(node, "type"))
        vis = visibility(node)
        name = node.get("name", "")
        accessors = all_children_of_type(node, ("AccessorDeclaration",))

        if all(get_attr(a, "body") is None for a in accessors):
            self.root.emit(" ".join([vis, name + ":", mapped + ";"]))
            return

        for accessor in accessors:
            body = get_attr(accessor, "body")
            if body is None:
                continue
            keyword = get_attr(accessor, "keyword") or ""
            if keyword == "get":
                signature = "(): " + mapped
            else:
                signature = f"(value: {mapped})"
            self.root.emit(f"{vis} {keyword} {name}{signature}")
            with self.root.scope():
                self.root.convert_node(body)

    def convert(self, node) -> None:
        if node.get("type") == "PropertyDeclaration":
            return self.convert_property(node)
        return self.convert_field(node)
