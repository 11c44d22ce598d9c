from contextlib import contextmanager
from typing import List

INDENT_WIDTH = 4

class Emitter:
    """Append-only line buffer plus the indentation counter every translator writes through."""

    def __init__(self):
        self.lines: List[str] = []
        self.indent = 0

    def indentation(self) -> str:
        return " " * (self.indent * INDENT_WIDTH)

    def emit(self, template: str, *args) -> None:
        # 无参数时原样输出，模板中的花括号不做格式化
        text = template.format(*args) if args else template
        self.lines.append(self.indentation() + text)

    def add_indent(self) -> None:
        self.indent += 1

    def remove_indent(self) -> None:
        self.indent -= 1

    @contextmanager
    def scope(self, requires_braces: bool = True):
        """One indentation level, optionally wrapped in braces.

        The closing brace is emitted after the indent is removed, so it lines
        up with the opening one. Release runs on every exit path.
        """
        if requires_braces:
            self.emit("{")
        self.add_indent()
        try:
            yield self
        finally:
            self.remove_indent()
            if requires_braces:
                self.emit("}")

    def to_text(self) -> str:
        return "\n".join(self.lines)
