# cs2ts/classes.py
import re
from dataclasses import dataclass

from cs2ts.util import children, get_attr, visibility

ZERO_LITERAL = "=0"
_EQUALS_ZERO = re.compile(r"\s*=\s*0")

@dataclass
class EnumCounter:
    """
    一个 enum 声明内的隐式取值状态：
      - last_explicit: 最近一次显式初始化的原文（含 '='），初始为 '=0'
      - offset: 距离最近一次显式初始化的成员数
    """
    last_explicit: str = ZERO_LITERAL
    offset: int = 0

    def member_line(self, name: str, equals_value=None) -> str:
        if equals_value:
            self.last_explicit = str(equals_value)
            self.offset = 0
            line = f"public static {name} {self.last_explicit};"
        elif _EQUALS_ZERO.search(self.last_explicit):
            line = f"public static {name} = {self.offset};"
        else:
            # 显式值不一定是常量，交给目标语言在加载时求值
            line = f"public static {name} {self.last_explicit}+{self.offset};"
        self.offset += 1
        return line

class TopClassConverter:
    """
    处理 Class / Enum 两类顶层或嵌套类型。
    - ClassDeclaration: 只保留第一个基类作为 extends，其余接口丢弃
    - EnumDeclaration: 输出为 class + public static 成员，隐式值按 EnumCounter 续号
    """

    def __init__(self, root):
        self.root = root

    # ---------- Enum ----------
    def convert_enum(self, node) -> None:
        modifier = visibility(node)
        self.root.emit(" ".join([modifier, "class", node.get("name", "")]))
        counter = EnumCounter()
        with self.root.scope():
            for ch in children(node):
                if ch.get("type") == "EnumMemberDeclaration":
                    self.convert_enum_member(ch, counter)
                else:
                    self.root.convert_node(ch)

    def convert_enum_member(self, node, counter: EnumCounter) -> None:
        line = counter.member_line(node.get("name", ""), get_attr(node, "equals_value"))
        self.root.emit(line)

    # ---------- Class ----------
    def convert_class(self, node) -> None:
        mod = ""
        if visibility(node) == "public":
            dec = " ".join(["export " + mod, "class", node.get("name", "")])
        else:
            dec = " ".join([mod, "class", node.get("name", "")])

        bases = get_attr(node, "bases") or []
        if bases:
            dec = dec + " extends " + str(bases[0])

        self.root.emit(dec)
        with self.root.scope():
            for ch in children(node):
                self.root.convert_node(ch)

    # ---------- Dispatcher ----------
    def convert(self, node) -> None:
        t = (node.get("type") or "").strip()
        if t == "EnumDeclaration":
            return self.convert_enum(node)
        return self.convert_class(node)
