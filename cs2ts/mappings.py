import re
from typing import Callable, List, Optional, Tuple

# ---------- 类型映射 ----------

_LIST_SHAPE = re.compile(r"List<.*>")
_LIST_CAPTURE = re.compile(r"List<(.*)>")

# (predicate, transform)，按顺序匹配，命中即返回
TYPE_RULES: List[Tuple[Callable[[str], bool], Callable[[str], str]]] = [
    (lambda t: t == "void", lambda t: "void"),
    (lambda t: t.endswith("Exception"), lambda t: t),
    (lambda t: t.startswith("bool"), lambda t: "Boolean"),
    (lambda t: t.startswith("long"), lambda t: "number"),
    (lambda t: t.startswith("int"), lambda t: "number"),
    (lambda t: t.startswith("float"), lambda t: "number"),
    (lambda t: t.startswith("string"), lambda t: "string"),
    # 泛型参数原样保留，不递归映射：List<int> -> Array<int>
    (lambda t: _LIST_SHAPE.search(t) is not None, lambda t: _LIST_CAPTURE.sub(r"Array<\1>", t)),
]

def map_type(cs_type: Optional[str]) -> str:
    """Map a C# type spelling, as written, to its TypeScript spelling.

    Prefix rules are textual, so `integer`, `bool?` or `floaterUnit` all
    take the primitive mapping.
    """
    if cs_type is None:
        return ""
    spelling = str(cs_type)
    for matches, transform in TYPE_RULES:
        if matches(spelling):
            return transform(spelling)
    return spelling

# ---------- using 指令过滤 ----------

IGNORED_NAMESPACES = frozenset({
    "AnimationOrTween",
    "Coda",
    "Coda.LockStep",
    "Coda.Tools",
    "DG",
    "DG.Tweening",
    "FL",
    "FL.v1",
    "FL.v1.Crc32",
    "FL.v1.File",
    "FL.v1.Security",
    "FlyingWormConsole3",
    "Ref",
    "Spine",
    "ui",
})

PLATFORM_PREFIXES = ("System", "UnityEngine")

def is_suppressed_namespace(name: str) -> bool:
    if name in IGNORED_NAMESPACES:
        return True
    return name.startswith(PLATFORM_PREFIXES)
