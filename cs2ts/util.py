from typing import Any, Dict, List, Optional, Iterable

def get_attr(node: Dict, key: str, default=None):
    """取 node['attrs'][key] 或顶层 key。"""
    attrs = node.get("attrs") or {}
    return attrs.get(key, node.get(key, default))

def children(node: Optional[Dict]) -> List[Dict]:
    if not node:
        return []
    return node.get("children", []) or []

def node_type(node: Optional[Dict]) -> str:
    if not node or not isinstance(node, dict):
        return ""
    return node.get("type", "") or ""

def get_modifiers(node: Dict) -> List[str]:
    """attrs.modifiers 转为 token 列表。兼容 ['public', 'static'] / 'public static'。"""
    val = get_attr(node, "modifiers")
    if not val:
        return []
    if isinstance(val, str):
        val = val.strip().strip("[]").replace(",", " ").split()
    return [str(tok).strip() for tok in val if str(tok).strip()]

def has_modifier(node: Dict, mod: str) -> bool:
    return mod in get_modifiers(node)

def visibility(node: Dict) -> str:
    """public iff the modifier list carries `public`; everything else is private."""
    return "public" if has_modifier(node, "public") else "private"

def all_children_of_type(node: Dict, types: Iterable[str]) -> List[Dict]:
    ts = set(types)
    return [ch for ch in children(node) if ch.get("type") in ts]

def format_parameters(params: Optional[List[Dict[str, Any]]], map_type) -> str:
    """[{name, type}, ...] -> 'a: number, b: string'"""
    return ", ".join(f"{p.get('name', '')}: {map_type(p.get('type'))}" for p in (params or []))
