"""Conversion between ESTree JSON and `jsx_if_for.ast`.

ESTree is the tree format of acorn, MDX and most JavaScript tooling. Trees
arrive as nested dicts (for example from :code:`json.load`) and leave the same
way, so the rewriter can sit in a pipeline whose other stages are not Python.
"""
import re
from typing import Any, Dict, Optional, Tuple, Type

import attr

from . import ast
from .ast import Node, Opaque, Position, SourceLocation

_LOCATION_KEYS = ("type", "loc", "range")

NODE_TYPES: Dict[str, Type[Node]] = {
    cls.__name__: cls
    for cls in vars(ast).values()
    if isinstance(cls, type)
    and issubclass(cls, Node)
    and attr.has(cls)
    and cls not in (Node, Opaque, ast.Statement, ast.Expression)
}


def snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _position(obj: Dict[str, Any]) -> Position:
    return Position(obj["line"], obj["column"], obj.get("offset"))


def _location(obj: Dict[str, Any]) -> Tuple[Optional[SourceLocation], Optional[Tuple[int, int]]]:
    loc = None
    if isinstance(obj.get("loc"), dict):
        loc = SourceLocation(_position(obj["loc"]["start"]), _position(obj["loc"]["end"]))
    if obj.get("range") is not None:
        start, end = obj["range"]
        return loc, (start, end)
    if isinstance(obj.get("start"), int) and isinstance(obj.get("end"), int):
        return loc, (obj["start"], obj["end"])
    return loc, None


def from_estree(obj: Any) -> Any:
    """Convert an ESTree value (node dict, list or plain value) into nodes."""
    if isinstance(obj, list):
        return [from_estree(item) for item in obj]
    if not isinstance(obj, dict) or "type" not in obj:
        return obj

    loc, offsets = _location(obj)
    cls = NODE_TYPES.get(obj["type"])
    if cls is None:
        fields = {
            k: from_estree(v) for k, v in obj.items() if k not in _LOCATION_KEYS
        }
        return Opaque(obj["type"], fields, loc=loc, range=offsets)

    names = {f.name for f in attr.fields(cls)} - {"loc", "range", "extra"}
    kwargs: Dict[str, Any] = {}
    extra: Dict[str, Any] = {}
    for key, value in obj.items():
        if key in _LOCATION_KEYS:
            continue
        name = snake_case(key)
        if name in names:
            kwargs[name] = from_estree(value)
        else:
            extra[key] = value
    return cls(**kwargs, loc=loc, range=offsets, extra=extra)


def _position_to_estree(pos: Position) -> Dict[str, Any]:
    out: Dict[str, Any] = {"line": pos.line, "column": pos.column}
    if pos.offset is not None:
        out["offset"] = pos.offset
    return out


def to_estree(node: Any) -> Any:
    """Convert nodes back into ESTree dicts, ready for :code:`json.dumps`."""
    if isinstance(node, list):
        return [to_estree(item) for item in node]
    if not isinstance(node, Node):
        return node

    out: Dict[str, Any] = {"type": node.type}
    if isinstance(node, Opaque):
        out.update((k, to_estree(v)) for k, v in node.fields.items())
    else:
        out.update(node.extra)
        for key in node.child_keys():
            out[camel_case(key)] = to_estree(node.get_child(key))
    if node.loc is not None:
        out["loc"] = {
            "start": _position_to_estree(node.loc.start),
            "end": _position_to_estree(node.loc.end),
        }
    if node.range is not None:
        out["range"] = list(node.range)
    return out
