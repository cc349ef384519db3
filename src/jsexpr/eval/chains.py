from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, List

from ..tree import Node, node_field, node_field_or
from ..types import UNDEFINED, JsValue
from ..utils import array_index, is_number, to_string
from .common import property_name

EvalFunc = Callable[[Node, Mapping], JsValue]

def eval_member(n: Node, context: Mapping[str, Any], eval_func: EvalFunc) -> JsValue:
    base = eval_func(node_field(n, 'object'), context)
    prop = node_field(n, 'property')

    if node_field_or(n, 'computed', False):
        key = eval_func(prop, context)
    else:
        # `o.x` names the key; x is never looked up in the context
        key = property_name(prop)

    return get_member(base, key)

def eval_call(n: Node, context: Mapping[str, Any], eval_func: EvalFunc) -> JsValue:
    fn = eval_func(node_field(n, 'callee'), context)
    args = [eval_func(arg, context) for arg in node_field(n, 'arguments')]

    # Plain call: a callee reached through `o.f` does not get `o` as receiver.
    return call_value(fn, args)

def get_member(base: JsValue, key: JsValue) -> JsValue:
    """Read `base[key]` with JS property semantics over Python values."""
    if base is None or base is UNDEFINED:
        raise TypeError(f"Cannot read properties of {to_string(base)} (reading '{to_string(key)}')")

    match base:
        case Mapping():
            return _mapping_get(base, key)
        case str() | list() | tuple():
            return _indexed_get(base, key)
        case bool():
            return UNDEFINED
        case _ if is_number(base):
            return UNDEFINED
        case _:
            return _attribute_get(base, key)

def call_value(fn: Any, args: List[JsValue]) -> JsValue:
    if not callable(fn):
        raise TypeError(f"{to_string(fn)} is not a function")

    return fn(*args)

def _mapping_get(base: Mapping, key: JsValue) -> JsValue:
    if is_number(key) and key in base:
        return base[key]

    prop = to_string(key)
    if prop in base:
        return base[prop]

    return UNDEFINED

def _indexed_get(base: str | list | tuple, key: JsValue) -> JsValue:
    if key == 'length':
        return len(base)

    idx = array_index(key)
    if idx is None or idx >= len(base):
        return UNDEFINED

    return base[idx]

def _attribute_get(base: Any, key: JsValue) -> JsValue:
    name = to_string(key)

    # private and dunder attributes are not properties
    if name.startswith('_'):
        return UNDEFINED

    return getattr(base, name, UNDEFINED)
