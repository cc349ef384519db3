from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..tree import Node, node_field, node_type
from ..types import UNDEFINED, JsValue

def property_name(prop: Node) -> str:
    """Key named by a non-computed member property.

    The property is trusted to be an Identifier; a Literal here has no `name`
    and fails with the node's own AttributeError/KeyError.
    """
    return str(node_field(prop, 'name'))

def lookup_identifier(context: Mapping[str, Any], name: str) -> JsValue:
    # membership first so a defaultdict-style context is never populated
    if name in context:
        return context[name]

    return UNDEFINED

def describe_node(node: Any) -> str:
    kind = node_type(node)
    return kind if kind is not None else type(node).__name__
