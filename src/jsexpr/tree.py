"""ESTree node shapes understood by the evaluator, plus helpers for reading them.

Nodes may be the frozen dataclasses below or plain ESTree mappings (for example
the JSON emitted by a JavaScript parser). Everything that inspects a node goes
through `node_type` / `node_field`, so both forms evaluate the same way.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple, Union
from typing_extensions import TypeAlias

from .types import UnsupportedNodeError


@dataclass(frozen=True)
class Literal:
    value: Union[bool, int, float, str, None]
    type: str = field(default="Literal", init=False)


@dataclass(frozen=True)
class Identifier:
    name: str
    type: str = field(default="Identifier", init=False)


@dataclass(frozen=True)
class MemberExpression:
    object: 'ExpressionBody'
    property: Union[Literal, Identifier, 'ExpressionBody']
    computed: bool = False
    type: str = field(default="MemberExpression", init=False)


@dataclass(frozen=True)
class BinaryExpression:
    operator: str
    left: 'ExpressionBody'
    right: 'ExpressionBody'
    type: str = field(default="BinaryExpression", init=False)


@dataclass(frozen=True)
class UnaryExpression:
    operator: str
    argument: 'ExpressionBody'
    prefix: bool = True  # postfix unary forms never appear
    type: str = field(default="UnaryExpression", init=False)


@dataclass(frozen=True)
class CallExpression:
    callee: 'ExpressionBody'
    arguments: Tuple['ExpressionBody', ...] = ()
    type: str = field(default="CallExpression", init=False)


# ---------- structural-only shapes (never evaluated) ----------

@dataclass(frozen=True)
class BlockStatement:
    body: Tuple['ExpressionBody', ...] = ()
    type: str = field(default="BlockStatement", init=False)


@dataclass(frozen=True)
class FunctionDeclaration:
    params: Tuple[Identifier, ...]
    body: BlockStatement
    type: str = field(default="FunctionDeclaration", init=False)


@dataclass(frozen=True)
class ReturnStatement:
    argument: 'ExpressionBody'
    type: str = field(default="ReturnStatement", init=False)


@dataclass(frozen=True)
class ArrowFunctionExpression:
    params: Tuple[Identifier, ...]
    body: 'ExpressionBody'
    type: str = field(default="ArrowFunctionExpression", init=False)


@dataclass(frozen=True)
class ExpressionStatement:
    expression: Union[Literal, ArrowFunctionExpression]
    type: str = field(default="ExpressionStatement", init=False)


@dataclass(frozen=True)
class SequenceExpression:
    expressions: Tuple['ExpressionBody', ...] = ()
    type: str = field(default="SequenceExpression", init=False)


ExpressionBody: TypeAlias = Union[
    BlockStatement,
    ArrowFunctionExpression,
    ReturnStatement,
    SequenceExpression,
    CallExpression,
    MemberExpression,
    Literal,
    Identifier,
    BinaryExpression,
    UnaryExpression,
]

FunctionHeader: TypeAlias = Union[FunctionDeclaration, ExpressionStatement]

# Anything `evaluate` accepts: a dataclass node or an ESTree-shaped mapping.
Node: TypeAlias = Union[ExpressionBody, FunctionHeader, Mapping]

NODE_CLASSES: Dict[str, type] = {
    cls.__name__: cls
    for cls in (
        Literal,
        Identifier,
        MemberExpression,
        BinaryExpression,
        UnaryExpression,
        CallExpression,
        BlockStatement,
        FunctionDeclaration,
        ReturnStatement,
        ArrowFunctionExpression,
        ExpressionStatement,
        SequenceExpression,
    )
}

# ---------- accessors ----------

def is_mapping_node(node: Any) -> bool:
    return isinstance(node, Mapping)

def node_type(node: Any) -> Optional[str]:
    if is_mapping_node(node):
        return node.get("type")

    return getattr(node, "type", None)

def node_field(node: Any, name: str) -> Any:
    """Read a required field; a missing field raises KeyError/AttributeError as-is."""
    if is_mapping_node(node):
        return node[name]

    return getattr(node, name)

def node_field_or(node: Any, name: str, default: Any) -> Any:
    if is_mapping_node(node):
        return node.get(name, default)

    return getattr(node, name, default)

# ---------- ESTree mapping -> dataclasses ----------

def _convert_field(value: Any) -> Any:
    if is_mapping_node(value):
        return from_estree(value)

    if isinstance(value, (list, tuple)):
        return tuple(_convert_field(item) for item in value)

    return value

def from_estree(data: Mapping) -> Node:
    """Build the dataclass tree for an ESTree mapping.

    Keys other than the node's own fields (`loc`, `range`, `raw`, ...) are
    dropped. Optional fields absent from the mapping keep their defaults.
    """
    kind = data.get("type")
    cls = NODE_CLASSES.get(kind) if isinstance(kind, str) else None

    if cls is None:
        raise UnsupportedNodeError(kind)

    kwargs: Dict[str, Any] = {}

    for f in fields(cls):
        if f.init and f.name in data:
            # Literal values are primitives; never descend into them.
            value = data[f.name]
            kwargs[f.name] = value if cls is Literal else _convert_field(value)

    return cls(**kwargs)
