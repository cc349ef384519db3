from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional, Union
from typing_extensions import TypeAlias

# ---------- Value Model ----------

class JsUndefined:
    """The `undefined` value. Falsy, and a singleton so `is` comparisons hold."""

    _instance: Optional['JsUndefined'] = None

    def __new__(cls) -> 'JsUndefined':
        if cls._instance is None:
            cls._instance = super().__new__(cls)

        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNDEFINED"

UNDEFINED = JsUndefined()

# null is None; numbers are int/float (never bool); objects are anything else.
JsValue: TypeAlias = Union[
    JsUndefined,
    None,
    bool,
    int,
    float,
    str,
    Mapping,
    Sequence,
    Callable[..., Any],
    object,
]

# ---------- Exceptions ----------

class JsExprError(Exception):
    node: Optional[object]

    def __init__(self, message: str):
        super().__init__(message)
        self.node = None

    def __str__(self) -> str:
        msg = super().__str__()

        node = getattr(self, "node", None)
        if node is None:
            return msg

        if isinstance(node, Mapping):
            kind = node.get("type")
        else:
            kind = getattr(node, "type", None)

        if kind is None:
            return msg

        return f"{msg} (at {kind})"

class UnsupportedNodeError(JsExprError):
    def __init__(self, node_type: Any):
        super().__init__(f"Unsupported node type: {node_type}")
        self.node_type = node_type

    def __str__(self) -> str:
        # the message already names the node
        return Exception.__str__(self)

class UnsupportedOperatorError(JsExprError):
    kind = "operator"

    def __init__(self, operator: Any):
        super().__init__(f"Unsupported {self.kind}: {operator}")
        self.operator = operator

class UnsupportedBinaryOperatorError(UnsupportedOperatorError):
    kind = "binary operator"

class UnsupportedUnaryOperatorError(UnsupportedOperatorError):
    kind = "unary operator"
