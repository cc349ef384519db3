from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from .tree import Node, node_field, node_type
from .types import JsExprError, JsValue, UnsupportedNodeError
from .utils import debug_trace_enabled

from .eval.chains import eval_call, eval_member
from .eval.common import describe_node, lookup_identifier
from .eval.expr import eval_binary, eval_unary

logger = logging.getLogger("jsexpr.evaluator")
logger.addHandler(logging.NullHandler())

EvalFunc = Callable[[Node, Mapping[str, Any]], JsValue]

_EMPTY_CONTEXT: Mapping[str, Any] = MappingProxyType({})


def _attach_node(exc: JsExprError, node: Node) -> None:
    # innermost node wins; outer frames see it already set
    if exc.node is None:
        exc.node = node

# ---------------- Public API ----------------

def evaluate(node: Node, context: Optional[Mapping[str, Any]]=None, *, trace: Optional[bool]=None) -> JsValue:
    """Evaluate `node` against a read-only name -> value context.

    `trace=None` defers to JSEXPR_DEBUG_TRACE; when on, every node logs its
    result at DEBUG on the `jsexpr.evaluator` logger.
    """
    if context is None:
        context = _EMPTY_CONTEXT

    if trace is None:
        trace = debug_trace_enabled()

    eval_func: EvalFunc = _eval_node_traced if trace else eval_node

    try:
        return eval_func(node, context)
    except JsExprError as e:
        logger.debug("evaluation failed: %s", e)
        raise

# ---------------- Core evaluator ----------------

def eval_node(n: Node, context: Mapping[str, Any]) -> JsValue:
    return _eval_node_inner(n, context, eval_node)


def _eval_node_traced(n: Node, context: Mapping[str, Any]) -> JsValue:
    value = _eval_node_inner(n, context, _eval_node_traced)
    logger.debug("%s -> %r", describe_node(n), value)
    return value


def _eval_node_inner(n: Node, context: Mapping[str, Any], eval_func: EvalFunc) -> JsValue:
    handler = _NODE_DISPATCH.get(node_type(n))

    if handler is None:
        err = UnsupportedNodeError(describe_node(n))
        err.node = n
        raise err

    try:
        return handler(n, context, eval_func)
    except JsExprError as e:
        _attach_node(e, n)
        raise

# ---------------- Dispatch ----------------

_NODE_DISPATCH: dict[str, Callable[[Node, Mapping[str, Any], EvalFunc], JsValue]] = {
    'Literal': lambda n, _context, _eval: node_field(n, 'value'),
    'Identifier': lambda n, context, _eval: lookup_identifier(context, node_field(n, 'name')),
    'MemberExpression': eval_member,
    'BinaryExpression': eval_binary,
    'UnaryExpression': eval_unary,
    'CallExpression': eval_call,
}
