from __future__ import annotations

import pytest

from jsexpr.tree import (
    ArrowFunctionExpression,
    ExpressionStatement,
    FunctionDeclaration,
    ReturnStatement,
    SequenceExpression,
)
from tests.support.harness import (
    BlockStatement,
    JsExprError,
    UnsupportedBinaryOperatorError,
    UnsupportedNodeError,
    UnsupportedUnaryOperatorError,
    binary,
    call,
    evaluate,
    ident,
    lit,
    member,
    unary,
)


@pytest.mark.parametrize(
    "node, expected_type",
    [
        pytest.param(BlockStatement(), "BlockStatement", id="block"),
        pytest.param(FunctionDeclaration((), BlockStatement()), "FunctionDeclaration", id="function-declaration"),
        pytest.param(ReturnStatement(lit(1)), "ReturnStatement", id="return"),
        pytest.param(ArrowFunctionExpression((), lit(1)), "ArrowFunctionExpression", id="arrow"),
        pytest.param(ExpressionStatement(lit(1)), "ExpressionStatement", id="expression-statement"),
        pytest.param(SequenceExpression((lit(1), lit(2))), "SequenceExpression", id="sequence"),
        pytest.param({"type": "ConditionalExpression"}, "ConditionalExpression", id="unknown-mapping"),
        pytest.param({"name": "x"}, "dict", id="untyped-mapping"),
    ],
)
def test_structural_nodes_are_unsupported(node, expected_type) -> None:
    with pytest.raises(UnsupportedNodeError) as excinfo:
        evaluate(node)

    err = excinfo.value
    assert err.node_type == expected_type
    assert err.node is node
    assert str(err) == f"Unsupported node type: {expected_type}"


def test_unsupported_node_inside_expression() -> None:
    inner = SequenceExpression((lit(1),))
    node = binary("+", lit(1), inner)

    with pytest.raises(UnsupportedNodeError) as excinfo:
        evaluate(node)

    # the innermost offending node is kept, not the enclosing expression
    assert excinfo.value.node is inner


def test_unsupported_binary_operator_names_node() -> None:
    node = binary("??", None, 1)

    with pytest.raises(UnsupportedBinaryOperatorError) as excinfo:
        evaluate(node)

    err = excinfo.value
    assert err.operator == "??"
    assert err.node is node
    assert str(err) == "Unsupported binary operator: ?? (at BinaryExpression)"


def test_unsupported_unary_operator_names_node() -> None:
    node = unary("delete", member(ident("o"), "x"))

    with pytest.raises(UnsupportedUnaryOperatorError) as excinfo:
        evaluate(node, {"o": {"x": 1}})

    assert excinfo.value.node is node
    assert str(excinfo.value) == "Unsupported unary operator: delete (at UnaryExpression)"


def test_unsupported_operator_in_mapping_node() -> None:
    node = {
        "type": "BinaryExpression",
        "operator": "in",
        "left": {"type": "Literal", "value": "a"},
        "right": {"type": "Identifier", "name": "o"},
    }

    with pytest.raises(UnsupportedBinaryOperatorError) as excinfo:
        evaluate(node, {"o": {"a": 1}})

    assert excinfo.value.node is node
    assert str(excinfo.value).endswith("(at BinaryExpression)")


def test_operator_error_raised_after_operands_evaluated() -> None:
    calls = []

    def probe():
        calls.append("probe")
        return 1

    with pytest.raises(UnsupportedBinaryOperatorError):
        evaluate(binary("instanceof", call(ident("probe")), lit(2)), {"probe": probe})

    assert calls == ["probe"]


def test_error_hierarchy() -> None:
    assert issubclass(UnsupportedNodeError, JsExprError)
    assert issubclass(UnsupportedBinaryOperatorError, JsExprError)
    assert issubclass(UnsupportedUnaryOperatorError, JsExprError)
    assert not issubclass(JsExprError, TypeError)


def test_unattached_error_message_is_plain() -> None:
    err = UnsupportedBinaryOperatorError("??")
    assert err.node is None
    assert str(err) == "Unsupported binary operator: ??"


@pytest.mark.parametrize(
    "node, context, expected_exc",
    [
        pytest.param(member(lit(None), "x"), {}, TypeError, id="member-of-null"),
        pytest.param(call(lit("text")), {}, TypeError, id="call-string"),
        pytest.param(call(ident("boom")), {"boom": lambda: 1 / 0}, ZeroDivisionError, id="host-exception"),
        pytest.param({"type": "Identifier"}, {}, KeyError, id="malformed-mapping"),
        pytest.param({"type": "BinaryExpression", "operator": "+", "left": {"type": "Literal", "value": 1}}, {}, KeyError, id="missing-operand"),
    ],
)
def test_host_faults_are_not_wrapped(node, context, expected_exc) -> None:
    with pytest.raises(expected_exc) as excinfo:
        evaluate(node, context)

    assert not isinstance(excinfo.value, JsExprError)
