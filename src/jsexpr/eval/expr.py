from __future__ import annotations

import math
from typing import Any, Callable, Mapping

from ..tree import Node, node_field
from ..types import (
    UNDEFINED,
    JsValue,
    UnsupportedBinaryOperatorError,
    UnsupportedUnaryOperatorError,
)
from ..utils import (
    js_typeof,
    loose_equals,
    strict_equals,
    to_boolean,
    to_int32,
    to_number,
    to_primitive,
    to_string,
    to_uint32,
)

EvalFunc = Callable[[Node, Mapping[str, Any]], JsValue]

BINARY_OPERATORS = frozenset({
    '+', '-', '*', '/', '%', '**',
    '==', '!=', '===', '!==',
    '<', '<=', '>', '>=',
    '&&', '||',
    '|', '&', '^', '<<', '>>', '>>>',
})

UNARY_OPERATORS = frozenset({'-', '+', '!', '~', 'typeof', 'void'})

def eval_binary(n: Node, context: Mapping[str, Any], eval_func: EvalFunc) -> JsValue:
    # both sides always run, left first; && and || pick a value afterwards
    lhs = eval_func(node_field(n, 'left'), context)
    rhs = eval_func(node_field(n, 'right'), context)
    return apply_binary_operator(node_field(n, 'operator'), lhs, rhs)

def eval_unary(n: Node, context: Mapping[str, Any], eval_func: EvalFunc) -> JsValue:
    arg = eval_func(node_field(n, 'argument'), context)
    return apply_unary_operator(node_field(n, 'operator'), arg)

def apply_binary_operator(op: str, lhs: JsValue, rhs: JsValue) -> JsValue:
    match op:
        case '+':
            lprim, rprim = to_primitive(lhs), to_primitive(rhs)
            if isinstance(lprim, str) or isinstance(rprim, str):
                return to_string(lprim) + to_string(rprim)
            return to_number(lprim) + to_number(rprim)
        case '-':
            return to_number(lhs) - to_number(rhs)
        case '*':
            return to_number(lhs) * to_number(rhs)
        case '/':
            return _divide(to_number(lhs), to_number(rhs))
        case '%':
            return _remainder(to_number(lhs), to_number(rhs))
        case '**':
            return _exponentiate(to_number(lhs), to_number(rhs))
        case '==':
            return loose_equals(lhs, rhs)
        case '!=':
            return not loose_equals(lhs, rhs)
        case '===':
            return strict_equals(lhs, rhs)
        case '!==':
            return not strict_equals(lhs, rhs)
        case '<' | '<=' | '>' | '>=':
            return _compare_values(op, lhs, rhs)
        case '&&':
            return rhs if to_boolean(lhs) else lhs
        case '||':
            return lhs if to_boolean(lhs) else rhs
        case '|':
            return float(_wrap_int32(to_int32(lhs) | to_int32(rhs)))
        case '&':
            return float(_wrap_int32(to_int32(lhs) & to_int32(rhs)))
        case '^':
            return float(_wrap_int32(to_int32(lhs) ^ to_int32(rhs)))
        case '<<':
            return float(_wrap_int32(to_int32(lhs) << (to_uint32(rhs) & 31)))
        case '>>':
            return float(to_int32(lhs) >> (to_uint32(rhs) & 31))
        case '>>>':
            return float(to_uint32(lhs) >> (to_uint32(rhs) & 31))
    raise UnsupportedBinaryOperatorError(op)

def apply_unary_operator(op: str, arg: JsValue) -> JsValue:
    match op:
        case '-':
            return -to_number(arg)
        case '+':
            return to_number(arg)
        case '!':
            return not to_boolean(arg)
        case '~':
            return float(~to_int32(arg))
        case 'typeof':
            return js_typeof(arg)
        case 'void':
            return UNDEFINED
    raise UnsupportedUnaryOperatorError(op)

def _compare_values(op: str, lhs: JsValue, rhs: JsValue) -> bool:
    lprim, rprim = to_primitive(lhs), to_primitive(rhs)

    if isinstance(lprim, str) and isinstance(rprim, str):
        left: Any = lprim
        right: Any = rprim
    else:
        # NaN on either side makes every comparison False, as in JS
        left, right = to_number(lprim), to_number(rprim)

    match op:
        case '<':
            return left < right
        case '<=':
            return left <= right
        case '>':
            return left > right
        case '>=':
            return left >= right
    raise UnsupportedBinaryOperatorError(op)

def _wrap_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 2**32 if value >= 2**31 else value

def _divide(lhs: float, rhs: float) -> float:
    if rhs == 0:
        if lhs == 0 or math.isnan(lhs):
            return math.nan
        # the sign of a zero divisor matters: 1 / -0 is -Infinity
        return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)
    return lhs / rhs

def _remainder(lhs: float, rhs: float) -> float:
    if rhs == 0 or math.isnan(lhs) or math.isnan(rhs) or math.isinf(lhs):
        return math.nan
    if math.isinf(rhs):
        return lhs
    return math.fmod(lhs, rhs)

def _is_odd_integer(num: float) -> bool:
    return math.isfinite(num) and num.is_integer() and int(num) % 2 == 1

def _exponentiate(base: float, exponent: float) -> float:
    if math.isnan(exponent):
        return math.nan
    if exponent == 0:
        return 1.0
    if math.isnan(base):
        return math.nan
    if abs(base) == 1 and math.isinf(exponent):
        return math.nan

    try:
        return math.pow(base, exponent)
    except OverflowError:
        return -math.inf if base < 0 and _is_odd_integer(exponent) else math.inf
    except ValueError:
        if base == 0:
            # zero base, negative exponent
            negative = math.copysign(1.0, base) < 0 and _is_odd_integer(exponent)
            return -math.inf if negative else math.inf
        # negative base, fractional exponent
        return math.nan
