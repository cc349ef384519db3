from __future__ import annotations

import math
import numbers
import os as _os
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Optional

from .types import UNDEFINED, JsUndefined, JsValue


def debug_trace_enabled() -> bool:
    """Check JSEXPR_DEBUG_TRACE; read on every call, never cached."""
    raw = _os.environ.get("JSEXPR_DEBUG_TRACE")
    if raw is None:
        return False
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# ---------- classification ----------

def is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)

def is_primitive(value: Any) -> bool:
    return value is UNDEFINED or value is None or isinstance(value, (bool, str)) or is_number(value)

def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))

def js_kind(value: JsValue) -> str:
    """Runtime kind of a value; like typeof, but null is reported as "null"."""
    match value:
        case JsUndefined():
            return "undefined"
        case None:
            return "null"
        case bool():
            return "boolean"
        case numbers.Real():
            return "number"
        case str():
            return "string"
        case _ if callable(value):
            return "function"
        case _:
            return "object"

def js_typeof(value: JsValue) -> str:
    kind = js_kind(value)
    return "object" if kind == "null" else kind


# ---------- ToNumber ----------

_DECIMAL_LITERAL = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|Infinity)\Z")

_RADIX_LITERALS = {
    "0x": (16, re.compile(r"[0-9a-fA-F]+\Z")),
    "0o": (8, re.compile(r"[0-7]+\Z")),
    "0b": (2, re.compile(r"[01]+\Z")),
}

def as_float(value: Any) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf

def string_to_number(text: str) -> float:
    s = text.strip()
    if not s:
        return 0.0

    radix_literal = _RADIX_LITERALS.get(s[:2].lower())
    if radix_literal is not None:
        radix, digits_re = radix_literal
        digits = s[2:]
        if not digits_re.match(digits):
            return math.nan
        return as_float(int(digits, radix))

    # float() alone would also take "inf", "nan" and "1_000".
    if not _DECIMAL_LITERAL.match(s):
        return math.nan

    return float(s.replace("Infinity", "inf"))

def to_number(value: JsValue) -> float:
    match value:
        case JsUndefined():
            return math.nan
        case None:
            return 0.0
        case bool():
            return 1.0 if value else 0.0
        case numbers.Real():
            return as_float(value)
        case str():
            return string_to_number(value)
        case _:
            return string_to_number(to_string(value))

def to_uint32(value: JsValue) -> int:
    num = to_number(value)
    if math.isnan(num) or math.isinf(num):
        return 0
    return int(num) % 2**32

def to_int32(value: JsValue) -> int:
    num = to_uint32(value)
    return num - 2**32 if num >= 2**31 else num


# ---------- ToString / ToPrimitive ----------

def number_to_string(value: Any) -> str:
    num = as_float(value)

    if math.isnan(num):
        return "NaN"
    if math.isinf(num):
        return "Infinity" if num > 0 else "-Infinity"
    if num == 0:
        return "0"

    sign = "-" if num < 0 else ""
    # repr gives the shortest round-tripping digits; lay them out the JS way.
    _, digit_tuple, exponent = Decimal(repr(abs(num))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        body = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
        body = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"

    return sign + body

def to_string(value: JsValue) -> str:
    match value:
        case JsUndefined():
            return "undefined"
        case None:
            return "null"
        case bool():
            return "true" if value else "false"
        case str():
            return value
        case numbers.Real():
            return number_to_string(value)
        case list() | tuple():
            return ",".join("" if item is None or item is UNDEFINED else to_string(item) for item in value)
        case Mapping():
            return "[object Object]"
        case _ if callable(value):
            name = getattr(value, "__name__", "")
            return f"function {name}() {{ [native code] }}"
        case _:
            return "[object Object]"

def to_primitive(value: JsValue) -> JsValue:
    if is_primitive(value):
        return value
    return to_string(value)


# ---------- ToBoolean ----------

def to_boolean(value: JsValue) -> bool:
    match value:
        case JsUndefined() | None:
            return False
        case bool():
            return value
        case str():
            return value != ""
        case numbers.Real():
            num = as_float(value)
            return not (num == 0 or math.isnan(num))
        case _:
            # every object is truthy, empty containers included
            return True


# ---------- equality ----------

def strict_equals(lhs: JsValue, rhs: JsValue) -> bool:
    kind = js_kind(lhs)
    if kind != js_kind(rhs):
        return False

    match kind:
        case "undefined" | "null":
            return True
        case "number":
            return as_float(lhs) == as_float(rhs)
        case "string" | "boolean":
            return lhs == rhs
        case _:
            return lhs is rhs

def loose_equals(lhs: JsValue, rhs: JsValue) -> bool:
    lkind, rkind = js_kind(lhs), js_kind(rhs)

    if lkind == rkind:
        return strict_equals(lhs, rhs)

    if {lkind, rkind} == {"null", "undefined"}:
        return True

    if lkind == "number" and rkind == "string":
        return as_float(lhs) == string_to_number(rhs)
    if lkind == "string" and rkind == "number":
        return string_to_number(lhs) == as_float(rhs)

    if lkind == "boolean":
        return loose_equals(to_number(lhs), rhs)
    if rkind == "boolean":
        return loose_equals(lhs, to_number(rhs))

    if lkind in ("number", "string") and rkind in ("object", "function"):
        return loose_equals(lhs, to_primitive(rhs))
    if lkind in ("object", "function") and rkind in ("number", "string"):
        return loose_equals(to_primitive(lhs), rhs)

    return False


# ---------- property keys ----------

def array_index(key: JsValue) -> Optional[int]:
    """Canonical array index for `key`, or None when it is not one."""
    if isinstance(key, bool):
        return None

    if is_number(key):
        num = as_float(key)
        if math.isfinite(num) and num.is_integer() and num >= 0:
            return int(num)
        return None

    if isinstance(key, str) and key.isascii() and key.isdigit() and str(int(key)) == key:
        return int(key)

    return None
