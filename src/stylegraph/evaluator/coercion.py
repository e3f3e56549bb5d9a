"""Loose value coercion shared by every node kind.

Graphs are authored against browser semantics: numbers are doubles,
strings coerce to numbers leniently, empty objects are truthy and ``==``
converts between types. The embedded runtime gets those rules for free;
this module states them explicitly so the Python evaluator produces the
same values.

``None`` stands for both JavaScript ``null`` and ``undefined``. Unwired
sockets produce ``null`` in the runtime, so ``None`` coerces like ``null``
(to ``0`` as a number).
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_RADIX_RE = re.compile(r"^0([xXoObB])([0-9a-fA-F]+)$")
_RADIX = {"x": 16, "o": 8, "b": 2}

# Characters String.prototype.trim removes, beyond ASCII whitespace.
_JS_WHITESPACE = " \t\n\r\v\f\u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"


def is_number(value: Any) -> bool:
    """True for int/float values (bools are not numbers here)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_number(value: Any) -> float:
    """Coerce a value to a float the way ``Number(value)`` does.

    Examples:
        >>> to_number(" 12 ")
        12.0
        >>> to_number(True)
        1.0
        >>> math.isnan(to_number("abc"))
        True
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        return _string_to_number(value)
    if isinstance(value, (list, tuple)):
        if not value:
            return 0.0
        if len(value) == 1:
            return _string_to_number(to_string(value[0]) if value[0] is not None else "")
        return math.nan
    return math.nan


def _string_to_number(text: str) -> float:
    text = text.strip(_JS_WHITESPACE)
    if not text:
        return 0.0
    if text in ("Infinity", "+Infinity"):
        return math.inf
    if text == "-Infinity":
        return -math.inf
    radix = _RADIX_RE.match(text)
    if radix:
        try:
            return float(int(radix.group(2), _RADIX[radix.group(1).lower()]))
        except ValueError:
            return math.nan
    if _DECIMAL_RE.match(text):
        return float(text)
    return math.nan


def truthy(value: Any) -> bool:
    """Truthiness with browser rules: every dict and list is truthy.

    Examples:
        >>> truthy({})
        True
        >>> truthy(float("nan"))
        False
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if is_number(value):
        return not (value == 0 or math.isnan(value))
    if isinstance(value, str):
        return len(value) > 0
    return True


def or_default(value: Any, default: Any) -> Any:
    """``value || default``: the value when truthy, else the default."""
    return value if truthy(value) else default


def number_or(value: Any, default: float) -> float:
    """``Number(value || default)``, the usual way sockets get their defaults."""
    return to_number(or_default(value, default))


def to_string(value: Any) -> str:
    """Format a value the way ``String(value)`` does.

    Examples:
        >>> to_string(5.0)
        '5'
        >>> to_string(0.5)
        '0.5'
        >>> to_string(1e-7)
        '1e-7'
        >>> to_string({"a": 1})
        '[object Object]'
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return "[object Object]"
    if isinstance(value, (list, tuple)):
        return ",".join("" if v is None else to_string(v) for v in value)
    return str(value)


def format_number(x: float) -> str:
    """Shortest round-trip formatting with JavaScript's notation thresholds."""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    if x == 0:
        return "0"
    sign = "-" if x < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(x))).as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)
    digits = stripped or "0"
    k = len(digits)
    n = k + exponent  # position of the decimal point relative to the digits

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        body = "0." + "0" * (-n) + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        body = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + body


def loose_equals(a: Any, b: Any) -> bool:
    """Abstract equality (``a == b``) across mixed types.

    - ``None`` equals only ``None``
    - numbers and numeric strings compare numerically (``1 == "1"``)
    - booleans compare as 1/0 (``True == "1"``)
    - dicts and lists compare by identity with each other, and through
      their string form against strings and numbers

    Examples:
        >>> loose_equals(1, "1")
        True
        >>> loose_equals(0, "")
        True
        >>> loose_equals(None, 0)
        False
    """
    if a is None or b is None:
        return a is None and b is None
    if isinstance(a, bool) and isinstance(b, bool):
        return a == b
    if isinstance(a, bool):
        return loose_equals(to_number(a), b)
    if isinstance(b, bool):
        return loose_equals(a, to_number(b))
    if is_number(a) and is_number(b):
        return float(a) == float(b)
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    if is_number(a) and isinstance(b, str):
        return float(a) == to_number(b)
    if isinstance(a, str) and is_number(b):
        return to_number(a) == float(b)
    a_obj = isinstance(a, (dict, list, tuple))
    b_obj = isinstance(b, (dict, list, tuple))
    if a_obj and b_obj:
        return a is b
    if a_obj:
        return loose_equals(to_string(a), b)
    if b_obj:
        return loose_equals(a, to_string(b))
    return a == b
