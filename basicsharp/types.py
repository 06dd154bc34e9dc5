"""Runtime values and helpers for BasicSharp.

BasicSharp has exactly three kinds of values and they are represented by
plain Python objects:

* Number  -> `float`
* String  -> `str`
* Boolean -> `bool`

`bool` must always be tested before numbers are considered since Python
treats it as an integer subtype. Helpers here implement the canonical
string form and the numeric rules shared by the interpreter.
"""

from __future__ import annotations

import math
import re
from typing import Union


Value = Union[float, str, bool]

# Smallest positive double. Number equality is |a - b| < NUMBER_EPSILON.
NUMBER_EPSILON = math.ulp(0.0)

# A number renders without decimals when its fractional part is below this.
INTEGRAL_TOLERANCE = NUMBER_EPSILON * 100


def is_number(value: Value) -> bool:
    return isinstance(value, float)


def is_string(value: Value) -> bool:
    return isinstance(value, str)


def is_bool(value: Value) -> bool:
    return isinstance(value, bool)


def type_name(value: Value) -> str:
    """Name of a value's type as shown in error messages."""
    if isinstance(value, bool):
        return 'bool'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    raise TypeError(f"not a BasicSharp value: {value!r}")


def to_string(value: Value) -> str:
    """Canonical string form, used by print, tostr and concatenation."""
    if isinstance(value, bool):
        return 'TRUE' if value else 'FALSE'
    if isinstance(value, float):
        if math.isfinite(value) and abs(math.fmod(value, 1.0)) < INTEGRAL_TOLERANCE:
            return f"{value:.0f}"
        return f"{value:.2f}"
    return value


def numbers_equal(a: float, b: float) -> bool:
    return abs(a - b) < NUMBER_EPSILON


def numbers_differ(a: float, b: float) -> bool:
    # Not simply `not numbers_equal`: NaN operands are neither equal nor different.
    return abs(a - b) > NUMBER_EPSILON


def divide(a: float, b: float) -> float:
    """IEEE-754 division: dividing by zero gives an infinity or NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


# Decimal digits with optional sign, fraction and exponent. float() alone
# would also take "1_000", "inf" and "nan".
NUMBER_TEXT = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*")


def parse_number(text: str) -> float:
    """Parse user text into a number. Raises ValueError if it is not one."""
    if NUMBER_TEXT.fullmatch(text) is None:
        raise ValueError(f"not a number: {text!r}")
    return float(text)
