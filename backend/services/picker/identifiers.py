import math
import re
from typing import Any

from core.exceptions import InvalidIdentifier

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def coerce_identifier(raw: Any, max_identifier: int) -> int:
    """
    Coerce a raw JSON value into a positive integral identifier.

    Accepts ints, integral finite floats and numeric strings ("42", " 42 ",
    "1e3"). Booleans, None, containers, NaN/inf, fractional values,
    non-positive values and values above ``max_identifier`` raise
    InvalidIdentifier.
    """
    if isinstance(raw, bool) or raw is None:
        raise InvalidIdentifier(raw, "not a number")

    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        value = _integral_float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        # int() and float() both accept "1_000"; a JSON client would not
        if not text or "_" in text:
            raise InvalidIdentifier(raw, "not a number")
        try:
            value = int(text)
        except ValueError:
            try:
                value = _integral_float(float(text), raw)
            except ValueError:
                raise InvalidIdentifier(raw, "not a number") from None
    else:
        raise InvalidIdentifier(raw, "unsupported type")

    if value <= 0:
        raise InvalidIdentifier(raw, "not positive")
    if value > max_identifier:
        raise InvalidIdentifier(raw, "above maximum identifier")
    return value


def _integral_float(value: float, raw: Any = None) -> int:
    raw = value if raw is None else raw
    if not math.isfinite(value):
        raise InvalidIdentifier(raw, "not finite")
    if not value.is_integer():
        raise InvalidIdentifier(raw, "not integral")
    return int(value)


def parse_int_param(raw: Any, default: int) -> int:
    """Parse a leading integer prefix ("12abc" -> 12), else return ``default``."""
    if raw is None:
        return default
    match = _LEADING_INT_RE.match(str(raw))
    if not match:
        return default
    return int(match.group(1))


def matches_filter(filter_text: str, identifier: int) -> bool:
    """True when the filter is empty or occurs in the decimal form of the id."""
    if not filter_text:
        return True
    return filter_text in str(identifier)
