"""Canonical JSON serialization and content hashing.

Output follows the JSON Canonicalization Scheme (RFC 8785), so any runtime
with an ECMAScript-compatible number formatter produces the same bytes:

- object keys are sorted by their UTF-16 code units, at every depth
- no insignificant whitespace
- arrays keep the order they were given in
- floats use the ECMAScript Number-to-String form: shortest round-trip
  digits, plain notation for exponents from -7 to 20, otherwise ``1e-7`` /
  ``1e+21`` style; integral floats drop the fraction (``2.0`` -> ``2``) and
  ``-0.0`` is written ``0``
- integers are written in full
- NaN and infinities are rejected
"""

import hashlib
import json
import math
from decimal import Decimal
from typing import Any, Mapping, Tuple

from pydantic import BaseModel


def canonicalize(value: Any) -> Any:
    """Normalize a value tree into plain JSON types.

    Args:
        value: Pydantic model, mapping, sequence, or scalar

    Returns:
        Tree of dict/list/str/int/float/bool/None

    Raises:
        TypeError: For non-string mapping keys or unsupported types
        ValueError: For NaN or infinite floats
    """
    if isinstance(value, BaseModel):
        return canonicalize(value.model_dump(exclude_none=True))
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Canonical JSON cannot represent {value!r}")
        return value
    if isinstance(value, Mapping):
        result = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"Canonical JSON requires string keys, got {type(key).__name__}")
            result[key] = canonicalize(item)
        return result
    if isinstance(value, (list, tuple)):
        return [canonicalize(item) for item in value]
    raise TypeError(f"Cannot canonicalize value of type {type(value).__name__}")


def canonical_json(value: Any) -> str:
    """Serialize a value to canonical JSON text."""
    return _encode(canonicalize(value))


def format_number(value: float) -> str:
    """ECMAScript Number::toString for a finite float."""
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    digits, exponent = _shortest_digits(abs(value))
    k = len(digits)
    n = exponent + k

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits

    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def _shortest_digits(value: float) -> Tuple[str, int]:
    # repr() is the shortest string that round-trips, same as ECMAScript
    _, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    stripped = digits.rstrip("0")
    return stripped, exponent + len(digits) - len(stripped)


def _encode(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, dict):
        keys = sorted(value, key=lambda key: key.encode("utf-16-be"))
        members = (json.dumps(key, ensure_ascii=False) + ":" + _encode(value[key]) for key in keys)
        return "{" + ",".join(members) + "}"
    return "[" + ",".join(_encode(item) for item in value) + "]"


def sha256_hex(text: str) -> str:
    """Lowercase hex SHA-256 digest of the UTF-8 encoding of text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
