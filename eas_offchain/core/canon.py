# eas_offchain/core/canon.py
from typing import Any, Iterable, Sequence

try:
    import jcs
except ImportError:
    raise ImportError("Please install jcs: pip install jcs")

# Largest integer a JSON consumer backed by IEEE-754 doubles reads back exactly
MAX_SAFE_INTEGER = 2**53 - 1


def is_safe_integer(value: int) -> bool:
    return -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER


def to_js_number(value: int) -> int:
    """
    Coerce an unsigned 64-bit value the way a double-precision number would hold it.
    Values beyond the safe range are rounded to the nearest double, not corrected.
    """
    value = int(value)
    if is_safe_integer(value):
        return value
    return int(float(value))


def stringify_bigints(values: Sequence[Any], always: Iterable[int] = ()) -> list:
    """
    Replace integers outside the safe range with their decimal string.
    Positions listed in ``always`` are stringified regardless of magnitude.
    """
    forced = set(always)
    out = []
    for i, value in enumerate(values):
        if isinstance(value, int) and not isinstance(value, bool):
            if i in forced or not is_safe_integer(value):
                value = str(value)
        out.append(value)
    return out


def canonical_json(obj: Any) -> bytes:
    """
    Produce deterministic UTF-8 bytes according to RFC 8785 (JSON Canonicalization Scheme).
    For a flat array this is byte-identical to a browser's JSON.stringify.
    """
    return jcs.canonicalize(obj)


def canonical_json_str(obj: Any) -> str:
    """Same as above, but returns string (mostly for debugging)."""
    return canonical_json(obj).decode("utf-8")
