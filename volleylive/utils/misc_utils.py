# volleylive/utils/misc_utils.py
import json
import math
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

from loguru import logger

_DIGITS_RE = re.compile(r"(\d+)")


def as_str(value: Any) -> str:
    """Stringifies and strips a value; None becomes an empty string."""
    if value is None:
        return ""
    return str(value).strip()


def non_empty(value: Any) -> Optional[str]:
    """Returns the stripped string form of a value, or None when it is blank."""
    s = as_str(value)
    return s or None


def as_num(value: Any) -> Optional[float]:
    """Coerces a value to a finite number, or None if that is not possible."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        n = float(value)
    except (TypeError, ValueError):
        return None
    return n if math.isfinite(n) else None


def as_int(value: Any) -> Optional[int]:
    """Like as_num, but only accepts integral values."""
    n = as_num(value)
    if n is None or not n.is_integer():
        return None
    return int(n)


def counter(value: Any) -> float:
    """Reads an upstream counter field as-is; anything unusable counts as 0."""
    n = as_num(value)
    return n if n is not None else 0


def first_digits(text: Any) -> Optional[int]:
    """First run of digits in a free-text value, e.g. "3rd set" -> 3."""
    match = _DIGITS_RE.search(as_str(text))
    return int(match.group(1)) if match else None


def safe_array(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def unwrap_items(payload: Any) -> List[Any]:
    """Accepts a bare array or an envelope object carrying an `items` array."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        return safe_array(payload.get("items"))
    return []


def dig(obj: Any, *path: str) -> Any:
    """Walks nested mappings, returning None as soon as a step is missing."""
    for key in path:
        if not isinstance(obj, Mapping):
            return None
        obj = obj.get(key)
    return obj


def parse_raw_json(ev: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    """Decodes the embedded `raw_json` blob of an event.

    The blob is a last-resort source: a missing, invalid or too deeply
    nested blob yields None instead of raising.
    """
    raw = ev.get("raw_json")
    if raw is None or raw == "":
        return None
    if isinstance(raw, dict):
        return raw
    if not isinstance(raw, (str, bytes, bytearray)):
        return None
    try:
        parsed = json.loads(raw)
    except (ValueError, TypeError, RecursionError) as e:
        logger.debug(f"Ignoring unparsable raw_json on event: {e}")
        return None
    return parsed if isinstance(parsed, dict) else None


def initials(name: Any) -> str:
    """Two-letter initials for avatar placeholders ("Ola Nordmann" -> "ON")."""
    s = as_str(name)
    if not s:
        return "—"
    parts = s.split()
    a = parts[0][0].upper() if parts else ""
    b = parts[1][0].upper() if len(parts) > 1 else ""
    return (a + b) or s[:2].upper()


def set_scores(ev: Mapping[str, Any]) -> List[Tuple[int, Any, Any]]:
    """(set_number, home, away) for every set 1..5 with at least one score."""
    result = []
    for i in range(1, 6):
        home = ev.get(f"home_p{i}")
        away = ev.get(f"away_p{i}")
        if home is None and away is None:
            continue
        result.append((i, home, away))
    return result
