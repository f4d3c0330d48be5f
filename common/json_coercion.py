"""
Best-effort JSON coercion for loosely-structured prepress payloads.

Upstream fields arrive either already structured or as pre-serialized JSON
strings (sometimes both within the same log). Everything here is fail-soft:
bad input (including pathologically deep nesting) maps to None / empty
containers, never to an exception.
"""
import json
import logging
import math
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

Number = Union[int, float]


def parse_maybe_json(value: Any) -> Any:
    """
    Parse a value that may be a JSON string, an already-structured value, or absent.
    
    Args:
        value: Raw payload value
        
    Returns:
        Structured value, the input itself when it is not a string,
        or None for empty/unparsable input
    """
    if value is None:
        return None
    if not isinstance(value, str):
        return value
    
    trimmed = value.strip()
    if not trimmed:
        return None
    
    try:
        return json.loads(trimmed)
    except (json.JSONDecodeError, ValueError, TypeError, RecursionError) as e:
        logger.debug(f"Ignoring unparsable JSON payload ({len(trimmed)} chars): {e}")
        return None


def as_list(value: Any) -> List[Any]:
    """Return value as a list, or an empty list for any other shape."""
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return []


def as_dict(value: Any) -> Dict[str, Any]:
    """Return value (or the JSON object it encodes) as a dict, else an empty dict."""
    parsed = parse_maybe_json(value)
    if isinstance(parsed, dict):
        return parsed
    return {}


def to_number(value: Any) -> Optional[Number]:
    """
    Lenient numeric coercion for values read from key/value lists.
    
    Numeric strings are accepted ("210", " 297.5 "). Booleans, NaN and
    infinities are rejected. Integral floats are returned as int so that
    210.0 prints as 210.
    
    Args:
        value: Raw value
        
    Returns:
        int/float, or None when the value is not a usable number
    """
    if isinstance(value, bool) or value is None:
        return None
    
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    
    if isinstance(number, float):
        if math.isnan(number) or math.isinf(number):
            return None
        if number.is_integer():
            return int(number)
    return number


def format_number(value: Any) -> str:
    """Render a number without a trailing '.0' (210.0 -> '210')."""
    number = to_number(value)
    if number is None:
        return str(value)
    return str(number)


def dumps_compact(value: Any) -> str:
    """
    Serialize without whitespace so literal markers like '"Success":true' can be searched.
    
    Returns an empty string when the value cannot be serialized.
    """
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError, RecursionError) as e:
        logger.debug(f"Could not serialize payload for text search: {e}")
        return ""
