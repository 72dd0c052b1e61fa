from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
from .exceptions import ValidationError

def validate_string(value: Optional[str], name: str = "value") -> str:
    """Check that value is a non-empty string; it is returned unchanged."""
    if not value or not isinstance(value, str):
        raise ValidationError(f"{name} is required")
    return value

def to_epoch(value: Union[int, float, datetime]) -> int:
    """Convert a datetime or numeric timestamp to epoch seconds."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"Invalid timestamp: {value!r}")
    return int(value)

def omit_empty(payload: Dict[str, Any], *keys: str) -> Dict[str, Any]:
    """Drop the given keys from payload when their value is empty."""
    for key in keys:
        if key in payload and payload[key] in (None, "", [], {}):
            del payload[key]
    return payload

def merge_dicts(dict1: Dict[str, Any], dict2: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries."""
    result = dict1.copy()

    for key, value in dict2.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value

    return result
