import pytest
from datetime import datetime, timezone, timedelta
from mackerel_api.core.utils import (
    validate_string,
    to_epoch,
    omit_empty,
    merge_dicts
)
from mackerel_api.core.exceptions import ValidationError

def test_validate_string():
    """Test string validation"""
    assert validate_string("test") == "test"
    assert validate_string("  test  ") == "  test  "

    with pytest.raises(ValidationError):
        validate_string(None)
    with pytest.raises(ValidationError):
        validate_string(123)
    with pytest.raises(ValidationError) as exc_info:
        validate_string("", "host ID")
    assert "host ID" in str(exc_info.value)

def test_to_epoch():
    """Test timestamp conversion"""
    assert to_epoch(123456789) == 123456789
    assert to_epoch(123456789.9) == 123456789
    assert to_epoch(datetime(1973, 11, 29, 21, 33, 9, tzinfo=timezone.utc)) == 123456789
    assert to_epoch(datetime(1973, 11, 29, 21, 33, 9)) == 123456789

    jst = timezone(timedelta(hours=9))
    assert to_epoch(datetime(1973, 11, 30, 6, 33, 9, tzinfo=jst)) == 123456789

    with pytest.raises(ValidationError):
        to_epoch("yesterday")
    with pytest.raises(ValidationError):
        to_epoch(True)

def test_omit_empty():
    """Test dropping empty optional keys"""
    payload = {"name": "", "displayName": "", "checks": [], "memo": "kept"}
    assert omit_empty(payload, "displayName", "checks", "missing") == {"name": "", "memo": "kept"}

def test_merge_dicts():
    """Test dictionary merging"""
    dict1 = {"a": 1, "b": {"c": 2, "d": 3}}
    dict2 = {"b": {"c": 4, "e": 5}, "f": 6}
    result = merge_dicts(dict1, dict2)

    assert result == {
        "a": 1,
        "b": {"c": 4, "d": 3, "e": 5},
        "f": 6
    }
    assert dict1 == {"a": 1, "b": {"c": 2, "d": 3}}
