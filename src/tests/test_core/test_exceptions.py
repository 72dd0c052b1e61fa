import pytest
from mackerel_api.core.exceptions import (
    MackerelError,
    ConfigurationError,
    LoggerError,
    ValidationError,
    InfoError,
    TransportError,
    APIError,
    ResponseError,
    is_client_error,
    is_server_error
)

def test_base_exception():
    """Test MackerelError base exception"""
    with pytest.raises(MackerelError) as exc_info:
        raise MackerelError("Base error message")
    assert str(exc_info.value) == "Base error message"
    assert isinstance(exc_info.value, Exception)

def test_api_error_message():
    """Test APIError string format"""
    err = APIError(400, "bad request")
    assert str(err) == "API error. status: 400, msg: bad request"
    assert err.status_code == 400
    assert err.message == "bad request"

def test_api_error_client_error():
    """Test 4xx classification"""
    err = APIError(400, "bad request")
    assert err.is_client_error()
    assert not err.is_server_error()
    assert is_client_error(err)
    assert not is_server_error(err)

def test_api_error_server_error():
    """Test 5xx classification"""
    err = APIError(503, "unavailable")
    assert not err.is_client_error()
    assert err.is_server_error()
    assert not is_client_error(err)
    assert is_server_error(err)

@pytest.mark.parametrize("status", [399, 499, 500, 599, 600])
def test_classification_boundaries(status):
    """Test status range boundaries"""
    err = APIError(status, "boundary")
    assert err.is_client_error() == (400 <= status < 500)
    assert err.is_server_error() == (500 <= status < 600)

def test_errors_without_status_are_unclassified():
    """Network failures and informational errors are neither client nor server errors"""
    errors = [
        TransportError("connection refused"),
        InfoError("no host was found for the custom identifier: foo"),
        ConfigurationError("bad url"),
        ValueError("not ours")
    ]
    for err in errors:
        assert not is_client_error(err)
        assert not is_server_error(err)

def test_error_with_details():
    """Test exception with additional details"""
    details = {"path": "/api/v0/hosts"}
    err = APIError(404, "Host Not Found", details=details)
    assert err.details == details

def test_error_inheritance():
    """Test proper exception inheritance"""
    exceptions = [
        ConfigurationError, LoggerError, ValidationError,
        InfoError, TransportError, ResponseError
    ]

    for exception_class in exceptions:
        exc = exception_class("Test")
        assert isinstance(exc, MackerelError)
        assert isinstance(exc, Exception)

    assert isinstance(APIError(500, "Test"), TransportError)
    assert isinstance(ResponseError("Test"), TransportError)
    assert not isinstance(InfoError("Test"), TransportError)
