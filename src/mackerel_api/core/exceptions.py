from typing import Any, Dict, Optional

class MackerelError(Exception):
    """Base exception class for all mackerel_api exceptions"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

class ConfigurationError(MackerelError):
    """Raised when the client configuration is invalid"""
    pass

class LoggerError(MackerelError):
    """Raised when there is a logging error"""
    pass

class ValidationError(MackerelError):
    """Raised when a required argument is missing or malformed"""
    pass

class InfoError(MackerelError):
    """Raised for expected empty results that callers should log at INFO"""
    pass

class TransportError(MackerelError):
    """Raised when talking to the API fails.

    ``status_code`` is None when no HTTP response was received, e.g. for
    connection failures and timeouts.
    """
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.status_code = status_code

    def is_client_error(self) -> bool:
        """True for HTTP 4xx"""
        return self.status_code is not None and 400 <= self.status_code < 500

    def is_server_error(self) -> bool:
        """True for HTTP 5xx"""
        return self.status_code is not None and 500 <= self.status_code < 600

class APIError(TransportError):
    """Raised when the API answers with an HTTP error status"""
    def __init__(
        self,
        status_code: int,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, status_code=status_code, details=details)

    def __str__(self) -> str:
        return f"API error. status: {self.status_code}, msg: {self.message}"

class ResponseError(TransportError):
    """Raised when a successful response body cannot be decoded"""
    pass

def is_client_error(err: BaseException) -> bool:
    """Return True if err carries an HTTP 4xx status."""
    return isinstance(err, TransportError) and err.is_client_error()

def is_server_error(err: BaseException) -> bool:
    """Return True if err carries an HTTP 5xx status."""
    return isinstance(err, TransportError) and err.is_server_error()
