from .config import Config
from .exceptions import (
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
from .logger import Logger, TRACE

__all__ = [
    'Config',
    'MackerelError',
    'ConfigurationError',
    'LoggerError',
    'ValidationError',
    'InfoError',
    'TransportError',
    'APIError',
    'ResponseError',
    'is_client_error',
    'is_server_error',
    'Logger',
    'TRACE'
]
