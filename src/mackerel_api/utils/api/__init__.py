# src/mackerel_api/utils/api/__init__.py

"""
HTTP transport for the Mackerel API: request dispatch and response decoding.
"""

from .api_client import (
    APIClient,
    APIConfig,
    APIResponse,
    RequestMethod,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    parse_base_url
)

from .response_handler import ResponseHandler

__all__ = [
    'APIClient',
    'APIConfig',
    'APIResponse',
    'RequestMethod',
    'DEFAULT_TIMEOUT',
    'DEFAULT_USER_AGENT',
    'parse_base_url',
    'ResponseHandler'
]
