"""
Asynchronous client for the Mackerel monitoring API.
"""

from .api import API, RESTClient
from .client import MackerelClient
from .core import (
    Config,
    Logger,
    MackerelError,
    ConfigurationError,
    ValidationError,
    InfoError,
    TransportError,
    APIError,
    ResponseError,
    is_client_error,
    is_server_error
)
from .models import (
    CheckConfig,
    CreateHostParam,
    FindHostsParam,
    GraphDefsMetric,
    GraphDefsParam,
    Host,
    HostMeta,
    HostMetricValue,
    HostStatus,
    Interface,
    MetricValue,
    UpdateHostParam
)
from .utils.api import APIConfig

__version__ = "0.1.0"

__all__ = [
    'API',
    'APIConfig',
    'RESTClient',
    'MackerelClient',
    'Config',
    'Logger',
    'MackerelError',
    'ConfigurationError',
    'ValidationError',
    'InfoError',
    'TransportError',
    'APIError',
    'ResponseError',
    'is_client_error',
    'is_server_error',
    'CheckConfig',
    'CreateHostParam',
    'FindHostsParam',
    'GraphDefsMetric',
    'GraphDefsParam',
    'Host',
    'HostMeta',
    'HostMetricValue',
    'HostStatus',
    'Interface',
    'MetricValue',
    'UpdateHostParam'
]
