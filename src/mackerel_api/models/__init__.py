"""
Data models exchanged with the Mackerel API.
"""

from .host import (
    ACTIVE_STATUSES,
    CheckConfig,
    CreateHostParam,
    FindHostsParam,
    Host,
    HostMeta,
    HostStatus,
    Interface,
    UpdateHostParam
)

from .metric import (
    HostMetricValue,
    MetricValue
)

from .graph import (
    GraphDefsMetric,
    GraphDefsParam
)

__all__ = [
    'ACTIVE_STATUSES',
    'CheckConfig',
    'CreateHostParam',
    'FindHostsParam',
    'Host',
    'HostMeta',
    'HostStatus',
    'Interface',
    'UpdateHostParam',
    'HostMetricValue',
    'MetricValue',
    'GraphDefsMetric',
    'GraphDefsParam'
]
