"""Metric value models for the Mackerel tsdb API."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Union

from ..core.utils import to_epoch


@dataclass
class MetricValue:
    name: str
    time: Union[int, float, datetime]
    value: Any

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "time": to_epoch(self.time),
            "value": self.value,
        }


@dataclass
class HostMetricValue(MetricValue):
    """A metric value bound to a host"""
    host_id: str = ""

    def to_payload(self) -> Dict[str, Any]:
        payload = {"hostId": self.host_id}
        payload.update(super().to_payload())
        return payload
