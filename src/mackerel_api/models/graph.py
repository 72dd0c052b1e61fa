"""Graph definition models for the Mackerel graph-defs API."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class GraphDefsMetric:
    name: str
    display_name: str = ""
    is_stacked: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "isStacked": self.is_stacked,
        }


@dataclass
class GraphDefsParam:
    """A graph definition grouping related custom metrics"""
    name: str
    display_name: str = ""
    unit: str = ""
    metrics: List[GraphDefsMetric] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "unit": self.unit,
            "metrics": [metric.to_payload() for metric in self.metrics],
        }
