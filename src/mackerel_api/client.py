"""Typed REST client for the Mackerel API."""

from typing import Any, List, Optional, Sequence, Union

from .core.utils import validate_string
from .models import (
    CreateHostParam,
    FindHostsParam,
    GraphDefsParam,
    Host,
    HostMetricValue,
    HostStatus,
    UpdateHostParam
)
from .utils.api import APIClient, ResponseHandler


class MackerelClient:
    """
    One coroutine per Mackerel endpoint.

    Parameters are rendered with their to_payload() methods and results are
    decoded into models. Every method issues exactly one request through the
    shared APIClient; errors from it propagate unchanged.
    """

    def __init__(self, transport: APIClient, handler: Optional[ResponseHandler] = None):
        self.transport = transport
        self.handler = handler or ResponseHandler()

    @staticmethod
    def _host_path(host_id: str, *suffix: str) -> str:
        host_id = validate_string(host_id, "host ID")
        return "/".join(("/api/v0/hosts", host_id) + suffix)

    async def find_host(self, host_id: str, timeout: Optional[float] = None) -> Host:
        response = await self.transport.get(self._host_path(host_id), timeout=timeout)
        return self.handler.to_model(response, "host", Host.from_dict)

    async def find_hosts(
        self,
        param: Optional[FindHostsParam] = None,
        timeout: Optional[float] = None
    ) -> List[Host]:
        query = (param or FindHostsParam()).to_query()
        response = await self.transport.get("/api/v0/hosts", query=query, timeout=timeout)
        return self.handler.to_models(response, "hosts", Host.from_dict)

    async def create_host(self, param: CreateHostParam, timeout: Optional[float] = None) -> str:
        response = await self.transport.post("/api/v0/hosts", data=param.to_payload(), timeout=timeout)
        return self.handler.extract(response, "id", str)

    async def update_host(
        self,
        host_id: str,
        param: UpdateHostParam,
        timeout: Optional[float] = None
    ) -> str:
        response = await self.transport.put(
            self._host_path(host_id), data=param.to_payload(), timeout=timeout
        )
        return self.handler.extract(response, "id", str)

    async def update_host_status(
        self,
        host_id: str,
        status: Union[str, HostStatus],
        timeout: Optional[float] = None
    ) -> None:
        if isinstance(status, HostStatus):
            status = status.value
        await self.transport.post(
            self._host_path(host_id, "status"), data={"status": status}, timeout=timeout
        )

    async def post_host_metric_values(
        self,
        values: Sequence[HostMetricValue],
        timeout: Optional[float] = None
    ) -> None:
        payload = [value.to_payload() for value in values]
        await self.transport.post("/api/v0/tsdb", data=payload, timeout=timeout)

    async def create_graph_defs(
        self,
        payloads: Sequence[GraphDefsParam],
        timeout: Optional[float] = None
    ) -> None:
        data: List[Any] = [param.to_payload() for param in payloads]
        await self.transport.post("/api/v0/graph-defs/create", data=data, timeout=timeout)

    async def retire_host(self, host_id: str, timeout: Optional[float] = None) -> None:
        await self.transport.post(self._host_path(host_id, "retire"), data={}, timeout=timeout)
