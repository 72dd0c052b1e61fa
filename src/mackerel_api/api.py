"""Client facade for the Mackerel API used by the agent."""

import logging
from typing import Any, List, Optional, Protocol, Sequence, Union

import yarl

from .client import MackerelClient
from .core.config import Config
from .core.exceptions import InfoError
from .models import (
    ACTIVE_STATUSES,
    CreateHostParam,
    FindHostsParam,
    GraphDefsParam,
    Host,
    HostMetricValue,
    HostStatus,
    UpdateHostParam
)
from .utils.api import APIClient, APIConfig, APIResponse, RequestMethod
from .utils.api.api_client import Query

logger = logging.getLogger(__name__)


class RESTClient(Protocol):
    """Operations the facade delegates to"""

    async def find_host(self, host_id: str, timeout: Optional[float] = None) -> Host:
        ...

    async def find_hosts(
        self, param: Optional[FindHostsParam] = None, timeout: Optional[float] = None
    ) -> List[Host]:
        ...

    async def create_host(self, param: CreateHostParam, timeout: Optional[float] = None) -> str:
        ...

    async def update_host(
        self, host_id: str, param: UpdateHostParam, timeout: Optional[float] = None
    ) -> str:
        ...

    async def update_host_status(
        self, host_id: str, status: Union[str, HostStatus], timeout: Optional[float] = None
    ) -> None:
        ...

    async def post_host_metric_values(
        self, values: Sequence[HostMetricValue], timeout: Optional[float] = None
    ) -> None:
        ...

    async def create_graph_defs(
        self, payloads: Sequence[GraphDefsParam], timeout: Optional[float] = None
    ) -> None:
        ...

    async def retire_host(self, host_id: str, timeout: Optional[float] = None) -> None:
        ...


class API:
    """
    Main interface of the Mackerel API.

    Every operation is a single request; nothing is retried or cached.
    Errors raised by the REST client propagate unchanged, so callers can use
    is_client_error()/is_server_error() to decide whether to retry.

    Use as an async context manager, or call close() when done.
    """

    def __init__(self, config: APIConfig, client: Optional[RESTClient] = None):
        self.config = config
        self.logger = config.logger or logger
        self._transport = APIClient(config)
        self._client: RESTClient = client or MackerelClient(self._transport)

    @classmethod
    def new(cls, raw_url: str, api_key: str, verbose: bool = False, **options: Any) -> "API":
        """
        Create an API for raw_url.

        Raises ConfigurationError if raw_url is not an http(s) URL with a host.
        Extra options (user_agent, default_headers, timeout, logger) are
        passed through to APIConfig.
        """
        return cls(APIConfig(base_url=raw_url, api_key=api_key, verbose=verbose, **options))

    @classmethod
    def from_config(
        cls,
        config: Config,
        client: Optional[RESTClient] = None,
        logger: Optional[logging.Logger] = None
    ) -> "API":
        return cls(config.api_config(logger=logger), client=client)

    @property
    def base_url(self) -> yarl.URL:
        return self.config.url

    @property
    def api_key(self) -> str:
        return self.config.api_key

    @property
    def verbose(self) -> bool:
        return self.config.verbose

    @property
    def ua(self) -> str:
        return self._transport.ua

    def url_for(self, path: str, query: Query = None) -> yarl.URL:
        return self._transport.url_for(path, query)

    async def do(
        self,
        method: RequestMethod,
        path: str,
        query: Query = None,
        data: Any = None,
        timeout: Optional[float] = None
    ) -> APIResponse:
        """Send a raw request with the API key and User-Agent attached"""
        return await self._transport.request(method, path, query=query, data=data, timeout=timeout)

    async def get(self, path: str, query: Query = None, timeout: Optional[float] = None) -> APIResponse:
        return await self.do(RequestMethod.GET, path, query=query, timeout=timeout)

    async def close(self) -> None:
        """Close the HTTP session; an injected client is closed by its owner"""
        await self._transport.close()

    async def __aenter__(self) -> "API":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def find_host(self, host_id: str, timeout: Optional[float] = None) -> Host:
        """Find the host"""
        return await self._client.find_host(host_id, timeout=timeout)

    async def find_host_by_custom_identifier(
        self,
        custom_identifier: str,
        timeout: Optional[float] = None
    ) -> Host:
        """
        Find a non-retired host by its custom identifier.

        Raises InfoError when no host matches; callers should treat that as
        "not registered yet" and log it at INFO.
        """
        message = f"no host was found for the custom identifier: {custom_identifier}"
        # An empty identifier would turn into an unfiltered host listing
        if not custom_identifier:
            raise InfoError(message)

        param = FindHostsParam(
            custom_identifier=custom_identifier,
            statuses=list(ACTIVE_STATUSES)
        )
        hosts = await self._client.find_hosts(param, timeout=timeout)
        if not hosts:
            raise InfoError(message)
        return hosts[0]

    async def create_host(self, param: CreateHostParam, timeout: Optional[float] = None) -> str:
        """Register the host to Mackerel and return its ID"""
        return await self._client.create_host(param, timeout=timeout)

    async def update_host(
        self,
        host_id: str,
        param: UpdateHostParam,
        timeout: Optional[float] = None
    ) -> None:
        """Update the host information on Mackerel"""
        await self._client.update_host(host_id, param, timeout=timeout)

    async def update_host_status(
        self,
        host_id: str,
        status: Union[str, HostStatus],
        timeout: Optional[float] = None
    ) -> None:
        await self._client.update_host_status(host_id, status, timeout=timeout)

    async def post_metric_values(
        self,
        values: Sequence[HostMetricValue],
        timeout: Optional[float] = None
    ) -> None:
        await self._client.post_host_metric_values(values, timeout=timeout)

    async def create_graph_defs(
        self,
        payloads: Sequence[GraphDefsParam],
        timeout: Optional[float] = None
    ) -> None:
        """Register graph definitions"""
        await self._client.create_graph_defs(payloads, timeout=timeout)

    async def retire_host(self, host_id: str, timeout: Optional[float] = None) -> None:
        await self._client.retire_host(host_id, timeout=timeout)
