# src/mackerel_api/utils/api/api_client.py

from typing import Dict, Any, Optional, Union, Tuple, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlencode
import asyncio
import logging
import json
import aiohttp
from aiohttp import hdrs
import yarl
from multidict import CIMultiDict, CIMultiDictProxy, MultiMapping

from ...core.exceptions import (
    APIError,
    ConfigurationError,
    ResponseError,
    TransportError,
    ValidationError
)
from ...core.logger import TRACE

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "mackerel-agent/0.0.0"
API_KEY_HEADER = "X-Api-Key"

Query = Union[str, Sequence[Tuple[str, str]], None]

class RequestMethod(Enum):
    """HTTP request methods"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

def parse_base_url(raw_url: str) -> yarl.URL:
    """Parse the API base URL, raising ConfigurationError if unusable"""
    try:
        url = yarl.URL(raw_url)
        host = url.host
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid API base URL {raw_url!r}: {e}")
    if url.scheme not in ("http", "https") or not host:
        raise ConfigurationError(f"Invalid API base URL {raw_url!r}: an http(s) URL with a host is required")
    return url

def _to_multidict(headers: Any) -> CIMultiDict:
    result: CIMultiDict = CIMultiDict()
    if headers is None:
        return result
    if isinstance(headers, MultiMapping):
        for name, value in headers.items():
            result.add(name, value)
        return result
    for name, values in headers.items():
        if isinstance(values, str):
            values = [values]
        for value in values:
            result.add(name, value)
    return result

@dataclass(frozen=True)
class APIConfig:
    """Configuration for the API client. Immutable once built."""
    base_url: str
    api_key: str
    verbose: bool = False
    user_agent: str = ""
    default_headers: Mapping[str, Any] = field(default_factory=dict, compare=False)
    timeout: float = DEFAULT_TIMEOUT
    logger: Optional[logging.Logger] = None
    url: yarl.URL = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "url", parse_base_url(self.base_url))
        object.__setattr__(
            self, "default_headers", CIMultiDictProxy(_to_multidict(self.default_headers))
        )
        if self.timeout is None or self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")

@dataclass
class APIResponse:
    """Container for API response data"""
    status: int
    data: Any
    headers: Dict[str, str]

class APIClient:
    """
    Dispatches requests to the Mackerel API.

    This class provides:
    - URL composition against the configured base URL
    - Default, API key and User-Agent header injection
    - A fixed per-request timeout, overridable per call
    - Request/Response dumps at TRACE level in verbose mode
    - HTTP status to exception conversion

    Requests are never retried; one failed attempt surfaces immediately.
    """

    def __init__(self, config: APIConfig):
        self.config = config
        self.logger = config.logger or logger
        self._session: Optional[aiohttp.ClientSession] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def ua(self) -> str:
        return self.config.user_agent or DEFAULT_USER_AGENT

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session for the running event loop"""
        loop = asyncio.get_running_loop()
        if self._session is None or self._session.closed or self._loop is not loop:
            # A session cannot outlive the loop it was created on
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout)
            )
            self._loop = loop
        return self._session

    async def close(self) -> None:
        """Close the API client session"""
        if self._session and not self._session.closed:
            if self._loop is asyncio.get_running_loop():
                await self._session.close()
            self._session = None
            self._loop = None

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def url_for(self, path: str, query: Query = None) -> yarl.URL:
        """Compose a URL from the base URL's scheme and host, path and raw query"""
        if query is not None and not isinstance(query, str):
            query = urlencode(list(query))
        return self.config.url.with_path(path).with_query(query or None)

    def build_headers(self) -> CIMultiDict:
        """Headers sent with every request"""
        headers: CIMultiDict = CIMultiDict()
        for name, value in self.config.default_headers.items():
            headers.add(name, value)
        headers.add(API_KEY_HEADER, self.config.api_key)
        headers[hdrs.USER_AGENT] = self.ua
        return headers

    def _dump_request(
        self,
        method: RequestMethod,
        url: yarl.URL,
        headers: CIMultiDict,
        body: Optional[bytes]
    ) -> None:
        try:
            lines = [f"{method.value} {url.raw_path_qs} HTTP/1.1", f"Host: {url.raw_authority}"]
            lines.extend(f"{name}: {value}" for name, value in headers.items())
            dump = "\r\n".join(lines) + "\r\n\r\n"
            if body:
                dump += body.decode("utf-8", errors="replace")
            self.logger.log(TRACE, "%s", dump)
        except Exception as e:
            self.logger.debug("Failed to dump request: %s", e)

    def _dump_response(self, response: aiohttp.ClientResponse, body: bytes) -> None:
        try:
            version = response.version
            lines = [f"HTTP/{version.major}.{version.minor} {response.status} {response.reason or ''}".rstrip()]
            lines.extend(f"{name}: {value}" for name, value in response.headers.items())
            dump = "\r\n".join(lines) + "\r\n\r\n" + body.decode("utf-8", errors="replace")
            self.logger.log(TRACE, "%s", dump)
        except Exception as e:
            self.logger.debug("Failed to dump response: %s", e)

    @staticmethod
    def _error_message(response: aiohttp.ClientResponse, body: bytes) -> str:
        """Extract the error message from an error response body"""
        try:
            payload = json.loads(body) if body else None
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if isinstance(error, str) and error:
                return error
        text = body.decode("utf-8", errors="replace").strip()
        return text or (response.reason or "")

    async def request(
        self,
        method: RequestMethod,
        path: str,
        query: Query = None,
        data: Any = None,
        timeout: Optional[float] = None
    ) -> APIResponse:
        """
        Make an API request

        Args:
            method: HTTP method to use
            path: API path, e.g. /api/v0/hosts
            query: Raw query string or (key, value) pairs
            data: Request body, JSON-encoded when given
            timeout: Overrides the configured timeout for this call

        Returns:
            APIResponse object containing the decoded JSON body

        Raises:
            APIError: the API answered with status >= 400
            ResponseError: a successful body was not valid JSON
            TransportError: the request could not be completed
            ValidationError: timeout is not positive
        """
        # aiohttp reads a zero or negative total as "no timeout"
        if timeout is not None and timeout <= 0:
            raise ValidationError(f"timeout must be positive, got {timeout!r}")

        url = self.url_for(path, query)
        headers = self.build_headers()
        body: Optional[bytes] = None
        if data is not None:
            body = json.dumps(data).encode("utf-8")
            headers[hdrs.CONTENT_TYPE] = "application/json"

        if self.config.verbose:
            self._dump_request(method, url, headers, body)

        session = await self._get_session()
        options: Dict[str, Any] = {}
        if timeout is not None:
            options["timeout"] = aiohttp.ClientTimeout(total=timeout)

        try:
            async with session.request(
                method.value,
                url,
                data=body,
                headers=headers,
                **options
            ) as response:
                raw = await response.read()

                if self.config.verbose:
                    self._dump_response(response, raw)

                if response.status >= 400:
                    raise APIError(response.status, self._error_message(response, raw))

                try:
                    response_data = json.loads(raw) if raw.strip() else None
                except ValueError as e:
                    raise ResponseError(
                        f"Invalid JSON response from {method.value} {path}: {e}",
                        status_code=response.status
                    )

                return APIResponse(
                    status=response.status,
                    data=response_data,
                    headers=dict(response.headers)
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"API request failed: {method.value} {path}: {e!r}") from e

    async def get(
        self,
        path: str,
        query: Query = None,
        **kwargs: Any
    ) -> APIResponse:
        """Perform GET request"""
        return await self.request(RequestMethod.GET, path, query=query, **kwargs)

    async def post(
        self,
        path: str,
        data: Any = None,
        **kwargs: Any
    ) -> APIResponse:
        """Perform POST request"""
        return await self.request(RequestMethod.POST, path, data=data, **kwargs)

    async def put(
        self,
        path: str,
        data: Any = None,
        **kwargs: Any
    ) -> APIResponse:
        """Perform PUT request"""
        return await self.request(RequestMethod.PUT, path, data=data, **kwargs)
