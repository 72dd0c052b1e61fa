"""Tests for the API facade with an injected REST client."""
import pytest
from unittest.mock import AsyncMock, MagicMock
from mackerel_api import (
    API,
    APIConfig,
    APIError,
    Config,
    CreateHostParam,
    FindHostsParam,
    Host,
    InfoError,
    MackerelClient,
    RESTClient,
    is_server_error
)

@pytest.fixture
def rest_client():
    """Fake REST client; every operation is an AsyncMock"""
    client = MagicMock(spec=MackerelClient)
    for name in [
        "find_host", "find_hosts", "create_host", "update_host",
        "update_host_status", "post_host_metric_values",
        "create_graph_defs", "retire_host"
    ]:
        setattr(client, name, AsyncMock())
    return client

@pytest.fixture
def api(rest_client):
    """Facade wired to the fake client"""
    config = APIConfig(base_url="https://api.example.com", api_key="dummy-key")
    return API(config, client=rest_client)

def test_mackerel_client_satisfies_protocol():
    """Test that the default client offers every operation the facade uses"""
    for name in dir(RESTClient):
        if not name.startswith("_"):
            assert callable(getattr(MackerelClient, name))

@pytest.mark.asyncio
async def test_find_host_by_custom_identifier_filters_statuses(api, rest_client):
    """Test the lookup asks only for hosts that are not retired"""
    host = Host(id="9rxGOHfVF8F", custom_identifier="foo-bar")
    rest_client.find_hosts.return_value = [host, Host(id="other")]

    assert await api.find_host_by_custom_identifier("foo-bar") is host

    param = rest_client.find_hosts.call_args.args[0]
    assert param == FindHostsParam(
        custom_identifier="foo-bar",
        statuses=["working", "standby", "maintenance", "poweroff"]
    )

@pytest.mark.asyncio
async def test_find_host_by_custom_identifier_miss(api, rest_client):
    """Test a lookup miss raises InfoError"""
    rest_client.find_hosts.return_value = []

    with pytest.raises(InfoError):
        await api.find_host_by_custom_identifier("unknown")

@pytest.mark.asyncio
async def test_empty_custom_identifier_is_not_sent(api, rest_client):
    """Test an empty identifier never lists every host"""
    with pytest.raises(InfoError):
        await api.find_host_by_custom_identifier("")
    rest_client.find_hosts.assert_not_called()

@pytest.mark.asyncio
async def test_errors_propagate_unchanged(api, rest_client):
    """Test the facade neither wraps nor retries errors"""
    error = APIError(503, "Service Unavailable")
    rest_client.create_host.side_effect = error

    with pytest.raises(APIError) as exc_info:
        await api.create_host(CreateHostParam(name="web01"))

    assert exc_info.value is error
    assert is_server_error(exc_info.value)
    assert rest_client.create_host.await_count == 1

@pytest.mark.asyncio
async def test_update_host_discards_id(api, rest_client):
    """Test update_host returns nothing"""
    rest_client.update_host.return_value = "ABCD123"
    assert await api.update_host("ABCD123", CreateHostParam(name="web01")) is None

@pytest.mark.asyncio
async def test_timeout_is_forwarded(api, rest_client):
    """Test the per-call timeout reaches the REST client"""
    await api.retire_host("ABCD123", timeout=3.0)
    rest_client.retire_host.assert_awaited_once_with("ABCD123", timeout=3.0)

def test_from_config(monkeypatch, rest_client):
    """Test building the facade from layered configuration"""
    monkeypatch.setenv("MACKEREL_APIKEY", "env-key")
    monkeypatch.setenv("MACKEREL_API_BASE_URL", "http://mackerel.local:8080/")
    monkeypatch.setenv("MACKEREL_API_VERBOSE", "true")

    api = API.from_config(Config(), client=rest_client)

    assert api.api_key == "env-key"
    assert str(api.url_for("/api/v0/hosts")) == "http://mackerel.local:8080/api/v0/hosts"
    assert api.verbose is True
    assert api.config.timeout == 30.0
