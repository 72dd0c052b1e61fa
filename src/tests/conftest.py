"""Global test configuration and fixtures."""
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer


@pytest_asyncio.fixture
async def mackerel_server():
    """
    Start in-process API servers.

    Yields a coroutine taking an aiohttp handler; every request, whatever its
    path, is routed to the handler. Returns the server's base URL.
    """
    servers = []

    async def start(handler):
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", handler)
        server = TestServer(app)
        await server.start_server()
        servers.append(server)
        return f"http://{server.host}:{server.port}"

    yield start

    for server in servers:
        await server.close()

