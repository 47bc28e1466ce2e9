import pytest_asyncio
from aiohttp.test_utils import TestServer

from testutils import CALLS, make_node_app


class MockNode:
    """Handle on a running mock node."""

    def __init__(self, server: TestServer):
        self.server = server

    @property
    def url(self) -> str:
        return str(self.server.make_url("/"))

    @property
    def calls(self) -> list[str]:
        return self.server.app[CALLS]


@pytest_asyncio.fixture
async def eth_node():
    """Factory starting an in-process JSON-RPC node with canned results."""
    servers: list[TestServer] = []

    async def start(methods: dict) -> MockNode:
        server = TestServer(make_node_app(methods))
        await server.start_server()
        servers.append(server)
        return MockNode(server)

    yield start

    for server in servers:
        await server.close()
