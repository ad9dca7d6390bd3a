"""
Shared fixtures.

Hostname lookups never leave the process: FakeHostnameResolver accepts a
fixed set of hosts and rejects everything else the way a failed DNS lookup
would.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from shorturl.core.exceptions import HostnameResolutionError
from shorturl.core.rate_limit import limiter
from shorturl.core.registry_manager import get_registry, get_resolver
from shorturl.core.setting import settings
from shorturl.db.session import create_engine, create_session_maker, create_tables
from shorturl.main import app
from shorturl.services.hostname_resolver import HostnameResolver
from shorturl.services.registry import InMemoryRegistry
from shorturl.services.sql_registry import SQLRegistry

KNOWN_HOSTS = {
    "www.freecodecamp.org",
    "www.example.com",
    "example.com",
}


class FakeHostnameResolver(HostnameResolver):
    """Resolves only the hosts it was given and records every lookup."""

    def __init__(self, known_hosts=KNOWN_HOSTS):
        super().__init__(timeout=0.1)
        self.known_hosts = set(known_hosts)
        self.calls = []

    async def resolve(self, hostname: str) -> None:
        self.calls.append(hostname)
        if hostname not in self.known_hosts:
            raise HostnameResolutionError(hostname, reason="Unknown host")


@pytest.fixture
def resolver():
    return FakeHostnameResolver()


@pytest.fixture
def memory_registry():
    return InMemoryRegistry()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def registry(request, tmp_path):
    """Every registry backend, so shared behaviour is tested once for both."""
    if request.param == "memory":
        yield InMemoryRegistry()
        return

    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'registry.db'}")
    await create_tables(engine)
    sql_registry = SQLRegistry(create_session_maker(engine), engine=engine)
    yield sql_registry
    await sql_registry.close()


@pytest.fixture
def client(memory_registry, resolver):
    """TestClient wired to an isolated registry and the fake resolver."""
    app.dependency_overrides[get_registry] = lambda: memory_registry
    app.dependency_overrides[get_resolver] = lambda: resolver
    limiter.enabled = False
    with TestClient(app) as test_client:
        yield test_client
    limiter.enabled = settings.RATE_LIMIT_ENABLED
    app.dependency_overrides.clear()
