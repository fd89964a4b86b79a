"""
Shared fixtures: in-memory/on-disk storage scopes, a recording client factory
standing in for supabase.create_client, and an ASGI client for route tests.
"""
import asyncio
from types import SimpleNamespace

import pytest
from httpx import AsyncClient, ASGITransport

from menuhub.modules.tenants.schemas import TenantCredential
from menuhub.modules.tenants.service import TenantSessionManager
from menuhub.modules.tenants.storage import FileStorage, MemoryStorage


class FakeAuth:
    def __init__(self, session=None, error=None, hang=False):
        self.session = session
        self.error = error
        self.hang = hang
        self.calls = 0
        self.finished = False

    async def get_session(self):
        self.calls += 1
        if self.hang:
            await asyncio.Event().wait()
        if self.error is not None:
            raise self.error
        self.finished = True
        return self.session


class FakeTenantClient:
    def __init__(self, base_url, api_key, token_storage=None):
        self.base_url = base_url
        self.api_key = api_key
        self.token_storage = token_storage
        self.auth = FakeAuth(session=SimpleNamespace(user=SimpleNamespace(id="user-1")))


class RecordingFactory:
    def __init__(self):
        self.built = []

    def __call__(self, base_url, api_key, token_storage=None):
        client = FakeTenantClient(base_url, api_key, token_storage)
        self.built.append(client)
        return client


@pytest.fixture
def ephemeral():
    return MemoryStorage()


@pytest.fixture
def durable(tmp_path):
    return FileStorage(tmp_path / "session.json")


@pytest.fixture
def factory():
    return RecordingFactory()


@pytest.fixture
def manager(durable, ephemeral, factory):
    return TenantSessionManager(
        durable=durable,
        ephemeral=ephemeral,
        client_factory=factory,
        session_check_timeout=0.2,
    )


@pytest.fixture
def make_credential():
    def _make(base_url="https://alpha.supabase.co", keep_signed_in=False, **extra):
        return TenantCredential(
            base_url=base_url,
            api_key=f"anon-{base_url.split('//')[-1]}",
            keep_signed_in=keep_signed_in,
            **extra,
        )
    return _make


@pytest.fixture
async def api_client(manager):
    """ASGI client whose app uses the test session manager."""
    from menuhub.main import app

    previous = app.state.session_manager
    app.state.session_manager = manager
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
    app.state.session_manager = previous
    app.dependency_overrides.clear()
