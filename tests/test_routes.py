"""
HTTP-level tests for the session, auth and translation routes.

Run with: pytest tests/test_routes.py -v
"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest

from menuhub.modules.auth.routes import get_auth_service
from menuhub.modules.auth.schemas import LoginResponse
from menuhub.modules.auth.service import RestaurantAuthService
from menuhub.modules.translation.routes import get_translation_service
from menuhub.modules.translation.service import TranslationService

from conftest import FakeAuth


@pytest.mark.asyncio
async def test_session_status_without_login(api_client):
    response = await api_client.get("/api/v1/restaurant/session")
    assert response.status_code == 200
    assert response.json()["authenticated"] is False


@pytest.mark.asyncio
async def test_session_status_with_live_session(api_client, manager, make_credential):
    manager.store_credential(make_credential(id="r-1", name="Alpha Bistro", keep_signed_in=True))

    response = await api_client.get("/api/v1/restaurant/session")

    body = response.json()
    assert body["authenticated"] is True
    assert body["restaurant_id"] == "r-1"
    assert body["restaurant_name"] == "Alpha Bistro"
    assert body["keep_signed_in"] is True


@pytest.mark.asyncio
async def test_session_status_with_expired_session(api_client, manager, make_credential):
    manager.store_credential(make_credential())
    manager.resolve_client().auth = FakeAuth(session=None)

    response = await api_client.get("/api/v1/restaurant/session")

    assert response.json()["authenticated"] is False


@pytest.mark.asyncio
async def test_profile_requires_login(api_client):
    response = await api_client.get("/api/v1/restaurant/profile")
    assert response.status_code == 401
    assert "login again" in response.json()["detail"]


@pytest.mark.asyncio
async def test_profile_reads_active_restaurant(api_client, manager, make_credential):
    manager.store_credential(make_credential(id="r-1"))
    client = manager.resolve_client()
    client.table = MagicMock()
    client.table.return_value.select.return_value.limit.return_value.execute.return_value = SimpleNamespace(
        data=[{"name": "Alpha Bistro", "currency": "EUR"}]
    )

    response = await api_client.get("/api/v1/restaurant/profile")

    assert response.status_code == 200
    assert response.json() == {"restaurant_id": "r-1", "profile": {"name": "Alpha Bistro", "currency": "EUR"}}
    client.table.assert_called_with("restaurant_profile")


@pytest.mark.asyncio
async def test_logout_clears_session(api_client, manager, make_credential):
    manager.store_credential(make_credential())

    response = await api_client.post("/api/v1/auth/logout")

    assert response.status_code == 200
    assert manager.get_active_credential() is None
    assert (await api_client.get("/api/v1/restaurant/profile")).status_code == 401


@pytest.mark.asyncio
async def test_keep_signed_in_preference(api_client, manager):
    assert (await api_client.get("/api/v1/auth/preference")).json() == {"keep_signed_in": False}
    manager.remember_keep_signed_in(True)
    assert (await api_client.get("/api/v1/auth/preference")).json() == {"keep_signed_in": True}


@pytest.mark.asyncio
async def test_login_route(api_client):
    from menuhub.main import app

    service = MagicMock(spec=RestaurantAuthService)
    service.login.return_value = LoginResponse(
        restaurant_id="r-1",
        restaurant_name="Alpha Bistro",
        user_id="u-1",
        email="owner@alpha-bistro.example.com",
        keep_signed_in=True,
        message="Welcome to Alpha Bistro!",
    )
    app.dependency_overrides[get_auth_service] = lambda: service

    response = await api_client.post(
        "/api/v1/auth/restaurant-login",
        json={"email": "owner@alpha-bistro.example.com", "password": "pw", "keep_signed_in": True},
    )

    assert response.status_code == 200
    assert response.json()["restaurant_name"] == "Alpha Bistro"
    login_data = service.login.call_args[0][0]
    assert login_data.keep_signed_in is True


@pytest.mark.asyncio
async def test_login_route_validates_email(api_client):
    from menuhub.main import app

    service = MagicMock(spec=RestaurantAuthService)
    app.dependency_overrides[get_auth_service] = lambda: service

    response = await api_client.post(
        "/api/v1/auth/restaurant-login",
        json={"email": "not-an-email", "password": "pw"},
    )
    assert response.status_code == 422
    service.login.assert_not_called()


@pytest.mark.asyncio
async def test_translate_route_uses_camel_case(api_client):
    from menuhub.main import app

    def handler(request: httpx.Request):
        return httpx.Response(200, json=[[["Ciao", "Hello", None]]])

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_translation_service] = lambda: TranslationService(http_client)

    response = await api_client.post(
        "/api/v1/auto-translate",
        json={"text": "Hello", "fromLang": "en", "toLang": "it"},
    )
    await http_client.aclose()

    assert response.status_code == 200
    assert response.json()["translatedText"] == "Ciao"
    assert response.json()["success"] is True


@pytest.mark.asyncio
async def test_health_has_security_headers(api_client):
    response = await api_client.get("/health")
    assert response.status_code == 200
    assert response.headers["X-Frame-Options"] == "DENY"


@pytest.mark.asyncio
async def test_ready_reports_stored_session(api_client, manager, make_credential):
    assert (await api_client.get("/ready")).json()["restaurant_session"] is False
    manager.store_credential(make_credential())
    assert (await api_client.get("/ready")).json()["restaurant_session"] is True
