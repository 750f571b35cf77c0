import json

import httpx
import pytest

from food_ordering.core.errors import IdentityProviderError
from food_ordering.core.identity import PASSWORD_REALM_GRANT, IdentityClient


def client_with(settings, handler):
    return IdentityClient(settings, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_sign_up_posts_to_database_connection(settings):
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"_id": "abc123", "email": "jane@foodmail.com"})

    data = await client_with(settings, handler).sign_up("jane@foodmail.com", "pw", "Jane")

    assert data["_id"] == "abc123"
    assert seen["url"] == "https://tenant.auth0.test/dbconnections/signup"
    assert seen["body"]["connection"] == "Username-Password-Authentication"
    assert seen["body"]["client_id"] == "client-123"
    assert seen["body"]["user_metadata"] == {"firstName": "Jane"}


@pytest.mark.asyncio
async def test_sign_up_reports_provider_message(settings):
    def handler(request):
        return httpx.Response(400, json={"code": "invalid_signup", "description": "Invalid sign up"})

    with pytest.raises(IdentityProviderError) as excinfo:
        await client_with(settings, handler).sign_up("jane@foodmail.com", "pw", "Jane")
    assert excinfo.value.message == "Invalid sign up"


@pytest.mark.asyncio
async def test_sign_up_without_id_fails(settings):
    def handler(request):
        return httpx.Response(200, json={})

    with pytest.raises(IdentityProviderError):
        await client_with(settings, handler).sign_up("jane@foodmail.com", "pw", "Jane")


@pytest.mark.asyncio
async def test_password_grant(settings):
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id_token": "tok", "access_token": "acc"})

    tokens = await client_with(settings, handler).password_grant("jane@foodmail.com", "pw")

    assert tokens["id_token"] == "tok"
    assert seen["body"]["grant_type"] == PASSWORD_REALM_GRANT
    assert seen["body"]["realm"] == "Username-Password-Authentication"
    assert seen["body"]["client_secret"] == "secret"


@pytest.mark.asyncio
async def test_password_grant_wrong_credentials(settings):
    def handler(request):
        return httpx.Response(403, json={"error": "invalid_grant", "error_description": "Wrong email or password."})

    assert await client_with(settings, handler).password_grant("jane@foodmail.com", "bad") == {}


@pytest.mark.asyncio
async def test_password_grant_transport_failure(settings):
    def handler(request):
        raise httpx.ConnectError("connection refused")

    with pytest.raises(IdentityProviderError) as excinfo:
        await client_with(settings, handler).password_grant("jane@foodmail.com", "pw")
    assert excinfo.value.message == "Failed to sign in user"
