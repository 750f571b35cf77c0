import logging
from typing import Any, Dict, Optional

import httpx

from food_ordering.core.config import Settings
from food_ordering.core.errors import IdentityProviderError
from food_ordering.core.messages import AuthMessages

log = logging.getLogger(__name__)

PASSWORD_REALM_GRANT = "http://auth0.com/oauth/grant-type/password-realm"


class IdentityClient:
    """
    Thin client for the identity provider's database-connection sign-up
    and password-realm token endpoints.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.settings.auth0_base_url,
            timeout=10.0,
            transport=self._transport,
        )

    @staticmethod
    def _error_message(response: httpx.Response, fallback: str) -> str:
        try:
            body = response.json()
        except ValueError:
            return fallback
        return body.get("description") or body.get("message") or body.get("error_description") or fallback

    async def sign_up(self, email: str, password: str, name: str) -> Dict[str, Any]:
        payload = {
            "client_id": self.settings.AUTH0_CLIENT_ID,
            "email": email,
            "password": password,
            "connection": self.settings.AUTH0_CONNECTION,
            "user_metadata": {"firstName": name},
        }
        try:
            async with self._client() as client:
                response = await client.post("/dbconnections/signup", json=payload)
        except httpx.HTTPError as e:
            log.error(f"Identity provider sign-up request failed: {e}")
            raise IdentityProviderError(AuthMessages.SIGNUP_FAILED)

        if response.is_error:
            raise IdentityProviderError(self._error_message(response, AuthMessages.SIGNUP_FAILED))

        data = response.json()
        if not data.get("_id"):
            raise IdentityProviderError(AuthMessages.SIGNUP_FAILED)
        return data

    async def password_grant(self, email: str, password: str) -> Dict[str, Any]:
        payload = {
            "grant_type": PASSWORD_REALM_GRANT,
            "username": email,
            "password": password,
            "realm": self.settings.AUTH0_CONNECTION,
            "client_id": self.settings.AUTH0_CLIENT_ID,
            "client_secret": self.settings.AUTH0_CLIENT_SECRET,
            "scope": "openid profile email",
            "audience": f"{self.settings.auth0_base_url}/api/v2/",
        }
        try:
            async with self._client() as client:
                response = await client.post("/oauth/token", json=payload)
        except httpx.HTTPError as e:
            log.error(f"Identity provider token request failed: {e}")
            raise IdentityProviderError(AuthMessages.SIGNIN_FAILED)

        if response.status_code in (401, 403):
            # wrong credentials come back as an empty token set
            return {}
        if response.is_error:
            raise IdentityProviderError(self._error_message(response, AuthMessages.SIGNIN_FAILED))
        return response.json()
