from typing import Any, Dict, Optional

from fastapi import Header, Request

from food_ordering.core.config import Settings
from food_ordering.core.identity import IdentityClient
from food_ordering.core.security import TokenVerifier, extract_bearer_token


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_identity_client(request: Request) -> IdentityClient:
    return request.app.state.identity_client


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


def require_token(request: Request, authorization: Optional[str] = Header(default=None)) -> Dict[str, Any]:
    """
    Validates the bearer token and returns its decoded claims.
    Declared sync so the JWKS fetch runs in FastAPI's threadpool.
    """
    token = extract_bearer_token(authorization)
    claims = get_token_verifier(request).verify(token)
    request.state.claims = claims
    return claims
