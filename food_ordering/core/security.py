import logging
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from food_ordering.core.config import Settings
from food_ordering.core.errors import InvalidTokenError, TokenExpiredError, UnauthorizedError

log = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Returns the token part of an 'Authorization: Bearer <token>' header."""
    if not authorization:
        raise UnauthorizedError()
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError()
    return token.strip()


class TokenVerifier:
    """
    Verifies RS256 bearer tokens issued by the identity provider.

    The signing key is looked up by the token's `kid` header in the
    provider's published JSON Web Key Set. The key set is cached by
    PyJWKClient between requests.
    """

    algorithms = ["RS256"]

    def __init__(self, jwks_url: str, audience: str, issuer: str, jwk_client: Optional[jwt.PyJWKClient] = None):
        self.audience = audience
        self.issuer = issuer
        self.jwk_client = jwk_client or jwt.PyJWKClient(jwks_url, cache_keys=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenVerifier":
        return cls(
            jwks_url=settings.jwks_url,
            audience=settings.AUTH0_CLIENT_ID,
            issuer=settings.token_issuer,
        )

    def verify(self, token: str) -> Dict[str, Any]:
        try:
            header = jwt.get_unverified_header(token)
        except jwt.InvalidTokenError:
            raise InvalidTokenError()

        kid = header.get("kid")
        if not kid:
            raise InvalidTokenError()

        try:
            signing_key = self.jwk_client.get_signing_key(kid)
        except jwt.PyJWKClientError as e:
            log.warning(f"Signing key lookup failed for kid {kid}: {e}")
            raise InvalidTokenError()

        try:
            return jwt.decode(
                token,
                signing_key.key,
                algorithms=self.algorithms,
                audience=self.audience,
                issuer=self.issuer,
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError()
        except jwt.InvalidTokenError as e:
            log.info(f"Rejected bearer token: {e}")
            raise InvalidTokenError()
