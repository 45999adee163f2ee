"""
Security utilities for authentication
Bearer token verification for tokens issued by the external identity provider
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import jwt

from analyst.config import settings
from analyst.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass
class TokenClaims:
    """Claims the API relies on"""
    sub: str
    email: Optional[str] = None


class IdentityVerifier:
    """
    Verifies bearer tokens with PyJWT

    HS256 tokens are checked against a shared secret. When a JWKS URL is
    configured, asymmetric tokens are checked against the provider's
    published keys (fetched and cached by PyJWKClient).
    """

    def __init__(
        self,
        secret: str = "",
        algorithms: Optional[List[str]] = None,
        jwks_url: str = "",
        audience: str = "",
        issuer: str = "",
    ):
        self.secret = secret
        self.algorithms = algorithms or ["HS256"]
        self.audience = audience or None
        self.issuer = issuer or None
        self.jwks_client = jwt.PyJWKClient(jwks_url) if jwks_url else None

    def is_configured(self) -> bool:
        return bool(self.secret or self.jwks_client)

    def verify_token(self, token: str) -> TokenClaims:
        """
        Verify signature, expiry and (when configured) audience and issuer

        Raises:
            AuthenticationError: Token missing, malformed, expired or unsigned by us
        """
        if not token:
            raise AuthenticationError("Bearer token missing")
        if not self.is_configured():
            raise AuthenticationError("Token verification is not configured")

        try:
            header = jwt.get_unverified_header(token)
            alg = header.get("alg")
            if alg not in self.algorithms:
                raise AuthenticationError(f"Unsupported token algorithm: {alg}")

            if alg == "HS256":
                if not self.secret:
                    raise AuthenticationError("HS256 token received but no shared secret is configured")
                key = self.secret
                algorithms = ["HS256"]
            elif self.jwks_client is not None:
                key = self.jwks_client.get_signing_key_from_jwt(token).key
                algorithms = [alg]
            else:
                raise AuthenticationError(f"Unsupported token algorithm: {alg}")

            payload = jwt.decode(
                token,
                key,
                algorithms=algorithms,
                audience=self.audience,
                issuer=self.issuer,
                options={
                    "require": ["sub", "exp"],
                    "verify_aud": self.audience is not None,
                },
            )
        except jwt.PyJWKClientError as e:
            logger.warning(f"JWKS lookup failed: {e}")
            raise AuthenticationError("Invalid authentication credentials") from e
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected token: {e}")
            raise AuthenticationError("Invalid authentication credentials") from e

        return TokenClaims(sub=str(payload["sub"]), email=payload.get("email"))


def get_identity_verifier() -> IdentityVerifier:
    return IdentityVerifier(
        secret=settings.AUTH_JWT_SECRET,
        algorithms=list(settings.AUTH_JWT_ALGORITHMS),
        jwks_url=settings.AUTH_JWKS_URL,
        audience=settings.AUTH_AUDIENCE,
        issuer=settings.AUTH_ISSUER,
    )
