"""Security utilities for issuing and verifying JWT bearer tokens."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from jose.utils import base64url_decode, base64url_encode

from app.config import settings
from app.core.exceptions import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
)

# Claim carrying the authenticated username
PRINCIPAL_CLAIM = "username"

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


@dataclass(frozen=True)
class IssuedToken:
    """A signed token together with its unix expiry."""

    token: str
    expires_at: int


class TokenCodec:
    """Encode and decode signed principal claims with a static secret."""

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        """Initialize codec with the signing secret and algorithm."""
        self._secret_key = secret_key
        self.algorithm = algorithm

    def issue(self, principal: str, ttl: timedelta) -> IssuedToken:
        """
        Create a signed token for a principal.

        Args:
            principal: Username the token is bound to
            ttl: Lifetime of the token, counted from now

        Returns:
            Encoded token and its expiry as unix seconds
        """
        expires_at = int((datetime.now(UTC) + ttl).timestamp())
        claims: dict[str, Any] = {
            PRINCIPAL_CLAIM: principal,
            "exp": expires_at,
        }

        token = jwt.encode(claims, self._secret_key, algorithm=self.algorithm)

        return IssuedToken(token=token, expires_at=expires_at)

    def verify(self, token: str) -> str:
        """
        Decode a token, checking its signature and expiry.

        Args:
            token: Encoded JWT

        Returns:
            The principal the token was issued for

        Raises:
            MalformedTokenError: If the token cannot be parsed
            InvalidSignatureError: If the signature does not verify
            ExpiredTokenError: If the token has expired
        """
        # A token that parses structurally but fails decode has a bad signature
        try:
            jwt.get_unverified_header(token)
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise MalformedTokenError(str(e)) from e

        # Trailing pad bits of the last signature character are ignored by the
        # decoder, so only the canonical encoding is accepted
        signature = token.rsplit(".", 1)[-1].encode("ascii", errors="replace")
        try:
            canonical = base64url_encode(base64url_decode(signature))
        except ValueError as e:
            raise MalformedTokenError(str(e)) from e
        if canonical != signature:
            raise InvalidSignatureError("Signature is not canonically encoded")

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise ExpiredTokenError(str(e)) from e
        except JWTError as e:
            raise InvalidSignatureError(str(e)) from e

        principal = payload.get(PRINCIPAL_CLAIM)
        if not isinstance(principal, str):
            raise MalformedTokenError(f"Token is missing the {PRINCIPAL_CLAIM} claim")

        return principal


def format_expiry(expires_at: int) -> str:
    """Format a unix expiry as an RFC 3339 UTC timestamp."""
    return datetime.fromtimestamp(expires_at, UTC).strftime(RFC3339_FORMAT)


@lru_cache
def get_token_codec() -> TokenCodec:
    """Get the process-wide token codec built from settings."""
    return TokenCodec(settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
