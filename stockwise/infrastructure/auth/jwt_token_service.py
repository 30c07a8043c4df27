"""
Infrastructure adapter: python-jose HS256 JWTs → ITokenIssuer + ITokenValidator.

Tokens carry the user id as both ``sub`` and ``userId`` plus the user's
email, and expire one hour after issue by default.
"""

import time

from jose import JWTError, jwt

from stockwise.domain.ports.token_validator_port import ITokenIssuer, ITokenValidator


class JWTTokenService(ITokenIssuer, ITokenValidator):
    """Signs and verifies symmetric (HS256) JWT bearer tokens."""

    ALGORITHM = "HS256"

    def __init__(self, secret_key: str, ttl_seconds: int = 3600) -> None:
        if not secret_key:
            raise ValueError("secret_key must be a non-empty string")
        self._secret_key = secret_key
        self._ttl_seconds = ttl_seconds

    def issue(self, subject: str, email: str) -> str:
        now = int(time.time())
        claims = {
            "sub": subject,
            "userId": subject,
            "email": email,
            "iat": now,
            "exp": now + self._ttl_seconds,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self.ALGORITHM)

    def validate(self, token: str) -> dict:
        """Decode and verify *token*.

        Raises:
            ValueError: on a bad signature, an expired token, or a malformed token.
        """
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self.ALGORITHM])
        except JWTError as exc:
            raise ValueError(f"Token validation failed: {exc}") from exc
