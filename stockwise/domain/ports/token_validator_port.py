"""
Ports (interfaces) for issuing and validating bearer tokens.
Infrastructure adapters (e.g. JWTTokenService) must implement these interfaces.
"""

from abc import ABC, abstractmethod


class ITokenValidator(ABC):
    @abstractmethod
    def validate(self, token: str) -> dict:
        """Validate a JWT token and return its decoded claims.

        Raises:
            ValueError: if the token is malformed, expired, or has a bad signature.
        """
        ...


class ITokenIssuer(ABC):
    @abstractmethod
    def issue(self, subject: str, email: str) -> str:
        """Return a signed token identifying the user *subject*."""
        ...
