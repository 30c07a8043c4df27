"""
Use-case: register a new user with an email and password.
Depends only on Domain ports and entities; no infrastructure imports.
"""

import logging

from stockwise.domain.entities.user import User
from stockwise.domain.errors import EmailAlreadyRegisteredError, SignUpValidationError
from stockwise.domain.ports.password_hasher_port import IPasswordHasher
from stockwise.domain.ports.user_repository_port import IUserRepository

logger = logging.getLogger(__name__)


class SignUpUseCase:
    MIN_PASSWORD_LENGTH: int = 6

    def __init__(self, users: IUserRepository, hasher: IPasswordHasher) -> None:
        self._users = users
        self._hasher = hasher

    def execute(self, email: str | None, password: str | None) -> User:
        """Create a user and return it with its assigned id.

        Raises:
            SignUpValidationError:       if either field is missing or the password is too short.
            EmailAlreadyRegisteredError: if the email is already in use.
        """
        if not email or not password:
            raise SignUpValidationError("Email and password are required.")
        if len(password) < self.MIN_PASSWORD_LENGTH:
            raise SignUpValidationError(
                f"Password must be at least {self.MIN_PASSWORD_LENGTH} characters long."
            )

        email = email.strip().lower()
        if self._users.find_by_email(email) is not None:
            raise EmailAlreadyRegisteredError("Email already in use.")

        user = self._users.add(User(email=email, password_hash=self._hasher.hash(password)))
        logger.info("Registered user %s", user.id)
        return user
