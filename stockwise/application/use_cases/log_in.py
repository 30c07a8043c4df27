"""
Use-case: exchange an email and password for a signed bearer token.
Depends only on Domain ports and entities; no infrastructure imports.
"""

from stockwise.domain.entities.user import LoginResult
from stockwise.domain.errors import InvalidCredentialsError
from stockwise.domain.ports.password_hasher_port import IPasswordHasher
from stockwise.domain.ports.token_validator_port import ITokenIssuer
from stockwise.domain.ports.user_repository_port import IUserRepository


class LogInUseCase:
    def __init__(
        self,
        users: IUserRepository,
        hasher: IPasswordHasher,
        issuer: ITokenIssuer,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._issuer = issuer

    def execute(self, email: str | None, password: str | None) -> LoginResult:
        """Raises InvalidCredentialsError for an unknown email or a wrong password."""
        if not email or not password:
            raise InvalidCredentialsError("Invalid credentials.")

        user = self._users.find_by_email(email.strip().lower())
        if user is None or not self._hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError("Invalid credentials.")

        token = self._issuer.issue(subject=str(user.id), email=user.email)
        return LoginResult(token=token, email=user.email)
