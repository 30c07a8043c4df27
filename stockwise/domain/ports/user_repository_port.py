"""
Port (interface) for user persistence.
Infrastructure adapters (e.g. MongoUserRepository) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from stockwise.domain.entities.user import User


class IUserRepository(ABC):
    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """Return the user registered under *email* (already lowercased), or None."""
        ...

    @abstractmethod
    def add(self, user: User) -> User:
        """Persist a new user and return it with its assigned id.

        Raises:
            EmailAlreadyRegisteredError: if the email is already taken.
        """
        ...
