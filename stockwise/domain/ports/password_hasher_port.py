"""
Port (interface) for password hashing.
Infrastructure adapters (e.g. BcryptPasswordHasher) must implement this interface.
"""

from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    @abstractmethod
    def hash(self, password: str) -> str: ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool: ...
