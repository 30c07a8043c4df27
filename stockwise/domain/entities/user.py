"""
Domain entities for registered users and login results.
Zero external dependencies, pure Python dataclasses only.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    email: str
    password_hash: str
    id: Optional[str] = None


@dataclass(frozen=True)
class LoginResult:
    token: str
    email: str
