"""
Infrastructure adapter: bcrypt → IPasswordHasher.
"""

import bcrypt

from stockwise.domain.ports.password_hasher_port import IPasswordHasher

# bcrypt only looks at the first 72 bytes; newer releases reject longer input.
_MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher(IPasswordHasher):
    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        hashed = bcrypt.hashpw(self._encode(password), bcrypt.gensalt(rounds=self._rounds))
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(self._encode(password), password_hash.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash.
            return False

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:_MAX_PASSWORD_BYTES]
