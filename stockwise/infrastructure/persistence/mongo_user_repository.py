"""
Infrastructure adapter: MongoDB (pymongo) → IUserRepository.

Users live in a single ``users`` collection with a unique index on ``email``.
Documents look like ``{"_id": ObjectId, "email": str, "passwordHash": str}``.
"""

import logging
from typing import Optional

from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from stockwise.domain.entities.user import User
from stockwise.domain.errors import EmailAlreadyRegisteredError
from stockwise.domain.ports.user_repository_port import IUserRepository

logger = logging.getLogger(__name__)


class MongoUserRepository(IUserRepository):
    COLLECTION = "users"

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    @classmethod
    def from_database(cls, database) -> "MongoUserRepository":
        return cls(database[cls.COLLECTION])

    def ensure_indexes(self) -> None:
        self._collection.create_index([("email", ASCENDING)], unique=True)

    def find_by_email(self, email: str) -> Optional[User]:
        document = self._collection.find_one({"email": email.lower()})
        if document is None:
            return None
        return self._to_entity(document)

    def add(self, user: User) -> User:
        try:
            result = self._collection.insert_one(
                {"email": user.email.lower(), "passwordHash": user.password_hash}
            )
        except DuplicateKeyError as exc:
            raise EmailAlreadyRegisteredError("Email already in use.") from exc
        return User(
            id=str(result.inserted_id),
            email=user.email.lower(),
            password_hash=user.password_hash,
        )

    @staticmethod
    def _to_entity(document: dict) -> User:
        return User(
            id=str(document["_id"]),
            email=document["email"],
            password_hash=document["passwordHash"],
        )
