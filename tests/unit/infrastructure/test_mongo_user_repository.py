import mongomock
import pytest

from stockwise.domain.entities.user import User
from stockwise.domain.errors import EmailAlreadyRegisteredError
from stockwise.infrastructure.persistence.mongo_user_repository import MongoUserRepository


@pytest.fixture
def repository():
    database = mongomock.MongoClient().get_database("stockwiseDB")
    repo = MongoUserRepository.from_database(database)
    repo.ensure_indexes()
    return repo


def test_add_assigns_id_and_lowercases_email(repository):
    user = repository.add(User(email="Ana@Example.com", password_hash="$2b$hash"))

    assert user.id
    assert user.email == "ana@example.com"


def test_find_by_email(repository):
    added = repository.add(User(email="ana@example.com", password_hash="$2b$hash"))

    found = repository.find_by_email("ANA@example.com")

    assert found == added


def test_find_unknown_email(repository):
    assert repository.find_by_email("nobody@example.com") is None


def test_duplicate_email_raises(repository):
    repository.add(User(email="ana@example.com", password_hash="$2b$hash"))
    with pytest.raises(EmailAlreadyRegisteredError):
        repository.add(User(email="ana@example.com", password_hash="$2b$other"))


def test_document_shape(repository):
    repository.add(User(email="ana@example.com", password_hash="$2b$hash"))

    document = repository._collection.find_one({"email": "ana@example.com"})

    assert set(document) == {"_id", "email", "passwordHash"}
