import pytest

from stockwise.application.use_cases.log_in import LogInUseCase
from stockwise.application.use_cases.sign_up import SignUpUseCase
from stockwise.domain.errors import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    SignUpValidationError,
)


@pytest.fixture
def sign_up(users, hasher):
    return SignUpUseCase(users, hasher)


@pytest.fixture
def log_in(users, hasher, tokens):
    return LogInUseCase(users, hasher, tokens)


class TestSignUp:
    def test_creates_user_with_hashed_password(self, sign_up, users, hasher):
        user = sign_up.execute("  Ana@Example.com ", "secret1")

        assert user.id == "user-1"
        assert user.email == "ana@example.com"
        assert user.password_hash != "secret1"
        assert hasher.verify("secret1", users.users["ana@example.com"].password_hash)

    @pytest.mark.parametrize("email, password", [(None, "secret1"), ("ana@example.com", ""), ("", "")])
    def test_missing_fields(self, sign_up, email, password):
        with pytest.raises(SignUpValidationError, match="Email and password are required."):
            sign_up.execute(email, password)

    def test_short_password(self, sign_up):
        with pytest.raises(SignUpValidationError, match="at least 6 characters"):
            sign_up.execute("ana@example.com", "12345")

    def test_duplicate_email_is_case_insensitive(self, sign_up):
        sign_up.execute("ana@example.com", "secret1")
        with pytest.raises(EmailAlreadyRegisteredError, match="Email already in use."):
            sign_up.execute("ANA@example.com", "another1")


class TestLogIn:
    def test_returns_token_for_valid_credentials(self, sign_up, log_in, tokens):
        user = sign_up.execute("ana@example.com", "secret1")

        result = log_in.execute("Ana@Example.com", "secret1")

        assert result.email == "ana@example.com"
        claims = tokens.validate(result.token)
        assert claims["sub"] == user.id
        assert claims["userId"] == user.id
        assert claims["email"] == "ana@example.com"

    def test_wrong_password(self, sign_up, log_in):
        sign_up.execute("ana@example.com", "secret1")
        with pytest.raises(InvalidCredentialsError):
            log_in.execute("ana@example.com", "wrong-password")

    def test_unknown_email(self, log_in):
        with pytest.raises(InvalidCredentialsError, match="Invalid credentials."):
            log_in.execute("nobody@example.com", "secret1")

    def test_missing_fields(self, log_in):
        with pytest.raises(InvalidCredentialsError):
            log_in.execute(None, None)
