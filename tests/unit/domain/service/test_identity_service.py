"""Unit tests for IdentityResolver."""

from uuid import uuid4

import pytest

from elevate.config import AuthSettings
from elevate.domain.error import InvalidCredentialsError
from elevate.domain.service import IdentityResolver, JWTService
from elevate.domain.value import CallerKind
from elevate.util.jwt import create_token

SECRET = "unit-test-secret-that-is-long-enough-for-hs256"


@pytest.fixture
def settings():
    return AuthSettings(jwt_secret=SECRET, service_key="operator-key")


@pytest.fixture
def resolver(settings):
    return IdentityResolver(jwt_service=JWTService(settings), auth_settings=settings)


class TestResolve:
    """Tests for resolve method."""

    def test_no_credentials_is_anonymous(self, resolver):
        context = resolver.resolve(None, None)

        assert context.kind == CallerKind.ANONYMOUS
        assert context.current_principal() is None

    def test_session_token_gives_principal(self, resolver, settings):
        principal_id = uuid4()
        token = create_token(str(principal_id), "Alice@Example.com", settings)

        context = resolver.resolve(token, None)

        assert context.kind == CallerKind.PRINCIPAL
        assert context.principal_id == principal_id
        assert context.email.root == "alice@example.com"
        assert context.is_trusted_operator is False

    def test_service_key_gives_operator(self, resolver, settings):
        context = resolver.resolve(None, "operator-key")

        assert context.is_trusted_operator is True
        assert context.principal_id == settings.service_principal_id

    def test_wrong_service_key_rejected(self, resolver):
        with pytest.raises(InvalidCredentialsError):
            resolver.resolve(None, "guess")

    def test_service_key_disabled_when_unset(self):
        settings = AuthSettings(jwt_secret=SECRET, service_key="")
        resolver = IdentityResolver(JWTService(settings), settings)

        with pytest.raises(InvalidCredentialsError):
            resolver.resolve(None, "anything")
    def test_tampered_token_rejected(self, resolver, settings):
        token = create_token(str(uuid4()), "alice@example.com", settings)

        with pytest.raises(InvalidCredentialsError):
            resolver.resolve(token[:-2] + "xx", None)

    def test_token_signed_with_other_secret_rejected(self, resolver):
        other = AuthSettings(jwt_secret="another-secret-that-is-long-enough-too!!")
        token = create_token(str(uuid4()), "alice@example.com", other)

        with pytest.raises(InvalidCredentialsError):
            resolver.resolve(token, None)

    def test_token_with_bad_identity_rejected(self, resolver, settings):
        token = create_token("not-a-uuid", "alice@example.com", settings)

        with pytest.raises(InvalidCredentialsError):
            resolver.resolve(token, None)
