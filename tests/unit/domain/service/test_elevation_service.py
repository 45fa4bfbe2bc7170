"""Unit tests for ElevationService."""

from datetime import timedelta

import pytest

from elevate.config import AuthSettings
from elevate.domain.error import (
    EmailMismatchError,
    GrantAfterConsumeFailedError,
    NotAuthorizedError,
    PrincipalNotFoundError,
    TokenAlreadyUsedError,
    TokenExpiredError,
)
from elevate.domain.service import AdminTokenService, ElevationService, PrivilegeGuard
from elevate.domain.value import TokenStatus
from elevate.persistence.repository.inmemory import (
    InMemoryAdminTokenRepository,
    InMemoryPrincipalRepository,
)
from tests.conftest import (
    OPERATOR_ID,
    FrozenClock,
    make_principal,
    operator_context,
    owner_context,
)


class FailingGrantPrincipalRepository(InMemoryPrincipalRepository):
    """Principal repository whose writes fail after setup is done."""

    fail_updates = False
    fail_commits = False

    async def update(self, principal_id, changes, context):
        if self.fail_updates:
            raise RuntimeError("connection reset by peer")
        return await super().update(principal_id, changes, context)

    async def commit(self):
        if self.fail_commits:
            raise RuntimeError("could not serialize access")
        await super().commit()


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def token_repo():
    return InMemoryAdminTokenRepository()


@pytest.fixture
def principal_repo():
    return FailingGrantPrincipalRepository(before_write=PrivilegeGuard())


@pytest.fixture
def token_service(token_repo, clock):
    return AdminTokenService(admin_token_repository=token_repo, clock=clock)


@pytest.fixture
def service(token_service, principal_repo):
    return ElevationService(
        admin_token_service=token_service,
        principal_repository=principal_repo,
        auth_settings=AuthSettings(service_principal_id=OPERATOR_ID),
    )


async def registered(principal_repo, email="alice@example.com"):
    principal = make_principal(email)
    return await principal_repo.insert(principal, owner_context(principal))


class TestElevateViaToken:
    """Tests for elevate_via_token method."""

    @pytest.mark.asyncio
    async def test_happy_path(self, service, token_service, principal_repo, clock):
        alice = await registered(principal_repo)
        token = await token_service.issue(
            "alice@example.com", timedelta(days=7), OPERATOR_ID
        )

        display = await token_service.validate_for_display(token.value.root)
        assert display.is_valid is True
        assert display.email == "alice@example.com"

        elevated = await service.elevate_via_token(
            token.value.root, alice.id, "alice@example.com"
        )

        assert elevated.is_admin is True
        assert (await principal_repo.find_by_id(alice.id)).is_admin is True
        listings = await token_service.list_tokens()
        assert listings[0].status == TokenStatus.USED
        assert listings[0].token.consumed_by == alice.id

        with pytest.raises(TokenAlreadyUsedError):
            await service.elevate_via_token(
                token.value.root, alice.id, "alice@example.com"
            )

    @pytest.mark.asyncio
    async def test_mismatch_touches_nothing(self, service, token_service, principal_repo):
        mallory = await registered(principal_repo, "mallory@example.com")
        token = await token_service.issue(
            "alice@example.com", timedelta(days=7), OPERATOR_ID
        )

        with pytest.raises(EmailMismatchError):
            await service.elevate_via_token(
                token.value.root, mallory.id, "mallory@example.com"
            )

        assert (await principal_repo.find_by_id(mallory.id)).is_admin is False
        display = await token_service.validate_for_display(token.value.root)
        assert display.is_valid is True

    @pytest.mark.asyncio
    async def test_expired_token(self, service, token_service, principal_repo, clock):
        alice = await registered(principal_repo)
        token = await token_service.issue(
            "alice@example.com", timedelta(days=1), OPERATOR_ID
        )
        clock.advance(timedelta(days=2))

        with pytest.raises(TokenExpiredError):
            await service.elevate_via_token(
                token.value.root, alice.id, "alice@example.com"
            )

        assert (await principal_repo.find_by_id(alice.id)).is_admin is False

    @pytest.mark.asyncio
    async def test_missing_principal_does_not_burn_token(
        self, service, token_service
    ):
        ghost = make_principal()
        token = await token_service.issue(
            "alice@example.com", timedelta(days=7), OPERATOR_ID
        )

        with pytest.raises(PrincipalNotFoundError):
            await service.elevate_via_token(
                token.value.root, ghost.id, "alice@example.com"
            )

        display = await token_service.validate_for_display(token.value.root)
        assert display.is_valid is True

    @pytest.mark.asyncio
    async def test_grant_failure_after_consume(
        self, service, token_service, principal_repo
    ):
        alice = await registered(principal_repo)
        token = await token_service.issue(
            "alice@example.com", timedelta(days=7), OPERATOR_ID
        )
        principal_repo.fail_updates = True

        with pytest.raises(GrantAfterConsumeFailedError) as exc_info:
            await service.elevate_via_token(
                token.value.root, alice.id, "alice@example.com"
            )

        error = exc_info.value
        assert error.principal_id == str(alice.id)
        assert error.token_prefix == token.value.redacted()
        assert isinstance(error.__cause__, RuntimeError)

        # Token stays consumed; no retry is possible
        listings = await token_service.list_tokens()
        assert listings[0].status == TokenStatus.USED
        assert (await principal_repo.find_by_id(alice.id)).is_admin is False

        # Operator remediation
        principal_repo.fail_updates = False
        fixed = await service.set_admin_flag(alice.id, True, operator_context())
        assert fixed.is_admin is True

    @pytest.mark.asyncio
    async def test_grant_commit_failure_after_consume(
        self, service, token_service, principal_repo
    ):
        alice = await registered(principal_repo)
        token = await token_service.issue(
            "alice@example.com", timedelta(days=7), OPERATOR_ID
        )
        principal_repo.fail_commits = True

        with pytest.raises(GrantAfterConsumeFailedError) as exc_info:
            await service.elevate_via_token(
                token.value.root, alice.id, "alice@example.com"
            )

        assert exc_info.value.principal_id == str(alice.id)
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        listings = await token_service.list_tokens()
        assert listings[0].status == TokenStatus.USED


class TestSetAdminFlag:
    """Tests for set_admin_flag method."""

    @pytest.mark.asyncio
    async def test_operator_can_grant_and_revoke(self, service, principal_repo):
        alice = await registered(principal_repo)

        granted = await service.set_admin_flag(alice.id, True, operator_context())
        revoked = await service.set_admin_flag(alice.id, False, operator_context())

        assert granted.is_admin is True
        assert revoked.is_admin is False

    @pytest.mark.asyncio
    async def test_principal_cannot_use_operator_path(self, service, principal_repo):
        alice = await registered(principal_repo)

        with pytest.raises(NotAuthorizedError):
            await service.set_admin_flag(alice.id, True, owner_context(alice))

        assert (await principal_repo.find_by_id(alice.id)).is_admin is False

    @pytest.mark.asyncio
    async def test_admin_principal_cannot_use_operator_path(
        self, service, principal_repo
    ):
        alice = await registered(principal_repo)
        await service.set_admin_flag(alice.id, True, operator_context())
        bob = await registered(principal_repo, "bob@example.com")

        with pytest.raises(NotAuthorizedError):
            await service.set_admin_flag(bob.id, True, owner_context(alice))

    @pytest.mark.asyncio
    async def test_missing_principal(self, service):
        with pytest.raises(PrincipalNotFoundError):
            await service.set_admin_flag(make_principal().id, True, operator_context())
