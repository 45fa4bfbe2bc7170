"""Tests for admin token use cases."""

from datetime import timedelta
from uuid import uuid4

import pytest

from elevate.application.usecase.admin_token import (
    CleanupExpiredTokensRequest,
    CleanupExpiredTokensUseCase,
    DeleteAdminTokenRequest,
    DeleteAdminTokenUseCase,
    IssueAdminTokenRequest,
    IssueAdminTokenUseCase,
    ListAdminTokensRequest,
    ListAdminTokensUseCase,
    ValidateAdminTokenRequest,
    ValidateAdminTokenUseCase,
)
from elevate.config import Settings
from elevate.domain.error import InvalidValidityWindowError, NotAuthorizedError
from elevate.domain.model import CallerContext
from elevate.domain.repository import PrincipalRepository
from elevate.domain.value import TokenStatus
from tests.conftest import (
    OPERATOR_ID,
    make_principal,
    operator_context,
    owner_context,
)
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestIssueAdminTokenUseCase:
    """Tests for IssueAdminTokenUseCase."""

    @pytest.mark.asyncio
    async def test_operator_issues_with_default_validity(self, unit_env):
        use_case = await unit_env.get(IssueAdminTokenUseCase)
        settings = await unit_env.get(Settings)

        response = await use_case.execute(
            IssueAdminTokenRequest(context=operator_context(), email="new@example.com")
        )

        assert response.email == "new@example.com"
        assert response.registration_url == (
            f"{settings.api.frontend_url}/register?token={response.token}"
        )

        tokens = await (await unit_env.get(ListAdminTokensUseCase)).execute(
            ListAdminTokensRequest(context=operator_context())
        )
        item = tokens.tokens[0]
        assert item.expires_at - item.issued_at == timedelta(
            days=settings.admin_tokens.default_validity_days
        )
        assert item.issued_by == OPERATOR_ID

    @pytest.mark.asyncio
    async def test_admin_principal_issues(self, unit_env):
        use_case = await unit_env.get(IssueAdminTokenUseCase)
        repo = await unit_env.get(PrincipalRepository)
        admin = await repo.insert(make_principal(is_admin=True), operator_context())

        response = await use_case.execute(
            IssueAdminTokenRequest(
                context=owner_context(admin), email="new@example.com", validity_days=1
            )
        )

        listing = await (await unit_env.get(ListAdminTokensUseCase)).execute(
            ListAdminTokensRequest(context=owner_context(admin))
        )
        assert listing.tokens[0].token == response.token
        assert listing.tokens[0].issued_by == admin.id

    @pytest.mark.asyncio
    async def test_ordinary_principal_denied(self, unit_env):
        use_case = await unit_env.get(IssueAdminTokenUseCase)
        repo = await unit_env.get(PrincipalRepository)
        alice = make_principal()
        await repo.insert(alice, owner_context(alice))

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                IssueAdminTokenRequest(context=owner_context(alice), email="a@example.com")
            )

    @pytest.mark.asyncio
    async def test_anonymous_denied(self, unit_env):
        use_case = await unit_env.get(IssueAdminTokenUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                IssueAdminTokenRequest(
                    context=CallerContext.anonymous(), email="a@example.com"
                )
            )

    @pytest.mark.asyncio
    async def test_zero_days_rejected(self, unit_env):
        use_case = await unit_env.get(IssueAdminTokenUseCase)

        with pytest.raises(InvalidValidityWindowError):
            await use_case.execute(
                IssueAdminTokenRequest(
                    context=operator_context(), email="a@example.com", validity_days=0
                )
            )

    @pytest.mark.asyncio
    async def test_window_above_maximum_rejected(self, unit_env):
        use_case = await unit_env.get(IssueAdminTokenUseCase)
        settings = await unit_env.get(Settings)
        too_long = settings.admin_tokens.max_validity_days + 1

        with pytest.raises(InvalidValidityWindowError, match="at most"):
            await use_case.execute(
                IssueAdminTokenRequest(
                    context=operator_context(),
                    email="a@example.com",
                    validity_days=too_long,
                )
            )

        listed = await (await unit_env.get(ListAdminTokensUseCase)).execute(
            ListAdminTokensRequest(context=operator_context())
        )
        assert listed.tokens == []


class TestHousekeepingUseCases:
    """Tests for validate, delete and cleanup use cases."""

    @pytest.mark.asyncio
    async def test_validate_then_delete(self, unit_env):
        issue = await unit_env.get(IssueAdminTokenUseCase)
        validate = await unit_env.get(ValidateAdminTokenUseCase)
        delete = await unit_env.get(DeleteAdminTokenUseCase)

        issued = await issue.execute(
            IssueAdminTokenRequest(context=operator_context(), email="a@example.com")
        )
        before = await validate.execute(ValidateAdminTokenRequest(token=issued.token))

        await delete.execute(
            DeleteAdminTokenRequest(context=operator_context(), token=issued.token)
        )
        after = await validate.execute(ValidateAdminTokenRequest(token=issued.token))

        assert before.is_valid is True
        assert before.email == "a@example.com"
        assert after.is_valid is False
        assert after.email == ""

    @pytest.mark.asyncio
    async def test_delete_requires_operator(self, unit_env):
        delete = await unit_env.get(DeleteAdminTokenUseCase)
        alice = make_principal()

        with pytest.raises(NotAuthorizedError):
            await delete.execute(
                DeleteAdminTokenRequest(context=owner_context(alice), token=str(uuid4()))
            )

    @pytest.mark.asyncio
    async def test_cleanup_with_nothing_expired(self, unit_env):
        issue = await unit_env.get(IssueAdminTokenUseCase)
        cleanup = await unit_env.get(CleanupExpiredTokensUseCase)
        await issue.execute(
            IssueAdminTokenRequest(context=operator_context(), email="a@example.com")
        )

        response = await cleanup.execute(
            CleanupExpiredTokensRequest(context=operator_context())
        )

        assert response.deleted == 0
        listing = await (await unit_env.get(ListAdminTokensUseCase)).execute(
            ListAdminTokensRequest(context=operator_context())
        )
        assert listing.tokens[0].status == TokenStatus.ACTIVE
