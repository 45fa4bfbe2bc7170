"""Tests for elevation use cases."""

import pytest

from elevate.application.usecase.admin_token import (
    IssueAdminTokenRequest,
    IssueAdminTokenUseCase,
)
from elevate.application.usecase.elevation import (
    ElevateViaTokenRequest,
    ElevateViaTokenUseCase,
    SetAdminFlagRequest,
    SetAdminFlagUseCase,
)
from elevate.domain.error import NotAuthorizedError, TokenAlreadyUsedError
from elevate.domain.model import CallerContext
from elevate.domain.repository import PrincipalRepository
from tests.conftest import make_principal, operator_context, owner_context
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestElevateViaTokenUseCase:
    """Tests for ElevateViaTokenUseCase."""

    @pytest.mark.asyncio
    async def test_redeem_uses_caller_identity(self, unit_env):
        issue = await unit_env.get(IssueAdminTokenUseCase)
        elevate = await unit_env.get(ElevateViaTokenUseCase)
        repo = await unit_env.get(PrincipalRepository)
        alice = make_principal("alice@example.com")
        await repo.insert(alice, owner_context(alice))
        issued = await issue.execute(
            IssueAdminTokenRequest(context=operator_context(), email="alice@example.com")
        )

        response = await elevate.execute(
            ElevateViaTokenRequest(context=owner_context(alice), token=issued.token)
        )

        assert response.id == alice.id
        assert response.is_admin is True

        with pytest.raises(TokenAlreadyUsedError):
            await elevate.execute(
                ElevateViaTokenRequest(context=owner_context(alice), token=issued.token)
            )

    @pytest.mark.asyncio
    async def test_anonymous_cannot_redeem(self, unit_env):
        elevate = await unit_env.get(ElevateViaTokenUseCase)

        with pytest.raises(NotAuthorizedError) as exc_info:
            await elevate.execute(
                ElevateViaTokenRequest(context=CallerContext.anonymous(), token="x")
            )
        assert exc_info.value.anonymous is True

    @pytest.mark.asyncio
    async def test_operator_cannot_redeem(self, unit_env):
        """Redemption needs a real principal to receive the grant."""
        elevate = await unit_env.get(ElevateViaTokenUseCase)

        with pytest.raises(NotAuthorizedError):
            await elevate.execute(
                ElevateViaTokenRequest(context=operator_context(), token="x")
            )


class TestSetAdminFlagUseCase:
    """Tests for SetAdminFlagUseCase."""

    @pytest.mark.asyncio
    async def test_operator_grant(self, unit_env):
        use_case = await unit_env.get(SetAdminFlagUseCase)
        repo = await unit_env.get(PrincipalRepository)
        alice = make_principal()
        await repo.insert(alice, owner_context(alice))

        response = await use_case.execute(
            SetAdminFlagRequest(
                context=operator_context(), principal_id=alice.id, is_admin=True
            )
        )

        assert response.is_admin is True

    @pytest.mark.asyncio
    async def test_self_grant_denied(self, unit_env):
        use_case = await unit_env.get(SetAdminFlagUseCase)
        repo = await unit_env.get(PrincipalRepository)
        alice = make_principal()
        await repo.insert(alice, owner_context(alice))

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                SetAdminFlagRequest(
                    context=owner_context(alice), principal_id=alice.id, is_admin=True
                )
            )
