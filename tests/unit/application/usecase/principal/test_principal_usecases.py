"""Tests for principal use cases."""

from uuid import uuid4

import pytest

from elevate.application.usecase.principal import (
    GetPrincipalRequest,
    GetPrincipalUseCase,
    RegisterPrincipalRequest,
    RegisterPrincipalUseCase,
    UpdatePrincipalRequest,
    UpdatePrincipalUseCase,
)
from elevate.domain.error import (
    InvalidEmailError,
    NotAuthorizedError,
    SelfElevationForbiddenError,
)
from elevate.domain.model import CallerContext
from tests.conftest import make_principal, operator_context, owner_context
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestRegisterPrincipalUseCase:
    """Tests for RegisterPrincipalUseCase."""

    @pytest.mark.asyncio
    async def test_principal_registers_itself(self, unit_env):
        use_case = await unit_env.get(RegisterPrincipalUseCase)
        alice = make_principal("alice@example.com")

        response = await use_case.execute(
            RegisterPrincipalRequest(
                context=owner_context(alice),
                email="ignored@example.com",
                display_name="Alice",
            )
        )

        assert response.id == alice.id
        # Email always comes from the verified identity
        assert response.email == "alice@example.com"
        assert response.is_admin is False

    @pytest.mark.asyncio
    async def test_principal_cannot_register_as_admin(self, unit_env):
        use_case = await unit_env.get(RegisterPrincipalUseCase)
        alice = make_principal()

        with pytest.raises(SelfElevationForbiddenError):
            await use_case.execute(
                RegisterPrincipalRequest(context=owner_context(alice), is_admin=True)
            )

    @pytest.mark.asyncio
    async def test_operator_registers_anyone(self, unit_env):
        use_case = await unit_env.get(RegisterPrincipalUseCase)
        principal_id = uuid4()

        response = await use_case.execute(
            RegisterPrincipalRequest(
                context=operator_context(),
                principal_id=principal_id,
                email="Seed.Admin@Example.com",
                is_admin=True,
            )
        )

        assert response.id == principal_id
        assert response.email == "seed.admin@example.com"
        assert response.is_admin is True

    @pytest.mark.asyncio
    async def test_operator_must_supply_valid_email(self, unit_env):
        use_case = await unit_env.get(RegisterPrincipalUseCase)

        with pytest.raises(InvalidEmailError):
            await use_case.execute(
                RegisterPrincipalRequest(
                    context=operator_context(), principal_id=uuid4(), email="nope"
                )
            )

    @pytest.mark.asyncio
    async def test_anonymous_denied(self, unit_env):
        use_case = await unit_env.get(RegisterPrincipalUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                RegisterPrincipalRequest(context=CallerContext.anonymous())
            )


class TestUpdateAndGetPrincipal:
    """Tests for UpdatePrincipalUseCase and GetPrincipalUseCase."""

    @pytest.mark.asyncio
    async def test_update_profile_then_read(self, unit_env):
        register = await unit_env.get(RegisterPrincipalUseCase)
        update = await unit_env.get(UpdatePrincipalUseCase)
        get = await unit_env.get(GetPrincipalUseCase)
        alice = make_principal()
        await register.execute(RegisterPrincipalRequest(context=owner_context(alice)))

        await update.execute(
            UpdatePrincipalRequest(
                context=owner_context(alice),
                principal_id=alice.id,
                fields={"display_name": "Alice"},
            )
        )
        response = await get.execute(
            GetPrincipalRequest(context=owner_context(alice), principal_id=alice.id)
        )

        assert response.display_name == "Alice"
        assert response.is_admin is False

    @pytest.mark.asyncio
    async def test_update_is_admin_denied(self, unit_env):
        register = await unit_env.get(RegisterPrincipalUseCase)
        update = await unit_env.get(UpdatePrincipalUseCase)
        alice = make_principal()
        await register.execute(RegisterPrincipalRequest(context=owner_context(alice)))

        with pytest.raises(SelfElevationForbiddenError):
            await update.execute(
                UpdatePrincipalRequest(
                    context=owner_context(alice),
                    principal_id=alice.id,
                    fields={"is_admin": True},
                )
            )

    @pytest.mark.asyncio
    async def test_read_other_principal_denied(self, unit_env):
        register = await unit_env.get(RegisterPrincipalUseCase)
        get = await unit_env.get(GetPrincipalUseCase)
        alice = make_principal()
        mallory = make_principal("mallory@example.com")
        await register.execute(RegisterPrincipalRequest(context=owner_context(alice)))

        with pytest.raises(NotAuthorizedError):
            await get.execute(
                GetPrincipalRequest(context=owner_context(mallory), principal_id=alice.id)
            )
