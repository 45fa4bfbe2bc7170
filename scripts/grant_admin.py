#!/usr/bin/env python3
"""Grant or revoke admin directly as the trusted operator.

This is the remediation path when a token was consumed but the grant
failed (GrantAfterConsumeFailed): the token cannot be reused, so the flag
is set here instead.

    python scripts/grant_admin.py 7d0f...-uuid
    python scripts/grant_admin.py 7d0f...-uuid --revoke
"""

import argparse
import asyncio
import sys
from uuid import UUID

import logfire

from elevate.application.usecase.elevation import (
    SetAdminFlagRequest,
    SetAdminFlagUseCase,
)
from elevate.config import Settings
from elevate.domain.error import DomainError
from elevate.domain.model import CallerContext
from elevate.domain.value import PrincipalId
from elevate.util.di.container import create_container
from elevate.util.logging import get_logger, setup_logging
from elevate.util.observability import configure_logfire

logger = get_logger(__name__)


async def set_flag(principal_id: UUID, is_admin: bool) -> int:
    settings = Settings()
    container = create_container()
    context = CallerContext.trusted_operator(
        PrincipalId(settings.auth.service_principal_id)
    )

    try:
        async with container() as request_container:
            use_case = await request_container.get(SetAdminFlagUseCase)
            response = await use_case.execute(
                SetAdminFlagRequest(
                    context=context, principal_id=principal_id, is_admin=is_admin
                )
            )
    except DomainError as e:
        logger.error(f"{e.code}: {e}")
        return 1
    finally:
        await container.close()

    print(f"Principal {response.id} ({response.email}) is_admin={response.is_admin}")
    return 0


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    parser = argparse.ArgumentParser(description="Set a principal's admin flag")
    parser.add_argument("principal_id", type=UUID, help="Principal id")
    parser.add_argument(
        "--revoke", action="store_true", help="Remove admin instead of granting it"
    )
    args = parser.parse_args()

    with logfire.span("script.grant_admin", principal_id=str(args.principal_id)):
        return asyncio.run(set_flag(args.principal_id, not args.revoke))


if __name__ == "__main__":
    sys.exit(main())
