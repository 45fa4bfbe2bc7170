#!/usr/bin/env python3
"""Issue an admin registration token as the trusted operator.

Run on the backend host. Prints the registration link to hand to the
recipient, who must sign up with the same email address.

    python scripts/create_admin_token.py new.admin@example.com --days 7
"""

import argparse
import asyncio
import sys

import logfire

from elevate.application.usecase.admin_token import (
    IssueAdminTokenRequest,
    IssueAdminTokenUseCase,
)
from elevate.config import Settings
from elevate.domain.error import DomainError
from elevate.domain.model import CallerContext
from elevate.domain.value import PrincipalId
from elevate.util.di.container import create_container
from elevate.util.logging import get_logger, setup_logging
from elevate.util.observability import configure_logfire

logger = get_logger(__name__)


async def issue(email: str, days: int | None) -> int:
    settings = Settings()
    container = create_container()
    context = CallerContext.trusted_operator(
        PrincipalId(settings.auth.service_principal_id)
    )

    try:
        async with container() as request_container:
            use_case = await request_container.get(IssueAdminTokenUseCase)
            response = await use_case.execute(
                IssueAdminTokenRequest(context=context, email=email, validity_days=days)
            )
    except DomainError as e:
        logger.error(f"{e.code}: {e}")
        return 1
    finally:
        await container.close()

    print(f"Token:            {response.token}")
    print(f"Email:            {response.email}")
    print(f"Expires at:       {response.expires_at.isoformat()}")
    print(f"Registration URL: {response.registration_url}")
    return 0


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    parser = argparse.ArgumentParser(description="Issue an admin registration token")
    parser.add_argument("email", help="Email address the token is bound to")
    parser.add_argument(
        "--days",
        type=int,
        default=None,
        help=f"Validity in days (default {settings.admin_tokens.default_validity_days}; "
        f"presets {settings.admin_tokens.validity_presets})",
    )
    args = parser.parse_args()

    with logfire.span("script.create_admin_token"):
        return asyncio.run(issue(args.email, args.days))


if __name__ == "__main__":
    sys.exit(main())
