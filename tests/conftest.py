"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire

from elevate.domain.model import CallerContext, Principal
from elevate.domain.value import Email, PrincipalId

# Keep telemetry local and quiet during tests
logfire.configure(send_to_logfire=False, console=False)

OPERATOR_ID = PrincipalId(uuid4())


class FrozenClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


def make_principal(
    email: str = "alice@example.com", is_admin: bool = False, **fields
) -> Principal:
    """Build a principal record with a fresh id."""
    return Principal(
        id=PrincipalId(uuid4()), email=Email(email), is_admin=is_admin, **fields
    )


def owner_context(principal: Principal) -> CallerContext:
    """Context of the principal acting on its own record."""
    return CallerContext.principal(principal.id, principal.email)


def operator_context() -> CallerContext:
    """Trusted operator context."""
    return CallerContext.trusted_operator(OPERATOR_ID)
