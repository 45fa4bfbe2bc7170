"""Admin registration token.

Tokens grant administrator privilege to the principal that consumes them.
They are single-use, time-limited and bound to one email address.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from elevate.domain.model.common import DomainModel, utcnow
from elevate.domain.value import Email, PrincipalId, TokenStatus, TokenValue


class AdminToken(DomainModel):
    """Admin registration token.

    Lifecycle:
    - active until consumed (terminal: used) or past expires_at (terminal: expired)
    - an expired token stays as a historical record until an operator deletes it
    - deletion is allowed at any point and invalidates an unconsumed token

    consumed_at and consumed_by are always set together.
    """

    value: TokenValue
    bound_email: Email
    issued_by: PrincipalId  # Audit trail only
    issued_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime
    consumed_at: Optional[datetime] = None
    consumed_by: Optional[PrincipalId] = None

    def status_at(self, now: datetime) -> TokenStatus:
        """Derive the token status at the given instant.

        Used wins over expired: a consumed token is reported as used even
        after its window has passed.
        """
        if self.consumed_at is not None:
            return TokenStatus.USED
        if now > self.expires_at:
            return TokenStatus.EXPIRED
        return TokenStatus.ACTIVE


class AdminTokenListing(DomainModel):
    """Token annotated with its derived status, for operator review."""

    token: AdminToken
    status: TokenStatus
