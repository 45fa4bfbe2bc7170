"""Caller context.

Explicit per-request identity passed into every operation that needs an
authorization decision, instead of ambient session state.
"""

from typing import Optional

from elevate.domain.model.common import DomainModel
from elevate.domain.value import CallerKind, Email, PrincipalId


class CallerContext(DomainModel):
    """Who is making the current request.

    The OPERATOR kind is produced only by the identity resolver (from the
    backend service key) or by server-side code acting as the trusted bridge.
    Nothing in a login session or request body can select it.
    """

    kind: CallerKind
    principal_id: Optional[PrincipalId] = None
    email: Optional[Email] = None

    @classmethod
    def anonymous(cls) -> "CallerContext":
        return cls(kind=CallerKind.ANONYMOUS)

    @classmethod
    def principal(cls, principal_id: PrincipalId, email: Email) -> "CallerContext":
        return cls(kind=CallerKind.PRINCIPAL, principal_id=principal_id, email=email)

    @classmethod
    def trusted_operator(cls, principal_id: PrincipalId) -> "CallerContext":
        return cls(kind=CallerKind.OPERATOR, principal_id=principal_id)

    @property
    def is_anonymous(self) -> bool:
        return self.kind == CallerKind.ANONYMOUS

    @property
    def is_trusted_operator(self) -> bool:
        return self.kind == CallerKind.OPERATOR

    def current_principal(self) -> Optional[tuple[PrincipalId, Email]]:
        """Return (id, email) for an ordinary principal, None otherwise."""
        if self.kind != CallerKind.PRINCIPAL:
            return None
        if self.principal_id is None or self.email is None:
            return None
        return self.principal_id, self.email
