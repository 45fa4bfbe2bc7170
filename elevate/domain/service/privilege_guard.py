"""Privilege field guard.

Write-time invariant over principal records: is_admin changes only when the
writer is the trusted operator context.

The guard compares the pre-mutation snapshot against the candidate image.
A check phrased only in terms of the post-mutation row (for example
"new is_admin equals the is_admin currently stored for this id", evaluated
after the change is applied) compares the candidate with itself and always
passes. Repositories therefore call this hook with both images before
applying the write.

Decision table:

    writer                 | is_admin old vs new | decision
    -----------------------+---------------------+--------------------------
    trusted operator       | any                 | allow
    owner                  | unchanged           | allow
    owner                  | changed             | SelfElevationForbidden
    another principal      | any                 | NotAuthorized
    anonymous              | any                 | NotAuthorized
"""

import logfire

from elevate.domain.error import NotAuthorizedError, SelfElevationForbiddenError
from elevate.domain.model import CallerContext, Principal

from .base import Service


class PrivilegeGuard(Service):
    """Before-write hook enforcing the is_admin write path."""

    def __call__(
        self, old: Principal | None, new: Principal, context: CallerContext
    ) -> None:
        self.check(old, new, context)

    def check(
        self, old: Principal | None, new: Principal, context: CallerContext
    ) -> None:
        """Allow or deny a candidate write.

        Args:
            old: Snapshot before the change, None for an insert
            new: Candidate image after the change
            context: Writer context

        Raises:
            NotAuthorizedError: Anonymous writer, or a principal writing
                someone else's record
            SelfElevationForbiddenError: Non-operator writer changing is_admin
        """
        if context.is_anonymous:
            logfire.warn("Anonymous principal write denied", principal_id=str(new.id))
            raise NotAuthorizedError("write principal records", anonymous=True)

        if old is not None and old.id != new.id:
            raise NotAuthorizedError("change a principal id")

        if not context.is_trusted_operator and context.principal_id != new.id:
            # Access control should have stopped this earlier; fail closed anyway
            logfire.warn(
                "Cross-principal write denied",
                writer_id=str(context.principal_id),
                principal_id=str(new.id),
            )
            raise NotAuthorizedError("write another principal's record")

        # Column default applies to inserts
        old_is_admin = old.is_admin if old is not None else False
        if old_is_admin == new.is_admin:
            return

        if context.is_trusted_operator:
            logfire.info(
                "Admin flag change allowed",
                principal_id=str(new.id),
                operator_id=str(context.principal_id),
                old_is_admin=old_is_admin,
                new_is_admin=new.is_admin,
            )
            return

        logfire.warn(
            "Self-elevation attempt blocked",
            principal_id=str(new.id),
            old_is_admin=old_is_admin,
            new_is_admin=new.is_admin,
        )
        raise SelfElevationForbiddenError(str(new.id))
