"""Admin token domain service."""

from dataclasses import dataclass
from datetime import timedelta
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from elevate.domain.error import (
    AlreadyConsumedError,
    EmailMismatchError,
    InvalidEmailError,
    InvalidValidityWindowError,
    NotFoundError,
    TokenAlreadyUsedError,
    TokenExpiredError,
    TokenNotFoundError,
)
from elevate.domain.model import AdminToken, AdminTokenListing
from elevate.domain.repository import AdminTokenRepository
from elevate.domain.value import Email, PrincipalId, TokenStatus, TokenValue

from .base import Clock, Service, utcnow


@dataclass
class TokenDisplay:
    """What the registration page may show before the user commits."""

    email: str
    is_valid: bool


def parse_email(raw: str) -> Email:
    """Normalize an email or raise InvalidEmailError."""
    try:
        return Email(raw)
    except PydanticValidationError:
        raise InvalidEmailError(raw)


def _parse_token_value(raw: str) -> TokenValue | None:
    try:
        return TokenValue(raw)
    except PydanticValidationError:
        return None


class AdminTokenService(Service):
    """Domain service for the admin token lifecycle.

    Issuance, display validation, single-use consumption and operator
    housekeeping. Authorization of operator-only calls happens in the
    application layer before these methods are reached.
    """

    def __init__(
        self, admin_token_repository: AdminTokenRepository, clock: Clock = utcnow
    ) -> None:
        """Initialize admin token service.

        Args:
            admin_token_repository: Admin token repository
            clock: Source of the current time
        """
        self.admin_token_repository = admin_token_repository
        self.clock = clock

    async def issue(
        self, email: str, validity: timedelta, issued_by: PrincipalId
    ) -> AdminToken:
        """Issue a new token bound to an email address.

        Args:
            email: Address the token is valid for
            validity: How long the token stays consumable
            issued_by: Operator creating the token

        Returns:
            The stored token

        Raises:
            InvalidEmailError: If the email fails format validation
            InvalidValidityWindowError: If validity is not positive or the
                expiry falls outside the representable range
        """
        with logfire.span("admin_token_service.issue", issued_by=str(issued_by)):
            bound_email = parse_email(email)
            if validity <= timedelta(0):
                raise InvalidValidityWindowError()

            now = self.clock()
            try:
                expires_at = now + validity
            except OverflowError:
                raise InvalidValidityWindowError("Validity window is out of range")

            token = AdminToken(
                value=TokenValue(str(uuid4())),
                bound_email=bound_email,
                issued_by=issued_by,
                issued_at=now,
                expires_at=expires_at,
            )

            saved = await self.admin_token_repository.insert(token)
            logfire.info(
                "Admin token issued",
                token=saved.value.redacted(),
                bound_email=bound_email.root,
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def validate_for_display(self, value: str) -> TokenDisplay:
        """Check a token without consuming it.

        Unknown tokens report is_valid=False rather than raising, so the
        endpoint does not reveal which values exist.

        Args:
            value: Token value from the registration link

        Returns:
            Bound email (empty if unknown) and whether the token is active
        """
        with logfire.span("admin_token_service.validate_for_display"):
            token_value = _parse_token_value(value)
            token = (
                await self.admin_token_repository.find_by_value(token_value)
                if token_value is not None
                else None
            )
            if token is None:
                logfire.info("Display validation for unknown token")
                return TokenDisplay(email="", is_valid=False)

            status = token.status_at(self.clock())
            logfire.info(
                "Display validation", token=token.value.redacted(), status=status.value
            )
            return TokenDisplay(
                email=token.bound_email.root, is_valid=status == TokenStatus.ACTIVE
            )

    async def consume(
        self, value: str, presented_email: str, consumed_by: PrincipalId
    ) -> AdminToken:
        """Validate and consume a token.

        The status and email checks run first so doomed requests never reach
        the write, but only the store's conditional write decides whether
        this caller consumed the token.

        Args:
            value: Token value
            presented_email: Email of the principal presenting the token
            consumed_by: Principal presenting the token

        Returns:
            The consumed token

        Raises:
            TokenNotFoundError: Unknown value
            TokenAlreadyUsedError: Already consumed, including a lost race
            TokenExpiredError: Past expires_at
            EmailMismatchError: Presented email is not the bound email
        """
        with logfire.span(
            "admin_token_service.consume", consumed_by=str(consumed_by)
        ):
            token_value = _parse_token_value(value)
            if token_value is None:
                raise TokenNotFoundError()

            token = await self.admin_token_repository.find_by_value(token_value)
            if token is None:
                logfire.warn("Consume of unknown token", token=token_value.redacted())
                raise TokenNotFoundError()

            now = self.clock()
            status = token.status_at(now)
            if status == TokenStatus.USED:
                logfire.warn("Consume of used token", token=token_value.redacted())
                raise TokenAlreadyUsedError()
            if status == TokenStatus.EXPIRED:
                logfire.warn(
                    "Consume of expired token",
                    token=token_value.redacted(),
                    expires_at=token.expires_at.isoformat(),
                )
                raise TokenExpiredError()

            try:
                email = Email(presented_email)
            except PydanticValidationError:
                raise EmailMismatchError()
            if email != token.bound_email:
                logfire.warn(
                    "Consume with mismatched email",
                    token=token_value.redacted(),
                    consumed_by=str(consumed_by),
                )
                raise EmailMismatchError()

            try:
                consumed = await self.admin_token_repository.mark_consumed(
                    token_value, consumed_by, now
                )
            except AlreadyConsumedError:
                logfire.warn("Lost consume race", token=token_value.redacted())
                raise TokenAlreadyUsedError()
            except NotFoundError:
                # Deleted between lookup and write
                raise TokenNotFoundError()

            logfire.info(
                "Admin token consumed",
                token=token_value.redacted(),
                consumed_by=str(consumed_by),
            )
            return consumed

    async def list_tokens(self) -> list[AdminTokenListing]:
        """List every token with its derived status, newest first."""
        with logfire.span("admin_token_service.list_tokens"):
            listings = await self.admin_token_repository.list_all(self.clock())
            logfire.info("Admin tokens listed", count=len(listings))
            return listings

    async def delete_token(self, value: str) -> None:
        """Delete a token; missing tokens are ignored.

        Args:
            value: Token value
        """
        with logfire.span("admin_token_service.delete_token"):
            token_value = _parse_token_value(value)
            if token_value is None:
                return
            await self.admin_token_repository.delete(token_value)
            logfire.info("Admin token deleted", token=token_value.redacted())

    async def cleanup_expired(self) -> int:
        """Delete expired tokens that were never consumed.

        Used tokens are kept as the audit record of who became admin.

        Returns:
            Number of deleted tokens
        """
        with logfire.span("admin_token_service.cleanup_expired"):
            count = await self.admin_token_repository.delete_expired_unconsumed(
                self.clock()
            )
            logfire.info("Expired admin tokens removed", count=count)
            return count
