"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and normalization.
"""

import re
from enum import Enum

from pydantic import field_validator

from elevate.domain.value.common import RootValueObject

# Basic shape check only; deliverability is the identity provider's concern
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class TokenStatus(str, Enum):
    """Derived status of an admin registration token.

    Never stored; computed from consumed_at and expires_at at read time.
    """

    ACTIVE = "active"
    USED = "used"
    EXPIRED = "expired"


class CallerKind(str, Enum):
    """Who is performing a request."""

    ANONYMOUS = "anonymous"
    PRINCIPAL = "principal"
    OPERATOR = "operator"


class Email(RootValueObject[str]):
    """Email address, normalized to lowercase.

    Normalization happens once here so issuance and consumption compare
    the same canonical form.
    """

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Trim, lowercase and check basic format."""
        normalized = v.strip().lower()
        if len(normalized) > 255 or not _EMAIL_PATTERN.match(normalized):
            raise ValueError("Email must look like name@domain.tld")
        return normalized


class TokenValue(RootValueObject[str]):
    """Opaque admin registration token value.

    Doubles as the lookup key and the bearer secret in the registration link.
    """

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v

    def redacted(self) -> str:
        """Short prefix safe to put in logs."""
        return self.root[:8] + "..."
