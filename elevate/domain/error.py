"""Domain layer errors.

Every error carries a stable ``code`` that callers can branch on and that
the HTTP layer returns verbatim.
"""


class DomainError(Exception):
    """Base domain error."""

    code = "DomainError"


# ============================================================================
# Validation errors (client-fixable)
# ============================================================================


class ValidationError(DomainError):
    """Domain validation error."""

    code = "ValidationError"


class InvalidEmailError(ValidationError):
    """Raised when an email address fails basic format validation."""

    code = "InvalidEmail"

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Invalid email address: {email!r}")


class InvalidValidityWindowError(ValidationError):
    """Raised when a token validity window is not positive or is too long."""

    code = "InvalidValidityWindow"

    def __init__(self, message: str = "Validity window must be positive"):
        super().__init__(message)


class TokenNotFoundError(ValidationError):
    """Raised when a presented token value does not exist."""

    code = "TokenNotFound"

    def __init__(self):
        super().__init__("Admin token not found. Request a new token.")


class TokenExpiredError(ValidationError):
    """Raised when a token is past its expiry."""

    code = "TokenExpired"

    def __init__(self):
        super().__init__("Admin token has expired. Request a new token.")


class TokenAlreadyUsedError(ValidationError):
    """Raised when a token has already been consumed."""

    code = "TokenAlreadyUsed"

    def __init__(self):
        super().__init__("Admin token has already been used.")


class EmailMismatchError(ValidationError):
    """Raised when the presenting principal's email is not the bound email."""

    code = "EmailMismatch"

    def __init__(self):
        # Never echo the bound email back to the caller
        super().__init__("This token was issued for a different email address.")


# ============================================================================
# Authorization errors (loud, never silent)
# ============================================================================


class AuthorizationError(DomainError):
    """Base authorization error."""

    code = "AuthorizationError"


class InvalidCredentialsError(AuthorizationError):
    """Raised when presented credentials cannot be verified."""

    code = "InvalidCredentials"

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class NotAuthorizedError(AuthorizationError):
    """Raised when a caller may not perform an operation."""

    code = "NotAuthorized"

    def __init__(self, action: str, anonymous: bool = False):
        self.action = action
        self.anonymous = anonymous
        super().__init__(f"Not authorized to {action}")


class SelfElevationForbiddenError(AuthorizationError):
    """Raised when a non-operator write would change a principal's is_admin."""

    code = "SelfElevationForbidden"

    def __init__(self, principal_id: str):
        self.principal_id = principal_id
        super().__init__(
            "Permission denied: users cannot modify their own admin status. "
            "Contact an administrator."
        )


# ============================================================================
# Consistency errors (operator-facing)
# ============================================================================


class ConsistencyError(DomainError):
    """Base consistency error; requires operator attention."""

    code = "ConsistencyError"


class GrantAfterConsumeFailedError(ConsistencyError):
    """Raised when a token was consumed but the admin grant did not happen.

    Remediation: grant the flag to the principal through the operator path
    directly. The token cannot be consumed again.
    """

    code = "GrantAfterConsumeFailed"

    def __init__(self, token_prefix: str, principal_id: str):
        self.token_prefix = token_prefix
        self.principal_id = principal_id
        super().__init__(
            f"Token {token_prefix} was consumed but granting admin to principal "
            f"{principal_id} failed; operator remediation required"
        )


class DuplicateValueError(ConsistencyError):
    """Raised when inserting a token whose value already exists."""

    code = "DuplicateValue"

    def __init__(self, token_prefix: str):
        super().__init__(f"Admin token value already exists: {token_prefix}")


# ============================================================================
# Store-level outcomes
# ============================================================================


class AlreadyConsumedError(DomainError):
    """Raised by the token store when a conditional consume finds it used."""

    code = "AlreadyConsumed"

    def __init__(self, token_prefix: str):
        super().__init__(f"Admin token already consumed: {token_prefix}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = "NotFound"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class PrincipalNotFoundError(NotFoundError):
    """Raised when a principal record does not exist."""

    code = "PrincipalNotFound"

    def __init__(self, principal_id: str):
        super().__init__("Principal", principal_id)


class PrincipalExistsError(DomainError):
    """Raised when registering a principal record that already exists."""

    code = "PrincipalExists"

    def __init__(self, principal_id: str):
        super().__init__(f"Principal already registered: {principal_id}")
