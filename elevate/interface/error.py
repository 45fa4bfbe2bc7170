"""Interface layer errors and the domain error to HTTP status mapping."""

from fastapi import status

from elevate.domain.error import (
    AlreadyConsumedError,
    AuthorizationError,
    ConsistencyError,
    DomainError,
    InvalidCredentialsError,
    NotAuthorizedError,
    NotFoundError,
    PrincipalExistsError,
    TokenAlreadyUsedError,
    TokenExpiredError,
    TokenNotFoundError,
    ValidationError,
)


class InterfaceError(Exception):
    """Base interface error."""

    pass


# Most specific class wins; lookup walks the exception's MRO
ERROR_STATUS: dict[type[DomainError], int] = {
    TokenNotFoundError: status.HTTP_404_NOT_FOUND,
    TokenExpiredError: status.HTTP_410_GONE,
    TokenAlreadyUsedError: status.HTTP_409_CONFLICT,
    AlreadyConsumedError: status.HTTP_409_CONFLICT,
    PrincipalExistsError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    ConsistencyError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(error: DomainError) -> int:
    """HTTP status for a domain error."""
    if isinstance(error, NotAuthorizedError) and error.anonymous:
        return status.HTTP_401_UNAUTHORIZED
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return status.HTTP_400_BAD_REQUEST
