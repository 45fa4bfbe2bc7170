"""JWT token utilities.

Session tokens are issued by the identity provider after login. This
service only verifies them; create_token exists for scripts and tests.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from elevate.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    principal_id: str
    email: str
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(principal_id: str, email: str, settings: AuthSettings) -> str:
    """Create a session token for a principal.

    Args:
        principal_id: Principal ID
        email: Verified email address
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "principal_id": principal_id,
        "email": email,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a session token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
    except ValueError:
        # Signed but missing principal_id or email
        raise JWTError("Malformed token payload")
