"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so mapping is manual.
"""

from typing import Any, Dict
from uuid import UUID

from elevate.domain.model import AdminToken, Principal
from elevate.domain.value import Email, PrincipalId, TokenValue


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_principal(row: Dict[str, Any]) -> Principal:
    """Convert database row to Principal domain model.

    Args:
        row: Database row as dict

    Returns:
        Principal domain model
    """
    return Principal(
        id=PrincipalId(_uuid(row["id"])),
        email=Email(row["email"]),
        display_name=row.get("display_name"),
        avatar_url=row.get("avatar_url"),
        is_admin=bool(row["is_admin"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def principal_to_dict(principal: Principal) -> Dict[str, Any]:
    """Convert Principal domain model to database dict."""
    return principal.model_dump()


def row_to_admin_token(row: Dict[str, Any]) -> AdminToken:
    """Convert database row to AdminToken domain model.

    Args:
        row: Database row as dict

    Returns:
        AdminToken domain model
    """
    consumed_by = row.get("consumed_by")
    return AdminToken(
        value=TokenValue(row["value"]),
        bound_email=Email(row["bound_email"]),
        issued_by=PrincipalId(_uuid(row["issued_by"])),
        issued_at=row["issued_at"],
        expires_at=row["expires_at"],
        consumed_at=row.get("consumed_at"),
        consumed_by=PrincipalId(_uuid(consumed_by)) if consumed_by else None,
    )


def admin_token_to_dict(token: AdminToken) -> Dict[str, Any]:
    """Convert AdminToken domain model to database dict."""
    return token.model_dump()
