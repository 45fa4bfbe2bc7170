"""Domain model entities."""

from elevate.domain.model.admin_token import AdminToken, AdminTokenListing
from elevate.domain.model.caller import CallerContext
from elevate.domain.model.principal import PROFILE_FIELDS, Principal

__all__ = [
    "AdminToken",
    "AdminTokenListing",
    "CallerContext",
    "PROFILE_FIELDS",
    "Principal",
]
