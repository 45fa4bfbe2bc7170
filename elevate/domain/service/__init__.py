"""Domain services."""

from .admin_token_service import AdminTokenService, TokenDisplay, parse_email
from .base import Clock, Service
from .elevation_service import ElevationService
from .identity_service import IdentityResolver
from .jwt_service import JWTService
from .principal_service import PrincipalService
from .privilege_guard import PrivilegeGuard

__all__ = [
    "AdminTokenService",
    "Clock",
    "ElevationService",
    "IdentityResolver",
    "JWTService",
    "PrincipalService",
    "PrivilegeGuard",
    "Service",
    "TokenDisplay",
    "parse_email",
]
