"""Admin token use cases."""

from elevate.application.usecase.admin_token.cleanup_tokens import (
    CleanupExpiredTokensRequest,
    CleanupExpiredTokensResponse,
    CleanupExpiredTokensUseCase,
)
from elevate.application.usecase.admin_token.delete_token import (
    DeleteAdminTokenRequest,
    DeleteAdminTokenUseCase,
)
from elevate.application.usecase.admin_token.issue_token import (
    IssueAdminTokenRequest,
    IssueAdminTokenResponse,
    IssueAdminTokenUseCase,
)
from elevate.application.usecase.admin_token.list_tokens import (
    AdminTokenItem,
    ListAdminTokensRequest,
    ListAdminTokensResponse,
    ListAdminTokensUseCase,
)
from elevate.application.usecase.admin_token.validate_token import (
    ValidateAdminTokenRequest,
    ValidateAdminTokenResponse,
    ValidateAdminTokenUseCase,
)

__all__ = [
    "AdminTokenItem",
    "CleanupExpiredTokensRequest",
    "CleanupExpiredTokensResponse",
    "CleanupExpiredTokensUseCase",
    "DeleteAdminTokenRequest",
    "DeleteAdminTokenUseCase",
    "IssueAdminTokenRequest",
    "IssueAdminTokenResponse",
    "IssueAdminTokenUseCase",
    "ListAdminTokensRequest",
    "ListAdminTokensResponse",
    "ListAdminTokensUseCase",
    "ValidateAdminTokenRequest",
    "ValidateAdminTokenResponse",
    "ValidateAdminTokenUseCase",
]
