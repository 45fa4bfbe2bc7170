"""Principal record.

The identity provider owns the principal's id and email. This system owns
the profile attributes and, most importantly, constrains how is_admin may
change.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from elevate.domain.model.common import DomainModel, utcnow
from elevate.domain.value import Email, PrincipalId

# Fields the owner may change through a profile update
PROFILE_FIELDS = frozenset({"display_name", "avatar_url"})


class Principal(DomainModel):
    """Principal record.

    Business rules:
    - id and email are immutable here (identity provider attributes)
    - is_admin defaults to False and is never None
    - is_admin only changes via token consumption or a trusted operator write
    """

    id: PrincipalId
    email: Email
    display_name: Optional[str] = Field(default=None, max_length=100)
    avatar_url: Optional[str] = None
    is_admin: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
