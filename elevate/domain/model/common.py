"""Base model for domain records."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    """Timezone-aware current time; all stored timestamps are UTC."""
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Base class for all domain models.

    Records are immutable; changes produce a new image via model_copy, which
    lets write hooks see the old and the candidate image side by side.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )
