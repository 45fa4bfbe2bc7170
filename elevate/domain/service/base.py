"""Base service class for domain services."""

from collections.abc import Callable
from datetime import datetime

from elevate.domain.model.common import utcnow

# Injected so expiry behaviour can be tested without sleeping
Clock = Callable[[], datetime]


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single record or spans several of them.
    """

    pass


__all__ = ["Clock", "Service", "utcnow"]
