"""Infrastructure providers."""

from .persistence import PersistenceProvider

# Imported so get_provider can find it through __subclasses__()
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
