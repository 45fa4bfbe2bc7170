"""Mock providers for testing."""

from .persistence import ApiPersistenceProvider, MockPersistenceProvider
from .container import build_api_container, build_test_container

__all__ = [
    "ApiPersistenceProvider",
    "MockPersistenceProvider",
    "build_api_container",
    "build_test_container",
]
