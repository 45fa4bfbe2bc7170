"""Strongly typed identifiers for domain entities.

Using NewType prevents mixing up principal IDs with other UUIDs.
"""

from typing import NewType
from uuid import UUID

# Assigned by the identity provider at registration time; never minted here
PrincipalId = NewType("PrincipalId", UUID)
