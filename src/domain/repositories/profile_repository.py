"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile aggregates."""

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        ...

    async def get_all(self) -> list[Profile]:
        """Get every profile."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Write a profile if its stored version still equals ``profile.version``.

        Raises:
            StaleVersionError: If another writer got there first.
        """
        ...

    async def delete_by_user_id(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user and return success status."""
        ...
