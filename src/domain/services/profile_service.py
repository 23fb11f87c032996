"""Profile service layer with business logic."""

from dataclasses import replace
from typing import Any, Callable, List, Optional, Sequence
from uuid import UUID

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileNotFoundError,
    UserNotFoundError,
)
from domain.entities.profile import (
    SOCIAL_NETWORKS,
    EducationEntry,
    ExperienceEntry,
    Profile,
    ProfileView,
)
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services import collection_editor as editor
from domain.services.ownership import (
    may_mutate_profile,
    may_remove_profile_entry,
    require,
)
from domain.services.versioned_write import retry_on_stale


def parse_skills(skills: str | Sequence[str]) -> tuple[str, ...]:
    """Split a comma separated skill list, dropping blanks."""
    items = skills.split(",") if isinstance(skills, str) else skills
    return tuple(s.strip() for s in items if s and s.strip())


class ProfileService:
    """Service layer for profiles and their experience/education entries."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        write_attempts: int = 3,
    ) -> None:
        self._uow_factory = uow_factory
        self._write_attempts = write_attempts

    async def get_for_user(self, user_id: UUID) -> ProfileView:
        """Get the profile owned by ``user_id`` with owner details."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user_id(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            return await self._view(uow, profile)

    async def get_all(self) -> List[ProfileView]:
        """Get every profile with owner details."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.get_all()
            owners = await uow.users.get_many([p.user_id for p in profiles])
            return [
                ProfileView(
                    profile=p,
                    owner_name=owners[p.user_id].name,
                    owner_avatar=owners[p.user_id].avatar,
                )
                for p in profiles
                if p.user_id in owners
            ]

    async def upsert(
        self,
        user_id: UUID,
        status: str,
        skills: str | Sequence[str],
        company: Optional[str] = None,
        website: Optional[str] = None,
        location: Optional[str] = None,
        bio: Optional[str] = None,
        githubusername: Optional[str] = None,
        social: Optional[dict[str, Optional[str]]] = None,
    ) -> ProfileView:
        """Create the caller's profile or update its scalar fields.

        Experience and education are left untouched. The owner never
        changes: the profile is always looked up by the caller's id.
        """
        fields: dict[str, Any] = {
            "status": status,
            "skills": parse_skills(skills),
            "company": company,
            "website": website,
            "location": location,
            "bio": bio,
            "githubusername": githubusername,
            "social": {
                network: link
                for network, link in (social or {}).items()
                if network in SOCIAL_NETWORKS and link
            },
        }

        async def attempt() -> ProfileView:
            async with self._uow_factory() as uow:
                user = await uow.users.get(user_id)
                if not user:
                    raise UserNotFoundError(str(user_id))

                existing = await uow.profiles.get_by_user_id(user_id)
                if existing:
                    require(may_mutate_profile(user_id, existing))
                    saved = await uow.profiles.update(replace(existing, **fields))
                else:
                    saved = await uow.profiles.create(Profile(user_id=user_id, **fields))
                await uow.commit()
                return ProfileView(profile=saved, owner_name=user.name, owner_avatar=user.avatar)

        return await retry_on_stale(
            attempt,
            attempts=self._write_attempts,
            resource="profile",
            resource_id=str(user_id),
        )

    async def add_experience(self, user_id: UUID, entry: ExperienceEntry) -> Profile:
        """Prepend an experience entry to the caller's profile."""
        return await self._edit(
            user_id, lambda p: editor.insert_front(p, "experience", entry)[0]
        )

    async def remove_experience(self, user_id: UUID, entry_id: UUID) -> Profile:
        """Remove an experience entry from the caller's profile."""
        return await self._remove(user_id, "experience", entry_id, ExperienceNotFoundError)

    async def add_education(self, user_id: UUID, entry: EducationEntry) -> Profile:
        """Prepend an education entry to the caller's profile."""
        return await self._edit(
            user_id, lambda p: editor.insert_front(p, "education", entry)[0]
        )

    async def remove_education(self, user_id: UUID, entry_id: UUID) -> Profile:
        """Remove an education entry from the caller's profile."""
        return await self._remove(user_id, "education", entry_id, EducationNotFoundError)

    async def _remove(
        self,
        user_id: UUID,
        collection: str,
        entry_id: UUID,
        not_found: Callable[[str], Exception],
    ) -> Profile:
        def edit(profile: Profile) -> Profile:
            require(may_remove_profile_entry(user_id, profile))
            updated, removed = editor.remove_by_id(profile, collection, entry_id)
            if not removed:
                raise not_found(str(entry_id))
            return updated

        return await self._edit(user_id, edit)

    async def _edit(self, user_id: UUID, edit: Callable[[Profile], Profile]) -> Profile:
        """Apply ``edit`` as one versioned read-modify-write on the caller's profile."""

        async def attempt() -> Profile:
            async with self._uow_factory() as uow:
                profile = await uow.profiles.get_by_user_id(user_id)
                if not profile:
                    raise ProfileNotFoundError(str(user_id))

                updated = edit(profile)
                if updated is profile:
                    return profile

                saved = await uow.profiles.update(updated)
                await uow.commit()
                return saved

        return await retry_on_stale(
            attempt,
            attempts=self._write_attempts,
            resource="profile",
            resource_id=str(user_id),
        )

    async def _view(self, uow: IUnitOfWork, profile: Profile) -> ProfileView:
        owner = await uow.users.get(profile.user_id)
        if not owner:
            raise ProfileNotFoundError(str(profile.user_id))
        return ProfileView(profile=profile, owner_name=owner.name, owner_avatar=owner.avatar)
