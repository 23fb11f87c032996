"""SQLAlchemy implementation of Profile repository."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import StaleVersionError
from domain.entities.profile import EducationEntry, ExperienceEntry, Profile
from infrastructure.database.models import ProfileModel


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def experience_to_doc(entry: ExperienceEntry) -> dict[str, Any]:
    """Serialize an experience entry into its embedded JSON form."""
    return {
        "id": str(entry.id),
        "title": entry.title,
        "company": entry.company,
        "location": entry.location,
        "from": entry.from_date.isoformat(),
        "to": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def experience_from_doc(doc: dict[str, Any]) -> ExperienceEntry:
    """Deserialize an embedded experience document."""
    return ExperienceEntry(
        id=UUID(doc["id"]),
        title=doc["title"],
        company=doc["company"],
        location=doc.get("location"),
        from_date=date.fromisoformat(doc["from"]),
        to_date=_date_or_none(doc.get("to")),
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )


def education_to_doc(entry: EducationEntry) -> dict[str, Any]:
    """Serialize an education entry into its embedded JSON form."""
    return {
        "id": str(entry.id),
        "school": entry.school,
        "degree": entry.degree,
        "fieldofstudy": entry.fieldofstudy,
        "from": entry.from_date.isoformat(),
        "to": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def education_from_doc(doc: dict[str, Any]) -> EducationEntry:
    """Deserialize an embedded education document."""
    return EducationEntry(
        id=UUID(doc["id"]),
        school=doc["school"],
        degree=doc["degree"],
        fieldofstudy=doc.get("fieldofstudy"),
        from_date=date.fromisoformat(doc["from"]),
        to_date=_date_or_none(doc.get("to")),
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Profile]:
        """Get every profile."""
        stmt = select(ProfileModel).order_by(ProfileModel.date.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile.

        A concurrent create for the same owner trips the unique owner
        constraint and is reported as a lost race so the caller re-reads.
        """
        model = ProfileModel(
            id=profile.id,
            user_id=profile.user_id,
            version=0,
            **self._columns(profile),
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise StaleVersionError(str(profile.user_id), profile.version) from exc
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Write a profile if nobody else has written it since it was read."""
        stmt = (
            update(ProfileModel)
            .where(
                ProfileModel.id == profile.id,
                ProfileModel.version == profile.version,
            )
            .values(version=profile.version + 1, **self._columns(profile))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise StaleVersionError(str(profile.id), profile.version)

        stored = await self.get_by_user_id(profile.user_id)
        if stored is None:
            raise StaleVersionError(str(profile.id), profile.version)
        return stored

    async def delete_by_user_id(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    def _columns(self, profile: Profile) -> dict[str, Any]:
        """Mutable columns of a profile row."""
        return {
            "status": profile.status,
            "company": profile.company,
            "website": profile.website,
            "location": profile.location,
            "bio": profile.bio,
            "githubusername": profile.githubusername,
            "skills": list(profile.skills),
            "social": dict(profile.social),
            "experience": [experience_to_doc(e) for e in profile.experience],
            "education": [education_to_doc(e) for e in profile.education],
            "date": profile.date,
        }

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            status=model.status,
            company=model.company,
            website=model.website,
            location=model.location,
            bio=model.bio,
            githubusername=model.githubusername,
            skills=tuple(model.skills or ()),
            social=dict(model.social or {}),
            experience=tuple(experience_from_doc(d) for d in model.experience or ()),
            education=tuple(education_from_doc(d) for d in model.education or ()),
            date=model.date,
            version=model.version,
        )
