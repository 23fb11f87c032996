"""Profile domain entities."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


@dataclass(frozen=True)
class ExperienceEntry:
    """A single job on a profile. ``to_date`` is dropped while ``current``."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None

    def __post_init__(self) -> None:
        if self.current and self.to_date is not None:
            object.__setattr__(self, "to_date", None)


@dataclass(frozen=True)
class EducationEntry:
    """A single school on a profile. ``to_date`` is dropped while ``current``."""

    school: str
    degree: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    fieldofstudy: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None

    def __post_init__(self) -> None:
        if self.current and self.to_date is not None:
            object.__setattr__(self, "to_date", None)


@dataclass(frozen=True)
class Profile:
    """Domain entity for the professional record owned by one user.

    Instances are snapshots: edits produce a new ``Profile`` (see
    ``domain.services.collection_editor``) that the caller persists.
    ``version`` is the store's optimistic-concurrency counter.
    """

    user_id: UUID
    id: UUID = field(default_factory=uuid4)
    status: str = ""
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    skills: tuple[str, ...] = ()
    social: dict[str, str] = field(default_factory=dict)
    experience: tuple[ExperienceEntry, ...] = ()
    education: tuple[EducationEntry, ...] = ()
    date: datetime = field(default_factory=datetime.utcnow)
    version: int = 0


@dataclass
class ProfileView:
    """A profile joined with its owner's public fields."""

    profile: Profile
    owner_name: str
    owner_avatar: str
