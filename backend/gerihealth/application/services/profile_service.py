"""
Profile Service

The user's profile: name, surname, date of birth, age, location and an
optional photo. The onboarding form rule applies to every write.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Union
import logging

from sqlalchemy import select

from ...domain.exceptions import InvalidProfileError, RecordNotFoundError
from ...domain.value_objects.image_data import ImageData
from ...cross_cutting.validation import ensure_valid_image
from ...infrastructure.storage.database import Database
from ...infrastructure.storage.models import UserProfile


logger = logging.getLogger(__name__)

DateLike = Union[date, str]


def compute_age(date_of_birth: date, today: Optional[date] = None) -> int:
    """Age in whole calendar years, never negative."""
    today = today or date.today()
    years = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return max(0, years)


def _as_date(value: DateLike) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise InvalidProfileError("date_of_birth", f"not a date: '{value}'")


def validate_profile(
    name: str,
    surname: str,
    location: str,
    date_of_birth: DateLike,
    today: Optional[date] = None
) -> Dict[str, Any]:
    """
    Check and trim profile fields.

    Name, surname and location must be non-empty after trimming and the
    computed age must be above zero.

    Returns:
        Cleaned fields including the computed age

    Raises:
        InvalidProfileError: Naming the first field that fails
    """
    cleaned = {
        "name": (name or "").strip(),
        "surname": (surname or "").strip(),
        "location": (location or "").strip(),
    }
    for field_name, value in cleaned.items():
        if not value:
            raise InvalidProfileError(field_name, "must not be empty")

    dob = _as_date(date_of_birth)
    age = compute_age(dob, today)
    if age <= 0:
        raise InvalidProfileError("date_of_birth", "age must be greater than zero")

    cleaned["date_of_birth"] = dob
    cleaned["age"] = age
    return cleaned


class ProfileService:
    """CRUD for user profiles."""

    def __init__(self, database: Database):
        self._db = database
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def create(
        self,
        name: str,
        surname: str,
        date_of_birth: DateLike,
        location: str
    ) -> UserProfile:
        fields = validate_profile(name, surname, location, date_of_birth)
        with self._db.session_scope() as session:
            profile = UserProfile(**fields)
            session.add(profile)
            session.flush()
            self.logger.info(f"Created profile {profile.id}")
            return profile

    def get(self, profile_id: int) -> UserProfile:
        with self._db.session_scope() as session:
            profile = session.get(UserProfile, profile_id)
            if profile is None:
                raise RecordNotFoundError("UserProfile", profile_id)
            return profile

    def get_current(self) -> Optional[UserProfile]:
        """The first profile created, or None before onboarding."""
        with self._db.session_scope() as session:
            return session.scalars(select(UserProfile).order_by(UserProfile.id).limit(1)).first()

    def list(self) -> List[UserProfile]:
        with self._db.session_scope() as session:
            return list(session.scalars(select(UserProfile).order_by(UserProfile.id)))

    def update(self, profile_id: int, **changes: Any) -> UserProfile:
        """Update some fields; the whole profile is validated again and age recomputed."""
        with self._db.session_scope() as session:
            profile = session.get(UserProfile, profile_id)
            if profile is None:
                raise RecordNotFoundError("UserProfile", profile_id)

            fields = validate_profile(
                name=changes.get("name") if changes.get("name") is not None else profile.name,
                surname=changes.get("surname") if changes.get("surname") is not None else profile.surname,
                location=changes.get("location") if changes.get("location") is not None else profile.location,
                date_of_birth=changes.get("date_of_birth") or profile.date_of_birth,
            )
            for key, value in fields.items():
                setattr(profile, key, value)
            return profile

    def delete(self, profile_id: int) -> None:
        with self._db.session_scope() as session:
            profile = session.get(UserProfile, profile_id)
            if profile is None:
                raise RecordNotFoundError("UserProfile", profile_id)
            session.delete(profile)
            self.logger.info(f"Deleted profile {profile_id}")

    def set_photo(self, profile_id: int, data: bytes) -> UserProfile:
        """
        Store a profile photo.

        Raises:
            InvalidImageError: If the bytes are not an image or exceed 10 MB
        """
        ensure_valid_image(ImageData.from_bytes(data, source="profile-photo"))
        with self._db.session_scope() as session:
            profile = session.get(UserProfile, profile_id)
            if profile is None:
                raise RecordNotFoundError("UserProfile", profile_id)
            profile.photo = data
            return profile

    def get_photo(self, profile_id: int) -> bytes:
        profile = self.get(profile_id)
        if profile.photo is None:
            raise RecordNotFoundError("Photo", profile_id)
        return profile.photo
