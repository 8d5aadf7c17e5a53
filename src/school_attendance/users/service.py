from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError
from .model import Profile
from .repository import ProfileRepository

PROFILE_NOT_FOUND = "Profile not found. Please contact your administrator."


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    email: str
    role: Role


class AuthService:
    """Use case: authenticate a profile (login)."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip().lower()
        if not email or not password:
            raise AuthenticationError("Email and password are required")

        profile = self._profiles.get_by_email(email)
        if not profile:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(profile.password_hash, password)
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=profile.id, full_name=profile.full_name, email=profile.email, role=profile.role)


class ProfileService:
    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def get_profile(self, user_id: int) -> Profile:
        profile = self._profiles.get_by_id(int(user_id))
        if not profile:
            raise NotFoundError(PROFILE_NOT_FOUND)
        return profile

    def list_teachers(self) -> Sequence[Profile]:
        return self._profiles.list_by_role(Role.TEACHER)

    def find_by_email(self, email: str) -> Profile:
        email = require_non_empty(email, "Email").lower()
        profile = self._profiles.get_by_email(email)
        if not profile:
            raise NotFoundError(f"No profile with email {email}")
        return profile
