from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Domain entity: one profile per authenticated user.

    Note: Plain data object (no database access code).
    """

    id: int
    email: str
    full_name: str
    role: Role
    phone: Optional[str] = None
    password_hash: str = ""
