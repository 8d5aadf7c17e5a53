from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Gender


@dataclass(frozen=True)
class Student:
    """Domain entity: an enrolled student (optionally linked to a login profile)."""

    id: int
    full_name: str
    roll_no: str
    class_id: Optional[int]
    section_id: Optional[int]
    gender: Gender
    date_of_birth: date
    guardian_name: str
    guardian_contact: str
    address: Optional[str] = None
    user_id: Optional[int] = None
    class_name: Optional[str] = None
    section_name: Optional[str] = None


@dataclass(frozen=True)
class StudentFields:
    """Validated write-model for create/update."""

    full_name: str
    roll_no: str
    class_id: int
    section_id: int
    gender: Gender
    date_of_birth: date
    guardian_name: str
    guardian_contact: str
    address: Optional[str] = None
    user_id: Optional[int] = None
