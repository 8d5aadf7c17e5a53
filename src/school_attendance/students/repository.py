from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student, StudentFields


class StudentRepository(Protocol):
    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def list_by_section(self, section_id: int) -> Sequence[Student]:
        """Students of a section ordered by roll number."""

        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[Student]:
        raise NotImplementedError

    def create(self, fields: StudentFields) -> int:
        raise NotImplementedError

    def update(self, student_id: int, fields: StudentFields) -> bool:
        raise NotImplementedError

    def delete(self, student_id: int) -> bool:
        """Attendance rows of the student go with it (FK cascade)."""

        raise NotImplementedError
