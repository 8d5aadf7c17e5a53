from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SchoolClass, Section


class ClassRepository(Protocol):
    def list_all(self) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        raise NotImplementedError

    def create(self, *, name: str, description: Optional[str]) -> int:
        raise NotImplementedError

    def update(self, *, class_id: int, name: str, description: Optional[str]) -> bool:
        raise NotImplementedError

    def delete(self, class_id: int) -> bool:
        """Sections, students and attendance of the class go with it (FK cascade)."""

        raise NotImplementedError


class SectionRepository(Protocol):
    def list_all(self) -> Sequence[Section]:
        raise NotImplementedError

    def list_by_class(self, class_id: int) -> Sequence[Section]:
        raise NotImplementedError

    def list_by_teacher(self, teacher_id: int) -> Sequence[Section]:
        raise NotImplementedError

    def get_by_id(self, section_id: int) -> Optional[Section]:
        raise NotImplementedError

    def create(self, *, name: str, class_id: int, teacher_id: Optional[int]) -> int:
        raise NotImplementedError

    def update(self, *, section_id: int, name: str, class_id: int, teacher_id: Optional[int]) -> bool:
        raise NotImplementedError

    def delete(self, section_id: int) -> bool:
        raise NotImplementedError
