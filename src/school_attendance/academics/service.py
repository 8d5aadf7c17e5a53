from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_non_empty, require_positive_id
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import ProfileRepository
from .model import SchoolClass, Section
from .repository import ClassRepository, SectionRepository


class ClassSectionService:
    """Use case: admin maintenance of classes and their sections."""

    def __init__(self, classes: ClassRepository, sections: SectionRepository, profiles: ProfileRepository):
        self._classes = classes
        self._sections = sections
        self._profiles = profiles

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can manage classes and sections")

    # --- reads ---

    def list_classes(self) -> Sequence[SchoolClass]:
        return self._classes.list_all()

    def list_sections(self, class_id: Optional[int] = None) -> Sequence[Section]:
        if class_id:
            return self._sections.list_by_class(int(class_id))
        return self._sections.list_all()

    def list_sections_for_teacher(self, teacher_id: int) -> Sequence[Section]:
        return self._sections.list_by_teacher(int(teacher_id))

    def get_class(self, class_id: int) -> SchoolClass:
        cls = self._classes.get_by_id(int(class_id))
        if not cls:
            raise NotFoundError("Class not found")
        return cls

    def get_section(self, section_id: int) -> Section:
        section = self._sections.get_by_id(int(section_id))
        if not section:
            raise NotFoundError("Section not found")
        return section

    # --- classes ---

    def add_class(self, *, current_role: Role, name: str, description: str = "") -> int:
        self._require_admin(current_role)
        name = require_non_empty(name, "Class name")
        return self._classes.create(name=name, description=(description or "").strip() or None)

    def update_class(self, *, current_role: Role, class_id: int, name: str, description: str = "") -> None:
        self._require_admin(current_role)
        self.get_class(class_id)
        name = require_non_empty(name, "Class name")
        self._classes.update(class_id=int(class_id), name=name, description=(description or "").strip() or None)

    def delete_class(self, *, current_role: Role, class_id: int) -> None:
        self._require_admin(current_role)
        if not self._classes.delete(int(class_id)):
            raise NotFoundError("Class not found")

    # --- sections ---

    def _check_teacher(self, teacher_id: Optional[int]) -> Optional[int]:
        if not teacher_id:
            return None
        teacher = self._profiles.get_by_id(int(teacher_id))
        if not teacher or teacher.role != Role.TEACHER:
            raise ValidationError("Selected teacher does not exist")
        return teacher.id

    def add_section(self, *, current_role: Role, name: str, class_id, teacher_id: Optional[int] = None) -> int:
        self._require_admin(current_role)
        name = require_non_empty(name, "Section name")
        class_id = require_positive_id(class_id, "Class")
        self.get_class(class_id)
        return self._sections.create(name=name, class_id=class_id, teacher_id=self._check_teacher(teacher_id))

    def update_section(
        self,
        *,
        current_role: Role,
        section_id: int,
        name: str,
        class_id,
        teacher_id: Optional[int] = None,
    ) -> None:
        self._require_admin(current_role)
        self.get_section(section_id)
        name = require_non_empty(name, "Section name")
        class_id = require_positive_id(class_id, "Class")
        self.get_class(class_id)
        self._sections.update(
            section_id=int(section_id),
            name=name,
            class_id=class_id,
            teacher_id=self._check_teacher(teacher_id),
        )

    def delete_section(self, *, current_role: Role, section_id: int) -> None:
        self._require_admin(current_role)
        if not self._sections.delete(int(section_id)):
            raise NotFoundError("Section not found")
