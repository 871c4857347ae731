from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import StorageError, ValidationError
from ..teachers.model import Teacher
from .model import SchoolClass
from .repository import ClassRepository

logger = logging.getLogger(__name__)


class ClassService:
    def __init__(self, classes: ClassRepository):
        self._classes = classes

    def list_for_teacher(self, teacher: Teacher) -> Sequence[SchoolClass]:
        ids = self._classes.class_ids_for_teacher(teacher.teacher_id)
        return self._classes.list_by_ids(ids)

    def count_for_teacher(self, teacher: Teacher) -> int:
        return len(self._classes.class_ids_for_teacher(teacher.teacher_id))

    def add_class(self, *, teacher: Teacher, name: str) -> str:
        if not teacher.school_id:
            raise ValidationError("Du måste vara kopplad till en skola först")
        name = require_non_empty(name, "Klassnamn")

        class_id = self._classes.create(name=name, school_id=teacher.school_id)
        try:
            self._classes.link_teacher(teacher_id=teacher.teacher_id, class_id=class_id)
        except StorageError:
            # An unlinked class is invisible to every teacher; remove it again.
            logger.error("Linking class %s to teacher %s failed, removing it", class_id, teacher.teacher_id)
            self._classes.delete(class_id)
            raise
        return class_id
