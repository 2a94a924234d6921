from __future__ import annotations

from typing import Optional, Sequence

from ..audit.service import AuditService
from ..common.validators import require_id, require_non_empty
from ..core.constants import FALLBACK_TASK_TYPES
from ..core.exceptions import ValidationError
from .model import TaskType
from .repository import TaskTypeRepository


class TaskTypeService:
    """Use case: admin-managed task type vocabulary."""

    def __init__(self, types: TaskTypeRepository, audit: AuditService):
        self._types = types
        self._audit = audit

    def list_types(self) -> Sequence[TaskType]:
        return self._types.list_all()

    def list_names(self) -> list[str]:
        """Names for the task form; the built-in list when none are configured."""
        names = [t.name for t in self._types.list_all()]
        return names or list(FALLBACK_TASK_TYPES)

    def add_type(self, *, name: str, user_id: Optional[int] = None) -> int:
        name = require_non_empty(name, "Task type name")
        if self._types.get_by_name(name):
            raise ValidationError("Task type already exists")

        type_id = self._types.create(name)
        if user_id:
            self._audit.log_action(user_id, "ADD_TASK_TYPE", {"name": name})
        return type_id

    def update_type(self, *, type_id: int, name: str, user_id: Optional[int] = None) -> None:
        type_id = require_id(type_id, "Task type")
        name = require_non_empty(name, "Task type name")

        existing = self._types.get_by_name(name)
        if existing and existing.type_id != type_id:
            raise ValidationError("Task type already exists")

        if not self._types.rename(type_id, name):
            raise ValidationError("Task type not found")
        if user_id:
            self._audit.log_action(user_id, "UPDATE_TASK_TYPE", {"id": type_id, "name": name})

    def delete_type(self, *, type_id: int, user_id: Optional[int] = None) -> None:
        type_id = require_id(type_id, "Task type")
        if not self._types.delete_by_id(type_id):
            raise ValidationError("Task type not found")
        if user_id:
            self._audit.log_action(user_id, "DELETE_TASK_TYPE", {"id": type_id})
