from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import TaskType


class TaskTypeRepository(Protocol):
    def list_all(self) -> Sequence[TaskType]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[TaskType]:
        raise NotImplementedError

    def create(self, name: str) -> int:
        raise NotImplementedError

    def rename(self, type_id: int, name: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, type_id: int) -> bool:
        raise NotImplementedError
