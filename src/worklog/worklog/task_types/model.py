from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TaskType:
    type_id: int
    name: str

    def to_dict(self) -> dict:
        return {"id": self.type_id, "name": self.name}
