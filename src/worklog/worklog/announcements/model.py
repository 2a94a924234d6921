from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Announcement:
    announcement_id: int
    message: str
    is_urgent: bool
    is_global: bool
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.announcement_id,
            "message": self.message,
            "is_urgent": 1 if self.is_urgent else 0,
            "is_global": 1 if self.is_global else 0,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
