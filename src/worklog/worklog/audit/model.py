from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AuditLogEntry:
    """Read-model for the admin audit trail (joined with the acting user)."""

    log_id: int
    user_id: Optional[int]
    action: str
    details: Optional[str]
    created_at: datetime
    user_name: Optional[str] = None
    js_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.log_id,
            "user_id": self.user_id,
            "action": self.action,
            "details": self.details,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "user_name": self.user_name,
            "js_id": self.js_id,
        }
