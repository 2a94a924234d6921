from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a trainer or admin account.

    Plain data object; persistence lives in the repositories.
    """

    user_id: int
    name: str
    js_id: str
    password_hash: str
    role: Role
    must_change_password: bool = False
    created_at: Optional[datetime] = None

    def to_public(self) -> dict:
        """Serializable view without the password hash."""
        return {
            "id": self.user_id,
            "name": self.name,
            "js_id": self.js_id,
            "role": self.role.value,
            "must_change_password": 1 if self.must_change_password else 0,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
