from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AuditLogEntry


class AuditLogRepository(Protocol):
    def insert(self, *, user_id: Optional[int], action: str, details: Optional[str]) -> None:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[AuditLogEntry]:
        raise NotImplementedError
