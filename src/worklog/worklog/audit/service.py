from __future__ import annotations

import json
import logging
from typing import Any, Optional, Sequence

from ..core.constants import DEFAULT_AUDIT_LOG_LIMIT
from .model import AuditLogEntry
from .repository import AuditLogRepository

logger = logging.getLogger(__name__)


class AuditService:
    """Append-only action trail.

    Writing an entry must never break the operation being audited, so
    failures are logged and dropped.
    """

    def __init__(self, logs: AuditLogRepository):
        self._logs = logs

    def log_action(self, user_id: Optional[int], action: str, details: Any = None) -> None:
        try:
            if isinstance(details, (dict, list)):
                details = json.dumps(details, default=str)
            self._logs.insert(user_id=user_id, action=action, details=details)
        except Exception:
            logger.exception("Log action error (user_id=%s action=%s)", user_id, action)

    def list_recent(self, limit: int = DEFAULT_AUDIT_LOG_LIMIT) -> Sequence[AuditLogEntry]:
        return self._logs.list_recent(int(limit))
