from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..audit.service import AuditService
from ..common.validators import require_id, require_non_empty
from ..core.constants import ADMIN_ANNOUNCEMENTS_LIMIT, USER_ANNOUNCEMENTS_LIMIT
from .model import Announcement
from .repository import AnnouncementRepository

ALL_RECIPIENTS = "all"


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository, audit: AuditService):
        self._announcements = announcements
        self._audit = audit

    def create(
        self,
        *,
        message: str,
        is_urgent: bool = False,
        recipient_ids: Iterable[int | str] = (),
        admin_id: Optional[int] = None,
    ) -> int:
        message = require_non_empty(message, "Message")
        recipients = list(recipient_ids or [])
        is_global = not recipients or ALL_RECIPIENTS in [str(r).lower() for r in recipients]
        user_ids = [] if is_global else sorted({require_id(r, "Recipient") for r in recipients})

        announcement_id = self._announcements.create(
            message=message,
            is_urgent=bool(is_urgent),
            is_global=is_global,
            recipient_ids=user_ids,
        )
        if admin_id:
            self._audit.log_action(
                admin_id,
                "CREATE_ANNOUNCEMENT",
                {"id": announcement_id, "is_global": is_global, "recipients": user_ids},
            )
        return announcement_id

    def list_for(self, user_id: Optional[int] = None) -> Sequence[Announcement]:
        """Latest announcements visible to a trainer, or the admin history."""
        if user_id:
            return self._announcements.list_for_user(int(user_id), limit=USER_ANNOUNCEMENTS_LIMIT)
        return self._announcements.list_recent(limit=ADMIN_ANNOUNCEMENTS_LIMIT)
