from __future__ import annotations

from typing import Protocol, Sequence

from .model import Announcement


class AnnouncementRepository(Protocol):
    def create(self, *, message: str, is_urgent: bool, is_global: bool, recipient_ids: Sequence[int]) -> int:
        """Insert the announcement and its recipients atomically."""
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, limit: int) -> Sequence[Announcement]:
        """Global announcements plus those addressed to ``user_id``."""
        raise NotImplementedError

    def list_recent(self, *, limit: int) -> Sequence[Announcement]:
        raise NotImplementedError
