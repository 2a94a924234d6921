from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for users.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_js_id(self, js_id: str) -> Optional[User]:
        """Case-insensitive lookup by login handle."""
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        name: str,
        js_id: str,
        password_hash: str,
        role: Role,
        must_change_password: bool,
    ) -> int:
        raise NotImplementedError

    def update_profile(self, user_id: int, *, name: str, js_id: str) -> bool:
        raise NotImplementedError

    def set_password(self, user_id: int, *, password_hash: str, must_change_password: bool) -> bool:
        raise NotImplementedError

    def delete_with_tasks(self, user_id: int) -> bool:
        """Delete the user's tasks and then the user, in one transaction."""
        raise NotImplementedError
