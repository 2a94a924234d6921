from __future__ import annotations

from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..audit.service import AuditService
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_TRAINER_PASSWORD, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import User
from .repository import UserRepository


class AuthService:
    """Use case: login and self-service password change."""

    def __init__(self, users: UserRepository, audit: AuditService):
        self._users = users
        self._audit = audit

    def authenticate(self, js_id: str, password: str) -> User:
        user = self._users.get_by_js_id((js_id or "").strip())
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except Exception:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")
        return user

    def change_password(self, user_id: int, new_password: str) -> None:
        require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)
        if not self._users.set_password(
            int(user_id),
            password_hash=generate_password_hash(new_password),
            must_change_password=False,
        ):
            raise ValidationError("User not found")
        self._audit.log_action(int(user_id), "CHANGE_PASSWORD", "User changed their own password")


class UserService:
    """Use case: manage trainer accounts (admin)."""

    def __init__(self, users: UserRepository, audit: AuditService, *, default_password: str = DEFAULT_TRAINER_PASSWORD):
        self._users = users
        self._audit = audit
        self._default_password = default_password

    def list_trainers(self) -> Sequence[User]:
        return self._users.list_by_role(Role.TRAINER)

    def add_trainer(self, *, name: str, js_id: str, admin_id: Optional[int] = None) -> int:
        name = require_non_empty(name, "Name")
        js_id = require_non_empty(js_id, "JS ID")

        if self._users.get_by_js_id(js_id):
            raise ValidationError("JS ID already exists")

        user_id = self._users.create_user(
            name=name,
            js_id=js_id,
            password_hash=generate_password_hash(self._default_password),
            role=Role.TRAINER,
            must_change_password=True,
        )
        if admin_id:
            self._audit.log_action(admin_id, "ADD_TRAINER", {"name": name, "jsId": js_id})
        return user_id

    def update_user(self, *, user_id: int, name: str, js_id: str, admin_id: Optional[int] = None) -> None:
        name = require_non_empty(name, "Name")
        js_id = require_non_empty(js_id, "JS ID")

        existing = self._users.get_by_js_id(js_id)
        if existing and existing.user_id != int(user_id):
            raise ValidationError("JS ID already exists")

        if not self._users.update_profile(int(user_id), name=name, js_id=js_id):
            raise ValidationError("User not found")
        if admin_id:
            self._audit.log_action(admin_id, "UPDATE_TRAINER", {"userId": int(user_id), "name": name, "jsId": js_id})

    def reset_password(self, *, user_id: int, admin_id: Optional[int] = None) -> None:
        if not self._users.set_password(
            int(user_id),
            password_hash=generate_password_hash(self._default_password),
            must_change_password=True,
        ):
            raise ValidationError("User not found")
        if admin_id:
            self._audit.log_action(admin_id, "RESET_PASSWORD", {"userId": int(user_id)})

    def delete_user(self, *, user_id: int, admin_id: Optional[int] = None) -> None:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise ValidationError("User not found")
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deleted")

        self._users.delete_with_tasks(int(user_id))
        if admin_id:
            self._audit.log_action(admin_id, "DELETE_TRAINER", {"userId": int(user_id)})
