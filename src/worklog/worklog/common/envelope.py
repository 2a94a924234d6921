from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import wraps

from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Envelope:
    """Uniform ``{success, ...}`` result plus the HTTP status it maps to."""

    body: dict = field(default_factory=dict)
    status: int = 200

    @property
    def success(self) -> bool:
        return bool(self.body.get("success"))

    @classmethod
    def ok(cls, **payload) -> "Envelope":
        return cls(body={"success": True, **payload}, status=200)

    @classmethod
    def fail(cls, error: str, status: int) -> "Envelope":
        return cls(body={"success": False, "error": error}, status=status)


def operation(label: str):
    """Turn a function returning a payload dict into one returning an Envelope.

    Storage and unexpected errors are logged and reported as
    ``"<label> failed"``; domain errors keep their own message.
    """

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs) -> Envelope:
            try:
                return Envelope.ok(**(fn(*args, **kwargs) or {}))
            except AuthenticationError as e:
                return Envelope.fail(str(e), 401)
            except AuthorizationError as e:
                return Envelope.fail(str(e), 403)
            except ValidationError as e:
                return Envelope.fail(str(e), 400)
            except Exception:
                logger.exception("%s failed", label)
                return Envelope.fail(f"{label} failed", 500)

        return wrapper

    return decorator
