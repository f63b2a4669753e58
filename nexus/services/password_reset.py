"""
Password recovery.

Reset codes are six-digit numbers held in process memory and shown directly
to the requester instead of being mailed. The admin hint reveals the
bootstrap credentials to whoever answers the security question.
"""
import random
import threading
import time
from dataclasses import dataclass
from typing import Dict, Optional

import structlog
from fastapi import HTTPException

from ..config import Settings, settings as default_settings
from ..schemas.records import SUPERADMIN_USERNAME, User
from ..storage.gateway import PersistenceGateway
from .validation import bad_request, check_password


def generate_reset_code() -> str:
    return str(random.randint(100000, 999999))


@dataclass
class PendingReset:
    code: str
    expires_at: float


class ResetCodeStore:
    def __init__(self, ttl_seconds: int):
        self.ttl_seconds = ttl_seconds
        self._pending: Dict[str, PendingReset] = {}
        self._lock = threading.Lock()

    def issue(self, email: str) -> PendingReset:
        pending = PendingReset(code=generate_reset_code(), expires_at=time.monotonic() + self.ttl_seconds)
        with self._lock:
            self._pending[email.lower()] = pending
        return pending

    def matches(self, email: str, code: str) -> bool:
        with self._lock:
            pending = self._pending.get(email.lower())
            if pending is None:
                return False
            if pending.expires_at < time.monotonic():
                del self._pending[email.lower()]
                return False
            return pending.code == code

    def discard(self, email: str) -> None:
        with self._lock:
            self._pending.pop(email.lower(), None)


def _find_by_email(gateway: PersistenceGateway, email: str) -> Optional[User]:
    wanted = email.lower()
    return next((u for u in gateway.get_users() if u.email and u.email.lower() == wanted), None)


def request_reset(gateway: PersistenceGateway, codes: ResetCodeStore, email: str) -> PendingReset:
    if _find_by_email(gateway, email) is None:
        raise HTTPException(status_code=404, detail="No user found with that email address.")
    pending = codes.issue(email)
    structlog.get_logger().info("password_reset_code_issued", email=email.lower())
    return pending


def reset_password(
    gateway: PersistenceGateway,
    codes: ResetCodeStore,
    email: str,
    code: str,
    new_password: str,
    confirm_password: str,
) -> User:
    if not codes.matches(email, code):
        raise bad_request("The code entered is incorrect.")
    if new_password != confirm_password:
        raise bad_request("Passwords do not match.")
    check_password(new_password)

    user = _find_by_email(gateway, email)
    if user is None:
        raise HTTPException(status_code=404, detail="No user found with that email address.")
    updated = user.model_copy(update={"password": new_password})
    gateway.update_user(updated)
    codes.discard(email)
    structlog.get_logger().info("password_reset_completed", user_id=user.id)
    return updated


def normalize_answer(answer: str) -> str:
    return "".join(answer.lower().split())


def reveal_admin_credentials(answer: str, config: Optional[Settings] = None) -> dict:
    config = config or default_settings
    if not config.admin_hint_enabled:
        raise HTTPException(status_code=404, detail="Not found")
    if normalize_answer(answer) != normalize_answer(config.admin_hint_answer):
        raise bad_request("Wrong answer")
    return {
        "username": SUPERADMIN_USERNAME,
        "password": config.bootstrap_admin_password,
        "visible_for_seconds": config.admin_hint_visible_seconds,
    }
