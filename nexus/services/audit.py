"""
Audit logging service.
Append-only trail of CREATE/UPDATE/DELETE/LOGIN actions.
"""
import uuid
from typing import List, Optional

import structlog

from ..schemas.records import Log, LogAction, UserPublic
from ..storage.gateway import PersistenceGateway, utc_now_iso
from ..storage.provider import StoreError


def create_audit_log(
    gateway: PersistenceGateway,
    action: LogAction,
    details: str,
    actor: UserPublic,
) -> Optional[Log]:
    """
    Append an audit entry for ``actor``.

    The username is copied into the entry and never refreshed afterwards.
    A failed write is logged and swallowed: the primary mutation it
    describes has already been stored and stands on its own.

    Returns:
        The written Log, or None when the write failed
    """
    log = Log(
        id=str(uuid.uuid4()),
        action=action,
        details=details,
        timestamp=utc_now_iso(),
        user_id=actor.id,
        username=actor.username,
    )
    try:
        gateway.add_log(log)
    except StoreError as e:
        structlog.get_logger().warning("audit_log_write_failed", action=action.value, error=str(e))
        return None
    return log


def get_audit_logs(
    gateway: PersistenceGateway,
    q: Optional[str] = None,
    action: Optional[LogAction] = None,
    limit: Optional[int] = None,
) -> List[Log]:
    """
    Most recent audit logs, filtered in memory.

    Args:
        q: Case-insensitive substring over username and details
        action: Exact action match
        limit: Read cap (defaults to the configured 100)
    """
    logs = gateway.get_logs(limit)
    if q:
        term = q.lower()
        logs = [l for l in logs if term in l.username.lower() or term in l.details.lower()]
    if action:
        logs = [l for l in logs if l.action == action]
    return logs
