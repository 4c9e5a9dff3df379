"""Append-only audit trail of identity-affecting actions."""

from datetime import datetime, timezone
from typing import Optional

from ..models.user import ActivityLogEntry
from ..utils.exceptions import StoreError
from ..utils.logger import get_logger
from .json_store import JsonDocumentStore

logger = get_logger(__name__)


def utcnow_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-01T09:30:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ActivityLogger:
    """Best-effort bookkeeping: a failed append never undoes the caller's mutation."""

    def __init__(self, store: JsonDocumentStore):
        self.store = store

    async def log_activity(self, user: Optional[str], action: str, details: str = "") -> None:
        entry = ActivityLogEntry(
            timestamp=utcnow_iso(),
            user=user,
            action=action,
            details=details,
        )
        try:
            document = await self.store.read()
            document.activity_log.append(entry)
            await self.store.write(document)
        except StoreError as e:
            logger.warning("Failed to append activity log entry", action=action, user=user, error=str(e))
