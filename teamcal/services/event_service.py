"""Shared calendar events. Only the owner or an Administrator may change an event."""

import uuid
from typing import Any, Dict, List, Optional

from ..auth.identity import require_authenticated
from ..models.user import Event, User
from ..utils.exceptions import EventNotFoundError, MissingFieldError, PermissionDenied
from .activity_log import ActivityLogger, utcnow_iso
from .json_store import JsonDocumentStore


class EventService:
    def __init__(self, store: JsonDocumentStore, activity: ActivityLogger):
        self.store = store
        self.activity = activity

    async def list_events(self) -> List[Event]:
        document = await self.store.read()
        return list(document.events)

    async def create_event(
        self,
        identity: Optional[User],
        title: Optional[str],
        start: Optional[str],
        end: Optional[str] = None,
        description: Optional[str] = None,
        all_day: Optional[bool] = None,
    ) -> Event:
        user = require_authenticated(identity)
        if not title or not start:
            raise MissingFieldError("Title and start date required")

        document = await self.store.read()
        event = Event(
            id=uuid.uuid4().hex,
            title=title,
            start=start,
            end=end or start,
            description=description or "",
            all_day=True if all_day is None else all_day,
            user_id=user.username,
            created_at=utcnow_iso(),
        )
        document.events.append(event)
        await self.store.write(document)

        await self.activity.log_activity(user.username, "Created event", title)
        return event

    async def update_event(self, identity: Optional[User], event_id: str, changes: Dict[str, Any]) -> Event:
        """Apply a partial update.

        Empty title/start/end are ignored; description and all_day are applied
        whenever they are not None.
        """
        user = require_authenticated(identity)
        document = await self.store.read()
        event = document.find_event(event_id)
        if not event:
            raise EventNotFoundError()
        self._check_owner(user, event)

        for field in ("title", "start", "end"):
            if changes.get(field):
                setattr(event, field, changes[field])
        for field in ("description", "all_day"):
            if changes.get(field) is not None:
                setattr(event, field, changes[field])
        event.updated_at = utcnow_iso()
        await self.store.write(document)

        await self.activity.log_activity(user.username, "Updated event", changes.get("title") or event.title)
        return event

    async def delete_event(self, identity: Optional[User], event_id: str) -> None:
        user = require_authenticated(identity)
        document = await self.store.read()
        event = document.find_event(event_id)
        if not event:
            raise EventNotFoundError()
        self._check_owner(user, event)

        document.events = [e for e in document.events if e.id != event_id]
        await self.store.write(document)

        await self.activity.log_activity(user.username, "Deleted event", event.title)

    @staticmethod
    def _check_owner(user: User, event: Event) -> None:
        if event.user_id != user.username and not user.is_admin:
            raise PermissionDenied("Unauthorized")
