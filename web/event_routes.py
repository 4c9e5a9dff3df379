"""Calendar event routes"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from teamcal.app import TeamCalApp
from teamcal.models.user import Event, User
from teamcal.utils.exceptions import NotFoundError

from .auth_deps import get_core, require_auth
from .models import EventRequest
from .responses import failure

router = APIRouter(prefix="/events", tags=["events"])


def _event_to_public(event: Event) -> Dict[str, Any]:
    return event.model_dump(mode="json", by_alias=True, exclude_none=True)


@router.get("")
async def list_events(core: TeamCalApp = Depends(get_core)) -> Dict[str, Any]:
    events = await core.events.list_events()
    return {"success": True, "events": [_event_to_public(e) for e in events]}


@router.post("")
async def create_event(
    event_data: EventRequest,
    current_user: User = Depends(require_auth),
    core: TeamCalApp = Depends(get_core),
) -> Dict[str, Any]:
    event = await core.events.create_event(
        current_user,
        event_data.title,
        event_data.start,
        end=event_data.end,
        description=event_data.description,
        all_day=event_data.all_day,
    )
    return {"success": True, "event": _event_to_public(event)}


@router.put("/{event_id}")
async def update_event(
    event_id: str,
    event_data: EventRequest,
    current_user: User = Depends(require_auth),
    core: TeamCalApp = Depends(get_core),
):
    """Owner or Administrator only"""
    changes = event_data.model_dump(exclude_unset=True)
    try:
        event = await core.events.update_event(current_user, event_id, changes)
    except NotFoundError as e:
        return failure(e.message, status.HTTP_404_NOT_FOUND)
    return {"success": True, "event": _event_to_public(event)}


@router.delete("/{event_id}")
async def delete_event(
    event_id: str,
    current_user: User = Depends(require_auth),
    core: TeamCalApp = Depends(get_core),
):
    """Owner or Administrator only"""
    try:
        await core.events.delete_event(current_user, event_id)
    except NotFoundError as e:
        return failure(e.message, status.HTTP_404_NOT_FOUND)
    return {"success": True}
