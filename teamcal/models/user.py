"""Document models persisted in the shared JSON store"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ADMINISTRATOR_ROLE = "Administrator"
USER_ROLE = "User"
DEFAULT_ROLES = (ADMINISTRATOR_ROLE, USER_ROLE)


class UserStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"


class _Document(BaseModel):
    """camelCase on disk, snake_case in Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class User(_Document):
    """User record. ``password`` is a bcrypt hash and never leaves the core."""
    username: str
    password: str
    role: str
    status: UserStatus = UserStatus.PENDING
    created_by: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    @property
    def is_admin(self) -> bool:
        return self.role == ADMINISTRATOR_ROLE

    def public(self) -> dict:
        return {"username": self.username, "role": self.role}


class Event(_Document):
    """Calendar event owned by ``user_id`` (a username)"""
    id: str
    title: str
    start: str
    end: str
    description: str = ""
    all_day: bool = True
    user_id: str
    created_at: str
    updated_at: Optional[str] = None


class ActivityLogEntry(_Document):
    timestamp: str
    user: Optional[str] = None
    action: str
    details: str = ""


class StoreDocument(_Document):
    """The whole persisted dataset; read and written as one unit"""
    users: List[User] = Field(default_factory=list)
    roles: List[str] = Field(default_factory=lambda: list(DEFAULT_ROLES))
    events: List[Event] = Field(default_factory=list)
    activity_log: List[ActivityLogEntry] = Field(default_factory=list)

    def find_user(self, username: Optional[str]) -> Optional[User]:
        if not username:
            return None
        return next((u for u in self.users if u.username == username), None)

    def find_event(self, event_id: str) -> Optional[Event]:
        return next((e for e in self.events if e.id == event_id), None)
