"""API request models. Fields are optional so that absent values surface as
``{success: false, message}`` from the services instead of a 422."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class CreateUserRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class UpdateUserRequest(BaseModel):
    username: Optional[str] = None
    role: Optional[str] = None
    password: Optional[str] = None


class UsernameRequest(BaseModel):
    """Body for delete/approve/reject"""
    username: Optional[str] = None


class RoleRequest(BaseModel):
    role: Optional[str] = None


class RenameRoleRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    old_role: Optional[str] = Field(default=None, alias="oldRole")
    new_role: Optional[str] = Field(default=None, alias="newRole")


class EventRequest(BaseModel):
    """Create/update body for calendar events"""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    all_day: Optional[bool] = Field(default=None, alias="allDay")
