"""User management and role registry routes"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status

from teamcal.app import TeamCalApp
from teamcal.models.user import User, UserStatus
from teamcal.utils.exceptions import NotFoundError

from .auth_deps import get_core, get_session_username, require_admin
from .models import (
    CreateUserRequest,
    RenameRoleRequest,
    RoleRequest,
    UpdateUserRequest,
    UsernameRequest,
)
from .responses import failure

router = APIRouter(tags=["users"])


@router.post("/create-user")
async def create_user(
    user_data: CreateUserRequest,
    core: TeamCalApp = Depends(get_core),
    session_username: Optional[str] = Depends(get_session_username),
) -> Dict[str, Any]:
    """Admin-created accounts are active; everyone else's request waits for approval"""
    user = await core.accounts.register(
        user_data.username,
        user_data.password,
        user_data.role,
        session_username=session_username,
    )
    if user.status == UserStatus.ACTIVE:
        message = "User created successfully."
    else:
        message = "Account request submitted. Awaiting admin approval."
    return {"success": True, "message": message}


@router.get("/users")
async def list_users(
    admin: User = Depends(require_admin),
    core: TeamCalApp = Depends(get_core),
) -> Dict[str, Any]:
    users = await core.accounts.list_users(admin)
    return {"success": True, "users": users}


# /update-user, /delete-user and /reject-user have no admin guard, unlike /approve-user.
# The acting user is only the raw cookie value, recorded in the activity log.
@router.post("/update-user")
async def update_user(
    user_data: UpdateUserRequest,
    core: TeamCalApp = Depends(get_core),
    session_username: Optional[str] = Depends(get_session_username),
) -> Dict[str, Any]:
    await core.accounts.update_user(
        user_data.username,
        user_data.role,
        password=user_data.password,
        actor=session_username,
    )
    return {"success": True, "message": "User updated"}


@router.post("/delete-user")
async def delete_user(
    body: UsernameRequest,
    core: TeamCalApp = Depends(get_core),
    session_username: Optional[str] = Depends(get_session_username),
) -> Dict[str, Any]:
    await core.accounts.delete_user(body.username, actor=session_username)
    return {"success": True}


@router.post("/approve-user")
async def approve_user(
    body: UsernameRequest,
    admin: User = Depends(require_admin),
    core: TeamCalApp = Depends(get_core),
):
    try:
        await core.accounts.approve_user(admin, body.username)
    except NotFoundError as e:
        return failure(e.message, status.HTTP_404_NOT_FOUND)
    return {"success": True}


@router.post("/reject-user")
async def reject_user(
    body: UsernameRequest,
    core: TeamCalApp = Depends(get_core),
    session_username: Optional[str] = Depends(get_session_username),
):
    try:
        await core.accounts.reject_user(body.username, actor=session_username)
    except NotFoundError as e:
        return failure(e.message, status.HTTP_404_NOT_FOUND)
    return {"success": True}


@router.get("/roles")
async def list_roles(core: TeamCalApp = Depends(get_core)) -> Dict[str, Any]:
    return {"roles": await core.roles.list_roles()}


@router.post("/create-role")
async def create_role(
    body: RoleRequest,
    admin: User = Depends(require_admin),
    core: TeamCalApp = Depends(get_core),
) -> Dict[str, Any]:
    await core.roles.create_role(admin, body.role)
    return {"success": True}


@router.post("/update-role")
async def update_role(
    body: RenameRoleRequest,
    admin: User = Depends(require_admin),
    core: TeamCalApp = Depends(get_core),
) -> Dict[str, Any]:
    await core.roles.rename_role(admin, body.old_role, body.new_role)
    return {"success": True}


@router.post("/delete-role")
async def delete_role(
    body: RoleRequest,
    admin: User = Depends(require_admin),
    core: TeamCalApp = Depends(get_core),
) -> Dict[str, Any]:
    await core.roles.delete_role(admin, body.role)
    return {"success": True}
