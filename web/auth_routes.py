"""Login, logout and session status routes"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from teamcal.app import TeamCalApp
from teamcal.models.user import User

from .auth_deps import get_core, get_identity, get_session_username
from .models import LoginRequest
from .responses import clear_session_cookie, set_session_cookie

router = APIRouter(tags=["auth"])


@router.post("/login")
async def login(login_data: LoginRequest, core: TeamCalApp = Depends(get_core)):
    """Verify credentials and set the session cookie (24 hours, httpOnly)"""
    user = await core.accounts.login(login_data.username, login_data.password)

    response = JSONResponse({
        "success": True,
        "message": "Login successful",
        "user": user.public(),
    })
    set_session_cookie(response, core.settings, user.username)
    return response


@router.post("/logout")
async def logout(
    core: TeamCalApp = Depends(get_core),
    session_username: Optional[str] = Depends(get_session_username),
):
    """Clear the cookie unconditionally"""
    await core.accounts.logout(session_username)
    response = JSONResponse({"success": True, "message": "Logged out"})
    clear_session_cookie(response, core.settings)
    return response


@router.get("/check-auth")
async def check_auth(identity: Optional[User] = Depends(get_identity)) -> Dict[str, Any]:
    if identity:
        return {"loggedIn": True, "user": identity.public()}
    return {"loggedIn": False}
