"""
FastAPI dependencies for authentication and authorization.

The identity itself is resolved once per request by the identity middleware
in web.main and parked on ``request.state.identity``.
"""

from typing import Optional

from fastapi import Depends, Request

from teamcal.app import TeamCalApp
from teamcal.auth.identity import require_administrator, require_authenticated
from teamcal.models.user import User


def get_core(request: Request) -> TeamCalApp:
    return request.app.state.core


def get_session_username(request: Request, core: TeamCalApp = Depends(get_core)) -> Optional[str]:
    """Raw session cookie value, whether or not it resolves to an active user"""
    return request.cookies.get(core.settings.session.cookie_name) or None


async def get_identity(request: Request) -> Optional[User]:
    return getattr(request.state, "identity", None)


async def require_auth(identity: Optional[User] = Depends(get_identity)) -> User:
    """401 when no active identity is attached"""
    return require_authenticated(identity)


async def require_admin(identity: Optional[User] = Depends(get_identity)) -> User:
    """401 without identity, 403 unless the role is exactly Administrator"""
    return require_administrator(identity)
