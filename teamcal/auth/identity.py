"""
Identity resolution and access guards.

A session is nothing more than the username carried in the session cookie.
It resolves to a user only while that user exists with status ``active``;
there is no server-side session table and no expiry beyond the cookie's own
lifetime.
"""

from typing import Optional

from ..models.user import ADMINISTRATOR_ROLE, User, UserStatus
from ..services.json_store import JsonDocumentStore
from ..utils.exceptions import AuthenticationRequired, PermissionDenied


class IdentityResolver:
    """Map a session cookie value to an active user"""

    def __init__(self, store: JsonDocumentStore):
        self.store = store

    async def resolve(self, session_username: Optional[str]) -> Optional[User]:
        """Return the active user named by the cookie, or None.

        Always reloads the store, even when no cookie is present.
        """
        document = await self.store.read()
        if not session_username:
            return None
        return next(
            (
                u
                for u in document.users
                if u.username == session_username and u.status == UserStatus.ACTIVE
            ),
            None,
        )


def require_authenticated(identity: Optional[User]) -> User:
    if identity is None:
        raise AuthenticationRequired()
    return identity


def require_administrator(identity: Optional[User]) -> User:
    """Plain role-name equality; there is no role hierarchy."""
    user = require_authenticated(identity)
    if user.role != ADMINISTRATOR_ROLE:
        raise PermissionDenied()
    return user
