"""Named roles: list, create, rename (cascading onto users) and delete."""

from typing import List, Optional

from ..auth.identity import require_administrator
from ..models.user import DEFAULT_ROLES, User
from ..utils.exceptions import (
    DuplicateRoleError,
    MissingFieldError,
    ProtectedRoleError,
    RoleInUseError,
    RoleNotFoundError,
)
from ..utils.logger import get_logger
from .activity_log import ActivityLogger
from .json_store import JsonDocumentStore

logger = get_logger(__name__)


class RoleRegistry:
    """Role-name collection stored alongside the users"""

    def __init__(self, store: JsonDocumentStore, activity: ActivityLogger):
        self.store = store
        self.activity = activity

    async def list_roles(self) -> List[str]:
        document = await self.store.read()
        return list(document.roles)

    async def create_role(self, identity: Optional[User], name: Optional[str]) -> None:
        admin = require_administrator(identity)
        document = await self.store.read()

        if not name:
            raise MissingFieldError("Role name required")
        if name in document.roles:
            raise DuplicateRoleError()

        document.roles.append(name)
        await self.store.write(document)
        await self.activity.log_activity(admin.username, "Created role", name)

    async def rename_role(
        self,
        identity: Optional[User],
        old_name: Optional[str],
        new_name: Optional[str],
    ) -> None:
        """Rename a role and every user holding it, in a single store write.

        The two defaults are not protected here; renaming "Administrator"
        moves every administrator onto the new name.
        """
        admin = require_administrator(identity)
        document = await self.store.read()

        if not old_name or not new_name:
            raise MissingFieldError()
        if old_name not in document.roles:
            raise RoleNotFoundError()
        if new_name in document.roles:
            raise DuplicateRoleError()

        document.roles = [new_name if r == old_name else r for r in document.roles]
        moved = 0
        for user in document.users:
            if user.role == old_name:
                user.role = new_name
                moved += 1
        await self.store.write(document)

        await self.activity.log_activity(admin.username, "Updated role", f"{old_name} → {new_name}")
        logger.info("Role renamed", old_name=old_name, new_name=new_name, users_moved=moved)

    async def delete_role(self, identity: Optional[User], name: Optional[str]) -> None:
        """Defaults can never go; a role still held by a user cannot go either."""
        admin = require_administrator(identity)
        document = await self.store.read()

        if name in DEFAULT_ROLES:
            raise ProtectedRoleError()
        if any(u.role == name for u in document.users):
            raise RoleInUseError()

        document.roles = [r for r in document.roles if r != name]
        await self.store.write(document)
        await self.activity.log_activity(admin.username, "Deleted role", name or "")
