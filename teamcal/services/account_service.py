"""
Account lifecycle: login/logout, registration, approval, update and removal.

Every mutating operation runs its own cycle against the shared store:
reload -> validate -> mutate the snapshot -> persist -> append to the
activity log. Nothing is held across the cycle, so overlapping requests
resolve last-write-wins. In particular the duplicate-username check is a
pre-check, not a reservation: two registrations of the same name that both
reload before either persists can both succeed.
"""

from typing import Dict, List, Optional

from ..auth.identity import require_administrator
from ..auth.passwords import CredentialVerifier
from ..models.user import ADMINISTRATOR_ROLE, User, UserStatus
from ..utils.exceptions import (
    AccountNotActiveError,
    DuplicateUsernameError,
    InvalidCredentialError,
    MissingFieldError,
    UserNotFoundError,
)
from ..utils.logger import get_logger
from .activity_log import ActivityLogger
from .json_store import JsonDocumentStore

logger = get_logger(__name__)

PUBLIC_CREATOR = "Public"


class AccountService:
    """Account lifecycle manager over the shared document store"""

    def __init__(
        self,
        store: JsonDocumentStore,
        verifier: CredentialVerifier,
        activity: ActivityLogger,
    ):
        self.store = store
        self.verifier = verifier
        self.activity = activity

    async def login(self, username: Optional[str], password: Optional[str]) -> User:
        """Check credentials for an active account. Failed attempts are not logged."""
        document = await self.store.read()
        user = document.find_user(username)
        if not user:
            raise UserNotFoundError()
        if user.status != UserStatus.ACTIVE:
            raise AccountNotActiveError()
        if not await self.verifier.verify(password or "", user.password):
            raise InvalidCredentialError()

        await self.activity.log_activity(user.username, "Login", "User logged in successfully")
        logger.info("User logged in", username=user.username)
        return user

    async def logout(self, session_username: Optional[str]) -> None:
        """Never fails; only a present cookie produces a log entry."""
        if session_username:
            await self.activity.log_activity(session_username, "Logout", "User logged out")

    async def register(
        self,
        username: Optional[str],
        password: Optional[str],
        role: Optional[str],
        session_username: Optional[str] = None,
    ) -> User:
        """Create an account.

        Accounts created by an active Administrator are active straight away;
        everything else (self-registration, non-admin callers) is pending until
        approved.
        """
        created_by = session_username or PUBLIC_CREATOR
        document = await self.store.read()

        if not username or not password or not role:
            raise MissingFieldError()
        if document.find_user(username):
            raise DuplicateUsernameError()

        creator = document.find_user(created_by)
        if creator and creator.is_active and creator.is_admin:
            status = UserStatus.ACTIVE
        else:
            status = UserStatus.PENDING

        user = User(
            username=username,
            password=await self.verifier.hash(password),
            role=role,
            status=status,
            created_by=created_by,
        )
        document.users.append(user)
        await self.store.write(document)

        action = "Created user" if status == UserStatus.ACTIVE else "Account requested"
        await self.activity.log_activity(created_by, action, f"Username: {username}, Role: {role}")
        logger.info("Account created", username=username, role=role, status=status.value, created_by=created_by)
        return user

    async def list_users(self, identity: Optional[User]) -> List[Dict[str, str]]:
        require_administrator(identity)
        document = await self.store.read()
        return [
            {"username": u.username, "role": u.role, "status": u.status.value}
            for u in document.users
        ]

    async def update_user(
        self,
        username: Optional[str],
        role: Optional[str],
        password: Optional[str] = None,
        actor: Optional[str] = None,
    ) -> User:
        """Set the role unconditionally and replace the password when one is given."""
        document = await self.store.read()

        if not username or not role:
            raise MissingFieldError()
        user = document.find_user(username)
        if not user:
            logger.warning("Update for unknown user", username=username, actor=actor)
            raise UserNotFoundError()

        user.role = role
        if password:
            user.password = await self.verifier.hash(password)
        await self.store.write(document)

        details = f"Username: {username}, New role: {role}"
        if password:
            details += ", password changed"
        await self.activity.log_activity(actor, "Updated user", details)
        return user

    async def delete_user(self, username: Optional[str], actor: Optional[str] = None) -> None:
        await self._remove_user(username, actor, "Deleted user")

    async def reject_user(self, username: Optional[str], actor: Optional[str] = None) -> None:
        """Rejection removes the account outright; no rejected state is kept."""
        await self._remove_user(username, actor, "Rejected user")

    async def approve_user(self, identity: Optional[User], username: Optional[str]) -> User:
        admin = require_administrator(identity)
        document = await self.store.read()
        user = document.find_user(username)
        if not user:
            raise UserNotFoundError()

        user.status = UserStatus.ACTIVE
        await self.store.write(document)

        await self.activity.log_activity(admin.username, "Approved user", f"Username: {username}")
        logger.info("User approved", username=username, actor=admin.username)
        return user

    async def ensure_default_admin(self, username: str, password: str) -> bool:
        """Seed an active Administrator when the document has no users at all."""
        document = await self.store.read()
        if document.users:
            return False

        document.users.append(
            User(
                username=username,
                password=await self.verifier.hash(password),
                role=ADMINISTRATOR_ROLE,
                status=UserStatus.ACTIVE,
                created_by="System",
            )
        )
        await self.store.write(document)
        logger.info("Seeded default administrator", username=username)
        return True

    async def _remove_user(self, username: Optional[str], actor: Optional[str], action: str) -> None:
        document = await self.store.read()
        user = document.find_user(username)
        if not user:
            raise UserNotFoundError()

        document.users.remove(user)
        await self.store.write(document)

        await self.activity.log_activity(actor, action, f"Username: {username}")
        logger.info(action, username=username, actor=actor)
