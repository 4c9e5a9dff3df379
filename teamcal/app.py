"""Application container: builds the core services around one shared store"""

from pathlib import Path
from typing import Optional

from .auth.identity import IdentityResolver
from .auth.passwords import CredentialVerifier
from .services.account_service import AccountService
from .services.activity_log import ActivityLogger
from .services.event_service import EventService
from .services.json_store import JsonDocumentStore
from .services.role_registry import RoleRegistry
from .utils.config import Settings, config_manager
from .utils.logger import get_logger

logger = get_logger(__name__)


class TeamCalApp:
    """Wires store, credential verifier and activity logger into the services"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or config_manager.settings

        self.store = JsonDocumentStore(Path(self.settings.store.path))
        self.verifier = CredentialVerifier(rounds=self.settings.security.bcrypt_rounds)
        self.activity = ActivityLogger(self.store)

        self.identity = IdentityResolver(self.store)
        self.accounts = AccountService(self.store, self.verifier, self.activity)
        self.roles = RoleRegistry(self.store, self.activity)
        self.events = EventService(self.store, self.activity)

    async def initialize(self) -> None:
        """Seed the default administrator on an empty document"""
        logger.info(
            "Initializing TeamCal",
            app_name=self.settings.app.name,
            version=self.settings.app.version,
            environment=self.settings.app.environment,
            store=str(self.store.path),
        )
        seed = self.settings.seed
        if seed.enabled:
            await self.accounts.ensure_default_admin(seed.admin_username, seed.admin_password)
