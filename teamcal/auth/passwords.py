"""
Credential verifier: bcrypt hashing with a fixed work factor.

Hashing and verification are deliberately slow; both run in the threadpool
so they suspend the calling request instead of blocking the event loop.
"""

import bcrypt
from fastapi.concurrency import run_in_threadpool

DEFAULT_ROUNDS = 10


class CredentialVerifier:
    """Create and check bcrypt password hashes"""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash_password_sync(self, password: str) -> str:
        """Hash a password using bcrypt"""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password_sync(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash"""
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))

    async def hash(self, password: str) -> str:
        return await run_in_threadpool(self.hash_password_sync, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        return await run_in_threadpool(self.verify_password_sync, password, password_hash)
