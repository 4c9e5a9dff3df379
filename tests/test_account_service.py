"""Tests for the account lifecycle: register, login, approve, update, remove"""

import pytest
import pytest_asyncio

from teamcal.models.user import UserStatus
from teamcal.utils.exceptions import (
    AccountNotActiveError,
    AuthenticationRequired,
    DuplicateUsernameError,
    InvalidCredentialError,
    MissingFieldError,
    PermissionDenied,
    UserNotFoundError,
)


@pytest_asyncio.fixture
async def seeded(core):
    await core.initialize()
    return core


async def _admin(core):
    return await core.identity.resolve("admin")


async def _actions(core):
    document = await core.store.read()
    return [(e.user, e.action, e.details) for e in document.activity_log]


@pytest.mark.asyncio
async def test_seed_creates_single_active_administrator(seeded):
    document = await seeded.store.read()
    assert len(document.users) == 1
    admin = document.users[0]
    assert admin.username == "admin"
    assert admin.role == "Administrator"
    assert admin.status == UserStatus.ACTIVE
    assert admin.password != "admin"

    # Idempotent
    assert await seeded.accounts.ensure_default_admin("admin", "other") is False


@pytest.mark.asyncio
async def test_admin_created_account_can_login_immediately(seeded):
    user = await seeded.accounts.register("carol", "pw", "User", session_username="admin")
    assert user.status == UserStatus.ACTIVE
    assert user.created_by == "admin"

    logged_in = await seeded.accounts.login("carol", "pw")
    assert logged_in.public() == {"username": "carol", "role": "User"}
    assert ("admin", "Created user", "Username: carol, Role: User") in await _actions(seeded)


@pytest.mark.asyncio
async def test_anonymous_registration_is_pending_until_approved(seeded):
    user = await seeded.accounts.register("alice", "pw", "User")
    assert user.status == UserStatus.PENDING
    assert user.created_by == "Public"
    assert ("Public", "Account requested", "Username: alice, Role: User") in await _actions(seeded)

    with pytest.raises(AccountNotActiveError):
        await seeded.accounts.login("alice", "pw")

    await seeded.accounts.approve_user(await _admin(seeded), "alice")
    user = await seeded.accounts.login("alice", "pw")
    assert user.public() == {"username": "alice", "role": "User"}


@pytest.mark.asyncio
async def test_non_admin_creator_yields_pending(seeded):
    await seeded.accounts.register("carol", "pw", "User", session_username="admin")
    user = await seeded.accounts.register("dave", "pw", "User", session_username="carol")
    assert user.status == UserStatus.PENDING
    assert user.created_by == "carol"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "username,password,role",
    [(None, "pw", "User"), ("x", None, "User"), ("x", "pw", None), ("", "pw", "User")],
)
async def test_register_requires_all_fields(seeded, username, password, role):
    with pytest.raises(MissingFieldError, match="Missing fields"):
        await seeded.accounts.register(username, password, role)


@pytest.mark.asyncio
async def test_duplicate_username_rejected(seeded):
    await seeded.accounts.register("alice", "pw", "User")
    with pytest.raises(DuplicateUsernameError, match="Username already exists"):
        await seeded.accounts.register("alice", "other", "User", session_username="admin")


@pytest.mark.asyncio
async def test_login_failures(seeded):
    with pytest.raises(UserNotFoundError, match="User not found"):
        await seeded.accounts.login("nobody", "pw")
    with pytest.raises(InvalidCredentialError, match="Invalid password"):
        await seeded.accounts.login("admin", "wrong")


@pytest.mark.asyncio
async def test_failed_login_is_not_logged(seeded):
    with pytest.raises(InvalidCredentialError):
        await seeded.accounts.login("admin", "wrong")
    assert await _actions(seeded) == []

    await seeded.accounts.login("admin", "admin")
    assert await _actions(seeded) == [("admin", "Login", "User logged in successfully")]


@pytest.mark.asyncio
async def test_logout_without_session_logs_nothing(seeded):
    await seeded.accounts.logout(None)
    assert await _actions(seeded) == []

    await seeded.accounts.logout("admin")
    assert await _actions(seeded) == [("admin", "Logout", "User logged out")]


@pytest.mark.asyncio
async def test_list_users_projects_out_password(seeded):
    await seeded.accounts.register("alice", "pw", "User")
    users = await seeded.accounts.list_users(await _admin(seeded))
    assert users == [
        {"username": "admin", "role": "Administrator", "status": "active"},
        {"username": "alice", "role": "User", "status": "pending"},
    ]


@pytest.mark.asyncio
async def test_list_users_requires_administrator(seeded):
    await seeded.accounts.register("carol", "pw", "User", session_username="admin")
    with pytest.raises(AuthenticationRequired):
        await seeded.accounts.list_users(None)
    with pytest.raises(PermissionDenied):
        await seeded.accounts.list_users(await seeded.identity.resolve("carol"))


@pytest.mark.asyncio
async def test_update_user_role_and_password(seeded):
    await seeded.accounts.register("carol", "pw", "User", session_username="admin")

    await seeded.accounts.update_user("carol", "Editor", actor="admin")
    user = await seeded.accounts.login("carol", "pw")
    assert user.role == "Editor"

    await seeded.accounts.update_user("carol", "Editor", password="new-pw", actor="admin")
    with pytest.raises(InvalidCredentialError):
        await seeded.accounts.login("carol", "pw")
    await seeded.accounts.login("carol", "new-pw")

    actions = await _actions(seeded)
    assert ("admin", "Updated user", "Username: carol, New role: Editor") in actions
    assert ("admin", "Updated user", "Username: carol, New role: Editor, password changed") in actions


@pytest.mark.asyncio
async def test_update_user_validation(seeded):
    with pytest.raises(MissingFieldError):
        await seeded.accounts.update_user("admin", None)
    with pytest.raises(UserNotFoundError):
        await seeded.accounts.update_user("ghost", "User")


@pytest.mark.asyncio
async def test_approve_requires_administrator(seeded):
    await seeded.accounts.register("alice", "pw", "User")
    await seeded.accounts.register("carol", "pw", "User", session_username="admin")

    with pytest.raises(AuthenticationRequired):
        await seeded.accounts.approve_user(None, "alice")
    with pytest.raises(PermissionDenied):
        await seeded.accounts.approve_user(await seeded.identity.resolve("carol"), "alice")
    with pytest.raises(UserNotFoundError):
        await seeded.accounts.approve_user(await _admin(seeded), "ghost")


@pytest.mark.asyncio
async def test_reject_deletes_the_account(seeded):
    await seeded.accounts.register("alice", "pw", "User")
    await seeded.accounts.reject_user("alice", actor="admin")

    document = await seeded.store.read()
    assert document.find_user("alice") is None
    assert ("admin", "Rejected user", "Username: alice") in await _actions(seeded)

    with pytest.raises(UserNotFoundError):
        await seeded.accounts.reject_user("alice")


@pytest.mark.asyncio
async def test_delete_is_a_hard_delete(seeded):
    await seeded.accounts.register("carol", "pw", "User", session_username="admin")
    await seeded.accounts.delete_user("carol", actor=None)

    with pytest.raises(UserNotFoundError):
        await seeded.accounts.login("carol", "pw")
    with pytest.raises(UserNotFoundError):
        await seeded.accounts.delete_user("carol")
    assert (None, "Deleted user", "Username: carol") in await _actions(seeded)


@pytest.mark.asyncio
async def test_deleted_user_loses_identity(seeded):
    await seeded.accounts.register("carol", "pw", "User", session_username="admin")
    assert await seeded.identity.resolve("carol") is not None
    await seeded.accounts.delete_user("carol")
    assert await seeded.identity.resolve("carol") is None


def _fail_writes_after(store, monkeypatch, allowed: int):
    """Let `allowed` writes through, then fail every later one with a full disk."""
    original = store._atomic_write
    calls = []

    def flaky_write(payload):
        calls.append(payload)
        if len(calls) > allowed:
            raise OSError(28, "No space left on device")
        original(payload)

    monkeypatch.setattr(store, "_atomic_write", flaky_write)
    return calls


@pytest.mark.asyncio
async def test_activity_log_failure_does_not_fail_approval(seeded, monkeypatch):
    await seeded.accounts.register("alice", "pw", "User")
    admin = await _admin(seeded)

    calls = _fail_writes_after(seeded.store, monkeypatch, allowed=1)
    user = await seeded.accounts.approve_user(admin, "alice")

    assert user.status == UserStatus.ACTIVE
    assert len(calls) == 2
    document = await seeded.store.read()
    assert document.find_user("alice").status == UserStatus.ACTIVE
    assert not any(e.action == "Approved user" for e in document.activity_log)
