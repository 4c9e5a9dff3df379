"""Custom exceptions for TeamCal"""

from typing import Optional


class TeamCalError(Exception):
    """Base exception for TeamCal"""

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    default_message = "Request failed"


class MissingFieldError(TeamCalError):
    """A required request field was absent or empty"""
    default_message = "Missing fields"


class NotFoundError(TeamCalError):
    """Referenced record does not exist"""
    default_message = "Not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class RoleNotFoundError(NotFoundError):
    default_message = "Old role not found"


class EventNotFoundError(NotFoundError):
    default_message = "Event not found"


class DuplicateUsernameError(TeamCalError):
    default_message = "Username already exists"


class DuplicateRoleError(TeamCalError):
    default_message = "Role already exists"


class AccountNotActiveError(TeamCalError):
    """Login attempted on an account that has not been approved"""
    default_message = "Account is pending approval"


class InvalidCredentialError(TeamCalError):
    default_message = "Invalid password"


class AuthenticationRequired(TeamCalError):
    """No active identity is attached to the request (401)"""
    default_message = "Login required"


class PermissionDenied(TeamCalError):
    """Identity lacks the required role or ownership (403)"""
    default_message = "Admin access only"


class ProtectedRoleError(TeamCalError):
    default_message = "Default roles cannot be deleted"


class RoleInUseError(TeamCalError):
    default_message = "Role is assigned to users"


class StoreError(TeamCalError):
    """Reading or persisting the shared JSON document failed"""
    default_message = "Store failure"


class ConfigError(TeamCalError):
    """Configuration error"""
    default_message = "Invalid configuration"
