# Auth: Session state and wildcard permission checks
"""
Auth module for the signed-in CMS session.

Holds the user, bearer token and permission set, persists the token between
runs, and resolves ``resource.action`` permissions with wildcard grants.
"""

from .models import PERMISSIONS, ROLE_PERMISSIONS, PermissionDef, Role, permissions_for_role
from .permissions import has_all_permissions, has_any_permission, has_permission
from .session import AuthSession
from .token_store import TokenStore, is_token_valid

__all__ = [
    "AuthSession",
    "PERMISSIONS",
    "PermissionDef",
    "ROLE_PERMISSIONS",
    "Role",
    "TokenStore",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
    "is_token_valid",
    "permissions_for_role",
]
