"""Admin check over session claims (``app_metadata`` / ``user_metadata``)."""
from __future__ import annotations
from typing import Any, Mapping

ADMIN_ROLE = "admin"


def is_admin(user: Mapping[str, Any] | None) -> bool:
    if not user:
        return False
    app_metadata = user.get("app_metadata") or {}
    user_metadata = user.get("user_metadata") or {}

    roles = app_metadata.get("roles")
    if not isinstance(roles, list):
        role = app_metadata.get("role")
        roles = [role] if isinstance(role, str) else []
    if ADMIN_ROLE in roles:
        return True
    return user_metadata.get("role") == ADMIN_ROLE
