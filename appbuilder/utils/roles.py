# appbuilder/utils/roles.py
"""
Role-name and permission-shape helpers shared by the normalizer, enforcer,
validator and spec consumers.
"""
from typing import Any, List, Optional, Sequence


# Promotion preference when no role can edit anything (lowercase, in order)
PREFERRED_ADMIN_ROLES = ("admin", "administrator", "owner", "manager", "supervisor")


def canonical_role_key(role: Any) -> Any:
    """
    Key under which a role's permissions live in rolePermissions.

    "teacher" -> "Teacher", "ADMIN" -> "Admin". Non-strings and empty
    strings are returned unchanged.
    """
    if not isinstance(role, str) or not role:
        return role
    return role[0].upper() + role[1:].lower()


def select_promotion_target(roles: Sequence[Any]) -> Optional[Any]:
    """
    Pick the role to receive full access.

    First role whose lowercase name matches PREFERRED_ADMIN_ROLES (in that
    order), otherwise the first declared role.
    """
    if not roles:
        return None
    lowered: List[Optional[str]] = [r.lower() if isinstance(r, str) else None for r in roles]
    for name in PREFERRED_ADMIN_ROLES:
        if name in lowered:
            return roles[lowered.index(name)]
    return roles[0]


PERMISSION_KEYS = ("canCreate", "canView", "canEdit")

# Field names used inside list records. A mapping whose only key is one of
# these was never really keyed by role.
RECORD_ROLE_KEYS = ("role", "roleName")


def is_degenerate_permissions(value: Any) -> bool:
    """True for a mapping whose single key is a record field name, e.g. {"role": {...}}."""
    return isinstance(value, dict) and len(value) == 1 and next(iter(value)) in RECORD_ROLE_KEYS
