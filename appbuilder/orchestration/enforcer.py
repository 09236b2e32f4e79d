# appbuilder/orchestration/enforcer.py
"""
Permission safety enforcement.

Repairs a normalized spec in place so the generated app stays usable:

1. every declared role has a permissions entry (read-only by default)
2. every role can view something
3. at least one role can edit something (an admin-like role, or the first
   role, is promoted to full access)

Repair is idempotent. Specs that cannot be repaired safely are left
untouched and the validator rejects them.
"""
from typing import Any, Dict, List

from appbuilder.core.logging import log
from appbuilder.utils.roles import canonical_role_key, is_degenerate_permissions, select_promotion_target


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def entity_names_of(entities: Any) -> List[str]:
    """Ordered entity names, skipping entities without a name."""
    if not _is_sequence(entities):
        return []
    return [e.get("name") for e in entities if isinstance(e, dict) and e.get("name")]


def _read_only_entry(entity_names: List[str]) -> Dict[str, list]:
    return {"canCreate": [], "canView": list(entity_names), "canEdit": []}


def _has_editor(roles: List[Any], permissions: Dict[Any, Any]) -> bool:
    for role in roles:
        if not isinstance(role, str):
            continue
        entry = permissions.get(canonical_role_key(role))
        if isinstance(entry, dict) and _is_sequence(entry.get("canEdit")) and len(entry["canEdit"]) > 0:
            return True
    return False


def enforce_permission_safety(data: Any) -> bool:
    """
    Mutate data["rolePermissions"] to satisfy the permission invariants.

    Returns False when enforcement was skipped (roles/entities not lists,
    rolePermissions neither absent nor a mapping, or the degenerate
    single-key shape). Absent rolePermissions is treated as empty.
    """
    if not isinstance(data, dict):
        return False
    roles = data.get("roles")
    entities = data.get("entities")
    if not _is_sequence(roles) or not _is_sequence(entities):
        log("ENFORCE", "Skipped: roles/entities are not lists")
        return False

    permissions = data.get("rolePermissions")
    if permissions is None:
        permissions = {}
        data["rolePermissions"] = permissions
    elif not isinstance(permissions, dict):
        log("ENFORCE", f"Skipped: rolePermissions is {type(permissions).__name__}, expected mapping")
        return False
    elif is_degenerate_permissions(permissions):
        log("ENFORCE", "Skipped: degenerate rolePermissions shape")
        return False

    entity_names = entity_names_of(entities)

    # 1) Every role gets an entry with usable arrays
    for role in roles:
        if not isinstance(role, str) or not role:
            continue
        key = canonical_role_key(role)
        entry = permissions.get(key)
        if not isinstance(entry, dict):
            permissions[key] = _read_only_entry(entity_names)
            log("ENFORCE", f"Added read-only permissions for role '{key}'")
            continue
        if not _is_sequence(entry.get("canCreate")):
            entry["canCreate"] = []
        if not _is_sequence(entry.get("canEdit")):
            entry["canEdit"] = []
        if not _is_sequence(entry.get("canView")) or len(entry["canView"]) == 0:
            entry["canView"] = list(entity_names)

    # 2) At least one role must be able to edit
    if not _has_editor(list(roles), permissions):
        target = select_promotion_target([r for r in roles if isinstance(r, str) and r])
        if target is not None:
            key = canonical_role_key(target)
            entry = permissions.setdefault(key, _read_only_entry(entity_names))
            entry["canCreate"] = list(entity_names)
            entry["canEdit"] = list(entity_names)
            if not _is_sequence(entry.get("canView")) or len(entry["canView"]) == 0:
                entry["canView"] = list(entity_names)
            log("ENFORCE", f"No editor found, promoted '{key}' to full access")

    return True
