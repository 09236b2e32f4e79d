# appbuilder/validation/spec_validator.py
"""
Structural validation of a repaired AppSpec.

Pure: never mutates its input. Run after normalization and enforcement;
anything still rejected here is discarded by the orchestrator.
"""
from typing import Any, List

from appbuilder.core.logging import log, log_issues
from appbuilder.utils.roles import PERMISSION_KEYS, canonical_role_key, is_degenerate_permissions


REQUIRED_TOP_LEVEL_KEYS = ("appName", "entities", "roles", "features", "rolePermissions")


def collect_spec_issues(data: Any) -> List[str]:
    """
    Return the reasons a candidate spec is unusable (empty list = valid).

    Per-role empty canEdit is only a warning; rejection needs every role to
    lack edit access.
    """
    if not isinstance(data, dict):
        return [f"Spec must be an object, got {type(data).__name__}"]

    issues: List[str] = []
    for key in REQUIRED_TOP_LEVEL_KEYS:
        if data.get(key) is None or (key == "appName" and not data.get(key)):
            issues.append(f"Missing required top-level field: {key}")
    if issues:
        return issues

    entities = data["entities"]
    if not isinstance(entities, (list, tuple)) or len(entities) == 0:
        issues.append("entities must be a non-empty list")

    roles = data["roles"]
    if not isinstance(roles, (list, tuple)) or len(roles) == 0:
        issues.append("roles must be a non-empty list")
        return issues

    permissions = data["rolePermissions"]
    if not isinstance(permissions, dict):
        issues.append(f"rolePermissions must be a mapping, got {type(permissions).__name__}")
        return issues
    if is_degenerate_permissions(permissions):
        issues.append(f"rolePermissions is keyed by '{next(iter(permissions))}' instead of role names")
        return issues

    has_editor = False
    for role in roles:
        key = canonical_role_key(role)
        entry = permissions.get(key) if isinstance(key, str) else None
        if not isinstance(entry, dict):
            issues.append(f"Missing permissions for role: {role!r}")
            continue
        missing = [k for k in PERMISSION_KEYS if entry.get(k) is None]
        if missing:
            issues.append(f"Missing permission fields for role {key}: {', '.join(missing)}")
            continue
        can_edit = entry.get("canEdit")
        if isinstance(can_edit, (list, tuple)) and len(can_edit) > 0:
            has_editor = True
        else:
            log("VALIDATE", f"No edit permissions for role: {key}")

    if not has_editor:
        issues.append("No role has edit permissions")

    return issues


def is_valid_app_spec(data: Any) -> bool:
    """Pass/fail form of collect_spec_issues."""
    issues = collect_spec_issues(data)
    if issues:
        log_issues("VALIDATE", issues)
        return False
    return True
