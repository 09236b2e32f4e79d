# appbuilder/orchestration/normalizer.py
"""
Role-permission normalization.

Generators return rolePermissions either keyed by role:

    {"Teacher": {"canCreate": [...], "canView": [...], "canEdit": [...]}}

or, following the structured-output schema, as a list of records:

    [{"role": "Teacher", "canCreate": [...], "canView": [...], "canEdit": [...]}]

Both collapse to the keyed form here. Keys are the record's role value as
written; canonical-key lookup happens in the enforcer and validator.
"""
from typing import Any, Dict

from appbuilder.core.logging import log
from appbuilder.utils.roles import PERMISSION_KEYS, is_degenerate_permissions


def normalize_role_permissions(data: Any) -> Any:
    """
    Return data["rolePermissions"] in mapping-by-role form.

    - absent: returned as-is (None)
    - mapping: returned unchanged, including the degenerate single-key shape,
      which is left for the validator to reject
    - list: reduced to a mapping; records without a string role are dropped
      and non-list permission arrays become []
    - anything else: returned unchanged
    """
    rp = data.get("rolePermissions") if isinstance(data, dict) else None
    if rp is None:
        return rp

    if isinstance(rp, dict):
        if is_degenerate_permissions(rp):
            log("NORMALIZE", f"rolePermissions keyed only by '{next(iter(rp))}', leaving as-is")
        return rp

    if not isinstance(rp, (list, tuple)):
        log("NORMALIZE", f"rolePermissions has unexpected type {type(rp).__name__}")
        return rp

    normalized: Dict[str, Dict[str, list]] = {}
    for item in rp:
        if not isinstance(item, dict) or not isinstance(item.get("role"), str):
            continue
        normalized[item["role"]] = {
            key: item[key] if isinstance(item.get(key), list) else []
            for key in PERMISSION_KEYS
        }

    log("NORMALIZE", f"Reduced {len(rp)} permission record(s) to {len(normalized)} role(s)")
    return normalized


def normalize_response(data: Any) -> Any:
    """Normalize rolePermissions on a parsed generator response in place."""
    if isinstance(data, dict) and "rolePermissions" in data:
        data["rolePermissions"] = normalize_role_permissions(data)
    return data
