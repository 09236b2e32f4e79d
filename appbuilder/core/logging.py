# appbuilder/core/logging.py
import sys
import os
from datetime import datetime
from typing import Any, Optional, List


# ═══════════════════════════════════════════════════════════════════════════════
# LOG FILTERING
# ═══════════════════════════════════════════════════════════════════════════════
# Only these scopes are shown at INFO level
# Everything else is gated behind DEBUG

INFO_SCOPES = {
    "EXTRACT",      # Orchestrator decisions (live vs mock)
    "GEMINI",       # LLM boundary
    "JOBS",         # Job lifecycle transitions
    "API",          # Request handling
    "DB",           # Store selection / connection
    "STARTUP",
}

# DEBUG-only scopes (hidden by default)
DEBUG_SCOPES = {
    "NORMALIZE",
    "ENFORCE",
    "VALIDATE",
    "MOCK",
    "POLL",
}

# Check if DEBUG mode is enabled
DEBUG_MODE = os.getenv("APPBUILDER_DEBUG", "false").lower() == "true"


def log(scope: str, message: str, data: Any = None, job_id: Optional[str] = None) -> None:
    """
    Unified logging function for the requirement extraction service.

    Only INFO_SCOPES are shown by default.
    Set APPBUILDER_DEBUG=true to see all scopes.
    """
    if not DEBUG_MODE and scope not in INFO_SCOPES:
        return

    timestamp = datetime.now().strftime("%H:%M:%S")
    prefix = f"[{timestamp}] [{scope}]"

    if job_id:
        prefix += f" [{job_id[:8]}]"

    print(f"{prefix} {message}")

    if data:
        print(f"  Data: {data}")

    sys.stdout.flush()


def log_section(scope: str, title: str, job_id: Optional[str] = None) -> None:
    """
    Log a section header with visual separator.
    """
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"\n{'='*60}")
    if job_id:
        print(f"[{timestamp}] [{scope}] [{job_id[:8]}] {title}")
    else:
        print(f"[{timestamp}] [{scope}] {title}")
    print(f"{'='*60}")
    sys.stdout.flush()


def log_issues(scope: str, issues: List[str], job_id: Optional[str] = None, max_items: int = 5) -> None:
    """
    Log a validation issue list, truncated to max_items.
    """
    if not issues:
        return
    if not DEBUG_MODE and scope not in INFO_SCOPES:
        return

    timestamp = datetime.now().strftime("%H:%M:%S")
    prefix = f"[{timestamp}] [{scope}]"
    if job_id:
        prefix += f" [{job_id[:8]}]"

    print(f"{prefix} ⚠️ {len(issues)} issue(s):")
    for i, issue in enumerate(issues[:max_items]):
        print(f"  {i+1}. {issue}")
    if len(issues) > max_items:
        print(f"  ... ({len(issues) - max_items} more)")
    sys.stdout.flush()
