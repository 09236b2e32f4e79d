# appbuilder/orchestration/__init__.py
"""
Orchestration module - response normalization, permission repair,
extraction policy and the job lifecycle.
"""
from .normalizer import normalize_role_permissions, normalize_response
from .enforcer import enforce_permission_safety
from .orchestrator import ExtractionOrchestrator
from .job_lifecycle import JobLifecycle
from .poller import poll_job

__all__ = [
    "normalize_role_permissions",
    "normalize_response",
    "enforce_permission_safety",
    "ExtractionOrchestrator",
    "JobLifecycle",
    "poll_job",
]
