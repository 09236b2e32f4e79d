from .job import (
    Job,
    JobStatus,
    RequirementJobDocument,
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
)

__all__ = [
    "Job",
    "JobStatus",
    "RequirementJobDocument",
    "ALLOWED_TRANSITIONS",
    "TERMINAL_STATUSES",
]
