# appbuilder/core/exceptions.py
"""
Custom exceptions for the application.
"""
from typing import Optional, Dict, Any, List


class AppBuilderError(Exception):
    """Base exception for all app builder errors."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputError(AppBuilderError):
    """Submission rejected before a job was created."""
    pass


class LLMError(AppBuilderError):
    """LLM provider error."""
    def __init__(self, provider: str, message: str, status: Optional[int] = None):
        super().__init__(
            f"LLM error ({provider}): {message}",
            {"provider": provider, "status": status}
        )
        self.provider = provider
        self.status = status


class ParseError(AppBuilderError):
    """JSON/output parsing error."""
    pass


class SpecValidationError(AppBuilderError):
    """Specification failed structural validation after repair."""
    def __init__(self, issues: List[str]):
        super().__init__(
            f"Specification rejected: {'; '.join(issues) if issues else 'unknown reason'}",
            {"issues": list(issues)}
        )
        self.issues = list(issues)


class PersistenceError(AppBuilderError):
    """Job store write/read failure."""
    def __init__(self, job_id: str, message: str):
        super().__init__(message, {"job_id": job_id})
        self.job_id = job_id


class JobNotFoundError(AppBuilderError):
    """No job exists for the given id."""
    def __init__(self, job_id: str):
        super().__init__(f"Job not found: {job_id}", {"job_id": job_id})
        self.job_id = job_id


class DuplicateJobError(AppBuilderError):
    """A job with this id already exists or is already running."""
    def __init__(self, job_id: str):
        super().__init__(f"Job already exists: {job_id}", {"job_id": job_id})
        self.job_id = job_id


class InvalidTransitionError(AppBuilderError):
    """Job status change not allowed by the lifecycle."""
    def __init__(self, job_id: str, current: str, target: str):
        super().__init__(
            f"Job {job_id}: cannot move from '{current}' to '{target}'",
            {"job_id": job_id, "current": current, "target": target}
        )
        self.job_id = job_id
        self.current = current
        self.target = target


class PollTimeoutError(AppBuilderError):
    """Polling gave up before the job reached a terminal status."""
    def __init__(self, job_id: str, attempts: int, last_status: Optional[str] = None):
        super().__init__(
            f"Processing timeout: job {job_id} still '{last_status}' after {attempts} attempts",
            {"job_id": job_id, "attempts": attempts, "last_status": last_status}
        )
        self.job_id = job_id
        self.attempts = attempts
        self.last_status = last_status
