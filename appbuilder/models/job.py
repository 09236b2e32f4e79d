# appbuilder/models/job.py
"""
Requirement job models: the API/pipeline snapshot and its MongoDB document.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field


JobStatus = Literal["pending", "processing", "completed", "failed"]

TERMINAL_STATUSES = frozenset({"completed", "failed"})

# status -> statuses it may move to
ALLOWED_TRANSITIONS: Dict[str, frozenset] = {
    "pending": frozenset({"processing", "failed"}),
    "processing": frozenset({"completed", "failed"}),
    "completed": frozenset(),
    "failed": frozenset(),
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Job(BaseModel):
    """Snapshot of one requirement-extraction job."""
    id: str
    input_text: str
    status: JobStatus = "pending"
    result: Optional[Dict[str, Any]] = None
    error_message: Optional[str] = None
    source: Optional[str] = None  # "live" | "mock"
    fallback_reason: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def to_response(self) -> Dict[str, Any]:
        """Wire shape returned by the API."""
        return {
            "id": self.id,
            "inputText": self.input_text,
            "status": self.status,
            "result": self.result,
            "errorMessage": self.error_message,
            "source": self.source,
            "fallbackReason": self.fallback_reason,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


class RequirementJobDocument(Document):
    """MongoDB persistence for Job."""
    job_id: Indexed(str, unique=True)
    input_text: str
    status: JobStatus = "pending"
    result: Optional[Dict[str, Any]] = None
    error_message: Optional[str] = None
    source: Optional[str] = None
    fallback_reason: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    class Settings:
        name = "app_requirements"

    def to_job(self) -> Job:
        return Job(
            id=self.job_id,
            input_text=self.input_text,
            status=self.status,
            result=self.result,
            error_message=self.error_message,
            source=self.source,
            fallback_reason=self.fallback_reason,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
