# appbuilder/db/job_store.py
"""
Keyed job stores.

Both stores offer the same async interface: create / update / get /
list_recent. Writes are last-write-wins; there is no transaction spanning
the `processing` write and the terminal write.
"""
import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

from appbuilder.core.exceptions import DuplicateJobError, JobNotFoundError, PersistenceError
from appbuilder.models.job import Job, RequirementJobDocument


UPDATABLE_FIELDS = {"status", "result", "error_message", "source", "fallback_reason"}


class JobStore(Protocol):
    async def create(self, job: Job) -> Job: ...

    async def update(self, job_id: str, fields: Dict[str, Any]) -> Job: ...

    async def get(self, job_id: str) -> Optional[Job]: ...

    async def list_recent(self, limit: int = 50) -> List[Job]: ...


def _check_fields(job_id: str, fields: Dict[str, Any]) -> None:
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise PersistenceError(job_id, f"Cannot update fields: {', '.join(sorted(unknown))}")


class MemoryJobStore:
    """In-process store. Default when MongoDB is not configured."""

    def __init__(self) -> None:
        self._jobs: Dict[str, Job] = {}

    async def create(self, job: Job) -> Job:
        if job.id in self._jobs:
            raise DuplicateJobError(job.id)
        self._jobs[job.id] = job.model_copy(deep=True)
        return job.model_copy(deep=True)

    async def update(self, job_id: str, fields: Dict[str, Any]) -> Job:
        _check_fields(job_id, fields)
        current = self._jobs.get(job_id)
        if current is None:
            raise JobNotFoundError(job_id)
        changes = copy.deepcopy(fields)
        changes["updated_at"] = datetime.now(timezone.utc)
        updated = current.model_copy(update=changes, deep=True)
        self._jobs[job_id] = updated
        return updated.model_copy(deep=True)

    async def get(self, job_id: str) -> Optional[Job]:
        job = self._jobs.get(job_id)
        return job.model_copy(deep=True) if job else None

    async def list_recent(self, limit: int = 50) -> List[Job]:
        # Reversed insertion order first so equal timestamps still list newest first
        jobs = sorted(reversed(list(self._jobs.values())), key=lambda j: j.created_at, reverse=True)
        return [j.model_copy(deep=True) for j in jobs[:limit]]


class MongoJobStore:
    """Beanie-backed store. Requires connect_db() to have succeeded."""

    async def create(self, job: Job) -> Job:
        from pymongo.errors import DuplicateKeyError

        doc = RequirementJobDocument(
            job_id=job.id,
            input_text=job.input_text,
            status=job.status,
            result=job.result,
            error_message=job.error_message,
            source=job.source,
            fallback_reason=job.fallback_reason,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )
        try:
            await doc.insert()
        except DuplicateKeyError:
            raise DuplicateJobError(job.id)
        return doc.to_job()

    async def update(self, job_id: str, fields: Dict[str, Any]) -> Job:
        _check_fields(job_id, fields)
        doc = await RequirementJobDocument.find_one(RequirementJobDocument.job_id == job_id)
        if doc is None:
            raise JobNotFoundError(job_id)
        for key, value in fields.items():
            setattr(doc, key, value)
        doc.updated_at = datetime.now(timezone.utc)
        await doc.save()
        return doc.to_job()

    async def get(self, job_id: str) -> Optional[Job]:
        doc = await RequirementJobDocument.find_one(RequirementJobDocument.job_id == job_id)
        return doc.to_job() if doc else None

    async def list_recent(self, limit: int = 50) -> List[Job]:
        docs = await RequirementJobDocument.find_all().sort(-RequirementJobDocument.created_at).limit(limit).to_list()
        return [d.to_job() for d in docs]
