# appbuilder/orchestration/job_lifecycle.py
"""
Requirement job lifecycle.

    submit(text) -> pending --(task starts)--> processing --> completed
                                                          \-> failed

submit() creates the job and schedules extraction as an asyncio task keyed
by job id; it never waits for extraction. Terminal states absorb: any
further transition raises InvalidTransitionError.
"""
import asyncio
import uuid
from typing import Any, Dict, List, Optional

from appbuilder.core.exceptions import (
    DuplicateJobError,
    InvalidInputError,
    InvalidTransitionError,
    JobNotFoundError,
)
from appbuilder.core.logging import log
from appbuilder.db.job_store import JobStore
from appbuilder.lib.monitoring import record_extraction, record_job_failure
from appbuilder.models.job import ALLOWED_TRANSITIONS, Job
from appbuilder.orchestration.orchestrator import ExtractionOrchestrator


class JobLifecycle:
    """Owns job creation, background extraction and status transitions."""

    def __init__(self, store: JobStore, orchestrator: ExtractionOrchestrator):
        self.store = store
        self.orchestrator = orchestrator
        self._tasks: Dict[str, asyncio.Task] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def submit(self, input_text: Any, job_id: Optional[str] = None) -> Dict[str, str]:
        """
        Create a job and schedule its extraction.

        Raises:
            InvalidInputError: text missing or whitespace-only (no job created)
            DuplicateJobError: job_id already used
        """
        if not isinstance(input_text, str) or not input_text.strip():
            raise InvalidInputError("User description is required")

        job_id = job_id or str(uuid.uuid4())
        if job_id in self._tasks or await self.store.get(job_id) is not None:
            raise DuplicateJobError(job_id)

        text = input_text.strip()
        job = await self.store.create(Job(id=job_id, input_text=text))
        log("JOBS", "Job created (pending)", job_id=job.id)

        self._schedule(job.id, text)
        return {"id": job.id, "status": "processing"}

    async def get_job(self, job_id: str) -> Optional[Job]:
        """Current snapshot, terminal or not."""
        return await self.store.get(job_id)

    async def list_jobs(self, limit: int = 50) -> List[Job]:
        return await self.store.list_recent(limit)

    def is_running(self, job_id: str) -> bool:
        task = self._tasks.get(job_id)
        return task is not None and not task.done()

    async def drain(self) -> None:
        """Wait for every scheduled extraction to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks.values()), return_exceptions=True)

    async def transition(self, job_id: str, target: str, **fields: Any) -> Job:
        """
        Move a job to `target`, writing `fields` alongside the status.

        The current status is read first; no lock spans the read and write.
        """
        current = await self.store.get(job_id)
        if current is None:
            raise JobNotFoundError(job_id)
        if target not in ALLOWED_TRANSITIONS.get(current.status, frozenset()):
            raise InvalidTransitionError(job_id, current.status, target)
        updated = await self.store.update(job_id, {"status": target, **fields})
        log("JOBS", f"{current.status} -> {target}", job_id=job_id)
        return updated

    # ------------------------------------------------------------------
    # Background extraction
    # ------------------------------------------------------------------

    def _schedule(self, job_id: str, text: str) -> asyncio.Task:
        if self.is_running(job_id):
            raise DuplicateJobError(job_id)
        task = asyncio.create_task(self._process(job_id, text))
        self._tasks[job_id] = task
        task.add_done_callback(lambda _t, jid=job_id: self._tasks.pop(jid, None))
        return task

    async def _process(self, job_id: str, text: str) -> None:
        try:
            await self.transition(job_id, "processing")
            report = await self.orchestrator.run(text, job_id=job_id)
            await self.transition(
                job_id,
                "completed",
                result=report.spec,
                source=report.source.value,
                fallback_reason=report.fallback_reason,
            )
            record_extraction(report.source.value)
            log("JOBS", f"✅ Successfully processed job ({report.source.value})", job_id=job_id)
        except Exception as e:
            log("JOBS", f"❌ Error processing job: {e}", job_id=job_id)
            await self._mark_failed(job_id, e)

    async def _mark_failed(self, job_id: str, error: Exception) -> None:
        try:
            await self.transition(job_id, "failed", error_message=str(error))
            record_job_failure()
        except Exception as e:
            # Job is left in its last written status; pollers see a timeout
            log("JOBS", f"❌ Could not record failure: {e}", job_id=job_id)
