# tests/test_job_lifecycle.py
"""
Tests for the requirement job lifecycle.

    submit -> pending -> processing -> completed | failed
"""
from unittest.mock import AsyncMock

import pytest

from appbuilder.core.config import LLMSettings
from appbuilder.core.exceptions import (
    DuplicateJobError,
    InvalidInputError,
    InvalidTransitionError,
    JobNotFoundError,
    PersistenceError,
)
from appbuilder.db.job_store import MemoryJobStore
from appbuilder.orchestration.job_lifecycle import JobLifecycle
from appbuilder.orchestration.orchestrator import ExtractionOrchestrator


class FailingCompletionStore(MemoryJobStore):
    """Accepts every write except the one that marks a job completed."""

    async def update(self, job_id, fields):
        if fields.get("status") == "completed":
            raise PersistenceError(job_id, "write conflict on completion")
        return await super().update(job_id, fields)


class TestSubmit:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None, 42])
    async def test_rejects_blank_input_without_creating_job(self, lifecycle, text):
        with pytest.raises(InvalidInputError):
            await lifecycle.submit(text)

        assert await lifecycle.list_jobs() == []

    @pytest.mark.asyncio
    async def test_returns_processing_immediately(self, lifecycle, course_description):
        submitted = await lifecycle.submit(course_description)

        assert submitted["status"] == "processing"
        assert submitted["id"]
        job = await lifecycle.get_job(submitted["id"])
        assert job is not None
        assert job.input_text == course_description

    @pytest.mark.asyncio
    async def test_input_is_trimmed(self, lifecycle):
        submitted = await lifecycle.submit("  inventory of products  ")
        job = await lifecycle.get_job(submitted["id"])

        assert job.input_text == "inventory of products"

    @pytest.mark.asyncio
    async def test_duplicate_job_id_rejected(self, lifecycle):
        await lifecycle.submit("first", job_id="job-1")

        with pytest.raises(DuplicateJobError):
            await lifecycle.submit("second", job_id="job-1")

        await lifecycle.drain()
        with pytest.raises(DuplicateJobError):
            await lifecycle.submit("third", job_id="job-1")
        job = await lifecycle.get_job("job-1")
        assert job.input_text == "first"


class TestProcessing:

    @pytest.mark.asyncio
    async def test_course_scenario_completes(self, lifecycle, course_description):
        """
        GIVEN a course description and no live generator
        WHEN the job is processed
        THEN it completes with the course template and Admin can edit every entity
        """
        submitted = await lifecycle.submit(course_description)
        await lifecycle.drain()

        job = await lifecycle.get_job(submitted["id"])
        assert job.status == "completed"
        assert job.source == "mock"
        assert job.error_message is None
        spec = job.result
        assert spec["roles"] == ["Teacher", "Student", "Admin"]
        entity_names = {e["name"] for e in spec["entities"]}
        assert entity_names <= set(spec["rolePermissions"]["Admin"]["canEdit"])

    @pytest.mark.asyncio
    async def test_live_failure_records_fallback_reason(self, memory_store, generic_description):
        generator = AsyncMock()
        generator.generate.return_value = "nonsense"
        orchestrator = ExtractionOrchestrator(LLMSettings(gemini_api_key=None), generator=generator)
        lifecycle = JobLifecycle(memory_store, orchestrator)

        submitted = await lifecycle.submit(generic_description)
        await lifecycle.drain()

        job = await lifecycle.get_job(submitted["id"])
        assert job.status == "completed"
        assert job.source == "mock"
        assert job.fallback_reason == "shape: expected a JSON object, got str"

    @pytest.mark.asyncio
    async def test_persistence_failure_marks_failed(self, mock_orchestrator, course_description):
        """
        GIVEN a store that rejects the completion write
        WHEN the job is processed
        THEN the job ends failed with the error message verbatim
        """
        lifecycle = JobLifecycle(FailingCompletionStore(), mock_orchestrator)

        submitted = await lifecycle.submit(course_description)
        await lifecycle.drain()

        job = await lifecycle.get_job(submitted["id"])
        assert job.status == "failed"
        assert job.error_message == "write conflict on completion"
        assert job.result is None

    @pytest.mark.asyncio
    async def test_orchestrator_crash_marks_failed(self, memory_store):
        orchestrator = AsyncMock()
        orchestrator.run.side_effect = RuntimeError("pipeline exploded")
        lifecycle = JobLifecycle(memory_store, orchestrator)

        submitted = await lifecycle.submit("anything")
        await lifecycle.drain()

        job = await lifecycle.get_job(submitted["id"])
        assert job.status == "failed"
        assert job.error_message == "pipeline exploded"

    @pytest.mark.asyncio
    async def test_task_forgotten_after_finish(self, lifecycle):
        submitted = await lifecycle.submit("notes")
        await lifecycle.drain()

        assert lifecycle.is_running(submitted["id"]) is False


class TestTransitions:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("target", ["pending", "processing", "completed", "failed"])
    async def test_terminal_states_absorb(self, lifecycle, target):
        submitted = await lifecycle.submit("notes")
        await lifecycle.drain()

        with pytest.raises(InvalidTransitionError):
            await lifecycle.transition(submitted["id"], target)

        job = await lifecycle.get_job(submitted["id"])
        assert job.status == "completed"

    @pytest.mark.asyncio
    async def test_pending_cannot_skip_to_completed(self, memory_store, mock_orchestrator):
        from appbuilder.models.job import Job

        lifecycle = JobLifecycle(memory_store, mock_orchestrator)
        await memory_store.create(Job(id="manual", input_text="x"))

        with pytest.raises(InvalidTransitionError):
            await lifecycle.transition("manual", "completed", result={})

        updated = await lifecycle.transition("manual", "processing")
        assert updated.status == "processing"

    @pytest.mark.asyncio
    async def test_unknown_job(self, lifecycle):
        with pytest.raises(JobNotFoundError):
            await lifecycle.transition("missing", "processing")

    @pytest.mark.asyncio
    async def test_list_jobs_newest_first(self, lifecycle):
        first = await lifecycle.submit("one")
        second = await lifecycle.submit("two")
        await lifecycle.drain()

        jobs = await lifecycle.list_jobs(limit=1)
        assert [j.id for j in jobs] == [second["id"]]
        assert len(await lifecycle.list_jobs()) == 2
        assert first["id"] != second["id"]
