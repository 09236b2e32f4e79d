# tests/test_poller.py
"""
Tests for the bounded polling consumer.
"""
import pytest

from appbuilder.core.exceptions import JobNotFoundError, PollTimeoutError
from appbuilder.models.job import Job
from appbuilder.orchestration.poller import poll_job


def _fetch_sequence(statuses):
    """Fetch stub returning a job in each status in turn, then repeating the last."""
    calls = {"count": 0}

    async def fetch(job_id):
        index = min(calls["count"], len(statuses) - 1)
        calls["count"] += 1
        status = statuses[index]
        if status is None:
            return None
        return Job(id=job_id, input_text="x", status=status, error_message="boom" if status == "failed" else None)

    return fetch, calls


@pytest.mark.asyncio
async def test_returns_completed_job():
    fetch, calls = _fetch_sequence(["pending", "processing", "completed"])

    job = await poll_job(fetch, "job-1", interval=0, max_attempts=5)

    assert job.status == "completed"
    assert calls["count"] == 3


@pytest.mark.asyncio
async def test_failed_is_terminal_not_timeout():
    """
    GIVEN a job that fails
    WHEN polled
    THEN the failed job is returned, distinct from a timeout
    """
    fetch, _ = _fetch_sequence(["processing", "failed"])

    job = await poll_job(fetch, "job-1", interval=0, max_attempts=5)

    assert job.status == "failed"
    assert job.error_message == "boom"


@pytest.mark.asyncio
async def test_timeout_after_max_attempts():
    fetch, calls = _fetch_sequence(["processing"])

    with pytest.raises(PollTimeoutError) as exc_info:
        await poll_job(fetch, "job-1", interval=0, max_attempts=3)

    assert calls["count"] == 3
    assert exc_info.value.attempts == 3
    assert exc_info.value.last_status == "processing"
    assert "Processing timeout" in exc_info.value.message


@pytest.mark.asyncio
async def test_missing_job():
    fetch, _ = _fetch_sequence([None])

    with pytest.raises(JobNotFoundError):
        await poll_job(fetch, "ghost", interval=0, max_attempts=3)


@pytest.mark.asyncio
async def test_against_lifecycle(lifecycle, course_description):
    submitted = await lifecycle.submit(course_description)

    job = await poll_job(lifecycle.get_job, submitted["id"], interval=0.01, max_attempts=50)

    assert job.status == "completed"
    assert job.result["appName"] == "Course Manager"
