# appbuilder/orchestration/poller.py
"""
Bounded polling consumer.

Fetches a job at a fixed interval until it is terminal. Giving up raises
PollTimeoutError, which says nothing about the job itself: it may still
complete after the poller stops watching.
"""
import asyncio
from typing import Awaitable, Callable, Optional

from appbuilder.core.config import settings
from appbuilder.core.exceptions import JobNotFoundError, PollTimeoutError
from appbuilder.core.logging import log
from appbuilder.models.job import Job


Fetch = Callable[[str], Awaitable[Optional[Job]]]


async def poll_job(
    fetch: Fetch,
    job_id: str,
    interval: Optional[float] = None,
    max_attempts: Optional[int] = None,
) -> Job:
    """
    Return the job once it is `completed` or `failed`.

    interval and max_attempts default to POLL_INTERVAL_SECONDS and
    POLL_MAX_ATTEMPTS.

    Raises:
        JobNotFoundError: fetch returned None
        PollTimeoutError: still non-terminal after max_attempts fetches
    """
    if interval is None:
        interval = settings.jobs.poll_interval_seconds
    if max_attempts is None:
        max_attempts = settings.jobs.poll_max_attempts

    last_status: Optional[str] = None
    for attempt in range(1, max_attempts + 1):
        job = await fetch(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        if job.is_terminal:
            log("POLL", f"Terminal status '{job.status}' after {attempt} attempt(s)", job_id=job_id)
            return job

        last_status = job.status
        log("POLL", f"Attempt {attempt}/{max_attempts}: {job.status}", job_id=job_id)
        if attempt < max_attempts:
            await asyncio.sleep(interval)

    raise PollTimeoutError(job_id, max_attempts, last_status)
