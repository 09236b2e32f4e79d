# appbuilder/api/requirements.py
"""
App requirement routes.

Submission returns immediately; clients poll GET /requirements/{id} until
the job status is `completed` or `failed`.
"""
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from appbuilder.core.config import settings
from appbuilder.core.exceptions import DuplicateJobError, InvalidInputError
from appbuilder.core.logging import log
from appbuilder.orchestration.job_lifecycle import JobLifecycle


router = APIRouter(prefix="/api/apps", tags=["Requirements"])


class SubmitRequirementRequest(BaseModel):
    input_text: Optional[str] = Field(default=None, alias="inputText")
    # Field name used by the original web client
    user_description: Optional[str] = Field(default=None, alias="userDescription")

    @property
    def text(self) -> Optional[str]:
        return self.input_text if self.input_text is not None else self.user_description


def get_lifecycle(request: Request) -> JobLifecycle:
    return request.app.state.lifecycle


@router.post("/requirements", status_code=201)
async def submit_requirement(request: Request, data: SubmitRequirementRequest):
    """Submit a new app requirement for extraction."""
    lifecycle = get_lifecycle(request)
    try:
        submitted = await lifecycle.submit(data.text)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except DuplicateJobError as e:
        raise HTTPException(status_code=409, detail=e.message)

    log("API", f"Requirement submitted: {submitted['id']}")
    return {
        "success": True,
        "message": "Requirement submitted successfully",
        "data": submitted,
    }


@router.get("/requirements/{job_id}")
async def get_requirement(request: Request, job_id: str):
    """Get an app requirement job by ID."""
    job = await get_lifecycle(request).get_job(job_id)
    if job is None:
        return JSONResponse(status_code=404, content={"success": False, "message": "Requirement not found"})
    return {"success": True, "data": job.to_response()}


@router.get("/requirements")
async def list_requirements(request: Request):
    """Most recent requirement jobs, newest first."""
    jobs = await get_lifecycle(request).list_jobs(settings.jobs.recent_jobs_limit)
    return {"success": True, "data": [j.to_response() for j in jobs]}


@router.get("/ai-status")
async def get_ai_status(request: Request):
    """Report whether the live generator is configured."""
    configured = get_lifecycle(request).orchestrator.is_configured
    return {
        "success": True,
        "data": {
            "configured": configured,
            "message": (
                "AI service is properly configured with Google Gemini"
                if configured
                else "AI service is using mock data (configure Gemini API key for real processing)"
            ),
        },
    }
