"""
AI proxy endpoints.

The upstream body is returned as-is on success. Any upstream failure becomes
a generic 500; the cause is only logged.
"""

import logging
from typing import Any, Dict, Optional
from fastapi import APIRouter, HTTPException, Depends

from jobloom.core.deps import get_completion_client, get_current_uid
from jobloom.schemas.ai import ResumeAnalysisRequest, MockInterviewRequest
from jobloom.services import career_coach
from jobloom.services.completion_client import CompletionClient, UpstreamError

router = APIRouter(tags=["AI"])
logger = logging.getLogger(__name__)

ANALYSIS_FAILED = "AI analysis failed"
MOCK_INTERVIEW_FAILED = "AI mock interview generation failed"


@router.post("/analyze-resume")
async def analyze_resume(
    request: Optional[ResumeAnalysisRequest] = None,
    user_id: str = Depends(get_current_uid),
    client: CompletionClient = Depends(get_completion_client)
) -> Dict[str, Any]:
    """Analyze resume text for strengths, weaknesses and suggestions."""
    request = request or ResumeAnalysisRequest()
    try:
        return await career_coach.analyze_resume(client, request.resume_text)
    except UpstreamError as e:
        logger.error(f"Resume analysis failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail=ANALYSIS_FAILED)


@router.post("/mock-interview")
async def mock_interview(
    request: Optional[MockInterviewRequest] = None,
    user_id: str = Depends(get_current_uid),
    client: CompletionClient = Depends(get_completion_client)
) -> Dict[str, Any]:
    """Generate mock interview questions for a job role."""
    request = request or MockInterviewRequest()
    try:
        return await career_coach.generate_mock_interview(client, request.job_role)
    except UpstreamError as e:
        logger.error(f"Mock interview generation failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail=MOCK_INTERVIEW_FAILED)
