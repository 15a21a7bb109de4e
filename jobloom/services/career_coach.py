"""
Resume analysis and mock interview prompts.

Both operations build a fixed prompt, send it once and return whatever the
completion service answered. Nothing is validated or post-processed.
"""

from typing import Any, Dict

from jobloom.services.completion_client import CompletionClient

RESUME_ANALYSIS_MAX_TOKENS = 300
MOCK_INTERVIEW_MAX_TOKENS = 500


def build_resume_analysis_prompt(resume_text: str) -> str:
    return f"Analyze the following resume and provide strengths, weaknesses, and suggestions: \n\n {resume_text}"


def build_mock_interview_prompt(job_role: str) -> str:
    return f"Generate a set of mock interview questions for a {job_role} position, along with AI feedback on answers."


async def analyze_resume(client: CompletionClient, resume_text: str) -> Dict[str, Any]:
    """Ask for strengths, weaknesses and suggestions for a resume"""
    return await client.complete(
        build_resume_analysis_prompt(resume_text),
        max_tokens=RESUME_ANALYSIS_MAX_TOKENS,
    )


async def generate_mock_interview(client: CompletionClient, job_role: str) -> Dict[str, Any]:
    """Ask for mock interview questions for a job role"""
    return await client.complete(
        build_mock_interview_prompt(job_role),
        max_tokens=MOCK_INTERVIEW_MAX_TOKENS,
    )
