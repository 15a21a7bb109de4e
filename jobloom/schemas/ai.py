from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ResumeAnalysisRequest(BaseModel):
    """Resume text to send for analysis; a missing value is sent as empty text"""
    resume_text: str = ""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class MockInterviewRequest(BaseModel):
    """Job role to generate mock interview questions for"""
    job_role: str = ""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
