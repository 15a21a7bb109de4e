from pydantic import BaseModel, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Optional
from datetime import date, datetime
from uuid import UUID

_datetime_adapter = TypeAdapter(datetime)


class JobFields(BaseModel):
    """
    Client-editable job fields.

    Only these keys are ever persisted from a request body; anything else the
    client sends (an owner id, for example) is dropped.
    """
    company: Optional[str] = None
    position: Optional[str] = None
    status: Optional[str] = None
    applied_date: Optional[date] = None
    follow_up_date: Optional[date] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("applied_date", "follow_up_date", mode="before")
    @classmethod
    def truncate_timestamps(cls, v: Any) -> Any:
        """Accept full timestamps (as browsers send them) and keep the calendar date"""
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            try:
                return _datetime_adapter.validate_python(v).date()
            except ValidationError:
                return v
        return v


class JobCreateRequest(JobFields):
    """Schema for creating a new job"""
    pass


class JobUpdateRequest(JobFields):
    """Schema for a partial job update; only fields present in the body are applied"""
    pass


class JobResponse(BaseModel):
    """Schema for job response"""
    id: UUID
    user_id: str
    company: Optional[str] = None
    position: Optional[str] = None
    status: Optional[str] = None
    applied_date: Optional[date] = None
    follow_up_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models
        alias_generator = to_camel
        populate_by_name = True


class JobDeleteResponse(BaseModel):
    """Schema for job deletion response"""
    message: str
