import uuid
from sqlalchemy import Column, Date, DateTime, String, Uuid, func
from jobloom.core.database import Base


class Job(Base):
    """
    A job application tracked by a single user.

    user_id is the identity provider's subject id and is the isolation
    boundary: every query must filter by it.
    """
    __tablename__ = "jobs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(String, nullable=False, index=True)

    company = Column(String, nullable=True)
    position = Column(String, nullable=True)
    # Free-form, e.g. "applied", "interviewing", "offer"
    status = Column(String, nullable=True)
    applied_date = Column(Date, nullable=True)
    follow_up_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Job(id={self.id}, company='{self.company}', position='{self.position}', status='{self.status}')>"
