from pydantic import BaseModel, Field
from typing import Literal, Optional
from datetime import datetime
from .base import MongoBaseModel, PyObjectId, utcnow

# not_started -> in_progress -> completed -> verified | rejected
ProgressStatus = Literal["not_started", "in_progress", "completed", "verified", "rejected"]
ProofType = Literal["certificate", "screenshot", "badge_link", "completion_email", "other"]

class HRVerification(BaseModel):
    verified: bool = False
    status: Optional[Literal["approved", "rejected", "needs_demonstration"]] = None
    verified_by: Optional[str] = None
    verified_at: Optional[datetime] = None
    notes: Optional[str] = None

class CourseProgress(MongoBaseModel):
    """One row per recommended course, seeded when recommendations are stored."""
    employee_id: PyObjectId
    recommendation_id: PyObjectId
    course_id: str
    course_title: str
    status: ProgressStatus = "not_started"
    proof: Optional[str] = None  # certificate / screenshot / badge URL
    proof_type: Optional[ProofType] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    hr_verification: HRVerification = Field(default_factory=HRVerification)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
