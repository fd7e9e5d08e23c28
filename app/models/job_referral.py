from pydantic import Field
from typing import List, Literal, Optional
from datetime import datetime
from .base import MongoBaseModel, PyObjectId, utcnow

class JobReferral(MongoBaseModel):
    job_id: PyObjectId
    referred_by: PyObjectId  # employee id
    candidate_name: str
    candidate_email: str
    candidate_phone: Optional[str] = None
    candidate_resume: str  # URL
    candidate_skills: List[str] = []
    candidate_experience: str = "Not specified"
    referral_date: datetime = Field(default_factory=utcnow)
    status: Literal["pending", "under_review", "rejected", "hired"] = "pending"
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
