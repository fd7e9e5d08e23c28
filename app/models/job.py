from pydantic import Field
from typing import Any, Dict, List, Literal, Optional
from datetime import datetime
from .base import EmbeddedModel, MongoBaseModel, PyObjectId, utcnow
from .employee import Department

ApplicationStatus = Literal["pending", "under_review", "approved", "rejected"]


class JobApplication(EmbeddedModel):
    employee_id: PyObjectId
    applied_date: datetime = Field(default_factory=utcnow)
    status: ApplicationStatus = "pending"
    resume_type: Literal["current", "updated"]
    updated_resume: Optional[str] = None
    match_percentage: int = 0
    skills: List[str] = []
    experience: str = "Not specified"
    application_data: Dict[str, Any] = {}
    notes: Optional[str] = None


class Job(MongoBaseModel):
    title: str
    department: Department
    location: str
    type: Literal["Full-time", "Part-time", "Contract", "Internship"] = "Full-time"
    salary: str
    description: str
    requirements: List[str] = []
    required_skills: List[str] = []
    status: Literal["draft", "active", "closed"] = "draft"
    posted_date: datetime = Field(default_factory=utcnow)
    deadline: datetime
    created_by: PyObjectId
    applications: List[JobApplication] = []
    referrals: List[PyObjectId] = []
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
