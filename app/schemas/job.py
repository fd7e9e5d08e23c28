from pydantic import BaseModel
from typing import List, Literal, Optional
from datetime import datetime

from app.models.employee import Department
from app.models.job import ApplicationStatus
from app.schemas.common import EmployeeCredentials

JobType = Literal["Full-time", "Part-time", "Contract", "Internship"]
JobStatus = Literal["draft", "active", "closed"]

# ===========================
# HR JOB POSTINGS
# ===========================

class JobCreate(BaseModel):
    title: str
    department: Department
    location: str
    type: JobType = "Full-time"
    salary: str
    description: str
    requirements: List[str] = []
    required_skills: List[str] = []
    status: JobStatus = "draft"
    deadline: datetime

class JobUpdate(BaseModel):
    """Schema for updating job details"""
    title: Optional[str] = None
    department: Optional[Department] = None
    location: Optional[str] = None
    type: Optional[JobType] = None
    salary: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[List[str]] = None
    required_skills: Optional[List[str]] = None
    status: Optional[JobStatus] = None
    deadline: Optional[datetime] = None

# ===========================
# EMPLOYEE INPUTS
# ===========================

class ApplyRequest(EmployeeCredentials):
    resume_type: Literal["current", "updated"]
    updated_resume: Optional[str] = None

class ReferRequest(EmployeeCredentials):
    candidate_name: str
    candidate_email: str
    candidate_phone: Optional[str] = None
    candidate_resume: str
    candidate_skills: List[str] = []
    candidate_experience: Optional[str] = None

# ===========================
# HR REVIEW INPUTS
# ===========================

class SwitchRequestDecision(BaseModel):
    request_id: str
    status: Literal["approved", "rejected"]
    rejection_reason: Optional[str] = None

class ApplicationStatusUpdate(BaseModel):
    job_id: str
    application_id: str
    status: ApplicationStatus
    notes: Optional[str] = None

class ReferralStatusUpdate(BaseModel):
    referral_id: str
    status: Literal["pending", "under_review", "rejected", "hired"]
    notes: Optional[str] = None
