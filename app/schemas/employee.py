from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional
from datetime import datetime

from app.models.employee import Priority, Skill
from app.schemas.common import EmployeeCredentials

# ===========================
# EMPLOYEE INPUTS
# ===========================

class ProfileUpdate(EmployeeCredentials):
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    avatar: Optional[str] = None
    achievements: Optional[List[str]] = None

class SkillsUpdate(EmployeeCredentials):
    skills: List[Skill]

class CareerGoalCreate(EmployeeCredentials):
    target_role: str
    priority: Priority = "Medium"
    target_date: Optional[datetime] = None
    skills_required: List[str] = []

class CareerGoalUpdate(EmployeeCredentials):
    goal_id: str
    target_role: Optional[str] = None
    priority: Optional[Priority] = None
    target_date: Optional[datetime] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    skills_required: Optional[List[str]] = None

class CareerGoalDelete(EmployeeCredentials):
    goal_id: str

class ResumeLinkUpdate(EmployeeCredentials):
    resume_link: str
    resume_data: Optional[Dict[str, Any]] = None

class ResumeDataUpdate(EmployeeCredentials):
    resume_data: Dict[str, Any]

# ===========================
# HR INPUTS
# ===========================

class EmployeeStatusUpdate(BaseModel):
    employee_id: str
    is_active: bool

class CareerGoalDecision(BaseModel):
    employee_id: str
    goal_id: str
    status: Literal["approved", "rejected"]
    review_notes: Optional[str] = ""
