from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime
from .base import MongoBaseModel, PyObjectId, utcnow

class MentorRequest(BaseModel):
    desired_mentor: Optional[str] = None
    duration: Optional[str] = None
    justification: Optional[str] = None
    career_goals: List[str] = []

class RoleChangeRequest(BaseModel):
    current_role: Optional[str] = None
    target_role: Optional[str] = None
    readiness_score: Optional[int] = None
    manager_approval: bool = False
    skill_gaps: List[str] = []
    proposed_date: Optional[datetime] = None

class TrainingRequest(BaseModel):
    course_name: Optional[str] = None
    provider: Optional[str] = None
    duration: Optional[str] = None
    cost: Optional[float] = None
    business_justification: Optional[str] = None
    expected_outcomes: List[str] = []
    budget_allocated: bool = False

class ApprovalRequest(MongoBaseModel):
    type: Literal["mentor", "role_change", "training"]
    employee_id: PyObjectId
    status: Literal["pending", "approved", "rejected"] = "pending"
    priority: Literal["High", "Medium", "Low"] = "Medium"
    mentor_request: Optional[MentorRequest] = None
    role_change_request: Optional[RoleChangeRequest] = None
    training_request: Optional[TrainingRequest] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    comments: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
