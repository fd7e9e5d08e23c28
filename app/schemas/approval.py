from pydantic import BaseModel
from typing import Literal, Optional

from app.models.approval_request import MentorRequest, RoleChangeRequest, TrainingRequest
from app.schemas.common import EmployeeCredentials

class ApprovalCreate(EmployeeCredentials):
    type: Literal["mentor", "role_change", "training"]
    priority: Literal["High", "Medium", "Low"] = "Medium"
    mentor_request: Optional[MentorRequest] = None
    role_change_request: Optional[RoleChangeRequest] = None
    training_request: Optional[TrainingRequest] = None

    def details(self):
        """The payload matching `type`, if the client sent it."""
        return {
            "mentor": self.mentor_request,
            "role_change": self.role_change_request,
            "training": self.training_request,
        }[self.type]

class ApprovalDecision(BaseModel):
    status: Literal["approved", "rejected"]
    comments: Optional[str] = None
