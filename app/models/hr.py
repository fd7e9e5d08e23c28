from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from .base import MongoBaseModel, PyObjectId, utcnow

class HRPermissions(BaseModel):
    can_create_employees: bool = True
    can_manage_jobs: bool = True
    can_view_analytics: bool = True
    can_process_approvals: bool = True

class HRProfile(MongoBaseModel):
    user_id: PyObjectId
    full_name: str = "HR Manager"
    department: str = "HR"
    permissions: HRPermissions = Field(default_factory=HRPermissions)
    last_activity: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
