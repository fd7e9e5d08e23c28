from pydantic import Field
from typing import Literal, Optional
from datetime import datetime, timedelta
from .base import MongoBaseModel, PyObjectId, utcnow

# Waiting period after a rejected job switch request
REJECTION_COOLDOWN = timedelta(days=30)

class JobSwitchRequest(MongoBaseModel):
    employee_id: PyObjectId
    status: Literal["pending", "approved", "rejected"] = "pending"
    request_date: datetime = Field(default_factory=utcnow)
    reviewed_by: Optional[str] = None
    reviewed_date: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    rejection_date: Optional[datetime] = None
    can_apply_after: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
