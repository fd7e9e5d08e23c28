from pydantic import EmailStr, Field
from typing import Literal, Optional
from datetime import datetime
from .base import MongoBaseModel, utcnow

class User(MongoBaseModel):
    email: EmailStr
    password: str  # argon2 hash
    user_type: Literal["employee", "hr"]
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
