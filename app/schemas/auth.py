from pydantic import BaseModel, EmailStr
from typing import List, Optional, Union
from datetime import datetime

from app.models.employee import Department, Skill

# 1. Input: Login (HR or employee)
class LoginRequest(BaseModel):
    email: str
    password: str

# 2. Input: HR creates an employee account
class EmployeeCreate(BaseModel):
    full_name: str
    email: EmailStr
    password: str
    phone_number: Optional[str] = ""
    department: Department
    role: str
    joining_date: datetime
    # list of skill objects, or a comma-separated string of names
    skills: Optional[Union[List[Skill], str]] = None

    def skill_list(self) -> List[Skill]:
        if not self.skills:
            return []
        if isinstance(self.skills, str):
            return [Skill(name=name.strip()) for name in self.skills.split(",") if name.strip()]
        return list(self.skills)
