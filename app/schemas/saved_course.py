from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from app.models.employee import ReviewDecision
from app.schemas.common import EmployeeCredentials

# 1. Course as sent by the client (from the AI recommendations page)
class CourseIn(BaseModel):
    title: str
    provider: str
    duration: str
    cost_type: Literal["Free", "Paid"]
    skills_covered: List[str] = []
    enroll_link: str
    rating: Optional[float] = None
    level: Optional[str] = None
    certificate: Optional[bool] = None
    description: Optional[str] = None

# 2. Input: Save a course
class SaveCourseRequest(EmployeeCredentials):
    course: CourseIn

# 3. Input: Completion proof (file URL and/or link)
class ProofIn(BaseModel):
    file: Optional[str] = None
    link: Optional[str] = None

class CompleteCourseRequest(EmployeeCredentials):
    course_id: str
    proof: ProofIn

# 4. Input: Delete a saved course
class CourseIdRequest(EmployeeCredentials):
    course_id: str

# 5. HR Input: saved courses of one employee
class EmployeeCoursesRequest(BaseModel):
    employee_email: str

# 6. HR Input: review a completion
class CourseReviewRequest(BaseModel):
    employee_id: str
    course_id: str
    status: ReviewDecision
    notes: Optional[str] = None
    verified: Optional[bool] = Field(default=None, description="Defaults to status == 'approved'")
