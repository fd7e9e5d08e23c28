from pydantic import BaseModel
from typing import List, Literal, Optional

from app.models.course_progress import ProofType
from app.models.course_recommendation import RecommendedCourse
from app.schemas.common import EmployeeCredentials

class StoreRecommendationsRequest(EmployeeCredentials):
    target_role: str
    priority: Literal["High", "Medium", "Low"]
    courses: List[RecommendedCourse]
    aspiration_id: Optional[str] = None

class GetRecommendationsRequest(EmployeeCredentials):
    priority: Optional[Literal["High", "Medium", "Low"]] = None

# Progress on one recommended course
class StartCourseRequest(EmployeeCredentials):
    course_id: str
    recommendation_id: str

class SubmitCompletionRequest(StartCourseRequest):
    proof: str
    proof_type: ProofType = "certificate"

# HR Input: verify a submitted completion
class VerifyCompletionRequest(BaseModel):
    progress_id: str
    status: Literal["approved", "rejected", "needs_demonstration"]
    notes: Optional[str] = None
