from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional
from datetime import datetime
from .base import EmbeddedModel, MongoBaseModel, PyObjectId, utcnow

Department = Literal["Engineering", "Product", "Design", "Marketing", "Sales", "HR", "Finance", "Operations"]
SkillCategory = Literal["Frontend", "Backend", "Leadership", "Business", "Design", "Data", "DevOps", "Soft Skills"]
Priority = Literal["High", "Medium", "Low"]

# active -> pending_review -> completed | rejected | needs_demonstration
SavedCourseStatus = Literal["active", "pending_review", "completed", "rejected", "needs_demonstration"]
ReviewDecision = Literal["approved", "rejected", "needs_demonstration"]

REVIEW_TO_COURSE_STATUS = {
    "approved": "completed",
    "rejected": "rejected",
    "needs_demonstration": "needs_demonstration",
}

MAX_SAVED_COURSES = 3


class Skill(BaseModel):
    name: str
    proficiency: int = Field(default=0, ge=0, le=100)
    category: SkillCategory = "Frontend"


class CareerGoal(EmbeddedModel):
    target_role: str
    priority: Priority = "Medium"
    target_date: Optional[datetime] = None
    progress: int = Field(default=0, ge=0, le=100)
    skills_required: List[str] = []
    status: Literal["pending", "approved", "rejected"] = "pending"
    submitted_at: datetime = Field(default_factory=utcnow)
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None


class CompletionProof(BaseModel):
    file: Optional[str] = None  # object-storage URL uploaded by the client
    link: Optional[str] = None
    submitted_at: datetime = Field(default_factory=utcnow)


class CourseReview(BaseModel):
    status: ReviewDecision
    notes: Optional[str] = None
    reviewed_at: datetime = Field(default_factory=utcnow)
    reviewed_by: Optional[str] = None


class SavedCourse(EmbeddedModel):
    title: str
    provider: str
    duration: str
    cost_type: Literal["Free", "Paid"]
    skills_covered: List[str] = []
    enroll_link: str
    saved_at: datetime = Field(default_factory=utcnow)
    status: SavedCourseStatus = "active"
    completion_proof: Optional[CompletionProof] = None
    verified: bool = False
    review: Optional[CourseReview] = None
    rating: Optional[float] = None
    level: Optional[str] = None
    certificate: Optional[bool] = None
    description: Optional[str] = None

    def is_same_course(self, other: Dict[str, Any]) -> bool:
        return self.title == other.get("title") and self.provider == other.get("provider")


class Employee(MongoBaseModel):
    user_id: PyObjectId
    full_name: str
    phone_number: str = ""
    department: Department
    role: str
    joining_date: datetime
    avatar: Optional[str] = None
    skills: List[Skill] = []
    career_goals: List[CareerGoal] = []
    career_readiness_score: int = Field(default=0, ge=0, le=100)
    tenure: int = 0  # months
    achievements: List[str] = []
    resume_link: Optional[str] = None
    resume_data: List[Dict[str, Any]] = []
    saved_courses: List[SavedCourse] = []
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
