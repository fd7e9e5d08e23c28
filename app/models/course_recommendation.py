from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime, timedelta
from .base import MongoBaseModel, PyObjectId, new_id, utcnow

RECOMMENDATION_TTL = timedelta(days=30)

class RecommendedCourse(BaseModel):
    id: str = Field(default_factory=new_id)
    title: str
    provider: str
    duration: Optional[str] = None
    cost: Literal["Free", "Paid"]
    key_skills_covered: List[str] = []
    link: str
    expected_readiness_gain: int = Field(default=0, ge=0, le=100)
    relevance_score: int = Field(default=0, ge=0, le=100)
    platform: str = "Other"
    category: str = "Technical"
    level: Literal["Beginner", "Intermediate", "Advanced"] = "Intermediate"
    is_active: bool = True

class CourseRecommendation(MongoBaseModel):
    employee_id: PyObjectId
    aspiration_id: Optional[str] = None
    target_role: str
    priority: Literal["High", "Medium", "Low"]
    courses: List[RecommendedCourse] = []
    status: Literal["active", "completed", "archived"] = "active"
    generated_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime = Field(default_factory=lambda: utcnow() + RECOMMENDATION_TTL)
    total_courses: int = 0
    free_courses: int = 0
    paid_courses: int = 0
    average_relevance_score: int = 0

    @classmethod
    def build(cls, employee_id: str, target_role: str, priority: str,
              courses: List[RecommendedCourse], aspiration_id: Optional[str] = None):
        total = len(courses)
        average = sum(c.relevance_score for c in courses) / total if total else 0
        return cls(
            employee_id=employee_id,
            aspiration_id=aspiration_id,
            target_role=target_role,
            priority=priority,
            courses=courses,
            total_courses=total,
            free_courses=sum(1 for c in courses if c.cost == "Free"),
            paid_courses=sum(1 for c in courses if c.cost == "Paid"),
            average_relevance_score=round(average),
        )
