# ========================================
# app/routes/saved_course.py - Employee saved courses
# ========================================

from fastapi import APIRouter, HTTPException

from app.database import get_db
from app.models.employee import MAX_SAVED_COURSES, CompletionProof, SavedCourse
from app.schemas.common import EmployeeCredentials
from app.schemas.saved_course import SaveCourseRequest, CompleteCourseRequest, CourseIdRequest
from app.utils.auth import authenticate_employee
from app.utils.logger import get_logger
from app.utils.mongo import find_embedded, utcnow

logger = get_logger(__name__)

router = APIRouter(prefix="/api/employee", tags=["Saved Courses"])


def sort_newest_first(courses: list) -> list:
    return sorted(courses, key=lambda c: c.get("saved_at") or utcnow(), reverse=True)


async def write_saved_courses(employee_id, courses: list):
    """Replace the whole embedded array; concurrent edits are last-write-wins."""
    db = get_db()
    await db.employees.update_one(
        {"_id": employee_id},
        {"$set": {"saved_courses": courses, "updated_at": utcnow()}}
    )


# ✅ 1. Save a Course
@router.post("/save-course")
async def save_course(payload: SaveCourseRequest):
    """Save an AI-recommended course. At most 3 per employee, no duplicates."""

    employee = await authenticate_employee(payload.email, payload.password)
    courses = employee.get("saved_courses", [])

    if len(courses) >= MAX_SAVED_COURSES:
        raise HTTPException(status_code=400, detail=f"Maximum of {MAX_SAVED_COURSES} courses can be saved")

    new_course = SavedCourse(**payload.course.model_dump())

    # Same title + provider counts as the same course
    if any(new_course.is_same_course(existing) for existing in courses):
        raise HTTPException(status_code=400, detail="Course already saved")

    course_doc = new_course.to_mongo()
    courses.append(course_doc)
    await write_saved_courses(employee["_id"], courses)

    logger.info("Saved course '%s' (%s) for %s", new_course.title, new_course.provider, employee["email"])

    return {
        "success": True,
        "message": "Course saved successfully",
        "saved_course": course_doc
    }


# ✅ 2. Submit Completion Proof
@router.post("/complete-course")
async def complete_course(payload: CompleteCourseRequest):
    """
    Submit completion proof (uploaded file URL and/or a link) for HR review.
    Resubmitting overwrites the previous proof.
    """

    employee = await authenticate_employee(payload.email, payload.password)
    courses = employee.get("saved_courses", [])

    course = find_embedded(courses, payload.course_id)
    if course is None:
        raise HTTPException(status_code=404, detail="Course not found")

    if not payload.proof.file and not payload.proof.link:
        raise HTTPException(status_code=400, detail="Completion proof requires a file or a link")

    # New proof needs a fresh review
    course["status"] = "pending_review"
    course["verified"] = False
    course["review"] = None
    course["completion_proof"] = CompletionProof(
        file=payload.proof.file,
        link=payload.proof.link
    ).model_dump()

    await write_saved_courses(employee["_id"], courses)

    logger.info("Completion proof submitted for course %s by %s", payload.course_id, employee["email"])

    return {
        "success": True,
        "message": "Course completion submitted for review",
        "saved_course": course
    }


# ✅ 3. List My Saved Courses
@router.post("/my-saved-courses")
async def my_saved_courses(credentials: EmployeeCredentials):
    """Get the employee's saved courses, newest first."""

    employee = await authenticate_employee(credentials.email, credentials.password)
    courses = sort_newest_first(employee.get("saved_courses", []))

    return {
        "success": True,
        "saved_courses": courses,
        "count": len(courses)
    }


# ✅ 4. Delete a Saved Course
@router.post("/delete-course")
async def delete_course(payload: CourseIdRequest):
    """Remove a saved course, whatever its status."""

    employee = await authenticate_employee(payload.email, payload.password)
    courses = employee.get("saved_courses", [])

    course = find_embedded(courses, payload.course_id)
    if course is None:
        raise HTTPException(status_code=404, detail="Course not found")

    remaining = [c for c in courses if c.get("id") != payload.course_id]
    await write_saved_courses(employee["_id"], remaining)

    logger.info("Deleted course %s for %s", payload.course_id, employee["email"])

    return {
        "success": True,
        "message": "Course deleted successfully",
        "deleted_course": {
            "id": course["id"],
            "title": course.get("title")
        }
    }
