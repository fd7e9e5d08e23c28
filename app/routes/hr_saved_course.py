# ========================================
# app/routes/hr_saved_course.py - HR review of saved courses
# ========================================

from fastapi import APIRouter, Depends, HTTPException, Response

from app.database import get_db
from app.models.employee import REVIEW_TO_COURSE_STATUS, CourseReview
from app.routes.saved_course import sort_newest_first, write_saved_courses
from app.schemas.saved_course import EmployeeCoursesRequest, CourseReviewRequest
from app.utils.auth import get_current_hr
from app.utils.employees import employee_info, load_user_emails
from app.utils.export import export_saved_courses_to_csv, create_csv_response_headers
from app.utils.logger import get_logger
from app.utils.mongo import find_embedded, parse_object_id, utcnow

logger = get_logger(__name__)

router = APIRouter(prefix="/api/hr", tags=["HR - Saved Courses"])

COURSE_STATUSES = ["active", "pending_review", "completed", "rejected", "needs_demonstration"]


async def _courses_with_owner(query: dict, status: str = None) -> list:
    """Flatten saved courses across employees, each tagged with its owner."""
    db = get_db()
    employees = await db.employees.find(query).to_list(1000)
    emails = await load_user_emails(e.get("user_id") for e in employees)

    result = []
    for employee in employees:
        info = employee_info(employee, emails.get(employee.get("user_id")))
        for course in employee.get("saved_courses", []):
            if status and course.get("status") != status:
                continue
            result.append({**course, "employee_info": info})
    return result


# ✅ 1. Saved Courses of One Employee
@router.post("/get-saved-courses")
async def get_employee_saved_courses(
    payload: EmployeeCoursesRequest,
    hr_user: dict = Depends(get_current_hr)
):
    """Get every saved course of the employee with the given login email."""

    db = get_db()

    user = await db.users.find_one({"email": payload.employee_email.strip().lower()})
    if not user:
        raise HTTPException(status_code=404, detail="Employee not found")

    employee = await db.employees.find_one({"user_id": str(user["_id"])})
    if not employee:
        raise HTTPException(status_code=404, detail="Employee profile not found")

    courses = sort_newest_first(employee.get("saved_courses", []))

    return {
        "success": True,
        "saved_courses": courses,
        "count": len(courses),
        "employee_info": employee_info(employee, user["email"])
    }


# ✅ 2. All Pending Completions
@router.get("/pending-course-completions")
async def get_pending_completions(hr_user: dict = Depends(get_current_hr)):
    """All courses awaiting review, most recently submitted proof first."""

    pending = await _courses_with_owner({"saved_courses.status": "pending_review"}, status="pending_review")

    def submitted(course):
        proof = course.get("completion_proof") or {}
        return proof.get("submitted_at") or course.get("saved_at") or utcnow()

    pending.sort(key=submitted, reverse=True)

    return {
        "success": True,
        "pending_completions": pending,
        "count": len(pending)
    }


# ✅ 3. All Saved Courses With Stats
@router.get("/all-saved-courses")
async def get_all_saved_courses(hr_user: dict = Depends(get_current_hr)):
    """Every saved course across employees regardless of status."""

    all_courses = sort_newest_first(
        await _courses_with_owner({"saved_courses.0": {"$exists": True}})
    )

    stats = {"total": len(all_courses)}
    for status in COURSE_STATUSES:
        stats[status] = sum(1 for c in all_courses if c.get("status") == status)
    stats["verified"] = sum(1 for c in all_courses if c.get("verified"))

    return {
        "success": True,
        "all_courses": all_courses,
        "count": len(all_courses),
        "stats": stats
    }


# ✅ 4. Export Saved Courses to CSV
@router.get("/all-saved-courses/export")
async def export_saved_courses(hr_user: dict = Depends(get_current_hr)):
    """Download every saved course as CSV."""

    all_courses = sort_newest_first(
        await _courses_with_owner({"saved_courses.0": {"$exists": True}})
    )
    csv_content = export_saved_courses_to_csv(all_courses)

    return Response(
        content=csv_content,
        media_type="text/csv",
        headers=create_csv_response_headers(f"saved_courses_{utcnow().strftime('%Y%m%d')}")
    )


# ✅ 5. Review a Course Completion
@router.put("/update-course-status")
async def update_course_status(
    review: CourseReviewRequest,
    hr_user: dict = Depends(get_current_hr)
):
    """
    Record HR's decision on a course.

    approved -> completed, rejected -> rejected,
    needs_demonstration -> needs_demonstration.
    The course's current state is not checked.
    """

    db = get_db()

    employee_oid = parse_object_id(review.employee_id, "employee ID")
    employee = await db.employees.find_one({"_id": employee_oid})
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")

    courses = employee.get("saved_courses", [])
    course = find_embedded(courses, review.course_id)
    if course is None:
        raise HTTPException(status_code=404, detail="Course not found")

    verified = review.verified if review.verified is not None else review.status == "approved"

    course["status"] = REVIEW_TO_COURSE_STATUS[review.status]
    course["verified"] = verified
    course["review"] = CourseReview(
        status=review.status,
        notes=review.notes,
        reviewed_by=hr_user["email"]
    ).model_dump()

    await write_saved_courses(employee_oid, courses)

    logger.info(
        "Course %s of employee %s reviewed by %s: %s",
        review.course_id, review.employee_id, hr_user["email"], review.status
    )

    return {
        "success": True,
        "message": f"Course status updated to {course['status']}",
        "course": course
    }
