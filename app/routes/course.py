# ========================================
# app/routes/course.py - Course recommendations and progress tracking
# ========================================

from fastapi import APIRouter, Depends, HTTPException

from app.database import get_db
from app.models.course_progress import CourseProgress, HRVerification
from app.models.course_recommendation import CourseRecommendation
from app.schemas.common import EmployeeCredentials
from app.schemas.course import (
    StoreRecommendationsRequest,
    GetRecommendationsRequest,
    StartCourseRequest,
    SubmitCompletionRequest,
    VerifyCompletionRequest
)
from app.utils.auth import authenticate_employee, get_current_hr
from app.utils.logger import get_logger
from app.utils.mongo import parse_object_id, serialize_doc, utcnow

logger = get_logger(__name__)

router = APIRouter(prefix="/api/courses", tags=["Course Recommendations"])

VERIFICATION_TO_PROGRESS_STATUS = {
    "approved": "verified",
    "rejected": "rejected",
    "needs_demonstration": "completed",
}


def progress_card(progress: dict) -> dict:
    return {
        "progress_id": str(progress["_id"]),
        "status": progress.get("status"),
        "started_at": progress.get("started_at"),
        "completed_at": progress.get("completed_at"),
        "hr_verified": (progress.get("hr_verification") or {}).get("verified", False),
    }


async def _seed_progress(employee_id: str, recommendation_id: str, courses: list):
    """One progress row per course; rows of courses no longer recommended are dropped."""
    db = get_db()
    course_ids = [course["id"] for course in courses]

    await db.course_progress.delete_many({
        "recommendation_id": recommendation_id,
        "course_id": {"$nin": course_ids}
    })

    for course in courses:
        row = CourseProgress(
            employee_id=employee_id,
            recommendation_id=recommendation_id,
            course_id=course["id"],
            course_title=course["title"],
        ).to_mongo()
        # existing rows keep their progress
        await db.course_progress.update_one(
            {"employee_id": employee_id, "recommendation_id": recommendation_id, "course_id": course["id"]},
            {"$setOnInsert": row},
            upsert=True
        )


async def _update_progress(payload: StartCourseRequest, fields: dict) -> dict:
    employee = await authenticate_employee(payload.email, payload.password)
    db = get_db()

    query = {
        "employee_id": str(employee["_id"]),
        "recommendation_id": payload.recommendation_id,
        "course_id": payload.course_id,
    }
    result = await db.course_progress.update_one(query, {"$set": {**fields, "updated_at": utcnow()}})
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Course progress not found")

    return await db.course_progress.find_one(query)


# ✅ 1. STORE RECOMMENDATIONS
@router.post("/store-recommendations", status_code=201)
async def store_recommendations(payload: StoreRecommendationsRequest):
    """
    Save generated recommendations for a target role and priority.
    An existing active set for the same role and priority is replaced.
    """

    employee = await authenticate_employee(payload.email, payload.password)
    employee_id = str(employee["_id"])
    db = get_db()

    recommendation = CourseRecommendation.build(
        employee_id=employee_id,
        target_role=payload.target_role,
        priority=payload.priority,
        courses=payload.courses,
        aspiration_id=payload.aspiration_id,
    )
    doc = recommendation.to_mongo()

    existing = await db.course_recommendations.find_one({
        "employee_id": employee_id,
        "target_role": payload.target_role,
        "priority": payload.priority,
        "status": "active",
    })

    if existing:
        await db.course_recommendations.update_one({"_id": existing["_id"]}, {"$set": doc})
        doc["_id"] = existing["_id"]
        message = "Course recommendations updated successfully"
    else:
        result = await db.course_recommendations.insert_one(doc)
        doc["_id"] = result.inserted_id
        message = "Course recommendations stored successfully"

    await _seed_progress(employee_id, str(doc["_id"]), doc["courses"])

    logger.info("Stored %s recommendations for %s (%s)", doc["total_courses"], employee["email"], payload.target_role)

    return {"success": True, "message": message, "recommendation": serialize_doc(doc)}


# ✅ 2. GET RECOMMENDATIONS
@router.post("/get-recommendations")
async def get_recommendations(payload: GetRecommendationsRequest):
    """Active, unexpired recommendations with each course's progress attached."""

    employee = await authenticate_employee(payload.email, payload.password)
    employee_id = str(employee["_id"])

    query = {"employee_id": employee_id, "status": "active", "expires_at": {"$gt": utcnow()}}
    if payload.priority:
        query["priority"] = payload.priority

    db = get_db()
    recommendations = await db.course_recommendations.find(query).sort("generated_at", -1).to_list(100)

    rows = await db.course_progress.find({"employee_id": employee_id}).to_list(1000)
    progress = {(row["recommendation_id"], row["course_id"]): row for row in rows}

    result = []
    for rec in recommendations:
        rec_id = str(rec["_id"])
        data = serialize_doc(rec)
        data["courses"] = [
            {**course, "progress": progress_card(progress[(rec_id, course["id"])])
                if (rec_id, course["id"]) in progress else None}
            for course in rec.get("courses", [])
        ]
        result.append(data)

    return {"success": True, "count": len(result), "recommendations": result}


# ✅ 3. START A COURSE
@router.post("/start-course")
async def start_course(payload: StartCourseRequest):
    row = await _update_progress(payload, {"status": "in_progress", "started_at": utcnow()})

    return {
        "success": True,
        "message": "Course marked as in progress",
        "progress": {"course_id": row["course_id"], "status": row["status"], "started_at": row["started_at"]}
    }


# ✅ 4. SUBMIT COMPLETION PROOF
@router.post("/submit-completion")
async def submit_completion(payload: SubmitCompletionRequest):
    if not payload.proof.strip():
        raise HTTPException(status_code=400, detail="Completion proof is required")

    row = await _update_progress(payload, {
        "status": "completed",
        "completed_at": utcnow(),
        "proof": payload.proof.strip(),
        "proof_type": payload.proof_type,
        "hr_verification": HRVerification().model_dump(),
    })

    logger.info("Completion proof submitted for recommended course %s", payload.course_id)

    return {
        "success": True,
        "message": "Course completion proof submitted successfully. Awaiting verification.",
        "progress": {
            "course_id": row["course_id"],
            "status": row["status"],
            "completed_at": row["completed_at"],
            "proof": row["proof"],
            "proof_type": row["proof_type"],
        }
    }


# ✅ 5. PROGRESS SUMMARY
@router.post("/progress-summary")
async def get_progress_summary(credentials: EmployeeCredentials):
    """Counts, completion/verification rates and a per-priority breakdown."""

    employee = await authenticate_employee(credentials.email, credentials.password)
    db = get_db()

    rows = await db.course_progress.find({"employee_id": str(employee["_id"])}).to_list(1000)

    rec_ids = {row["recommendation_id"] for row in rows}
    recommendations = await db.course_recommendations.find(
        {"_id": {"$in": [parse_object_id(rid, "recommendation ID") for rid in rec_ids]}},
        {"target_role": 1, "priority": 1}
    ).to_list(len(rec_ids) or 1)
    recs_by_id = {str(rec["_id"]): rec for rec in recommendations}

    def is_verified(row):
        return row.get("status") == "verified" or (row.get("hr_verification") or {}).get("verified", False)

    total = len(rows)
    completed = sum(1 for r in rows if r.get("status") == "completed")
    verified = sum(1 for r in rows if is_verified(r))

    by_priority = {}
    for row in rows:
        priority = recs_by_id.get(row["recommendation_id"], {}).get("priority", "Unknown")
        bucket = by_priority.setdefault(priority, {"total": 0, "completed": 0, "verified": 0})
        bucket["total"] += 1
        if row.get("status") in ("completed", "verified"):
            bucket["completed"] += 1
        if is_verified(row):
            bucket["verified"] += 1

    recent = sorted(rows, key=lambda r: r.get("updated_at") or utcnow(), reverse=True)[:10]

    return {
        "success": True,
        "summary": {
            "total_courses": total,
            "not_started": sum(1 for r in rows if r.get("status") == "not_started"),
            "in_progress": sum(1 for r in rows if r.get("status") == "in_progress"),
            "completed": completed,
            "verified": verified,
            "completion_rate": round(completed / total * 100) if total else 0,
            "verification_rate": round(verified / total * 100) if total else 0,
            "progress_by_priority": by_priority,
        },
        "recent_progress": [
            {
                "course_id": r["course_id"],
                "course_title": r.get("course_title"),
                "status": r.get("status"),
                "target_role": recs_by_id.get(r["recommendation_id"], {}).get("target_role"),
                "priority": recs_by_id.get(r["recommendation_id"], {}).get("priority"),
                "updated_at": r.get("updated_at"),
            }
            for r in recent
        ]
    }


# ✅ 6. VERIFY COMPLETION (HR)
@router.put("/verify-completion")
async def verify_completion(payload: VerifyCompletionRequest, hr_user: dict = Depends(get_current_hr)):
    db = get_db()
    progress_oid = parse_object_id(payload.progress_id, "progress ID")

    row = await db.course_progress.find_one({"_id": progress_oid})
    if not row:
        raise HTTPException(status_code=404, detail="Course progress not found")

    if row.get("status") not in ("completed", "verified", "rejected"):
        raise HTTPException(status_code=400, detail="Course completion has not been submitted")

    verification = HRVerification(
        verified=payload.status == "approved",
        status=payload.status,
        verified_by=hr_user["email"],
        verified_at=utcnow(),
        notes=payload.notes,
    ).model_dump()
    update = {
        "status": VERIFICATION_TO_PROGRESS_STATUS[payload.status],
        "hr_verification": verification,
        "updated_at": utcnow(),
    }
    await db.course_progress.update_one({"_id": progress_oid}, {"$set": update})

    logger.info("Course progress %s %s by %s", payload.progress_id, payload.status, hr_user["email"])

    row.update(update)
    return {"success": True, "message": f"Course completion {payload.status}", "progress": serialize_doc(row)}
