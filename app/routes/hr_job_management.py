# ========================================
# app/routes/hr_job_management.py - HR review of switch requests, applications and referrals
# ========================================

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from typing import Optional

from app.database import get_db
from app.models.job_switch_request import REJECTION_COOLDOWN
from app.schemas.job import SwitchRequestDecision, ApplicationStatusUpdate, ReferralStatusUpdate
from app.utils.auth import get_current_hr
from app.utils.employees import employee_cards
from app.utils.export import export_job_applications_to_csv, create_csv_response_headers
from app.utils.logger import get_logger
from app.utils.mongo import find_embedded, parse_object_id, serialize_doc, utcnow

logger = get_logger(__name__)

router = APIRouter(prefix="/api/hr", tags=["HR - Job Management"])


async def _collect_applications(job_id: Optional[str] = None, status: Optional[str] = None) -> list:
    """Flatten applications across jobs, newest first, each with its job and applicant."""

    db = get_db()
    query = {"_id": parse_object_id(job_id, "job ID")} if job_id else {}
    jobs = await db.jobs.find(query).to_list(500)

    applications = []
    for job in jobs:
        for app in job.get("applications", []):
            if status and app.get("status") != status:
                continue
            applications.append((job, app))

    cards = await employee_cards(app.get("employee_id") for _, app in applications)

    result = []
    for job, app in applications:
        result.append({
            "application_id": app.get("id"),
            "job_id": str(job["_id"]),
            "job_title": job.get("title"),
            "job_department": job.get("department"),
            "employee": cards.get(app.get("employee_id")),
            "status": app.get("status"),
            "match_percentage": app.get("match_percentage", 0),
            "resume_type": app.get("resume_type"),
            "updated_resume": app.get("updated_resume"),
            "applied_date": app.get("applied_date"),
            "skills": app.get("skills", []),
            "notes": app.get("notes"),
            "application_data": app.get("application_data", {}),
        })

    result.sort(key=lambda a: a["applied_date"] or utcnow(), reverse=True)
    return result


# ===========================
# JOB SWITCH REQUESTS
# ===========================

# ✅ 1. PENDING JOB SWITCH REQUESTS
@router.get("/job-switch-requests/pending")
async def get_pending_job_switch_requests(hr_user: dict = Depends(get_current_hr)):
    """Pending requests, oldest first."""

    db = get_db()
    requests = await db.job_switch_requests.find({"status": "pending"}).sort("created_at", 1).to_list(500)
    cards = await employee_cards(r.get("employee_id") for r in requests)

    result = [
        {**serialize_doc(r), "employee": cards.get(r.get("employee_id"))}
        for r in requests
    ]

    return {"success": True, "count": len(result), "requests": result}


# ✅ 2. APPROVE / REJECT JOB SWITCH REQUEST
@router.put("/job-switch-requests/status")
async def update_job_switch_request(
    decision: SwitchRequestDecision,
    hr_user: dict = Depends(get_current_hr)
):
    """A rejection blocks the employee from applying for one month."""

    db = get_db()
    request_oid = parse_object_id(decision.request_id, "request ID")

    request = await db.job_switch_requests.find_one({"_id": request_oid})
    if not request:
        raise HTTPException(status_code=404, detail="Job switch request not found")

    if request.get("status") != "pending":
        raise HTTPException(status_code=400, detail="Request has already been processed")

    now = utcnow()
    update = {"status": decision.status, "reviewed_by": hr_user["email"], "reviewed_date": now}
    if decision.status == "rejected":
        update.update({
            "rejection_reason": decision.rejection_reason or "Not provided",
            "rejection_date": now,
            "can_apply_after": now + REJECTION_COOLDOWN,
        })

    await db.job_switch_requests.update_one({"_id": request_oid}, {"$set": update})

    logger.info("Job switch request %s %s by %s", decision.request_id, decision.status, hr_user["email"])

    request.update(update)
    return {
        "success": True,
        "message": f"Job switch request {decision.status} successfully",
        "request": serialize_doc(request)
    }


# ===========================
# JOB APPLICATIONS
# ===========================

# ✅ 3. LIST APPLICATIONS
@router.get("/job-applications")
async def get_job_applications(
    job_id: Optional[str] = Query(None, description="Only applications for this job"),
    status: Optional[str] = Query(None, description="Filter by application status"),
    hr_user: dict = Depends(get_current_hr)
):
    applications = await _collect_applications(job_id, status)
    return {"success": True, "count": len(applications), "applications": applications}


# ✅ 4. EXPORT APPLICATIONS TO CSV
@router.get("/job-applications/export")
async def export_job_applications(
    job_id: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    hr_user: dict = Depends(get_current_hr)
):
    applications = await _collect_applications(job_id, status)
    csv_content = export_job_applications_to_csv(applications)

    filename = f"job_applications_{utcnow().strftime('%Y%m%d_%H%M%S')}"
    return Response(content=csv_content, media_type="text/csv", headers=create_csv_response_headers(filename))


# ✅ 5. UPDATE APPLICATION STATUS
@router.put("/job-applications/status")
async def update_application_status(
    payload: ApplicationStatusUpdate,
    hr_user: dict = Depends(get_current_hr)
):
    db = get_db()

    job = await db.jobs.find_one({"_id": parse_object_id(payload.job_id, "job ID")})
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    applications = job.get("applications", [])
    application = find_embedded(applications, payload.application_id)
    if application is None:
        raise HTTPException(status_code=404, detail="Application not found")

    application["status"] = payload.status
    if payload.notes is not None:
        application["notes"] = payload.notes

    await db.jobs.update_one(
        {"_id": job["_id"]},
        {"$set": {"applications": applications, "updated_at": utcnow()}}
    )

    logger.info("Application %s set to %s by %s", payload.application_id, payload.status, hr_user["email"])

    return {
        "success": True,
        "message": f"Application status updated to {payload.status}",
        "application": application
    }


# ===========================
# REFERRALS
# ===========================

# ✅ 6. LIST REFERRALS
@router.get("/job-referrals")
async def get_job_referrals(
    job_id: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    hr_user: dict = Depends(get_current_hr)
):
    """Referrals newest first, with the referring employee and the job title."""

    db = get_db()

    query = {}
    if job_id:
        query["job_id"] = job_id
    if status:
        query["status"] = status

    referrals = await db.job_referrals.find(query).sort("referral_date", -1).to_list(500)
    cards = await employee_cards(r.get("referred_by") for r in referrals)

    job_ids = {r.get("job_id") for r in referrals}
    jobs = await db.jobs.find(
        {"_id": {"$in": [parse_object_id(jid, "job ID") for jid in job_ids if jid]}},
        {"title": 1}
    ).to_list(500)
    titles = {str(job["_id"]): job.get("title") for job in jobs}

    result = [
        {
            **serialize_doc(r),
            "job_title": titles.get(r.get("job_id")),
            "referred_by_employee": cards.get(r.get("referred_by")),
        }
        for r in referrals
    ]

    return {"success": True, "count": len(result), "referrals": result}


# ✅ 7. UPDATE REFERRAL STATUS
@router.put("/job-referrals/status")
async def update_referral_status(
    payload: ReferralStatusUpdate,
    hr_user: dict = Depends(get_current_hr)
):
    db = get_db()
    referral_oid = parse_object_id(payload.referral_id, "referral ID")

    update = {"status": payload.status}
    if payload.notes is not None:
        update["notes"] = payload.notes

    result = await db.job_referrals.update_one({"_id": referral_oid}, {"$set": update})
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Referral not found")

    referral = await db.job_referrals.find_one({"_id": referral_oid})

    return {
        "success": True,
        "message": f"Referral status updated to {payload.status}",
        "referral": serialize_doc(referral)
    }
