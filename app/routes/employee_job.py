# ========================================
# app/routes/employee_job.py - Internal jobs for employees
# ========================================

from fastapi import APIRouter, HTTPException
from typing import Optional, Tuple
from pymongo.errors import DuplicateKeyError

from app.database import get_db
from app.models.job import JobApplication
from app.models.job_referral import JobReferral
from app.models.job_switch_request import REJECTION_COOLDOWN, JobSwitchRequest
from app.schemas.common import EmployeeCredentials
from app.schemas.job import ApplyRequest, ReferRequest
from app.utils.auth import authenticate_employee
from app.utils.employees import employee_info
from app.utils.logger import get_logger
from app.utils.mongo import parse_object_id, serialize_doc, utcnow

logger = get_logger(__name__)

router = APIRouter(prefix="/api/employee/jobs", tags=["Employee - Jobs"])


async def latest_switch_request(employee_id: str) -> Optional[dict]:
    db = get_db()
    requests = await db.job_switch_requests.find(
        {"employee_id": employee_id}
    ).sort("created_at", -1).to_list(1)
    return requests[0] if requests else None


def switch_state(request: Optional[dict], now=None) -> Tuple[bool, Optional[str]]:
    """
    Whether the employee may apply, and why not.
    Only an approved latest request allows applying.
    """
    now = now or utcnow()

    if request is None:
        return False, "You need to submit a job switch request before applying for internal positions."

    status = request.get("status")
    if status == "approved":
        return True, None
    if status == "pending":
        return False, "Your job switch request is pending HR review."

    rejected_at = request.get("rejection_date")
    if rejected_at and rejected_at > now - REJECTION_COOLDOWN:
        return False, request.get("rejection_reason") or (
            "Your job switch request was rejected. You cannot apply for new jobs for one month."
        )
    return False, "Your rejection period has ended. You can submit a new job switch request."


def match_percentage(employee_skills: list, required_skills: list) -> int:
    """Share of the job's required skills the employee lists, 0-100."""
    if not required_skills:
        return 0
    required = set(required_skills)
    matching = set(employee_skills) & required
    return round(len(matching) / len(required) * 100)


async def _load_active_job(job_id: str) -> dict:
    db = get_db()
    job = await db.jobs.find_one({"_id": parse_object_id(job_id, "job ID")})
    if not job or job.get("status") != "active":
        raise HTTPException(status_code=404, detail="Job not found or not active")
    return job


async def _ensure_not_engaged(job: dict, employee_id: str):
    """An employee either applies to or refers for a job, once."""
    if any(app.get("employee_id") == employee_id for app in job.get("applications", [])):
        raise HTTPException(status_code=400, detail="You have already applied for this job")

    db = get_db()
    existing = await db.job_referrals.find_one({"job_id": str(job["_id"]), "referred_by": employee_id})
    if existing:
        raise HTTPException(status_code=400, detail="You have already referred someone for this job")


# ✅ 1. ACTIVE JOBS WITH MY APPLY/REFER STATE
@router.post("/active-jobs")
async def get_active_jobs(credentials: EmployeeCredentials):
    """Open postings, each flagged with what this employee may still do."""

    employee = await authenticate_employee(credentials.email, credentials.password)
    employee_id = str(employee["_id"])
    db = get_db()

    switch_request = await latest_switch_request(employee_id)
    can_apply, restriction = switch_state(switch_request)

    # Other applicants are never sent to employees
    jobs = await db.jobs.find(
        {"status": "active", "deadline": {"$gte": utcnow()}},
        {"applications": 0}
    ).sort("created_at", -1).to_list(500)

    applied_jobs = await db.jobs.find({"applications.employee_id": employee_id}, {"_id": 1}).to_list(1000)
    applied_ids = {str(job["_id"]) for job in applied_jobs}

    referrals = await db.job_referrals.find({"referred_by": employee_id}).to_list(1000)
    referred_ids = {ref["job_id"] for ref in referrals}

    result = []
    for job in jobs:
        job_id = str(job["_id"])
        has_applied = job_id in applied_ids
        has_referred = job_id in referred_ids
        result.append({
            **serialize_doc(job),
            "has_applied": has_applied,
            "has_referred": has_referred,
            "can_apply": can_apply and not has_applied and not has_referred,
            "can_refer": not has_applied and not has_referred,
        })

    return {
        "success": True,
        "jobs": result,
        "job_switch_request": serialize_doc(switch_request),
        "can_apply": can_apply,
        "rejection_message": restriction,
        "employee_info": employee_info(employee, employee["email"])
    }


# ✅ 2. SUBMIT JOB SWITCH REQUEST
@router.post("/job-switch-request", status_code=201)
async def submit_job_switch_request(credentials: EmployeeCredentials):
    employee = await authenticate_employee(credentials.email, credentials.password)
    employee_id = str(employee["_id"])
    db = get_db()

    if await db.job_switch_requests.find_one({"employee_id": employee_id, "status": "pending"}):
        raise HTTPException(status_code=400, detail="You already have a pending job switch request")

    latest = await latest_switch_request(employee_id)
    if latest and latest.get("status") == "approved":
        raise HTTPException(status_code=400, detail="Your job switch request is already approved")

    recent_rejection = await db.job_switch_requests.find_one({
        "employee_id": employee_id,
        "status": "rejected",
        "rejection_date": {"$gte": utcnow() - REJECTION_COOLDOWN}
    })
    if recent_rejection:
        raise HTTPException(
            status_code=400,
            detail="You cannot submit a new request until one month after rejection"
        )

    request_doc = JobSwitchRequest(employee_id=employee_id).to_mongo()
    result = await db.job_switch_requests.insert_one(request_doc)
    request_doc["_id"] = result.inserted_id

    logger.info("Job switch request submitted by %s", employee["email"])

    return {
        "success": True,
        "message": "Job switch request submitted successfully for HR review",
        "job_switch_request": serialize_doc(request_doc)
    }


# ✅ 3. JOB SWITCH REQUEST STATUS
@router.post("/job-switch-request/status")
async def get_job_switch_request_status(credentials: EmployeeCredentials):
    employee = await authenticate_employee(credentials.email, credentials.password)

    request = await latest_switch_request(str(employee["_id"]))
    if request is None:
        return {"success": True, "has_request": False, "can_apply": False,
                "message": "No job switch request found"}

    can_apply, message = switch_state(request)
    response = {
        "success": True,
        "has_request": True,
        "status": request["status"],
        "request_date": request.get("request_date"),
        "reviewed_by": request.get("reviewed_by"),
        "reviewed_date": request.get("reviewed_date"),
        "can_apply": can_apply,
        "message": message,
    }
    if request["status"] == "rejected":
        response["rejection_reason"] = request.get("rejection_reason")
        response["rejection_date"] = request.get("rejection_date")
        response["can_apply_after"] = request.get("can_apply_after")

    return response


# ✅ 4. APPLY FOR JOB
@router.post("/{job_id}/apply", status_code=201)
async def apply_for_job(job_id: str, payload: ApplyRequest):
    """Apply with the current resume or an updated one. Needs an approved switch request."""

    if payload.resume_type == "updated" and not payload.updated_resume:
        raise HTTPException(
            status_code=400,
            detail="Updated resume file is required when resume type is 'updated'"
        )

    employee = await authenticate_employee(payload.email, payload.password)
    employee_id = str(employee["_id"])

    can_apply, _ = switch_state(await latest_switch_request(employee_id))
    if not can_apply:
        raise HTTPException(
            status_code=403,
            detail="You need an approved job switch request to apply for internal jobs"
        )

    job = await _load_active_job(job_id)
    await _ensure_not_engaged(job, employee_id)

    employee_skills = [skill.get("name") for skill in employee.get("skills", [])]
    percentage = match_percentage(employee_skills, job.get("required_skills", []))

    application = JobApplication(
        employee_id=employee_id,
        resume_type=payload.resume_type,
        updated_resume=payload.updated_resume if payload.resume_type == "updated" else None,
        match_percentage=percentage,
        skills=employee_skills,
        application_data={
            # snapshot of the profile at application time
            "employee_info": {
                "full_name": employee.get("full_name"),
                "email": employee["email"],
                "department": employee.get("department"),
                "role": employee.get("role"),
                "joining_date": employee.get("joining_date"),
                "tenure": employee.get("tenure", 0),
            },
            "skills": employee.get("skills", []),
            "career_goals": employee.get("career_goals", []),
            "resume_data": employee.get("resume_data", []),
            "resume_link": employee.get("resume_link"),
        },
    ).to_mongo()

    db = get_db()
    await db.jobs.update_one({"_id": job["_id"]}, {"$push": {"applications": application}})

    logger.info("%s applied to job %s (match %s%%)", employee["email"], job_id, percentage)

    return {
        "success": True,
        "message": "Application submitted successfully",
        "application": {
            "id": application["id"],
            "job_title": job.get("title"),
            "resume_type": payload.resume_type,
            "match_percentage": percentage,
            "applied_date": application["applied_date"],
        }
    }


# ✅ 5. REFER A CANDIDATE
@router.post("/{job_id}/refer", status_code=201)
async def refer_candidate(job_id: str, payload: ReferRequest):
    if not (payload.candidate_name.strip() and payload.candidate_email.strip() and payload.candidate_resume.strip()):
        raise HTTPException(status_code=400, detail="Candidate name, email, and resume are required")

    employee = await authenticate_employee(payload.email, payload.password)
    employee_id = str(employee["_id"])

    job = await _load_active_job(job_id)
    await _ensure_not_engaged(job, employee_id)

    referral = JobReferral(
        job_id=str(job["_id"]),
        referred_by=employee_id,
        candidate_name=payload.candidate_name,
        candidate_email=payload.candidate_email,
        candidate_phone=payload.candidate_phone,
        candidate_resume=payload.candidate_resume,
        candidate_skills=payload.candidate_skills,
        candidate_experience=payload.candidate_experience or "Not specified",
    )

    db = get_db()
    try:
        result = await db.job_referrals.insert_one(referral.to_mongo())
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="You have already referred someone for this job")

    await db.jobs.update_one({"_id": job["_id"]}, {"$push": {"referrals": str(result.inserted_id)}})

    logger.info("%s referred %s for job %s", employee["email"], payload.candidate_email, job_id)

    return {
        "success": True,
        "message": "Candidate referred successfully",
        "referral": {
            "id": str(result.inserted_id),
            "candidate_name": referral.candidate_name,
            "candidate_email": referral.candidate_email,
            "job_title": job.get("title"),
            "referral_date": referral.referral_date,
        }
    }
