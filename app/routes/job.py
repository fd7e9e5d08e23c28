# ========================================
# app/routes/job.py - HR job postings
# ========================================

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from app.database import get_db
from app.models.job import Job
from app.schemas.job import JobCreate, JobUpdate
from app.utils.auth import get_current_hr
from app.utils.logger import get_logger
from app.utils.mongo import naive_utc, parse_object_id, serialize_doc, utcnow

logger = get_logger(__name__)

router = APIRouter(prefix="/api/hr/jobs", tags=["HR - Jobs"])


def job_out(job: dict) -> dict:
    """Job document plus its application counters."""
    data = serialize_doc(job)
    applications = job.get("applications", [])
    data["total_applications"] = len(applications)
    data["pending_applications"] = sum(1 for a in applications if a.get("status") == "pending")
    return data


# ✅ 1. LIST JOBS
@router.get("")
async def get_all_jobs(
    status: Optional[str] = Query(None, description="Filter by status: draft, active, closed"),
    hr_user: dict = Depends(get_current_hr)
):
    db = get_db()

    query = {"status": status} if status else {}
    jobs = await db.jobs.find(query).sort("created_at", -1).to_list(500)

    return {"success": True, "count": len(jobs), "jobs": [job_out(job) for job in jobs]}


# ✅ 2. JOB STATISTICS
@router.get("/stats")
async def get_job_stats(hr_user: dict = Depends(get_current_hr)):
    db = get_db()
    jobs = await db.jobs.find({}, {"status": 1, "applications": 1, "referrals": 1}).to_list(1000)

    stats = {"total_jobs": len(jobs), "draft": 0, "active": 0, "closed": 0,
             "total_applications": 0, "pending_applications": 0, "total_referrals": 0}

    for job in jobs:
        if job.get("status") in ("draft", "active", "closed"):
            stats[job["status"]] += 1
        applications = job.get("applications", [])
        stats["total_applications"] += len(applications)
        stats["pending_applications"] += sum(1 for a in applications if a.get("status") == "pending")
        stats["total_referrals"] += len(job.get("referrals", []))

    return {"success": True, "stats": stats}


# ✅ 3. GET JOB
@router.get("/{job_id}")
async def get_job(job_id: str, hr_user: dict = Depends(get_current_hr)):
    db = get_db()

    job = await db.jobs.find_one({"_id": parse_object_id(job_id, "job ID")})
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    return {"success": True, "job": job_out(job)}


# ✅ 4. CREATE JOB
@router.post("", status_code=201)
async def create_job(payload: JobCreate, hr_user: dict = Depends(get_current_hr)):
    """Create a posting. New postings are drafts unless a status is given."""

    db = get_db()

    data = payload.model_dump()
    data["deadline"] = naive_utc(data["deadline"])
    job = Job(**data, created_by=str(hr_user["_id"]))

    job_doc = job.to_mongo()
    result = await db.jobs.insert_one(job_doc)
    job_doc["_id"] = result.inserted_id

    logger.info("Job '%s' created by %s", job.title, hr_user["email"])

    return {"success": True, "message": "Job created successfully", "job": job_out(job_doc)}


# ✅ 5. UPDATE JOB
@router.put("/{job_id}")
async def update_job(job_id: str, payload: JobUpdate, hr_user: dict = Depends(get_current_hr)):
    db = get_db()
    job_oid = parse_object_id(job_id, "job ID")

    update_data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "deadline" in update_data:
        update_data["deadline"] = naive_utc(update_data["deadline"])
    update_data["updated_at"] = utcnow()

    result = await db.jobs.update_one({"_id": job_oid}, {"$set": update_data})
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Job not found")

    job = await db.jobs.find_one({"_id": job_oid})
    return {"success": True, "message": "Job updated successfully", "job": job_out(job)}


# ✅ 6. DELETE JOB
@router.delete("/{job_id}")
async def delete_job(job_id: str, hr_user: dict = Depends(get_current_hr)):
    """Delete a posting together with its referrals."""

    db = get_db()
    job_oid = parse_object_id(job_id, "job ID")

    result = await db.jobs.delete_one({"_id": job_oid})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Job not found")

    await db.job_referrals.delete_many({"job_id": job_id})

    logger.info("Job %s deleted by %s", job_id, hr_user["email"])

    return {"success": True, "message": "Job deleted successfully", "deleted_id": job_id}
