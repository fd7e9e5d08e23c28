# ========================================
# app/routes/approval.py - Mentor, role-change and training requests
# ========================================

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from app.database import get_db
from app.models.approval_request import ApprovalRequest
from app.schemas.approval import ApprovalCreate, ApprovalDecision
from app.schemas.common import EmployeeCredentials
from app.utils.auth import authenticate_employee, get_current_hr
from app.utils.employees import employee_cards
from app.utils.logger import get_logger
from app.utils.mongo import parse_object_id, serialize_doc, utcnow

logger = get_logger(__name__)

router = APIRouter(tags=["Approval Requests"])


# ✅ 1. RAISE REQUEST (employee)
@router.post("/api/employee/approval-requests", status_code=201)
async def create_approval_request(payload: ApprovalCreate):
    """The payload field matching `type` must be present."""

    employee = await authenticate_employee(payload.email, payload.password)

    details = payload.details()
    if details is None:
        raise HTTPException(status_code=400, detail=f"{payload.type}_request details are required")

    request = ApprovalRequest(
        type=payload.type,
        employee_id=str(employee["_id"]),
        priority=payload.priority,
        **{f"{payload.type}_request": details}
    )

    db = get_db()
    request_doc = request.to_mongo()
    result = await db.approval_requests.insert_one(request_doc)
    request_doc["_id"] = result.inserted_id

    logger.info("%s approval request raised by %s", payload.type, employee["email"])

    return {
        "success": True,
        "message": "Approval request submitted successfully",
        "request": serialize_doc(request_doc)
    }


# ✅ 2. MY REQUESTS (employee)
@router.post("/api/employee/approval-requests/list")
async def get_my_approval_requests(credentials: EmployeeCredentials):
    employee = await authenticate_employee(credentials.email, credentials.password)

    db = get_db()
    requests = await db.approval_requests.find(
        {"employee_id": str(employee["_id"])}
    ).sort("created_at", -1).to_list(200)

    return {"success": True, "count": len(requests), "requests": [serialize_doc(r) for r in requests]}


# ✅ 3. ALL REQUESTS (HR)
@router.get("/api/hr/approval-requests")
async def get_approval_requests(
    status: Optional[str] = Query(None, description="Filter by status: pending, approved, rejected"),
    hr_user: dict = Depends(get_current_hr)
):
    db = get_db()

    query = {"status": status} if status else {}
    requests = await db.approval_requests.find(query).sort("created_at", -1).to_list(500)
    cards = await employee_cards(r.get("employee_id") for r in requests)

    result = [{**serialize_doc(r), "employee": cards.get(r.get("employee_id"))} for r in requests]

    return {"success": True, "count": len(result), "requests": result}


# ✅ 4. APPROVE / REJECT (HR)
@router.put("/api/hr/approval-requests/{request_id}")
async def review_approval_request(
    request_id: str,
    decision: ApprovalDecision,
    hr_user: dict = Depends(get_current_hr)
):
    db = get_db()
    request_oid = parse_object_id(request_id, "request ID")

    update = {
        "status": decision.status,
        "reviewed_by": hr_user["email"],
        "reviewed_at": utcnow(),
        "comments": decision.comments,
    }

    result = await db.approval_requests.update_one({"_id": request_oid}, {"$set": update})
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Approval request not found")

    request = await db.approval_requests.find_one({"_id": request_oid})

    logger.info("Approval request %s %s by %s", request_id, decision.status, hr_user["email"])

    return {
        "success": True,
        "message": f"Approval request {decision.status} successfully",
        "request": serialize_doc(request)
    }
