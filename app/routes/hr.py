# ========================================
# app/routes/hr.py - HR employee management and career-goal review
# ========================================

from fastapi import APIRouter, Depends, HTTPException
from bson import ObjectId

from app.database import get_db
from app.schemas.employee import EmployeeStatusUpdate, CareerGoalDecision
from app.utils.auth import get_current_hr
from app.utils.employees import load_user_emails
from app.utils.logger import get_logger
from app.utils.mongo import find_embedded, parse_object_id, serialize_doc, utcnow

logger = get_logger(__name__)

router = APIRouter(prefix="/api/hr", tags=["HR - Employees"])


# ===========================
# EMPLOYEE MANAGEMENT
# ===========================

# ✅ 1. LIST ALL EMPLOYEES
@router.get("/employees")
async def get_all_employees(hr_user: dict = Depends(get_current_hr)):
    """All employees, without the (large) parsed resume data."""

    db = get_db()
    employees = await db.employees.find().to_list(1000)

    user_ids = [ObjectId(e["user_id"]) for e in employees if ObjectId.is_valid(e.get("user_id", ""))]
    users = await db.users.find({"_id": {"$in": user_ids}}).to_list(1000)
    users_by_id = {str(u["_id"]): u for u in users}

    result = []
    for employee in employees:
        user = users_by_id.get(employee.get("user_id"), {})
        data = serialize_doc(employee, exclude=("resume_data",))
        data.update({
            "email": user.get("email"),
            "is_active": user.get("is_active", True),
            "last_login": user.get("last_login"),
            "resume_data_count": len(employee.get("resume_data", [])),
        })
        result.append(data)

    return {"success": True, "count": len(result), "employees": result}


# ✅ 2. GET EMPLOYEE DETAILS
@router.get("/employees/{employee_id}")
async def get_employee_by_id(employee_id: str, hr_user: dict = Depends(get_current_hr)):
    db = get_db()

    employee = await db.employees.find_one({"_id": parse_object_id(employee_id, "employee ID")})
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")

    user = None
    if ObjectId.is_valid(employee.get("user_id", "")):
        user = await db.users.find_one({"_id": ObjectId(employee["user_id"])})
    user = user or {}

    data = serialize_doc(employee)
    data.update({
        "email": user.get("email"),
        "is_active": user.get("is_active", True),
        "last_login": user.get("last_login"),
    })

    return {"success": True, "employee": data}


# ✅ 3. ACTIVATE / DEACTIVATE EMPLOYEE
@router.put("/employees/status")
async def update_employee_status(
    payload: EmployeeStatusUpdate,
    hr_user: dict = Depends(get_current_hr)
):
    """Toggle the `is_active` flag of the employee's login."""

    db = get_db()

    employee = await db.employees.find_one({"_id": parse_object_id(payload.employee_id, "employee ID")})
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")

    result = await db.users.update_one(
        {"_id": ObjectId(employee["user_id"])},
        {"$set": {"is_active": payload.is_active}}
    )
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Employee login not found")

    emails = await load_user_emails([employee["user_id"]])
    action = "activated" if payload.is_active else "deactivated"
    logger.info("Employee %s %s by %s", payload.employee_id, action, hr_user["email"])

    return {
        "success": True,
        "message": f"Employee {action} successfully",
        "employee": {
            "id": str(employee["_id"]),
            "full_name": employee.get("full_name"),
            "email": emails.get(employee["user_id"]),
            "is_active": payload.is_active
        }
    }


# ===========================
# CAREER GOALS
# ===========================

# ✅ 4. PENDING CAREER GOALS
@router.get("/career-goals/pending")
async def get_pending_career_goals(hr_user: dict = Depends(get_current_hr)):
    """Every pending goal across employees, newest submission first."""

    db = get_db()
    employees = await db.employees.find({"career_goals.status": "pending"}).to_list(1000)
    emails = await load_user_emails(e.get("user_id") for e in employees)

    pending = []
    for employee in employees:
        for goal in employee.get("career_goals", []):
            if goal.get("status") != "pending":
                continue
            pending.append({
                "goal_id": goal["id"],
                "employee_id": str(employee["_id"]),
                "employee_name": employee.get("full_name"),
                "employee_email": emails.get(employee.get("user_id")),
                "department": employee.get("department"),
                "role": employee.get("role"),
                "target_role": goal.get("target_role"),
                "priority": goal.get("priority"),
                "target_date": goal.get("target_date"),
                "skills_required": goal.get("skills_required", []),
                "progress": goal.get("progress", 0),
                "submitted_at": goal.get("submitted_at"),
            })

    pending.sort(key=lambda g: g["submitted_at"] or utcnow(), reverse=True)

    return {"success": True, "count": len(pending), "pending_goals": pending}


# ✅ 5. APPROVE / REJECT CAREER GOAL
@router.put("/career-goals/status")
async def update_career_goal_status(
    decision: CareerGoalDecision,
    hr_user: dict = Depends(get_current_hr)
):
    db = get_db()

    employee = await db.employees.find_one({"_id": parse_object_id(decision.employee_id, "employee ID")})
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")

    goals = employee.get("career_goals", [])
    goal = find_embedded(goals, decision.goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Career goal not found")

    goal["status"] = decision.status
    goal["reviewed_at"] = utcnow()
    goal["review_notes"] = decision.review_notes or ""

    await db.employees.update_one(
        {"_id": employee["_id"]},
        {"$set": {"career_goals": goals, "updated_at": utcnow()}}
    )

    logger.info("Career goal %s %s by %s", decision.goal_id, decision.status, hr_user["email"])

    return {"success": True, "message": f"Career goal {decision.status} successfully", "goal": goal}


# ✅ 6. CAREER GOAL STATISTICS
@router.get("/career-goals/stats")
async def get_career_goal_stats(hr_user: dict = Depends(get_current_hr)):
    db = get_db()
    employees = await db.employees.find({}, {"department": 1, "career_goals": 1}).to_list(1000)

    stats = {
        "total_goals": 0,
        "pending_goals": 0,
        "approved_goals": 0,
        "rejected_goals": 0,
        "goals_by_department": {},
        "goals_by_priority": {"High": 0, "Medium": 0, "Low": 0},
    }

    for employee in employees:
        for goal in employee.get("career_goals", []):
            stats["total_goals"] += 1

            status_key = f"{goal.get('status')}_goals"
            if status_key in stats:
                stats[status_key] += 1

            department = employee.get("department", "Unknown")
            stats["goals_by_department"][department] = stats["goals_by_department"].get(department, 0) + 1

            priority = goal.get("priority", "Medium")
            stats["goals_by_priority"][priority] = stats["goals_by_priority"].get(priority, 0) + 1

    return {"success": True, "stats": stats}
