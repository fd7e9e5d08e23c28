# ========================================
# app/routes/employee.py - Employee profile, skills, goals and resume
# ========================================

from fastapi import APIRouter, HTTPException

from app.database import get_db
from app.models.employee import CareerGoal
from app.schemas.common import EmployeeCredentials
from app.schemas.employee import (
    ProfileUpdate,
    SkillsUpdate,
    CareerGoalCreate,
    CareerGoalUpdate,
    CareerGoalDelete,
    ResumeLinkUpdate,
    ResumeDataUpdate
)
from app.utils.auth import authenticate_employee
from app.utils.employees import calculate_readiness_score, duplicate_skill_names, profile_touch
from app.utils.logger import get_logger
from app.utils.mongo import find_embedded, naive_utc, serialize_doc

logger = get_logger(__name__)

router = APIRouter(prefix="/api/employee", tags=["Employee"])


async def _save(employee: dict, fields: dict):
    merged = {**employee, **fields}
    score = calculate_readiness_score(merged.get("skills", []), merged.get("career_goals", []))

    db = get_db()
    await db.employees.update_one(
        {"_id": employee["_id"]},
        {"$set": {**fields, **profile_touch(employee), "career_readiness_score": score}}
    )


# ===========================
# PROFILE
# ===========================

# ✅ 1. GET MY PROFILE
@router.post("/get-profile")
async def get_profile(credentials: EmployeeCredentials):
    employee = await authenticate_employee(credentials.email, credentials.password)
    return {"success": True, "employee": serialize_doc(employee)}


# ✅ 2. UPDATE MY PROFILE
@router.post("/update-profile")
async def update_profile(payload: ProfileUpdate):
    """Update the editable profile fields; unset fields are left alone."""

    employee = await authenticate_employee(payload.email, payload.password)

    update_data = payload.model_dump(exclude_unset=True, exclude_none=True, exclude={"email", "password"})
    if not update_data:
        return {"success": True, "message": "No changes provided", "updated_fields": {}}

    await _save(employee, update_data)

    return {"success": True, "message": "Profile updated successfully", "updated_fields": update_data}


# ✅ 3. DASHBOARD
@router.post("/dashboard")
async def get_dashboard(credentials: EmployeeCredentials):
    """Profile card, readiness score and quick stats."""

    employee = await authenticate_employee(credentials.email, credentials.password)
    skills = employee.get("skills", [])
    goals = employee.get("career_goals", [])
    courses = employee.get("saved_courses", [])

    db = get_db()
    open_positions = await db.jobs.count_documents({"status": "active"})

    return {
        "success": True,
        "data": {
            "profile": {
                "full_name": employee.get("full_name"),
                "role": employee.get("role"),
                "department": employee.get("department"),
                "joining_date": employee.get("joining_date"),
                "tenure": employee.get("tenure", 0),
                "avatar": employee.get("avatar"),
            },
            "career_readiness_score": calculate_readiness_score(skills, goals),
            "skills": skills,
            "career_goals": goals,
            "quick_stats": {
                "skills_tracked": len(skills),
                "saved_courses": len(courses),
                "completed_courses": sum(1 for c in courses if c.get("status") == "completed"),
                "open_positions": open_positions,
                "achievements": len(employee.get("achievements", [])),
            }
        }
    }


# ✅ 4. REPLACE SKILLS
@router.post("/update-skills")
async def update_skills(payload: SkillsUpdate):
    duplicates = duplicate_skill_names(skill.name for skill in payload.skills)
    if duplicates:
        raise HTTPException(status_code=400, detail=f"Duplicate skill names: {', '.join(duplicates)}")

    employee = await authenticate_employee(payload.email, payload.password)
    skills = [skill.model_dump() for skill in payload.skills]

    await _save(employee, {"skills": skills})

    return {"success": True, "message": "Skills updated successfully", "skills": skills}


# ===========================
# CAREER GOALS
# ===========================

# ✅ 5. LIST CAREER GOALS
@router.post("/get-career-goals")
async def get_career_goals(credentials: EmployeeCredentials):
    employee = await authenticate_employee(credentials.email, credentials.password)
    goals = employee.get("career_goals", [])
    return {"success": True, "count": len(goals), "career_goals": goals}


# ✅ 6. ADD CAREER GOAL
@router.post("/add-career-goal", status_code=201)
async def add_career_goal(payload: CareerGoalCreate):
    """New goals start as `pending` until HR reviews them."""

    employee = await authenticate_employee(payload.email, payload.password)

    goal = CareerGoal(
        target_role=payload.target_role,
        priority=payload.priority,
        target_date=naive_utc(payload.target_date),
        skills_required=payload.skills_required,
    ).to_mongo()

    goals = employee.get("career_goals", [])
    goals.append(goal)
    await _save(employee, {"career_goals": goals})

    logger.info("Career goal '%s' added for %s", goal["target_role"], employee["email"])

    return {"success": True, "message": "Career goal added successfully", "goal": goal}


# ✅ 7. UPDATE CAREER GOAL
@router.post("/update-career-goal")
async def update_career_goal(payload: CareerGoalUpdate):
    employee = await authenticate_employee(payload.email, payload.password)
    goals = employee.get("career_goals", [])

    goal = find_embedded(goals, payload.goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Career goal not found")

    changes = payload.model_dump(exclude_unset=True, exclude_none=True, exclude={"email", "password", "goal_id"})
    if "target_date" in changes:
        changes["target_date"] = naive_utc(changes["target_date"])
    goal.update(changes)

    await _save(employee, {"career_goals": goals})

    return {"success": True, "message": "Career goal updated successfully", "goal": goal}


# ✅ 8. DELETE CAREER GOAL
@router.post("/delete-career-goal")
async def delete_career_goal(payload: CareerGoalDelete):
    employee = await authenticate_employee(payload.email, payload.password)
    goals = employee.get("career_goals", [])

    if find_embedded(goals, payload.goal_id) is None:
        raise HTTPException(status_code=404, detail="Career goal not found")

    remaining = [g for g in goals if g.get("id") != payload.goal_id]
    await _save(employee, {"career_goals": remaining})

    return {"success": True, "message": "Career goal deleted successfully", "count": len(remaining)}


# ===========================
# RESUME (link + parsed data)
# ===========================

# ✅ 9. GET RESUME LINK
@router.post("/get-resume-link")
async def get_resume_link(credentials: EmployeeCredentials):
    employee = await authenticate_employee(credentials.email, credentials.password)
    return {"success": True, "resume_link": employee.get("resume_link")}


# ✅ 10. GET PARSED RESUME DATA
@router.post("/get-resume-data")
async def get_resume_data(credentials: EmployeeCredentials):
    employee = await authenticate_employee(credentials.email, credentials.password)
    data = employee.get("resume_data", [])
    return {"success": True, "count": len(data), "resume_data": data}


# ✅ 11. UPDATE RESUME LINK
@router.post("/update-resume-link")
async def update_resume_link(payload: ResumeLinkUpdate):
    """
    Store the public URL of an uploaded resume. Parsed resume data sent in
    the same call replaces the stored data.
    """

    employee = await authenticate_employee(payload.email, payload.password)

    fields = {"resume_link": payload.resume_link.strip()}
    if payload.resume_data is not None:
        fields["resume_data"] = [payload.resume_data]

    await _save(employee, fields)

    return {
        "success": True,
        "message": "Resume link saved successfully",
        "resume_link": fields["resume_link"],
        "resume_data_count": len(fields.get("resume_data", employee.get("resume_data", [])))
    }


# ✅ 12. REPLACE PARSED RESUME DATA
@router.post("/update-resume-data", status_code=201)
async def update_resume_data(payload: ResumeDataUpdate):
    employee = await authenticate_employee(payload.email, payload.password)

    await _save(employee, {"resume_data": [payload.resume_data]})

    return {"success": True, "message": "Resume data overridden successfully", "count": 1}
