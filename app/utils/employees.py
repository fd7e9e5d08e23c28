"""
Helpers for presenting employee profiles, shared by the HR routers.
"""

from typing import Dict, Iterable, List, Optional

from bson import ObjectId

from app.database import get_db
from app.utils.mongo import months_between, utcnow


async def load_user_emails(user_ids: Iterable[str]) -> Dict[str, str]:
    """Map user id -> login email for a batch of profiles."""
    ids = [ObjectId(uid) for uid in set(user_ids) if uid and ObjectId.is_valid(uid)]
    if not ids:
        return {}

    db = get_db()
    users = await db.users.find({"_id": {"$in": ids}}, {"email": 1}).to_list(len(ids))
    return {str(user["_id"]): user.get("email") for user in users}


def employee_info(employee: dict, email: Optional[str]) -> dict:
    """Short owner card attached to saved courses, applications and requests."""
    return {
        "employee_id": str(employee["_id"]),
        "full_name": employee.get("full_name"),
        "email": email,
        "department": employee.get("department"),
        "role": employee.get("role"),
    }


async def employee_cards(employee_ids: Iterable[str]) -> Dict[str, dict]:
    """Map employee id -> owner card for a batch of employee ids."""
    ids = [ObjectId(eid) for eid in set(employee_ids) if eid and ObjectId.is_valid(eid)]
    if not ids:
        return {}

    db = get_db()
    employees = await db.employees.find({"_id": {"$in": ids}}).to_list(len(ids))
    emails = await load_user_emails(e.get("user_id") for e in employees)
    return {
        str(e["_id"]): employee_info(e, emails.get(e.get("user_id")))
        for e in employees
    }


def calculate_readiness_score(skills: List[dict], goals: List[dict]) -> int:
    """60% average skill proficiency, 40% average career-goal progress."""
    skill_score = sum(s.get("proficiency", 0) for s in skills) / (len(skills) or 1)
    goal_progress = sum(g.get("progress", 0) for g in goals) / (len(goals) or 1)
    return round(skill_score * 0.6 + goal_progress * 0.4)


def profile_touch(employee: dict) -> dict:
    """Fields refreshed on every profile write."""
    now = utcnow()
    return {
        "updated_at": now,
        "tenure": months_between(employee.get("joining_date"), now),
    }


def duplicate_skill_names(names: Iterable[str]) -> List[str]:
    """Skill names listed more than once, compared case-insensitively."""
    seen, duplicates = set(), []
    for name in names:
        key = name.strip().lower()
        if key in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(key)
    return duplicates
