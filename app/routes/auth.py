# ========================================
# app/routes/auth.py - Logins and HR-created employee accounts
# ========================================

from fastapi import APIRouter, Depends, HTTPException
from pymongo.errors import DuplicateKeyError

from app.database import get_db
from app.models.employee import Employee
from app.models.hr import HRProfile
from app.models.user import User
from app.schemas.auth import LoginRequest, EmployeeCreate
from app.utils.auth import authenticate_user, get_current_hr
from app.utils.employees import duplicate_skill_names, profile_touch
from app.utils.logger import get_logger
from app.utils.mongo import naive_utc, serialize_doc
from app.utils.security import HR_EMAIL, HR_PASSWORD, get_password_hash

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


async def initialize_hr_account():
    """Create the default HR user and profile from the environment when missing."""

    db = get_db()
    email = HR_EMAIL.strip().lower()

    existing = await db.users.find_one({"email": email})
    if existing:
        logger.info("HR account already exists")
        return

    user = User(email=email, password=get_password_hash(HR_PASSWORD), user_type="hr")
    result = await db.users.insert_one(user.to_mongo())

    profile = HRProfile(user_id=str(result.inserted_id))
    await db.hr_profiles.insert_one(profile.to_mongo())

    logger.info("Default HR account initialized for %s", email)


# ✅ 1. HR LOGIN
@router.post("/hr/login")
async def hr_login(credentials: LoginRequest):
    """Check HR credentials and return the HR profile."""

    user = await authenticate_user(
        credentials.email, credentials.password, "hr",
        invalid_message="Invalid HR credentials", touch_login=True
    )

    db = get_db()
    profile = await db.hr_profiles.find_one({"user_id": str(user["_id"])})

    return {
        "success": True,
        "message": "HR login successful",
        "user": {
            "id": str(user["_id"]),
            "email": user["email"],
            "user_type": user["user_type"],
            "profile": serialize_doc(profile)
        }
    }


# ✅ 2. EMPLOYEE LOGIN
@router.post("/employee/login")
async def employee_login(credentials: LoginRequest):
    """Check employee credentials and return the employee profile."""

    user = await authenticate_user(
        credentials.email, credentials.password, "employee",
        invalid_message="Invalid credentials", touch_login=True
    )

    db = get_db()
    profile = await db.employees.find_one({"user_id": str(user["_id"])})
    if not profile:
        raise HTTPException(status_code=404, detail="Employee profile not found")

    return {
        "success": True,
        "message": "Employee login successful",
        "user": {
            "id": str(user["_id"]),
            "email": user["email"],
            "user_type": user["user_type"],
            "last_login": user.get("last_login"),
            "profile": serialize_doc(profile)
        }
    }


# ✅ 3. CREATE EMPLOYEE ACCOUNT (HR)
@router.post("/employees", status_code=201)
async def create_employee(
    payload: EmployeeCreate,
    hr_user: dict = Depends(get_current_hr)
):
    """Create the login and the profile of a new employee."""

    skills = payload.skill_list()
    duplicates = duplicate_skill_names(skill.name for skill in skills)
    if duplicates:
        raise HTTPException(status_code=400, detail=f"Duplicate skill names: {', '.join(duplicates)}")

    db = get_db()
    email = payload.email.lower()

    if await db.users.find_one({"email": email}):
        raise HTTPException(status_code=400, detail="Employee with this email already exists")

    user = User(email=email, password=get_password_hash(payload.password), user_type="employee")
    try:
        result = await db.users.insert_one(user.to_mongo())
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Employee with this email already exists")

    employee = Employee(
        user_id=str(result.inserted_id),
        full_name=payload.full_name,
        phone_number=payload.phone_number or "",
        department=payload.department,
        role=payload.role,
        joining_date=naive_utc(payload.joining_date),
        skills=skills,
    )
    employee_doc = employee.to_mongo()
    employee_doc.update(profile_touch(employee_doc))
    employee_result = await db.employees.insert_one(employee_doc)

    logger.info("HR %s created employee account %s", hr_user["email"], email)

    return {
        "success": True,
        "message": "Employee account created successfully",
        "employee": {
            "id": str(employee_result.inserted_id),
            "full_name": employee.full_name,
            "email": email,
            "department": employee.department,
            "role": employee.role,
            "skills": employee_doc["skills"],
        }
    }
