from typing import Optional

from fastapi import Depends, HTTPException, status
# HR routes authenticate with a Basic-Auth header; employee routes resend
# their email/password in the JSON body on every request.
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from app.database import get_db
from app.utils.mongo import utcnow
from app.utils.security import verify_password

security = HTTPBasic(auto_error=False)


async def authenticate_user(
    email: Optional[str],
    password: Optional[str],
    user_type: str,
    invalid_message: str = "Invalid credentials",
    touch_login: bool = False,
) -> dict:
    """Look the user up by email and check type, active flag and password."""

    if not email or not password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    db = get_db()
    user = await db.users.find_one({"email": email.strip().lower()})

    if user is None or user.get("user_type") != user_type:
        raise HTTPException(status_code=401, detail=invalid_message)

    if not verify_password(password, user.get("password")):
        raise HTTPException(status_code=401, detail=invalid_message)

    if not user.get("is_active", True):
        raise HTTPException(status_code=401, detail="Account is deactivated")

    if touch_login:
        user["last_login"] = utcnow()
        await db.users.update_one({"_id": user["_id"]}, {"$set": {"last_login": user["last_login"]}})

    return user


async def authenticate_employee(email: Optional[str], password: Optional[str]) -> dict:
    """
    Resolve body credentials to the employee profile document.
    The caller gets the profile with the login email attached under `email`.
    """
    user = await authenticate_user(email, password, "employee", invalid_message="Invalid employee credentials")

    db = get_db()
    employee = await db.employees.find_one({"user_id": str(user["_id"])})
    if employee is None:
        raise HTTPException(status_code=404, detail="Employee profile not found")

    employee["email"] = user["email"]
    return employee


async def get_current_hr(credentials: Optional[HTTPBasicCredentials] = Depends(security)) -> dict:
    """FastAPI dependency - require HR Basic-Auth credentials."""

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="HR authentication required. Please provide Basic Auth credentials.",
            headers={"WWW-Authenticate": "Basic"},
        )

    return await authenticate_user(
        credentials.username,
        credentials.password,
        "hr",
        invalid_message="Invalid HR credentials",
    )
