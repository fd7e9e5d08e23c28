import asyncio
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app import database
from app.main import app
from app.models.employee import Employee, Skill
from app.models.user import User
from app.routes.auth import initialize_hr_account
from app.utils.security import HR_EMAIL, HR_PASSWORD, get_password_hash

EMPLOYEE_PASSWORD = "secret123"


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def db(monkeypatch):
    mock_db = AsyncMongoMockClient()["skillcompass_test"]
    monkeypatch.setattr(database, "db", mock_db)
    run(database.init_indexes())
    run(initialize_hr_account())
    return mock_db


@pytest.fixture
def client(db):
    # no `with`: startup hooks would connect to a real MongoDB
    return TestClient(app)


@pytest.fixture
def hr_auth(db):
    return (HR_EMAIL, HR_PASSWORD)


@pytest.fixture
def make_employee(db):
    """Insert an employee login + profile and return its body credentials."""

    async def _create(email, full_name, skills, department):
        user = User(email=email, password=get_password_hash(EMPLOYEE_PASSWORD), user_type="employee")
        result = await db.users.insert_one(user.to_mongo())
        employee = Employee(
            user_id=str(result.inserted_id),
            full_name=full_name,
            department=department,
            role="Software Engineer",
            joining_date=datetime.utcnow() - timedelta(days=400),
            skills=skills,
        )
        employee_result = await db.employees.insert_one(employee.to_mongo())
        return str(employee_result.inserted_id)

    def factory(email="alice@skillcompass.com", full_name="Alice Doe", skills=None, department="Engineering"):
        if skills is None:
            skills = [
                Skill(name="Python", proficiency=80, category="Backend"),
                Skill(name="SQL", proficiency=60, category="Data"),
            ]
        employee_id = run(_create(email, full_name, skills, department))
        return {"email": email, "password": EMPLOYEE_PASSWORD, "employee_id": employee_id}

    return factory


@pytest.fixture
def employee(make_employee):
    return make_employee()


@pytest.fixture
def creds(employee):
    return {"email": employee["email"], "password": employee["password"]}
