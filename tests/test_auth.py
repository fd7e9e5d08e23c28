from app.utils.security import HR_EMAIL, HR_PASSWORD


def test_hr_login(client, hr_auth):
    response = client.post("/api/auth/hr/login", json={"email": HR_EMAIL, "password": HR_PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["user"]["user_type"] == "hr"
    assert body["user"]["profile"]["full_name"] == "HR Manager"


def test_hr_login_wrong_password(client, hr_auth):
    response = client.post("/api/auth/hr/login", json={"email": HR_EMAIL, "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid HR credentials"}


def test_employee_login(client, employee):
    response = client.post("/api/auth/employee/login", json={"email": employee["email"], "password": employee["password"]})

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["user_type"] == "employee"
    assert user["profile"]["full_name"] == "Alice Doe"
    assert user["last_login"] is not None


def test_employee_login_is_case_insensitive(client, employee):
    response = client.post("/api/auth/employee/login", json={"email": "ALICE@skillcompass.com", "password": employee["password"]})
    assert response.status_code == 200


def test_employee_login_rejects_hr_account(client, hr_auth):
    response = client.post("/api/auth/employee/login", json={"email": HR_EMAIL, "password": HR_PASSWORD})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_missing_password(client, employee):
    response = client.post("/api/auth/employee/login", json={"email": employee["email"], "password": ""})

    assert response.status_code == 400
    assert response.json()["message"] == "Email and password are required"


def test_deactivated_employee_cannot_login(client, hr_auth, employee):
    response = client.put(
        "/api/hr/employees/status",
        json={"employee_id": employee["employee_id"], "is_active": False},
        auth=hr_auth
    )
    assert response.status_code == 200

    response = client.post("/api/auth/employee/login", json={"email": employee["email"], "password": employee["password"]})
    assert response.status_code == 401
    assert response.json()["message"] == "Account is deactivated"


def test_hr_creates_employee(client, hr_auth):
    payload = {
        "full_name": "Bob Smith",
        "email": "Bob@skillcompass.com",
        "password": "bobpass1",
        "department": "Product",
        "role": "Product Manager",
        "joining_date": "2023-01-15T00:00:00",
        "skills": "Roadmapping, SQL",
    }

    response = client.post("/api/auth/employees", json=payload, auth=hr_auth)

    assert response.status_code == 201
    employee = response.json()["employee"]
    assert employee["email"] == "bob@skillcompass.com"
    assert [s["name"] for s in employee["skills"]] == ["Roadmapping", "SQL"]

    login = client.post("/api/auth/employee/login", json={"email": "bob@skillcompass.com", "password": "bobpass1"})
    assert login.status_code == 200
    assert login.json()["user"]["profile"]["tenure"] > 0


def test_hr_cannot_create_duplicate_employee(client, hr_auth, employee):
    payload = {
        "full_name": "Alice Again",
        "email": employee["email"],
        "password": "whatever1",
        "department": "Engineering",
        "role": "Engineer",
        "joining_date": "2024-01-01T00:00:00",
    }

    response = client.post("/api/auth/employees", json=payload, auth=hr_auth)

    assert response.status_code == 400
    assert response.json()["message"] == "Employee with this email already exists"


def test_hr_routes_require_basic_auth(client, db):
    response = client.get("/api/hr/employees")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Basic"
    assert response.json()["message"] == "HR authentication required. Please provide Basic Auth credentials."


def test_hr_routes_reject_employee_credentials(client, employee):
    response = client.get("/api/hr/employees", auth=(employee["email"], employee["password"]))

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid HR credentials"


def test_hr_create_employee_rejects_duplicate_skills(client, hr_auth):
    response = client.post("/api/auth/employees", json={
        "full_name": "Dana Lee",
        "email": "dana@skillcompass.com",
        "password": "danapass1",
        "department": "Data",
        "role": "Analyst",
        "joining_date": "2024-03-01T00:00:00",
        "skills": "SQL, sql",
    }, auth=hr_auth)

    assert response.status_code == 400
    assert response.json()["message"] == "Duplicate skill names: sql"

    login = client.post("/api/auth/employee/login", json={"email": "dana@skillcompass.com", "password": "danapass1"})
    assert login.status_code == 401
