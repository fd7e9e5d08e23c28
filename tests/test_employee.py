import asyncio


def add_goal(client, creds, target_role="Tech Lead", **extra):
    return client.post("/api/employee/add-career-goal", json={
        **creds, "target_role": target_role, "priority": "High", "skills_required": ["Leadership"], **extra
    })


def test_get_profile(client, creds):
    response = client.post("/api/employee/get-profile", json=creds)

    assert response.status_code == 200
    employee = response.json()["employee"]
    assert employee["full_name"] == "Alice Doe"
    assert employee["email"] == "alice@skillcompass.com"
    assert "password" not in employee


def test_update_profile(client, creds):
    response = client.post("/api/employee/update-profile", json={**creds, "phone_number": "555-0100"})

    assert response.status_code == 200
    assert response.json()["updated_fields"] == {"phone_number": "555-0100"}

    profile = client.post("/api/employee/get-profile", json=creds).json()["employee"]
    assert profile["phone_number"] == "555-0100"
    assert profile["full_name"] == "Alice Doe"
    assert profile["tenure"] >= 12


def test_update_skills(client, creds):
    skills = [{"name": "Go", "proficiency": 40, "category": "Backend"}]

    response = client.post("/api/employee/update-skills", json={**creds, "skills": skills})

    assert response.status_code == 200
    profile = client.post("/api/employee/get-profile", json=creds).json()["employee"]
    assert [s["name"] for s in profile["skills"]] == ["Go"]


def test_skill_proficiency_is_bounded(client, creds):
    response = client.post("/api/employee/update-skills", json={**creds, "skills": [{"name": "Go", "proficiency": 140}]})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_add_career_goal_starts_pending(client, creds):
    response = add_goal(client, creds)

    assert response.status_code == 201
    goal = response.json()["goal"]
    assert goal["status"] == "pending"
    assert goal["progress"] == 0

    goals = client.post("/api/employee/get-career-goals", json=creds).json()
    assert goals["count"] == 1


def test_update_and_delete_career_goal(client, creds):
    goal_id = add_goal(client, creds).json()["goal"]["id"]

    response = client.post("/api/employee/update-career-goal", json={**creds, "goal_id": goal_id, "progress": 50})
    assert response.status_code == 200
    assert response.json()["goal"]["progress"] == 50
    assert response.json()["goal"]["target_role"] == "Tech Lead"

    response = client.post("/api/employee/delete-career-goal", json={**creds, "goal_id": goal_id})
    assert response.status_code == 200
    assert response.json()["count"] == 0


def test_update_unknown_goal(client, creds):
    response = client.post("/api/employee/update-career-goal", json={**creds, "goal_id": "missing", "progress": 10})

    assert response.status_code == 404
    assert response.json()["message"] == "Career goal not found"


def test_dashboard_readiness_score(client, creds):
    # skills average 70, no goals
    data = client.post("/api/employee/dashboard", json=creds).json()["data"]
    assert data["career_readiness_score"] == 42

    goal_id = add_goal(client, creds).json()["goal"]["id"]
    client.post("/api/employee/update-career-goal", json={**creds, "goal_id": goal_id, "progress": 50})

    data = client.post("/api/employee/dashboard", json=creds).json()["data"]
    assert data["career_readiness_score"] == 62
    assert data["quick_stats"]["skills_tracked"] == 2
    assert data["quick_stats"]["open_positions"] == 0

    profile = client.post("/api/employee/get-profile", json=creds).json()["employee"]
    assert profile["career_readiness_score"] == 62


def test_resume_link_and_data(client, creds):
    response = client.post("/api/employee/update-resume-link", json={
        **creds, "resume_link": " https://files.example.com/alice.pdf ", "resume_data": {"summary": "Backend dev"}
    })
    assert response.status_code == 200
    assert response.json()["resume_data_count"] == 1

    link = client.post("/api/employee/get-resume-link", json=creds).json()
    assert link["resume_link"] == "https://files.example.com/alice.pdf"

    response = client.post("/api/employee/update-resume-data", json={**creds, "resume_data": {"summary": "Lead"}})
    assert response.status_code == 201

    data = client.post("/api/employee/get-resume-data", json=creds).json()
    assert data["resume_data"] == [{"summary": "Lead"}]


def test_hr_lists_employees_without_resume_data(client, hr_auth, employee):
    response = client.get("/api/hr/employees", auth=hr_auth)

    assert response.status_code == 200
    listed = response.json()["employees"][0]
    assert listed["email"] == "alice@skillcompass.com"
    assert listed["is_active"] is True
    assert "resume_data" not in listed


def test_hr_get_employee(client, hr_auth, employee):
    response = client.get(f"/api/hr/employees/{employee['employee_id']}", auth=hr_auth)

    assert response.status_code == 200
    assert response.json()["employee"]["id"] == employee["employee_id"]


def test_hr_get_unknown_employee(client, hr_auth):
    response = client.get("/api/hr/employees/64b7f0c2a1b2c3d4e5f60718", auth=hr_auth)

    assert response.status_code == 404
    assert response.json()["message"] == "Employee not found"


def test_hr_reviews_career_goal(client, hr_auth, employee, creds):
    goal_id = add_goal(client, creds).json()["goal"]["id"]

    pending = client.get("/api/hr/career-goals/pending", auth=hr_auth).json()
    assert pending["count"] == 1
    assert pending["pending_goals"][0]["employee_email"] == "alice@skillcompass.com"

    response = client.put("/api/hr/career-goals/status", json={
        "employee_id": employee["employee_id"], "goal_id": goal_id, "status": "approved", "review_notes": "Go for it"
    }, auth=hr_auth)
    assert response.status_code == 200
    assert response.json()["goal"]["status"] == "approved"

    assert client.get("/api/hr/career-goals/pending", auth=hr_auth).json()["count"] == 0

    stats = client.get("/api/hr/career-goals/stats", auth=hr_auth).json()["stats"]
    assert stats["total_goals"] == 1
    assert stats["approved_goals"] == 1
    assert stats["goals_by_department"] == {"Engineering": 1}
    assert stats["goals_by_priority"]["High"] == 1


def test_duplicate_skill_names_are_rejected(client, creds):
    skills = [{"name": "Python", "proficiency": 50}, {"name": "python", "proficiency": 60}]

    response = client.post("/api/employee/update-skills", json={**creds, "skills": skills})

    assert response.status_code == 400
    assert response.json()["message"] == "Duplicate skill names: python"

    profile = client.post("/api/employee/get-profile", json=creds).json()["employee"]
    assert [s["name"] for s in profile["skills"]] == ["Python", "SQL"]


def test_null_profile_fields_are_ignored(client, creds):
    response = client.post("/api/employee/update-profile", json={**creds, "full_name": None, "phone_number": "555-0199"})

    assert response.status_code == 200
    assert response.json()["updated_fields"] == {"phone_number": "555-0199"}

    profile = client.post("/api/employee/get-profile", json=creds).json()["employee"]
    assert profile["full_name"] == "Alice Doe"
    assert profile["phone_number"] == "555-0199"


def test_null_goal_fields_are_ignored(client, creds):
    goal_id = add_goal(client, creds).json()["goal"]["id"]

    response = client.post("/api/employee/update-career-goal", json={
        **creds, "goal_id": goal_id, "priority": None, "target_role": None, "progress": 20
    })

    goal = response.json()["goal"]
    assert goal["priority"] == "High"
    assert goal["target_role"] == "Tech Lead"
    assert goal["progress"] == 20


def test_is_active_defaults_to_true(client, hr_auth, db, employee):
    asyncio.run(db.users.update_many({"user_type": "employee"}, {"$unset": {"is_active": ""}}))

    listed = client.get("/api/hr/employees", auth=hr_auth).json()["employees"][0]
    assert listed["is_active"] is True

    single = client.get(f"/api/hr/employees/{employee['employee_id']}", auth=hr_auth).json()["employee"]
    assert single["is_active"] is True
