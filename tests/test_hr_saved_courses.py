import pytest

from app.utils.security import HR_EMAIL


@pytest.fixture
def submitted(client, employee, creds):
    """A saved course with completion proof waiting for review."""
    saved = client.post("/api/employee/save-course", json={**creds, "course": {
        "title": "Docker Deep Dive",
        "provider": "Udemy",
        "duration": "10 hours",
        "cost_type": "Paid",
        "enroll_link": "https://example.com/docker",
    }}).json()["saved_course"]
    client.post("/api/employee/complete-course", json={
        **creds, "course_id": saved["id"], "proof": {"file": "https://files.example.com/cert.pdf"}
    })
    return {"employee_id": employee["employee_id"], "course_id": saved["id"]}


def review(client, hr_auth, submitted, status, **extra):
    return client.put("/api/hr/update-course-status", json={**submitted, "status": status, **extra}, auth=hr_auth)


def test_pending_completions(client, hr_auth, submitted):
    response = client.get("/api/hr/pending-course-completions", auth=hr_auth)

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    pending = body["pending_completions"][0]
    assert pending["id"] == submitted["course_id"]
    assert pending["employee_info"]["email"] == "alice@skillcompass.com"


def test_approve_marks_completed_and_verified(client, hr_auth, submitted, creds):
    response = review(client, hr_auth, submitted, "approved", notes="Nice work")

    assert response.status_code == 200
    course = response.json()["course"]
    assert response.json()["message"] == "Course status updated to completed"
    assert course["status"] == "completed"
    assert course["verified"] is True
    assert course["review"]["reviewed_by"] == HR_EMAIL
    assert course["review"]["notes"] == "Nice work"

    mine = client.post("/api/employee/my-saved-courses", json=creds).json()["saved_courses"]
    assert mine[0]["status"] == "completed"


def test_reject_marks_rejected(client, hr_auth, submitted):
    course = review(client, hr_auth, submitted, "rejected").json()["course"]

    assert course["status"] == "rejected"
    assert course["verified"] is False


def test_needs_demonstration(client, hr_auth, submitted):
    course = review(client, hr_auth, submitted, "needs_demonstration").json()["course"]
    assert course["status"] == "needs_demonstration"


def test_explicit_verified_flag_wins(client, hr_auth, submitted):
    course = review(client, hr_auth, submitted, "approved", verified=False).json()["course"]
    assert course["verified"] is False


def test_review_unknown_course(client, hr_auth, submitted):
    response = review(client, hr_auth, {**submitted, "course_id": "nope"}, "approved")

    assert response.status_code == 404
    assert response.json()["message"] == "Course not found"


def test_review_invalid_employee_id(client, hr_auth, submitted):
    response = review(client, hr_auth, {**submitted, "employee_id": "not-an-id"}, "approved")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid employee ID format"


def test_get_saved_courses_by_email(client, hr_auth, submitted):
    response = client.post("/api/hr/get-saved-courses", json={"employee_email": "Alice@skillcompass.com"}, auth=hr_auth)

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["employee_info"]["full_name"] == "Alice Doe"


def test_get_saved_courses_unknown_email(client, hr_auth):
    response = client.post("/api/hr/get-saved-courses", json={"employee_email": "ghost@skillcompass.com"}, auth=hr_auth)

    assert response.status_code == 404
    assert response.json()["message"] == "Employee not found"


def test_all_saved_courses_stats(client, hr_auth, submitted):
    review(client, hr_auth, submitted, "approved")

    body = client.get("/api/hr/all-saved-courses", auth=hr_auth).json()

    assert body["count"] == 1
    assert body["stats"]["total"] == 1
    assert body["stats"]["completed"] == 1
    assert body["stats"]["pending_review"] == 0
    assert body["stats"]["verified"] == 1


def test_export_saved_courses(client, hr_auth, submitted):
    response = client.get("/api/hr/all-saved-courses/export", auth=hr_auth)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment; filename=saved_courses_" in response.headers["content-disposition"]
    lines = response.text.strip().splitlines()
    assert lines[0].startswith("Course ID,Employee Name,Employee Email")
    assert "Docker Deep Dive" in lines[1]
    assert "pending_review" in lines[1]


def test_hr_can_review_active_course(client, hr_auth, employee, creds):
    saved = client.post("/api/employee/save-course", json={**creds, "course": {
        "title": "Kubernetes Basics",
        "duration": "6 hours",
        "provider": "Coursera",
        "cost_type": "Free",
        "enroll_link": "https://example.com/k8s",
    }}).json()["saved_course"]
    assert saved["status"] == "active"

    response = review(client, hr_auth, {"employee_id": employee["employee_id"], "course_id": saved["id"]}, "approved")

    assert response.status_code == 200
    assert response.json()["course"]["status"] == "completed"
    assert response.json()["course"]["verified"] is True


def test_resubmitting_proof_needs_fresh_review(client, hr_auth, submitted, creds):
    review(client, hr_auth, submitted, "approved")

    response = client.post("/api/employee/complete-course", json={
        **creds, "course_id": submitted["course_id"], "proof": {"link": "https://example.com/new-cert"}
    })

    course = response.json()["saved_course"]
    assert course["status"] == "pending_review"
    assert course["verified"] is False
    assert course["review"] is None

    stats = client.get("/api/hr/all-saved-courses", auth=hr_auth).json()["stats"]
    assert stats["verified"] == 0
    assert stats["pending_review"] == 1
