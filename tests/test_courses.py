import asyncio
from datetime import datetime, timedelta


def recommended(title, cost="Free", relevance=80):
    return {
        "title": title,
        "provider": "Coursera",
        "cost": cost,
        "link": f"https://example.com/{title.lower()}",
        "relevance_score": relevance,
        "key_skills_covered": ["Leadership"],
    }


def store(client, creds, courses, priority="High", target_role="Tech Lead"):
    return client.post("/api/courses/store-recommendations", json={
        **creds, "target_role": target_role, "priority": priority, "courses": courses
    })


def test_store_recommendations(client, creds):
    response = store(client, creds, [recommended("Mentoring", relevance=80), recommended("Architecture", "Paid", 90)])

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Course recommendations stored successfully"
    rec = body["recommendation"]
    assert rec["total_courses"] == 2
    assert rec["free_courses"] == 1
    assert rec["paid_courses"] == 1
    assert rec["average_relevance_score"] == 85
    assert rec["status"] == "active"


def test_store_replaces_same_role_and_priority(client, creds):
    store(client, creds, [recommended("Mentoring")])
    response = store(client, creds, [recommended("Architecture"), recommended("Hiring")])

    assert response.json()["message"] == "Course recommendations updated successfully"

    body = client.post("/api/courses/get-recommendations", json=creds).json()
    assert body["count"] == 1
    assert body["recommendations"][0]["total_courses"] == 2


def test_get_recommendations_by_priority(client, creds):
    store(client, creds, [recommended("Mentoring")], priority="High")
    store(client, creds, [recommended("Budgeting")], priority="Low", target_role="Manager")

    assert client.post("/api/courses/get-recommendations", json=creds).json()["count"] == 2

    body = client.post("/api/courses/get-recommendations", json={**creds, "priority": "Low"}).json()
    assert body["count"] == 1
    assert body["recommendations"][0]["target_role"] == "Manager"


def test_relevance_score_is_bounded(client, creds):
    response = store(client, creds, [recommended("Mentoring", relevance=150)])
    assert response.status_code == 400


def test_expired_recommendations_are_hidden(client, creds, db):
    store(client, creds, [recommended("Mentoring")])
    asyncio.run(db.course_recommendations.update_many(
        {}, {"$set": {"expires_at": datetime.utcnow() - timedelta(days=1)}}
    ))

    assert client.post("/api/courses/get-recommendations", json=creds).json()["count"] == 0


# ===========================
# progress tracking
# ===========================

def stored(client, creds, *courses, priority="High"):
    rec = store(client, creds, [recommended(c) for c in courses], priority=priority).json()["recommendation"]
    return rec["id"], [c["id"] for c in rec["courses"]]


def test_store_seeds_progress_rows(client, creds):
    stored(client, creds, "Mentoring", "Architecture")

    courses = client.post("/api/courses/get-recommendations", json=creds).json()["recommendations"][0]["courses"]

    assert [c["progress"]["status"] for c in courses] == ["not_started", "not_started"]
    assert courses[0]["progress"]["hr_verified"] is False


def test_restore_keeps_progress_of_same_course(client, creds):
    rec_id, (course_id,) = stored(client, creds, "Mentoring")
    client.post("/api/courses/start-course", json={**creds, "course_id": course_id, "recommendation_id": rec_id})

    course = {**recommended("Mentoring"), "id": course_id}
    store(client, creds, [course, recommended("Hiring")])

    courses = client.post("/api/courses/get-recommendations", json=creds).json()["recommendations"][0]["courses"]
    assert [c["progress"]["status"] for c in courses] == ["in_progress", "not_started"]


def test_start_and_submit_completion(client, creds):
    rec_id, (course_id,) = stored(client, creds, "Mentoring")
    ids = {"course_id": course_id, "recommendation_id": rec_id}

    response = client.post("/api/courses/start-course", json={**creds, **ids})
    assert response.status_code == 200
    assert response.json()["progress"]["status"] == "in_progress"
    assert response.json()["progress"]["started_at"]

    response = client.post("/api/courses/submit-completion", json={
        **creds, **ids, "proof": "https://example.com/cert.png", "proof_type": "screenshot"
    })
    assert response.status_code == 200
    progress = response.json()["progress"]
    assert progress["status"] == "completed"
    assert progress["proof_type"] == "screenshot"


def test_submit_completion_requires_proof(client, creds):
    rec_id, (course_id,) = stored(client, creds, "Mentoring")

    response = client.post("/api/courses/submit-completion", json={
        **creds, "course_id": course_id, "recommendation_id": rec_id, "proof": "  "
    })

    assert response.status_code == 400
    assert response.json()["message"] == "Completion proof is required"


def test_unknown_progress(client, creds):
    response = client.post("/api/courses/start-course", json={**creds, "course_id": "x", "recommendation_id": "y"})

    assert response.status_code == 404
    assert response.json()["message"] == "Course progress not found"


def test_progress_summary(client, hr_auth, creds):
    high_id, (first, second) = stored(client, creds, "Mentoring", "Architecture")
    stored(client, creds, "Budgeting", priority="Low")

    client.post("/api/courses/submit-completion", json={
        **creds, "course_id": first, "recommendation_id": high_id, "proof": "https://example.com/a.pdf"
    })
    client.post("/api/courses/start-course", json={**creds, "course_id": second, "recommendation_id": high_id})

    body = client.post("/api/courses/progress-summary", json=creds).json()
    summary = body["summary"]
    assert summary["total_courses"] == 3
    assert summary["not_started"] == 1
    assert summary["in_progress"] == 1
    assert summary["completed"] == 1
    assert summary["verified"] == 0
    assert summary["completion_rate"] == 33
    assert summary["progress_by_priority"]["High"] == {"total": 2, "completed": 1, "verified": 0}
    assert summary["progress_by_priority"]["Low"] == {"total": 1, "completed": 0, "verified": 0}
    assert len(body["recent_progress"]) == 3

    progress_id = [
        c for c in client.post("/api/courses/get-recommendations", json={**creds, "priority": "High"})
        .json()["recommendations"][0]["courses"] if c["id"] == first
    ][0]["progress"]["progress_id"]

    response = client.put("/api/courses/verify-completion", json={
        "progress_id": progress_id, "status": "approved"
    }, auth=hr_auth)
    assert response.status_code == 200
    assert response.json()["progress"]["status"] == "verified"

    summary = client.post("/api/courses/progress-summary", json=creds).json()["summary"]
    assert summary["verified"] == 1
    assert summary["verification_rate"] == 33
    assert summary["progress_by_priority"]["High"]["verified"] == 1


def test_verify_requires_submitted_completion(client, hr_auth, creds):
    stored(client, creds, "Mentoring")
    progress_id = client.post("/api/courses/get-recommendations", json=creds).json()[
        "recommendations"][0]["courses"][0]["progress"]["progress_id"]

    response = client.put("/api/courses/verify-completion", json={
        "progress_id": progress_id, "status": "approved"
    }, auth=hr_auth)

    assert response.status_code == 400
    assert response.json()["message"] == "Course completion has not been submitted"
