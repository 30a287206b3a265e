"""
Fluxos HTTP ponta a ponta (TestClient + overrides do conftest)
"""
import json

from swimschool.models.enrollment import Enrollment

REGISTRATION = {
    "courseId": "course-a",
    "startDate": "2025-01-10",
    "studentName": "Nong Nam",
    "gender": "F",
    "age": 6,
}

def _register(client, headers, payload=None):
    return client.post(
        "/api/v1/enrollments/",
        data={"data": json.dumps(payload or REGISTRATION)},
        files={"slip": ("slip.png", b"\x89PNG-slip", "image/png")},
        headers=headers,
    )

def test_health_and_public_catalog(client):
    assert client.get("/healthz").json() == {"status": "ok"}
    r = client.get("/api/v1/courses/")
    assert r.status_code == 200
    assert len(r.json()) == 5
    assert client.get("/api/v1/courses/nope").json()["code"] == "NOT_FOUND"

def test_requires_token(client, auth_headers):
    r = client.get("/api/v1/me")
    assert r.status_code == 401
    assert r.json()["code"] == "NOT_AUTHENTICATED"

    r = client.get("/api/v1/me", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401

def test_profile_created_with_allowlisted_role(client, auth_headers):
    r = client.get("/api/v1/me", headers=auth_headers("boss", email="admin@example.com"))
    assert r.status_code == 200
    assert r.json()["role"] == "ADMIN"

    r = client.get("/api/v1/me", headers=auth_headers("parent", email="parent@mail.com", name="Khun Mae"))
    assert (r.json()["role"], r.json()["displayName"]) == ("STUDENT", "Khun Mae")

    r = client.patch("/api/v1/me", json={"emergencyContact": "Dad"}, headers=auth_headers("parent"))
    assert r.json()["emergencyContact"] == "Dad"

def test_register_enrollment(client, auth_headers, blob_host):
    r = _register(client, auth_headers("parent", email="parent@mail.com"))

    assert r.status_code == 201, r.text
    body = r.json()
    assert body["studentId"] == "CA68001"
    assert body["paymentStatus"] == "PENDING"
    assert body["evaluation"] == "PENDING"
    assert body["expiryDate"] == "2025-04-10"
    assert body["slipUrl"].endswith("slip.png")
    assert blob_host.uploads == [("slip.png", b"\x89PNG-slip")]

def test_register_rejects_bad_payload(client, auth_headers, db):
    bad = dict(REGISTRATION, studentName="")
    r = _register(client, auth_headers("parent"), bad)
    assert r.status_code == 422
    assert r.json()["code"] == "VALIDATION_ERROR"
    assert db.query(Enrollment).count() == 0

def test_failed_slip_upload_creates_nothing(client, auth_headers, blob_host, db):
    blob_host.fail = True
    r = _register(client, auth_headers("parent"))

    assert r.status_code == 502
    assert r.json()["code"] == "BLOB_UPLOAD_FAILED"
    assert db.query(Enrollment).count() == 0

def test_payment_needs_two_clicks(client, auth_headers, admin):
    parent = auth_headers("parent", email="parent@mail.com")
    enrollment_id = _register(client, parent).json()["id"]
    url = f"/api/v1/enrollments/{enrollment_id}/payment"

    first = client.post(url, json={"decision": "PAID"}, headers=auth_headers(admin.uid))
    assert first.json()["status"] == "confirm_required"
    assert first.json()["paymentStatus"] == "PENDING"

    second = client.post(url, json={"decision": "PAID"}, headers=auth_headers(admin.uid))
    assert second.json() == {"status": "applied", "paymentStatus": "PAID", "confirmWithinSeconds": None}

    notes = client.get("/api/v1/notifications/?unread=true", headers=parent).json()
    assert [n["type"] for n in notes] == ["PAYMENT"]

    r = client.post("/api/v1/notifications/read", json={"ids": [notes[0]["id"]]}, headers=parent)
    assert r.json() == {"updated": 1}

def test_student_cannot_decide_payment(client, auth_headers):
    parent = auth_headers("parent")
    enrollment_id = _register(client, parent).json()["id"]

    r = client.post(f"/api/v1/enrollments/{enrollment_id}/payment", json={"decision": "PAID"}, headers=parent)
    assert r.status_code == 403
    assert r.json()["code"] == "PERMISSION_DENIED"

def test_owner_sees_only_own_enrollments(client, auth_headers, admin):
    mine = _register(client, auth_headers("parent")).json()["id"]
    _register(client, auth_headers("other"))

    r = client.get("/api/v1/enrollments/", headers=auth_headers("parent"))
    assert [e["id"] for e in r.json()] == [mine]

    r = client.get(f"/api/v1/enrollments/{mine}", headers=auth_headers("other"))
    assert r.status_code == 403

    assert len(client.get("/api/v1/enrollments/", headers=auth_headers(admin.uid)).json()) == 2

def test_check_in_and_dashboard(client, auth_headers, admin, instructor):
    enrollment_id = _register(client, auth_headers("parent")).json()["id"]
    url = f"/api/v1/enrollments/{enrollment_id}/payment"
    for _ in range(2):
        client.post(url, json={"decision": "PAID"}, headers=auth_headers(admin.uid))

    r = client.post(
        "/api/v1/enrollments/check-in",
        json={"enrollmentIds": [enrollment_id, "missing"]},
        headers=auth_headers(instructor.uid),
    )
    assert r.json()["checkedIn"] == [enrollment_id]
    assert r.json()["skipped"] == {"missing": "not_found"}

    progress = client.get(f"/api/v1/enrollments/{enrollment_id}/progress", headers=auth_headers("parent")).json()
    assert (progress["attended"], progress["sessions"], progress["percent"]) == (1, 20, 5.0)

    stats = client.get("/api/v1/dashboard/stats", headers=auth_headers(admin.uid)).json()
    assert stats["totalIncome"] == 3000
    assert stats["instructorLoad"] == {"Kru Fluke": 1}

def test_null_for_required_field_is_a_validation_error(client, auth_headers):
    parent = auth_headers("parent")
    enrollment_id = _register(client, parent).json()["id"]
    url = f"/api/v1/enrollments/{enrollment_id}"

    r = client.patch(url, json={"studentName": None}, headers=parent)
    assert r.status_code == 422
    assert r.json()["code"] == "VALIDATION_ERROR"

    # disease aceita null; campos omitidos ficam como estão
    r = client.patch(url, json={"disease": None, "school": "Anuban"}, headers=parent)
    assert r.status_code == 200
    assert (r.json()["school"], r.json()["studentName"]) == ("Anuban", "Nong Nam")

    r = client.patch("/api/v1/me", json={"displayName": None}, headers=parent)
    assert r.status_code == 422
    assert r.json()["code"] == "VALIDATION_ERROR"
