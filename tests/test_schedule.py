"""
Test timetables, evaluation calendars and instructor assignments.
"""
from httpx import AsyncClient

from tests.conftest import auth_headers


async def make_course(client: AsyncClient, admin, **extra) -> str:
    payload = {"title": "Analyse", "category": "Maths", "description": "...", "status": "published", **extra}
    response = await client.post("/api/courses", headers=auth_headers(admin), json=payload)
    return response.json()["id"]


async def test_timetable_ordering(client: AsyncClient, admin_a):
    course_id = await make_course(client, admin_a)
    headers = auth_headers(admin_a)
    slots = [
        ("wednesday", "08:00", "10:00"),
        ("monday", "14:00", "16:00"),
        ("monday", "08:00", "10:00"),
        ("saturday", "09:00", "11:00"),
    ]
    for day, start, end in slots:
        response = await client.post(
            "/api/timetables",
            headers=headers,
            json={"course_id": course_id, "day_of_week": day, "start_time": start, "end_time": end},
        )
        assert response.status_code == 201
        assert response.json()["institute"] == "A"

    listed = (await client.get("/api/timetables", headers=headers)).json()
    assert [(t["day_of_week"], t["start_time"]) for t in listed] == [
        ("monday", "08:00"),
        ("monday", "14:00"),
        ("wednesday", "08:00"),
        ("saturday", "09:00"),
    ]
    assert listed[0]["course"]["title"] == "Analyse"

    mondays = (await client.get("/api/timetables", params={"day_of_week": "monday"}, headers=headers)).json()
    assert len(mondays) == 2


async def test_timetable_validation_and_isolation(client: AsyncClient, admin_a, admin_b, student_a):
    course_id = await make_course(client, admin_a)
    bad_time = await client.post(
        "/api/timetables",
        headers=auth_headers(admin_a),
        json={"course_id": course_id, "start_time": "25:00", "end_time": "26:00"},
    )
    assert bad_time.status_code == 400

    foreign_course = await client.post(
        "/api/timetables",
        headers=auth_headers(admin_b),
        json={"course_id": course_id, "start_time": "08:00", "end_time": "10:00"},
    )
    assert foreign_course.status_code == 404

    created = await client.post(
        "/api/timetables",
        headers=auth_headers(admin_a),
        json={"course_id": course_id, "start_time": "08:00", "end_time": "10:00"},
    )
    timetable_id = created.json()["id"]

    assert (await client.get(f"/api/timetables/{timetable_id}", headers=auth_headers(admin_b))).status_code == 404
    assert (await client.get("/api/timetables", headers=auth_headers(admin_b))).json() == []
    assert (await client.get("/api/timetables", params={"institute": "A"}, headers=auth_headers(admin_b))).status_code == 403
    assert (await client.delete(f"/api/timetables/{timetable_id}", headers=auth_headers(student_a))).status_code == 403


async def test_evaluation_calendar(client: AsyncClient, admin_a):
    headers = auth_headers(admin_a)
    course_id = await make_course(client, admin_a)
    for title, day in [("Partiel", "2025-12-15"), ("Contrôle", "2025-11-03")]:
        response = await client.post(
            "/api/evaluation-calendars",
            headers=headers,
            json={"title": title, "evaluation_date": day, "type": "controle", "course_id": course_id},
        )
        assert response.status_code == 201

    listed = (await client.get("/api/evaluation-calendars", headers=headers)).json()
    assert [e["title"] for e in listed] == ["Contrôle", "Partiel"]

    by_course = (await client.get("/api/evaluation-calendars", params={"course_id": course_id}, headers=headers)).json()
    assert len(by_course) == 2

    calendar_id = listed[0]["id"]
    updated = await client.put(f"/api/evaluation-calendars/{calendar_id}", headers=headers, json={"location": "Amphi 1"})
    assert updated.json()["location"] == "Amphi 1"


async def test_instructor_assignments(client: AsyncClient, admin_a, admin_b, instructor_a, student_a):
    course_id = await make_course(client, admin_a)
    payload = {
        "user_id": str(instructor_a.id),
        "course_id": course_id,
        "institute": "A",
        "semester": "S1",
        "academic_year": 2025,
    }

    cross = await client.post("/api/admin/instructor-assignments", headers=auth_headers(admin_b), json=payload)
    assert cross.status_code == 403

    not_instructor = await client.post(
        "/api/admin/instructor-assignments",
        headers=auth_headers(admin_a),
        json={**payload, "user_id": str(student_a.id)},
    )
    assert not_instructor.status_code == 400

    created = await client.post("/api/admin/instructor-assignments", headers=auth_headers(admin_a), json=payload)
    assert created.status_code == 201
    assert created.json()["course"]["title"] == "Analyse"

    listed = (await client.get("/api/admin/instructor-assignments", headers=auth_headers(admin_b))).json()
    assert listed == []

    edit = await client.put(
        f"/api/courses/{course_id}", headers=auth_headers(instructor_a), json={"title": "Analyse 2"}
    )
    assert edit.status_code == 200

    removed = await client.delete(
        f"/api/admin/instructor-assignments/{created.json()['id']}", headers=auth_headers(admin_a)
    )
    assert removed.status_code == 204
    edit_again = await client.put(
        f"/api/courses/{course_id}", headers=auth_headers(instructor_a), json={"title": "Analyse 3"}
    )
    assert edit_again.status_code == 403
