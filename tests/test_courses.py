"""
Test course endpoints: tenant isolation, visibility and edit rights.
"""
from uuid import UUID

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import auth_headers
from webacademy.infrastructure.database.models import Course, InstructorAssignment


def course_payload(**overrides):
    payload = {
        "title": "Algorithmique",
        "category": "Informatique",
        "description": "Structures de données",
        "status": "published",
    }
    payload.update(overrides)
    return payload


async def create_course(client: AsyncClient, user, **overrides) -> dict:
    response = await client.post("/api/courses", headers=auth_headers(user), json=course_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


async def test_institute_admin_course_lands_in_its_institute(client: AsyncClient, admin_b):
    course = await create_course(client, admin_b)
    assert course["institute"] == "B"
    assert course["institution"] == "UCAO-UUT"
    assert course["created_by"]["id"] == str(admin_b.id)


async def test_super_admin_created_admin_creates_course(client: AsyncClient, super_admin):
    response = await client.post(
        "/api/admin/users",
        headers=auth_headers(super_admin),
        json={"name": "Admin B", "email": "admin.b@ucao.edu", "password": "secret123", "role": "admin", "institute": "B"},
    )
    assert response.status_code == 201

    login = await client.post("/api/auth/login", json={"email": "admin.b@ucao.edu", "password": "secret123"})
    token = login.json()["token"]
    course = await client.post(
        "/api/courses", headers={"Authorization": f"Bearer {token}"}, json=course_payload()
    )
    assert course.status_code == 201
    assert course.json()["institute"] == "B"


async def test_students_cannot_create_courses(client: AsyncClient, student_a):
    response = await client.post("/api/courses", headers=auth_headers(student_a), json=course_payload())
    assert response.status_code == 403


async def test_conflicting_institute_on_create_is_forbidden(client: AsyncClient, admin_a):
    response = await client.post("/api/courses", headers=auth_headers(admin_a), json=course_payload(institute="B"))
    assert response.status_code == 403
    assert response.json()["detail"] == "Institut non autorisé"


async def test_listing_is_tenant_scoped(client: AsyncClient, super_admin, admin_a, admin_b):
    await create_course(client, super_admin, title="Cours A", institute="A")
    await create_course(client, super_admin, title="Cours B", institute="B")

    titles = [c["title"] for c in (await client.get("/api/courses", headers=auth_headers(admin_a))).json()]
    assert titles == ["Cours A"]

    admin_titles = [
        c["title"] for c in (await client.get("/api/admin/courses", headers=auth_headers(admin_b))).json()
    ]
    assert admin_titles == ["Cours B"]

    everything = (await client.get("/api/courses", headers=auth_headers(super_admin))).json()
    assert {c["title"] for c in everything} == {"Cours A", "Cours B"}

    cross = await client.get("/api/courses", params={"institute": "B"}, headers=auth_headers(admin_a))
    assert cross.status_code == 403


async def test_drafts_hidden_from_catalogue(client: AsyncClient, instructor_a, student_a, admin_a):
    draft = await create_course(client, instructor_a, title="Brouillon", status="draft", institute="A")
    await create_course(client, instructor_a, title="Publié", institute="A")

    student_view = (await client.get("/api/courses", headers=auth_headers(student_a))).json()
    assert [c["title"] for c in student_view] == ["Publié"]

    denied = await client.get(f"/api/courses/{draft['id']}", headers=auth_headers(student_a))
    assert denied.status_code == 403

    own = await client.get(f"/api/courses/{draft['id']}", headers=auth_headers(instructor_a))
    assert own.status_code == 200

    admin_view = await client.get("/api/courses", params={"status": "draft"}, headers=auth_headers(admin_a))
    assert [c["title"] for c in admin_view.json()] == ["Brouillon"]


async def test_course_of_other_institute_is_not_found(client: AsyncClient, admin_a, admin_b):
    course = await create_course(client, admin_b)
    response = await client.get(f"/api/courses/{course['id']}", headers=auth_headers(admin_a))
    assert response.status_code == 404
    assert response.json()["detail"] == "Cours non trouvé"


async def test_pagination_shapes(client: AsyncClient, admin_a):
    for i in range(25):
        await create_course(client, admin_a, title=f"Cours {i:02d}")

    bare = (await client.get("/api/courses", headers=auth_headers(admin_a))).json()
    assert isinstance(bare, list) and len(bare) == 25

    page = (await client.get("/api/courses", params={"limit": 10, "page": 2}, headers=auth_headers(admin_a))).json()
    assert page["total"] == 25
    assert len(page["data"]) == 10
    expected = [c["id"] for c in bare[10:20]]
    assert [c["id"] for c in page["data"]] == expected


async def test_search_is_case_insensitive_and_literal(client: AsyncClient, admin_a):
    await create_course(client, admin_a, title="Réduction 50% Python")
    await create_course(client, admin_a, title="Java avancé")

    found = (await client.get("/api/courses", params={"search": "python"}, headers=auth_headers(admin_a))).json()
    assert [c["title"] for c in found] == ["Réduction 50% Python"]

    literal = (await client.get("/api/courses", params={"search": "%"}, headers=auth_headers(admin_a))).json()
    assert len(literal) == 1


async def test_edit_rights(client: AsyncClient, db: AsyncSession, admin_a, admin_b, instructor_a, make_user):
    course = await create_course(client, admin_a)
    other_instructor = await make_user(role="formateur", institute="A")

    update = {"title": "Nouveau titre"}
    assert (await client.put(f"/api/courses/{course['id']}", headers=auth_headers(admin_b), json=update)).status_code == 403
    assert (await client.put(f"/api/courses/{course['id']}", headers=auth_headers(other_instructor), json=update)).status_code == 403

    db.add(
        InstructorAssignment(
            user_id=instructor_a.id,
            course_id=UUID(course["id"]),
            institute="A",
            semester="S1",
            academic_year=2025,
        )
    )
    await db.commit()

    response = await client.put(f"/api/courses/{course['id']}", headers=auth_headers(instructor_a), json=update)
    assert response.status_code == 200
    assert response.json()["title"] == "Nouveau titre"

    mine = (await client.get("/api/courses/mine", headers=auth_headers(instructor_a))).json()
    assert [c["id"] for c in mine] == [course["id"]]


async def test_update_cannot_move_course_out_of_tenant(client: AsyncClient, admin_a):
    course = await create_course(client, admin_a)
    response = await client.put(f"/api/courses/{course['id']}", headers=auth_headers(admin_a), json={"institute": "C"})
    assert response.status_code == 403


async def test_delete(client: AsyncClient, db: AsyncSession, instructor_a, admin_a, admin_b, make_user):
    course = await create_course(client, instructor_a)
    stranger = await make_user(role="formateur", institute="A")

    assert (await client.delete(f"/api/courses/{course['id']}", headers=auth_headers(stranger))).status_code == 403
    assert (await client.delete(f"/api/courses/{course['id']}", headers=auth_headers(admin_b))).status_code == 404
    assert (await client.delete(f"/api/courses/{course['id']}", headers=auth_headers(instructor_a))).status_code == 204
    assert await db.get(Course, UUID(course["id"])) is None
