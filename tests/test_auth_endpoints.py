"""
Test authentication endpoints.
"""
from datetime import datetime, timedelta, timezone
from uuid import UUID

from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import PASSWORD, auth_headers
from webacademy.infrastructure.database.models import InstructorAssignment, User


async def register(client: AsyncClient, **overrides):
    payload = {
        "name": "Awa Diop",
        "email": "awa.diop@ucao.edu",
        "password": PASSWORD,
        "institute": "A",
    }
    payload.update(overrides)
    return await client.post("/api/auth/register", json=payload)


async def test_student_registration_waits_for_verification(client: AsyncClient, notifier):
    response = await register(client, role="student", student_number="MAT-001")
    assert response.status_code == 201

    data = response.json()
    assert data["token"] is None
    assert data["user"]["role"] == "etudiant"
    assert data["user"]["identity_verified"] is False
    assert "confirmation" in data["message"]
    assert notifier.kinds() == ["account_created"]


async def test_instructor_registration_returns_token(client: AsyncClient):
    response = await register(client, role="formateur", email="prof@ucao.edu")
    assert response.status_code == 201
    data = response.json()
    assert data["token"]
    assert data["user"]["role"] == "formateur"
    assert data["user"]["identity_verified"] is True


async def test_admin_self_registration_is_forbidden(client: AsyncClient):
    response = await register(client, role="admin")
    assert response.status_code == 403


async def test_duplicate_email_is_a_conflict(client: AsyncClient):
    assert (await register(client, role="formateur")).status_code == 201
    response = await register(client, role="formateur", email="AWA.DIOP@ucao.edu ")
    assert response.status_code == 400
    assert "email" in response.json()["detail"]


async def test_invalid_body_is_a_400(client: AsyncClient):
    response = await register(client, password="123")
    assert response.status_code == 400


async def test_unverified_student_cannot_log_in(client: AsyncClient, make_user):
    user = await make_user(role="etudiant", institute="A", verified=False)
    response = await client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
    assert response.status_code == 403
    assert "attente de vérification" in response.json()["detail"]


async def test_login(client: AsyncClient, instructor_a: User):
    response = await client.post(
        "/api/auth/login", json={"email": instructor_a.email.upper(), "password": PASSWORD}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["user"]["id"] == str(instructor_a.id)

    me = await client.get("/api/auth/user", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == instructor_a.email


async def test_login_wrong_password(client: AsyncClient, instructor_a: User):
    response = await client.post("/api/auth/login", json={"email": instructor_a.email, "password": "nope"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Email ou mot de passe incorrect"


async def test_missing_and_invalid_tokens(client: AsyncClient):
    missing = await client.get("/api/auth/user")
    assert missing.status_code == 401
    assert missing.json()["detail"] == "Token manquant"

    invalid = await client.get("/api/auth/user", headers={"Authorization": "Bearer garbage"})
    assert invalid.status_code == 401
    assert invalid.json()["detail"] == "Token invalide"


async def test_token_of_deleted_user(client: AsyncClient, db: AsyncSession, student_a: User):
    headers = auth_headers(student_a)
    await db.delete(student_a)
    await db.commit()

    response = await client.get("/api/auth/user", headers=headers)
    assert response.status_code == 401
    assert response.json()["detail"] == "Utilisateur non trouvé"


async def test_update_profile_ignores_protected_fields(client: AsyncClient, student_a: User):
    response = await client.put(
        "/api/auth/profile",
        headers=auth_headers(student_a),
        json={"name": "Nouveau Nom", "phone": " 770000000 ", "role": "admin", "institute": "B"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Nouveau Nom"
    assert data["phone"] == "770000000"
    assert data["role"] == "etudiant"
    assert data["institute"] == "A"


async def test_password_reset_flow(client: AsyncClient, db: AsyncSession, instructor_a: User, notifier):
    response = await client.post("/api/auth/forgot-password", json={"email": instructor_a.email})
    assert response.status_code == 200
    assert notifier.kinds() == ["password_reset"]

    await db.refresh(instructor_a)
    token = instructor_a.password_reset_token
    assert token

    reset = await client.post("/api/auth/reset-password", json={"token": token, "password": "brandnew1"})
    assert reset.status_code == 200

    again = await client.post("/api/auth/reset-password", json={"token": token, "password": "brandnew2"})
    assert again.status_code == 400
    assert "invalide ou expiré" in again.json()["detail"]

    login = await client.post("/api/auth/login", json={"email": instructor_a.email, "password": "brandnew1"})
    assert login.status_code == 200


async def test_forgot_password_unknown_email_looks_the_same(client: AsyncClient, notifier):
    response = await client.post("/api/auth/forgot-password", json={"email": "ghost@ucao.edu"})
    assert response.status_code == 200
    assert notifier.sent == []


async def test_expired_reset_token(client: AsyncClient, db: AsyncSession, instructor_a: User):
    instructor_a.password_reset_token = "a" * 64
    instructor_a.password_reset_expires = datetime.now(timezone.utc) - timedelta(minutes=1)
    await db.commit()

    response = await client.post("/api/auth/reset-password", json={"token": "a" * 64, "password": "brandnew1"})
    assert response.status_code == 400


async def test_my_assignments(client: AsyncClient, db: AsyncSession, instructor_a: User, admin_a: User):
    course = await client.post(
        "/api/courses",
        headers=auth_headers(admin_a),
        json={"title": "Réseaux", "category": "Informatique", "description": "TCP/IP"},
    )
    db.add(
        InstructorAssignment(
            user_id=instructor_a.id,
            course_id=UUID(course.json()["id"]),
            institute="A",
            semester="S1",
            academic_year=2025,
        )
    )
    await db.commit()

    response = await client.get("/api/auth/assignments", headers=auth_headers(instructor_a))
    assert response.status_code == 200
    [assignment] = response.json()
    assert assignment["course_title"] == "Réseaux"

    rows = (await db.execute(select(InstructorAssignment))).scalars().all()
    assert len(rows) == 1
