"""
Test discussions and replies.
"""
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import auth_headers
from webacademy.infrastructure.database.models import DiscussionReply


async def start(client: AsyncClient, user, **extra) -> dict:
    payload = {"title": "Question", "content": "Comment installer Python ?", **extra}
    response = await client.post("/api/discussions", headers=auth_headers(user), json=payload)
    assert response.status_code == 201
    return response.json()


async def test_pinned_first(client: AsyncClient, student_a, admin_a):
    await start(client, student_a, title="Ancienne")
    pinned = await start(client, admin_a, title="Annonce", is_pinned=True)
    student_pin = await start(client, student_a, title="Récente", is_pinned=True)
    assert pinned["is_pinned"] is True
    assert student_pin["is_pinned"] is False

    listed = (await client.get("/api/discussions", headers=auth_headers(student_a))).json()
    assert [d["title"] for d in listed] == ["Annonce", "Récente", "Ancienne"]

    found = (await client.get("/api/discussions", params={"search": "ANNONCE"}, headers=auth_headers(student_a))).json()
    assert [d["title"] for d in found] == ["Annonce"]


async def test_replies_flag_instructors(client: AsyncClient, student_a, instructor_a):
    discussion = await start(client, student_a)

    reply = await client.post(
        f"/api/discussions/{discussion['id']}/replies",
        headers=auth_headers(instructor_a),
        json={"content": "Utilisez pyenv."},
    )
    assert reply.status_code == 201
    assert reply.json()["is_instructor"] is True

    await client.post(
        f"/api/discussions/{discussion['id']}/replies", headers=auth_headers(student_a), json={"content": "Merci !"}
    )

    thread = (await client.get(f"/api/discussions/{discussion['id']}", headers=auth_headers(student_a))).json()
    assert [(r["content"], r["is_instructor"]) for r in thread["replies"]] == [
        ("Utilisez pyenv.", True),
        ("Merci !", False),
    ]


async def test_only_author_or_admin_edits(client: AsyncClient, student_a, admin_b, make_user):
    discussion = await start(client, student_a)
    classmate = await make_user(role="etudiant", institute="A")

    denied = await client.put(
        f"/api/discussions/{discussion['id']}", headers=auth_headers(classmate), json={"title": "Piraté"}
    )
    assert denied.status_code == 403

    own = await client.put(
        f"/api/discussions/{discussion['id']}", headers=auth_headers(student_a), json={"title": "Précision", "is_pinned": True}
    )
    assert own.json()["title"] == "Précision"
    assert own.json()["is_pinned"] is False

    moderated = await client.put(
        f"/api/discussions/{discussion['id']}", headers=auth_headers(admin_b), json={"is_pinned": True}
    )
    assert moderated.json()["is_pinned"] is True


async def test_delete_removes_replies(client: AsyncClient, db: AsyncSession, student_a, instructor_a):
    discussion = await start(client, student_a)
    await client.post(
        f"/api/discussions/{discussion['id']}/replies", headers=auth_headers(instructor_a), json={"content": "Réponse"}
    )

    assert (await client.delete(f"/api/discussions/{discussion['id']}", headers=auth_headers(instructor_a))).status_code == 403
    assert (await client.delete(f"/api/discussions/{discussion['id']}", headers=auth_headers(student_a))).status_code == 204

    remaining = (await db.execute(select(func.count()).select_from(DiscussionReply))).scalar_one()
    assert remaining == 0
    missing = await client.get(f"/api/discussions/{discussion['id']}", headers=auth_headers(student_a))
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Discussion non trouvée"


async def test_discussions_require_authentication(client: AsyncClient):
    assert (await client.get("/api/discussions")).status_code == 401
