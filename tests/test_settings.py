"""
Test platform settings, the admin dashboard and liveness.
"""
from httpx import AsyncClient

from tests.conftest import auth_headers


async def test_public_settings_defaults(client: AsyncClient):
    response = await client.get("/api/settings")
    assert response.status_code == 200
    data = response.json()
    assert data["current_semester"] == "S1"
    assert isinstance(data["current_academic_year"], int)
    assert "max_upload_size_mb" not in data


async def test_only_super_admin_updates_settings(client: AsyncClient, admin_a, super_admin):
    denied = await client.put("/api/admin/settings", headers=auth_headers(admin_a), json={"current_semester": "S2"})
    assert denied.status_code == 403

    out_of_range = await client.put(
        "/api/admin/settings", headers=auth_headers(super_admin), json={"max_upload_size_mb": 1000}
    )
    assert out_of_range.status_code == 400

    updated = await client.put(
        "/api/admin/settings",
        headers=auth_headers(super_admin),
        json={"current_semester": "S2", "max_upload_size_mb": 10},
    )
    assert updated.status_code == 200
    assert updated.json()["max_upload_size_mb"] == 10

    public = (await client.get("/api/settings")).json()
    assert public["current_semester"] == "S2"

    admin_view = (await client.get("/api/admin/settings", headers=auth_headers(admin_a))).json()
    assert admin_view["max_upload_size_mb"] == 10


async def test_dashboard_is_tenant_scoped(client: AsyncClient, admin_a, super_admin, make_user):
    await make_user(role="etudiant", institute="A")
    await make_user(role="etudiant", institute="B")
    await make_user(role="formateur", institute="A")
    await client.post("/api/admin/categories", headers=auth_headers(admin_a), json={"name": "Maths"})
    await client.post(
        "/api/courses",
        headers=auth_headers(admin_a),
        json={"title": "Algèbre", "category": "Maths", "description": "..."},
    )

    stats = (await client.get("/api/admin/stats", headers=auth_headers(admin_a))).json()
    assert stats["total_students"] == 1
    assert stats["new_students_this_month"] == 1
    assert stats["total_instructors"] == 1
    assert stats["total_courses"] == 1
    assert stats["recent_courses"][0]["title"] == "Algèbre"
    assert stats["categories"] == [
        {"id": stats["categories"][0]["id"], "name": "Maths", "course_count": 1}
    ]

    platform = (await client.get("/api/admin/stats", headers=auth_headers(super_admin))).json()
    assert platform["total_students"] == 2


async def test_health_and_request_id(client: AsyncClient):
    response = await client.get("/api/health", headers={"X-Request-ID": "req-42"})
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.headers["X-Request-ID"] == "req-42"
