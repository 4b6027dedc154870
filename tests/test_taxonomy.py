"""
Test categories and filieres.
"""
from httpx import AsyncClient

from tests.conftest import auth_headers


async def test_filiere_uniqueness_per_institute(client: AsyncClient, super_admin):
    headers = auth_headers(super_admin)
    first = await client.post("/api/admin/filieres", headers=headers, json={"name": "Génie Logiciel", "institute": "A"})
    assert first.status_code == 201

    duplicate = await client.post("/api/admin/filieres", headers=headers, json={"name": "Génie Logiciel", "institute": "A"})
    assert duplicate.status_code == 400
    assert duplicate.json()["detail"] == "Une filière avec ce nom existe déjà pour cet institut."

    other_institute = await client.post(
        "/api/admin/filieres", headers=headers, json={"name": "Génie Logiciel", "institute": "B"}
    )
    assert other_institute.status_code == 201


async def test_filiere_requires_institute(client: AsyncClient, super_admin, admin_a):
    missing = await client.post("/api/admin/filieres", headers=auth_headers(super_admin), json={"name": "Droit"})
    assert missing.status_code == 400

    forced = await client.post("/api/admin/filieres", headers=auth_headers(admin_a), json={"name": "Droit"})
    assert forced.status_code == 201
    assert forced.json()["institute"] == "A"


async def test_public_filieres(client: AsyncClient, super_admin, admin_b):
    headers = auth_headers(super_admin)
    for institute, name, order in [("B", "Zoologie", 0), ("A", "Gestion", 2), ("A", "Comptabilité", 1)]:
        await client.post("/api/admin/filieres", headers=headers, json={"name": name, "institute": institute, "order": order})

    everything = (await client.get("/api/filieres")).json()
    assert [f["name"] for f in everything] == ["Comptabilité", "Gestion", "Zoologie"]

    only_a = (await client.get("/api/filieres", params={"institute": "A"})).json()
    assert {f["institute"] for f in only_a} == {"A"}

    scoped = (await client.get("/api/admin/filieres", headers=auth_headers(admin_b))).json()
    assert [f["name"] for f in scoped] == ["Zoologie"]

    cross = await client.get("/api/admin/filieres", params={"institute": "A"}, headers=auth_headers(admin_b))
    assert cross.status_code == 403


async def test_global_categories_are_shared_but_read_only(client: AsyncClient, super_admin, admin_a, admin_b):
    glob = await client.post("/api/admin/categories", headers=auth_headers(super_admin), json={"name": "Sciences"})
    assert glob.status_code == 201
    assert glob.json()["institute"] is None

    own = await client.post("/api/admin/categories", headers=auth_headers(admin_a), json={"name": "Lettres"})
    assert own.json()["institute"] == "A"
    await client.post("/api/admin/categories", headers=auth_headers(admin_b), json={"name": "Arts"})

    visible = (await client.get("/api/admin/categories", headers=auth_headers(admin_a))).json()
    assert sorted(c["name"] for c in visible) == ["Lettres", "Sciences"]

    edit_global = await client.put(
        f"/api/admin/categories/{glob.json()['id']}", headers=auth_headers(admin_a), json={"name": "Autre"}
    )
    assert edit_global.status_code == 404

    delete_global = await client.delete(f"/api/admin/categories/{glob.json()['id']}", headers=auth_headers(admin_a))
    assert delete_global.status_code == 404


async def test_category_name_conflicts(client: AsyncClient, super_admin, admin_a):
    await client.post("/api/admin/categories", headers=auth_headers(super_admin), json={"name": "Sciences"})
    global_dup = await client.post("/api/admin/categories", headers=auth_headers(super_admin), json={"name": "Sciences"})
    assert global_dup.status_code == 400

    await client.post("/api/admin/categories", headers=auth_headers(admin_a), json={"name": "Lettres"})
    tenant_dup = await client.post("/api/admin/categories", headers=auth_headers(admin_a), json={"name": "Lettres"})
    assert tenant_dup.status_code == 400
    assert tenant_dup.json()["detail"] == "Une catégorie avec ce nom existe déjà."
