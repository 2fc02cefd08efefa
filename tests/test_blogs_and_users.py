def test_blog_slug_and_json_ld(client, admin_headers, blog):
    assert blog["slug"] == "engineering-notes"
    assert blog["seo_json_ld"]["@type"] == "WebPage"
    assert blog["seo_json_ld"]["url"] == "http://testserver/blogs/engineering-notes"
    assert blog["seo_json_ld"]["author"]["name"] == "Admin User"

    second = client.post("/api/admin/blogs/", json={"name": "Engineering Notes"}, headers=admin_headers).json()
    assert second["slug"] == "engineering-notes-1"

def test_renaming_a_blog_reslugs_it(client, admin_headers, blog):
    renamed = client.patch(f"/api/admin/blogs/{blog['id']}", json={"name": "Engineering Notes"}, headers=admin_headers).json()
    assert renamed["slug"] == "engineering-notes"

    renamed = client.patch(f"/api/admin/blogs/{blog['id']}", json={"name": "Field Reports"}, headers=admin_headers).json()
    assert renamed["slug"] == "field-reports"
    assert renamed["seo_json_ld"]["headline"] == "Field Reports"
    assert client.get("/api/blogs/field-reports").status_code == 200

def test_blog_owner_must_exist(client, admin_headers):
    response = client.post("/api/admin/blogs/", json={"name": "Orphan", "owner_id": "nope"}, headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Owner not found"

def test_inactive_blogs_are_hidden_publicly(client, admin_headers, blog):
    client.patch(f"/api/admin/blogs/{blog['id']}", json={"is_active": False}, headers=admin_headers)
    assert client.get("/api/blogs/").json() == []
    assert client.get(f"/api/blogs/{blog['slug']}").status_code == 404
    assert client.get(f"/api/admin/blogs/slug/{blog['slug']}", headers=admin_headers).status_code == 200

def test_seeded_roles(client, admin_headers):
    names = [role["name"] for role in client.get("/api/roles/", headers=admin_headers).json()]
    assert names == ["admin", "author", "editor", "translator"]
    duplicate = client.post("/api/roles/", json={"name": "editor"}, headers=admin_headers)
    assert duplicate.status_code == 409

def test_admin_manages_users_and_roles(client, admin_headers, login_as):
    roles = {role["name"]: role["id"] for role in client.get("/api/roles/", headers=admin_headers).json()}
    created = client.post("/api/users/", json={
        "email": "editor@contenthub.io",
        "password": "editor-secret",
        "first_name": "Eve",
        "last_name": "Editor",
        "role_ids": [roles["editor"], roles["translator"]],
    }, headers=admin_headers)
    assert created.status_code == 201
    user = created.json()
    assert sorted(role["name"] for role in user["roles"]) == ["editor", "translator"]

    unknown_role = client.patch(f"/api/users/{user['id']}", json={"role_ids": ["nope"]}, headers=admin_headers)
    assert unknown_role.status_code == 404

    updated = client.patch(f"/api/users/{user['id']}", json={"password": "rotated-secret"}, headers=admin_headers)
    assert updated.status_code == 200
    login_as("editor@contenthub.io", "rotated-secret")

    assert client.delete(f"/api/users/{user['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/users/{user['id']}", headers=admin_headers).status_code == 404
    denied = client.post("/api/auth/login", json={"email": "editor@contenthub.io", "password": "rotated-secret"})
    assert denied.status_code == 401

def test_deleted_email_can_register_again(client, admin_headers):
    first = client.post("/api/users/", json={
        "email": "temp@contenthub.io",
        "password": "temp-secret",
        "first_name": "Tem",
        "last_name": "Porary",
    }, headers=admin_headers).json()
    client.delete(f"/api/users/{first['id']}", headers=admin_headers)

    again = client.post("/api/auth/register", json={
        "email": "temp@contenthub.io",
        "password": "temp-secret",
        "first_name": "Tem",
        "last_name": "Porary",
    })
    assert again.status_code == 201
