def test_seeded_default_language(client):
    response = client.get("/api/languages/default")
    assert response.status_code == 200
    assert response.json()["code"] == "es"
    assert [language["code"] for language in client.get("/api/languages/").json()] == ["en", "es"]

def test_new_default_replaces_the_old_one(client, admin_headers):
    response = client.post(
        "/api/admin/languages/",
        json={"code": "FR", "name": "Français", "is_default": True},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert response.json()["code"] == "fr"

    languages = client.get("/api/admin/languages/", headers=admin_headers).json()
    assert [language["code"] for language in languages if language["is_default"]] == ["fr"]
    assert client.get("/api/languages/default").json()["code"] == "fr"

def test_switching_default_through_update(client, admin_headers, languages):
    response = client.patch(f"/api/admin/languages/{languages['en']}", json={"is_default": True}, headers=admin_headers)
    assert response.status_code == 200

    defaults = [language for language in client.get("/api/admin/languages/", headers=admin_headers).json() if language["is_default"]]
    assert [language["code"] for language in defaults] == ["en"]

def test_duplicate_code_conflicts(client, admin_headers):
    response = client.post("/api/admin/languages/", json={"code": "es", "name": "Spanish"}, headers=admin_headers)
    assert response.status_code == 409

def test_inactive_languages_are_hidden_publicly(client, admin_headers, languages):
    client.patch(f"/api/admin/languages/{languages['en']}", json={"is_active": False}, headers=admin_headers)
    assert [language["code"] for language in client.get("/api/languages/").json()] == ["es"]

def test_admin_language_routes_require_authentication(client):
    assert client.get("/api/admin/languages/").status_code == 401
