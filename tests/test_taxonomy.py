import pytest

@pytest.fixture(params=["categories", "tags"])
def resource(request):
    return request.param

def create(client, headers, resource, translations, **fields):
    response = client.post(f"/api/admin/{resource}/", json={"translations": translations, **fields}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()

def test_slug_comes_from_first_translation(client, admin_headers, languages, resource):
    item = create(client, admin_headers, resource, [
        {"language_id": languages["es"], "name": "Programación Funcional"},
        {"language_id": languages["en"], "name": "Functional Programming"},
    ])
    assert item["slug"] == "programacion-funcional"
    slugs = {translation["language"]["code"]: translation["slug"] for translation in item["translations"]}
    assert slugs == {"es": "programacion-funcional", "en": "functional-programming"}

    again = create(client, admin_headers, resource, [{"language_id": languages["es"], "name": "Programación Funcional"}])
    assert again["slug"] == "programacion-funcional-1"

def test_public_lookup_by_slug_with_language(client, admin_headers, languages, resource):
    create(client, admin_headers, resource, [
        {"language_id": languages["es"], "name": "Noticias"},
        {"language_id": languages["en"], "name": "News"},
    ])
    response = client.get(f"/api/{resource}/noticias", params={"lang": "en"})
    assert response.status_code == 200
    assert [translation["name"] for translation in response.json()["translations"]] == ["News"]
    assert client.get(f"/api/{resource}/missing").status_code == 404

def test_inactive_items_are_hidden_publicly(client, admin_headers, languages, resource):
    item = create(client, admin_headers, resource, [{"language_id": languages["es"], "name": "Oculto"}], is_active=False)
    assert client.get(f"/api/{resource}/").json() == []
    assert client.get(f"/api/{resource}/{item['slug']}").status_code == 404
    assert len(client.get(f"/api/admin/{resource}/", headers=admin_headers).json()) == 1

def test_update_and_delete(client, admin_headers, languages, resource):
    item = create(client, admin_headers, resource, [{"language_id": languages["es"], "name": "Viejo"}])
    updated = client.patch(f"/api/admin/{resource}/{item['id']}", json={
        "translations": [
            {"language_id": languages["es"], "name": "Nuevo"},
            {"language_id": languages["en"], "name": "New"},
        ],
    }, headers=admin_headers)
    assert updated.status_code == 200
    assert sorted(translation["name"] for translation in updated.json()["translations"]) == ["New", "Nuevo"]
    # The root slug is stable across translation edits
    assert updated.json()["slug"] == "viejo"

    assert client.delete(f"/api/admin/{resource}/{item['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/admin/{resource}/{item['id']}", headers=admin_headers).status_code == 404

def test_at_least_one_translation_is_required(client, admin_headers, resource):
    response = client.post(f"/api/admin/{resource}/", json={"translations": []}, headers=admin_headers)
    assert response.status_code == 400
