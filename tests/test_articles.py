import pytest

@pytest.fixture
def taxonomy(client, admin_headers, languages):
    category = client.post("/api/admin/categories/", json={
        "translations": [{"language_id": languages["es"], "name": "Tecnología"}],
    }, headers=admin_headers).json()
    tag = client.post("/api/admin/tags/", json={
        "translations": [{"language_id": languages["es"], "name": "Python"}],
    }, headers=admin_headers).json()
    return category, tag

def article_payload(blog, languages, **overrides):
    payload = {
        "blog_id": blog["id"],
        "status": "published",
        "translations": [
            {"language_id": languages["es"], "title": "Hola Mundo", "content": "<p>Contenido en español</p>"},
            {"language_id": languages["en"], "title": "Hello World", "content": "<p>English content</p>"},
        ],
    }
    payload.update(overrides)
    return payload

def create_article(client, headers, payload):
    response = client.post("/api/admin/articles/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()

def test_create_article_with_translations(client, admin_headers, blog, languages, taxonomy):
    category, tag = taxonomy
    article = create_article(client, admin_headers, article_payload(
        blog, languages, category_ids=[category["id"]], tag_ids=[tag["id"]],
    ))

    assert article["slug"] == "hola-mundo"
    assert article["published_at"] is not None
    assert [item["id"] for item in article["categories"]] == [category["id"]]
    assert [item["id"] for item in article["tags"]] == [tag["id"]]

    by_code = {translation["language"]["code"]: translation for translation in article["translations"]}
    assert set(by_code) == {"es", "en"}
    assert by_code["en"]["slug"] == "hello-world"
    json_ld = by_code["es"]["seo_json_ld"]
    assert json_ld["@type"] == "Article"
    assert json_ld["headline"] == "Hola Mundo"
    assert json_ld["description"] == "Contenido en español"
    assert json_ld["url"] == "http://testserver/hola-mundo"
    assert json_ld["author"]["name"] == "Admin User"

def test_language_filter_keeps_only_matching_translations(client, admin_headers, blog, languages):
    create_article(client, admin_headers, article_payload(blog, languages))
    only_spanish = create_article(client, admin_headers, article_payload(blog, languages, translations=[
        {"language_id": languages["es"], "title": "Solo Español", "content": "texto"},
    ]))

    english = client.get("/api/articles/", params={"lang": "en"}).json()
    assert [article["slug"] for article in english] == ["hola-mundo"]
    assert [translation["language"]["code"] for translation in english[0]["translations"]] == ["en"]

    spanish = client.get("/api/articles/", params={"lang": "es"}).json()
    assert {article["slug"] for article in spanish} == {"hola-mundo", only_spanish["slug"]}
    for article in spanish:
        assert [translation["language"]["code"] for translation in article["translations"]] == ["es"]

    unfiltered = client.get("/api/articles/hola-mundo").json()
    assert len(unfiltered["translations"]) == 2

def test_unknown_translation_language_is_skipped(client, admin_headers, blog, languages):
    article = create_article(client, admin_headers, article_payload(blog, languages, translations=[
        {"language_id": languages["es"], "title": "Hola", "content": "texto"},
        {"language_id": "missing-language", "title": "Bonjour", "content": "texte"},
    ]))
    assert [translation["language"]["code"] for translation in article["translations"]] == ["es"]

def test_slugs_stay_unique(client, admin_headers, blog, languages):
    first = create_article(client, admin_headers, article_payload(blog, languages))
    second = create_article(client, admin_headers, article_payload(blog, languages))
    assert first["slug"] == "hola-mundo"
    assert second["slug"] == "hola-mundo-1"

def test_drafts_are_not_public(client, admin_headers, blog, languages):
    draft = create_article(client, admin_headers, article_payload(blog, languages, status="draft"))
    assert draft["published_at"] is None
    assert client.get("/api/articles/").json() == []
    assert client.get(f"/api/articles/{draft['slug']}").status_code == 404

    published = client.patch(f"/api/admin/articles/{draft['id']}/status", json={"status": "published"}, headers=admin_headers)
    assert published.status_code == 200
    assert published.json()["published_at"] is not None
    assert client.get(f"/api/articles/{draft['slug']}").status_code == 200

def test_update_replaces_translations(client, admin_headers, blog, languages):
    article = create_article(client, admin_headers, article_payload(blog, languages))
    response = client.patch(f"/api/admin/articles/{article['id']}", json={
        "translations": [{"language_id": languages["en"], "title": "Hello Again", "content": "new"}],
    }, headers=admin_headers)
    assert response.status_code == 200
    translations = response.json()["translations"]
    assert [(t["language"]["code"], t["title"]) for t in translations] == [("en", "Hello Again")]

def test_missing_references_are_not_found(client, admin_headers, blog, languages):
    missing_blog = client.post("/api/admin/articles/", json=article_payload({"id": "nope"}, languages), headers=admin_headers)
    assert missing_blog.status_code == 404
    assert missing_blog.json()["detail"] == "Blog not found"

    missing_category = client.post(
        "/api/admin/articles/",
        json=article_payload(blog, languages, category_ids=["nope"]),
        headers=admin_headers,
    )
    assert missing_category.status_code == 404
    assert client.get("/api/admin/articles/", headers=admin_headers).json() == []

def test_deleted_article_disappears(client, admin_headers, blog, languages):
    article = create_article(client, admin_headers, article_payload(blog, languages))
    assert client.delete(f"/api/admin/articles/{article['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/admin/articles/{article['id']}", headers=admin_headers).status_code == 404
    assert client.get("/api/articles/").json() == []

def test_admin_list_filters_by_status(client, admin_headers, blog, languages):
    create_article(client, admin_headers, article_payload(blog, languages))
    create_article(client, admin_headers, article_payload(blog, languages, status="draft"))
    drafts = client.get("/api/admin/articles/", params={"status": "draft"}, headers=admin_headers).json()
    assert [article["status"] for article in drafts] == ["draft"]
