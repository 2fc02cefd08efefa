from datetime import datetime, timedelta
from contenthub.models.api_key import ApiKey
from contenthub.features.api_keys.service import validate_api_key

def create_key(client, headers, **payload):
    payload.setdefault("name", "ci-pipeline")
    response = client.post("/api/api-keys/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()

def bearer(token):
    return {"Authorization": f"Bearer {token}"}

def test_api_key_authenticates_as_its_owner(client, admin_headers, db):
    key = create_key(client, admin_headers, scopes=["articles:read"])
    assert key["plain_token"]
    assert key["expires_at"] is not None

    profile = client.get("/api/auth/profile", headers=bearer(key["plain_token"]))
    assert profile.status_code == 200
    assert profile.json()["email"] == "admin@contenthub.io"

    stored = db.query(ApiKey).filter(ApiKey.id == key["id"]).one()
    db.refresh(stored)
    assert stored.token != key["plain_token"]
    assert stored.last_used_at is not None
    assert stored.last_used_ip

def test_expired_key_is_rejected(client, admin_headers):
    past = (datetime.utcnow() - timedelta(days=1)).isoformat()
    key = create_key(client, admin_headers, name="old", expires_at=past)
    response = client.get("/api/auth/profile", headers=bearer(key["plain_token"]))
    assert response.status_code == 401

    cleanup = client.post("/api/api-keys/cleanup", headers=admin_headers)
    assert cleanup.json() == {"removed": 1}

def test_deactivated_and_deleted_keys_are_rejected(client, admin_headers):
    first = create_key(client, admin_headers, name="first")
    second = create_key(client, admin_headers, name="second")

    assert client.patch(f"/api/api-keys/{first['id']}/deactivate", headers=admin_headers).json()["is_active"] is False
    assert client.get("/api/auth/profile", headers=bearer(first["plain_token"])).status_code == 401

    assert client.delete(f"/api/api-keys/{second['id']}", headers=admin_headers).status_code == 200
    assert client.get("/api/auth/profile", headers=bearer(second["plain_token"])).status_code == 401
    assert client.get(f"/api/api-keys/{second['id']}", headers=admin_headers).status_code == 404

def test_key_names_are_unique_per_user(client, admin_headers):
    create_key(client, admin_headers)
    duplicate = client.post("/api/api-keys/", json={"name": "ci-pipeline"}, headers=admin_headers)
    assert duplicate.status_code == 409

def test_authors_only_see_and_manage_their_own_keys(client, admin_headers, author_headers):
    admin_key = create_key(client, admin_headers)
    author_key = create_key(client, author_headers, name="writer-key")

    mine = client.get("/api/api-keys/my-keys", headers=author_headers).json()
    assert [key["id"] for key in mine] == [author_key["id"]]
    assert "plain_token" not in mine[0]

    assert client.get(f"/api/api-keys/{admin_key['id']}", headers=author_headers).status_code == 403
    assert client.get("/api/api-keys/", headers=author_headers).status_code == 403
    assert len(client.get("/api/api-keys/", headers=admin_headers).json()) == 2

def test_key_update(client, admin_headers):
    key = create_key(client, admin_headers)
    response = client.patch(f"/api/api-keys/{key['id']}", json={"name": "renamed", "notes": "rotated"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "renamed"
    assert response.json()["notes"] == "rotated"

def test_key_update_scopes_and_reactivation(client, admin_headers):
    key = create_key(client, admin_headers, scopes=["articles:read"])
    response = client.patch(f"/api/api-keys/{key['id']}", json={"scopes": ["articles:read", "pages:write"]}, headers=admin_headers)
    assert response.json()["scopes"] == ["articles:read", "pages:write"]

    client.patch(f"/api/api-keys/{key['id']}/deactivate", headers=admin_headers)
    assert client.get("/api/auth/profile", headers=bearer(key["plain_token"])).status_code == 401

    reactivated = client.patch(f"/api/api-keys/{key['id']}", json={"is_active": True}, headers=admin_headers)
    assert reactivated.json()["is_active"] is True
    assert client.get("/api/auth/profile", headers=bearer(key["plain_token"])).status_code == 200

def test_required_key_fields_cannot_be_nulled(client, admin_headers):
    key = create_key(client, admin_headers)
    for field in ("name", "scopes", "is_active"):
        response = client.patch(f"/api/api-keys/{key['id']}", json={field: None}, headers=admin_headers)
        assert response.status_code == 400, field

def test_extending_an_expired_key_revives_it(client, admin_headers):
    past = (datetime.utcnow() - timedelta(minutes=5)).isoformat()
    key = create_key(client, admin_headers, name="short-lived", expires_at=past)
    assert client.get("/api/auth/profile", headers=bearer(key["plain_token"])).status_code == 401

    future = (datetime.utcnow() + timedelta(days=30)).isoformat()
    extended = client.patch(f"/api/api-keys/{key['id']}", json={"expires_at": future}, headers=admin_headers)
    assert extended.status_code == 200
    assert client.get("/api/auth/profile", headers=bearer(key["plain_token"])).status_code == 200

def test_clearing_the_expiry_keeps_a_key_valid(client, admin_headers):
    past = (datetime.utcnow() - timedelta(minutes=5)).isoformat()
    key = create_key(client, admin_headers, name="forever", expires_at=past)

    cleared = client.patch(f"/api/api-keys/{key['id']}", json={"expires_at": None}, headers=admin_headers)
    assert cleared.json()["expires_at"] is None
    assert client.get("/api/auth/profile", headers=bearer(key["plain_token"])).status_code == 200
    assert client.post("/api/api-keys/cleanup", headers=admin_headers).json() == {"removed": 0}

def test_validation_returns_the_issued_key(client, admin_headers, db):
    key = create_key(client, admin_headers)
    validated = validate_api_key(db, key["plain_token"])
    assert validated.id == key["id"]
    assert validated.user_id == key["user_id"]
    assert validated.user.email == "admin@contenthub.io"

def test_other_strings_never_validate(client, admin_headers, db):
    key = create_key(client, admin_headers)
    token = key["plain_token"]
    session_token = admin_headers["Authorization"].split(" ", 1)[1]
    tampered = token[:-1] + ("A" if token[-1] != "A" else "B")

    for candidate in (session_token, tampered, "not-a-token", "", token + " "):
        assert validate_api_key(db, candidate) is None
