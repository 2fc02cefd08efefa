import io
from PIL import Image

def png_bytes():
    buffer = io.BytesIO()
    Image.new("RGB", (320, 240), (20, 120, 200)).save(buffer, "PNG")
    return buffer.getvalue()

def upload(client, headers, route="/api/storage/upload", name="cover.png", content=None, mime_type="image/png", **form):
    files = {"file": (name, content if content is not None else png_bytes(), mime_type)}
    return client.post(route, files=files, data=form, headers=headers)

def local_url(url):
    return url.replace("http://testserver", "")

def test_image_upload_is_served_and_deleted(client, admin_headers):
    response = upload(client, admin_headers, route="/api/storage/upload/images", quality="60")
    assert response.status_code == 201, response.text
    stored = response.json()
    assert stored["type"] == "image"
    assert stored["format"] == "png"
    assert stored["original_name"] == "cover.png"
    assert stored["metadata"] == {"dimensions": {"width": 320, "height": 240}}
    assert {version["type"] for version in stored["processed_versions"]} == {"thumbnail", "compressed"}

    served = client.get(local_url(stored["url"]))
    assert served.status_code == 200
    assert served.content == png_bytes()

    assert client.delete(f"/api/storage/files/{stored['id']}", headers=admin_headers).status_code == 200
    assert client.get(local_url(stored["url"])).status_code == 404
    for version in stored["processed_versions"]:
        assert client.get(local_url(version["url"])).status_code == 404
    assert client.get(f"/api/storage/files/{stored['id']}", headers=admin_headers).status_code == 404

def test_type_specific_routes_reject_other_types(client, admin_headers):
    response = upload(client, admin_headers, route="/api/storage/upload/images", name="notes.txt", content=b"hello", mime_type="text/plain")
    assert response.status_code == 400
    assert response.json()["detail"] == "File type not allowed: document"

    unsupported = upload(client, admin_headers, name="tool.exe", content=b"MZ", mime_type="application/x-msdownload")
    assert unsupported.status_code == 400
    assert unsupported.json()["detail"] == "Unsupported file type: application/x-msdownload"

def test_upload_requires_authentication(client):
    assert upload(client, {}).status_code == 401

def test_blog_uploads_are_filed_under_the_blog(client, admin_headers, blog):
    response = upload(client, admin_headers, route="/api/storage/upload/documents", name="guide.pdf", content=b"%PDF-1.4", mime_type="application/pdf", blog_id=blog["id"])
    assert response.status_code == 201, response.text
    assert response.json()["path"].startswith(f"blog/{blog['id']}/")

    listed = client.get(f"/api/storage/blog/{blog['id']}/files", headers=admin_headers).json()
    assert listed["total"] == 1
    assert listed["has_more"] is False

    missing_blog = upload(client, admin_headers, blog_id="nope")
    assert missing_blog.status_code == 404

def test_folder_cannot_escape_uploads(client, admin_headers):
    response = upload(client, admin_headers, folder="../../etc")
    assert response.status_code == 400

def test_listing_stats_and_copy(client, admin_headers):
    image = upload(client, admin_headers).json()
    upload(client, admin_headers, name="notes.txt", content=b"hello", mime_type="text/plain")

    images = client.get("/api/storage/type/image/files", headers=admin_headers).json()
    assert [item["id"] for item in images["files"]] == [image["id"]]

    page = client.get("/api/storage/files", params={"limit": 1}, headers=admin_headers).json()
    assert page["total"] == 2
    assert page["has_more"] is True

    stats = client.get("/api/storage/stats", headers=admin_headers).json()
    assert stats["by_type"]["image"] == 1
    assert stats["by_type"]["document"] == 1

    copied = client.post(f"/api/storage/files/{image['id']}/copy", json={"destination_path": "library/cover.png"}, headers=admin_headers)
    assert copied.status_code == 201
    assert copied.json()["path"] == "library/cover.png"
    assert client.get("/uploads/library/cover.png").status_code == 200

def test_unknown_upload_is_not_found(client):
    assert client.get("/uploads/2020/01/01/missing.png").status_code == 404

def test_health(client):
    response = client.get("/api")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"

def test_relocation_must_keep_the_extension(client, admin_headers):
    image = upload(client, admin_headers).json()

    moved = client.post(f"/api/storage/files/{image['id']}/move", json={"destination_path": "library/cover.bin"}, headers=admin_headers)
    assert moved.status_code == 400
    assert moved.json()["detail"] == "Destination must keep the .png extension"

    copied = client.post(f"/api/storage/files/{image['id']}/copy", json={"destination_path": "library/cover.jpg"}, headers=admin_headers)
    assert copied.status_code == 400

    assert client.get("/uploads/library/cover.bin").status_code == 404
    assert client.get("/uploads/library/cover.jpg").status_code == 404
    assert client.get(local_url(image["url"])).status_code == 200
    for version in image["processed_versions"]:
        assert client.get(local_url(version["url"])).status_code == 200
    assert client.get(f"/api/storage/files/{image['id']}", headers=admin_headers).json()["path"] == image["path"]

def test_relocation_does_not_overwrite(client, admin_headers):
    first = upload(client, admin_headers).json()
    second = upload(client, admin_headers).json()
    response = client.post(f"/api/storage/files/{first['id']}/move", json={"destination_path": second["path"]}, headers=admin_headers)
    assert response.status_code == 409
    assert client.get(local_url(first["url"])).status_code == 200

def test_move_next_to_the_original(client, admin_headers):
    image = upload(client, admin_headers).json()
    folder, filename = image["path"].rsplit("/", 1)
    destination = f"{folder}/{filename.rsplit('.', 1)[0]}_copy.png"

    moved = client.post(f"/api/storage/files/{image['id']}/move", json={"destination_path": destination}, headers=admin_headers)
    assert moved.status_code == 200, moved.text
    assert moved.json()["path"] == destination
    assert moved.json()["processed_versions"] == []
    assert client.get(f"/uploads/{destination}").status_code == 200
    assert client.get(local_url(image["url"])).status_code == 404
