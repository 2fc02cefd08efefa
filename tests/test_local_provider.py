import io
import pytest
from PIL import Image
from contenthub.common.enums import FileFormat, FileType
from contenthub.common.exceptions import StorageError
from contenthub.features.storage.providers import LocalStorageProvider, UploadedFile, UploadOptions

def png_bytes(size=(640, 480)):
    buffer = io.BytesIO()
    Image.new("RGBA", size, (200, 30, 30, 255)).save(buffer, "PNG")
    return buffer.getvalue()

@pytest.fixture
def provider(tmp_path):
    return LocalStorageProvider(str(tmp_path / "uploads"), "http://cdn.contenthub.io/")

def upload_png(provider, **options):
    content = png_bytes()
    uploaded = UploadedFile(original_name="cover.png", mime_type="image/png", size=len(content), content=content)
    return provider.upload(uploaded, FileType.IMAGE, FileFormat.PNG, UploadOptions(**options))

def test_image_upload_writes_derivatives(provider):
    result = upload_png(provider, folder="covers", quality=70)

    assert result.path.startswith("covers/")
    assert result.url == f"http://cdn.contenthub.io/uploads/{result.path}"
    assert result.metadata == {"dimensions": {"width": 640, "height": 480}}
    assert provider.exists(result.path)

    kinds = {version["type"]: version for version in result.processed_versions}
    assert set(kinds) == {"thumbnail", "compressed"}
    thumb = kinds["thumbnail"]
    assert thumb["path"].endswith("_thumb.jpg")
    assert thumb["dimensions"]["width"] <= 200 and thumb["dimensions"]["height"] <= 200
    assert provider.exists(thumb["path"])
    assert kinds["compressed"]["dimensions"] == {"width": 640, "height": 480}

def test_processing_can_be_disabled(provider):
    result = upload_png(provider, generate_thumbnail=False, compress=False)
    assert result.processed_versions == []

def test_unreadable_image_is_stored_without_derivatives(provider):
    uploaded = UploadedFile(original_name="broken.png", mime_type="image/png", size=9, content=b"not a png")
    result = provider.upload(uploaded, FileType.IMAGE, FileFormat.PNG, UploadOptions())
    assert provider.exists(result.path)
    assert result.processed_versions == []
    assert result.metadata == {}

def test_delete_removes_derivatives(provider):
    result = upload_png(provider)
    derivative_paths = [version["path"] for version in result.processed_versions]

    assert provider.delete(result.path) is True
    assert not provider.exists(result.path)
    for path in derivative_paths:
        assert not provider.exists(path)
    assert provider.delete(result.path) is False

def test_paths_outside_root_are_refused(provider):
    assert provider.local_path("../../etc/passwd") is None
    assert provider.exists("../secrets.txt") is False
    with pytest.raises(StorageError):
        provider.delete("../outside.txt")

def test_copy_move_and_stats(provider):
    content = b"hello contenthub"
    uploaded = UploadedFile(original_name="notes.txt", mime_type="text/plain", size=len(content), content=content)
    result = provider.upload(uploaded, FileType.DOCUMENT, FileFormat.TXT, UploadOptions())
    assert result.processed_versions == []

    copied = provider.copy(result.path, "archive/notes.txt")
    assert copied.type == FileType.DOCUMENT
    assert copied.size == len(content)
    assert provider.exists(result.path)

    moved = provider.move("archive/notes.txt", "archive/moved.txt")
    assert moved.path == "archive/moved.txt"
    assert not provider.exists("archive/notes.txt")

    stats = provider.get_stats()
    assert stats["total_files"] == 2
    assert stats["total_size"] == 2 * len(content)
    assert [info.path for info in provider.list_files("archive")] == ["archive/moved.txt"]

def test_delete_keeps_files_that_only_share_a_prefix(provider):
    result = upload_png(provider, folder="covers")
    base = result.path.rsplit(".", 1)[0]
    sibling = f"{base}_copy.png"
    provider.copy(result.path, sibling)

    provider.delete(result.path)
    assert provider.exists(sibling)

def test_move_to_a_prefixed_sibling_keeps_the_moved_file(provider):
    result = upload_png(provider, folder="covers")
    base = result.path.rsplit(".", 1)[0]
    destination = f"{base}_copy.png"

    moved = provider.move(result.path, destination)
    assert moved.path == destination
    assert provider.exists(destination)
    assert not provider.exists(result.path)
    for version in result.processed_versions:
        assert not provider.exists(version["path"])

def test_copy_refuses_unknown_extensions_before_writing(provider):
    result = upload_png(provider, folder="covers")
    with pytest.raises(StorageError):
        provider.copy(result.path, "library/cover.bin")
    assert not provider.exists("library/cover.bin")
    assert provider.exists(result.path)

def test_copy_onto_itself_is_refused(provider):
    result = upload_png(provider)
    with pytest.raises(StorageError):
        provider.copy(result.path, result.path)
