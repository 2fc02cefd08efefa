"""Storage backends.

Only the local filesystem is implemented. `get_storage_provider` resolves the
configured backend once; unknown or unimplemented names fall back to local.
"""
import enum
import logging
import os
import shutil
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from PIL import Image, UnidentifiedImageError
from contenthub.common.enums import FileFormat, FileType
from contenthub.common.exceptions import StorageError
from contenthub.config.settings import settings
from contenthub.features.storage.utils import (
    FORMAT_TO_MIME_TYPE,
    format_file_size,
    generate_file_path,
    generate_unique_filename,
    get_file_format_from_extension,
    get_file_type_from_mime_type,
)

logger = logging.getLogger(__name__)

THUMBNAIL_SIZE = (200, 200)
DEFAULT_QUALITY = 85

DERIVATIVE_SUFFIXES = {
    "thumbnail": "_thumb.jpg",
    "compressed": "_compressed.jpg",
}

def derivative_path(full_path: Path, kind: str) -> Path:
    return full_path.with_name(f"{full_path.stem}{DERIVATIVE_SUFFIXES[kind]}")

@dataclass
class UploadedFile:
    original_name: str
    mime_type: str
    size: int
    content: bytes

@dataclass
class UploadOptions:
    blog_id: Optional[str] = None
    folder: Optional[str] = None
    generate_thumbnail: bool = True
    compress: bool = True
    quality: int = DEFAULT_QUALITY

@dataclass
class UploadResult:
    filename: str
    original_name: str
    path: str
    url: str
    size: int
    mime_type: str
    type: FileType
    format: FileFormat
    blog_id: Optional[str] = None
    processed_versions: List[dict] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)

class StorageProvider:
    def upload(self, file: UploadedFile, file_type: FileType, file_format: FileFormat, options: UploadOptions) -> UploadResult:
        raise NotImplementedError

    def delete(self, path: str) -> bool:
        raise NotImplementedError

    def get_url(self, path: str) -> str:
        raise NotImplementedError

    def local_path(self, path: str) -> Optional[Path]:
        raise NotImplementedError

    def exists(self, path: str) -> bool:
        raise NotImplementedError

    def get_file_info(self, path: str) -> Optional[UploadResult]:
        raise NotImplementedError

    def copy(self, source_path: str, destination_path: str) -> UploadResult:
        raise NotImplementedError

    def move(self, source_path: str, destination_path: str) -> UploadResult:
        raise NotImplementedError

    def list_files(self, directory: str = "") -> List[UploadResult]:
        raise NotImplementedError

    def get_stats(self) -> dict:
        raise NotImplementedError

class LocalStorageProvider(StorageProvider):
    def __init__(self, uploads_dir: str, base_url: str):
        self.root = Path(uploads_dir).resolve()
        self.base_url = base_url.rstrip("/")
        self.root.mkdir(parents=True, exist_ok=True)

    def _full_path(self, relative_path: str) -> Path:
        full_path = (self.root / relative_path).resolve()
        if full_path != self.root and self.root not in full_path.parents:
            raise StorageError(f"Path escapes the uploads directory: {relative_path}")
        return full_path

    def _relative(self, full_path: Path) -> str:
        return full_path.relative_to(self.root).as_posix()

    def get_url(self, path: str) -> str:
        return f"{self.base_url}/uploads/{path}"

    def upload(self, file, file_type, file_format, options):
        filename = generate_unique_filename(file.original_name, file_format)
        relative_path = generate_file_path(filename, blog_id=options.blog_id, folder=options.folder)
        full_path = self._full_path(relative_path)

        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_bytes(file.content)
        except OSError as exc:
            raise StorageError(f"Could not write {relative_path}") from exc
        logger.info("Stored %s (%s)", relative_path, format_file_size(file.size))

        result = UploadResult(
            filename=filename,
            original_name=file.original_name,
            path=relative_path,
            url=self.get_url(relative_path),
            size=file.size,
            mime_type=file.mime_type,
            type=file_type,
            format=file_format,
            blog_id=options.blog_id,
        )
        if file_type == FileType.IMAGE:
            result.processed_versions = self._process_image(full_path, options)
            result.metadata = self._image_metadata(full_path)
        elif file_type == FileType.VIDEO:
            self._process_video(full_path)
        return result

    def _process_image(self, full_path: Path, options: UploadOptions) -> List[dict]:
        processed = []
        if options.generate_thumbnail:
            thumbnail_path = derivative_path(full_path, "thumbnail")
            version = self._derive(full_path, thumbnail_path, "thumbnail", THUMBNAIL_SIZE, DEFAULT_QUALITY)
            if version:
                processed.append(version)
        if options.compress:
            compressed_path = derivative_path(full_path, "compressed")
            version = self._derive(full_path, compressed_path, "compressed", None, options.quality)
            if version:
                processed.append(version)
        return processed

    def _derive(self, source: Path, target: Path, kind: str, size, quality: int) -> Optional[dict]:
        try:
            with Image.open(source) as original, original.convert("RGB") as img:
                if size:
                    img.thumbnail(size)
                img.save(target, "JPEG", quality=quality, optimize=True)
                width, height = img.size
        except (OSError, UnidentifiedImageError):
            logger.warning("Could not generate %s for %s", kind, self._relative(source), exc_info=True)
            return None

        relative_path = self._relative(target)
        return {
            "type": kind,
            "path": relative_path,
            "url": self.get_url(relative_path),
            "size": target.stat().st_size,
            "dimensions": {"width": width, "height": height},
        }

    def _image_metadata(self, full_path: Path) -> dict:
        try:
            with Image.open(full_path) as img:
                return {"dimensions": {"width": img.width, "height": img.height}}
        except (OSError, UnidentifiedImageError):
            return {}

    def _process_video(self, full_path: Path):
        # TODO: transcode and extract a poster frame once ffmpeg is available on the hosts
        logger.info("Video processing is not enabled, keeping %s as uploaded", self._relative(full_path))

    def delete(self, path: str) -> bool:
        full_path = self._full_path(path)
        if not full_path.exists():
            return False
        try:
            full_path.unlink()
        except OSError as exc:
            raise StorageError(f"Could not delete {path}") from exc

        for kind in DERIVATIVE_SUFFIXES:
            derivative = derivative_path(full_path, kind)
            try:
                derivative.unlink(missing_ok=True)
            except OSError:
                logger.warning("Could not delete derivative %s", self._relative(derivative), exc_info=True)
        logger.info("Deleted %s", path)
        return True

    def local_path(self, path: str) -> Optional[Path]:
        """Filesystem location of a stored file, or None when missing or outside the root."""
        try:
            full_path = self._full_path(path)
        except StorageError:
            return None
        return full_path if full_path.is_file() else None

    def exists(self, path: str) -> bool:
        return self.local_path(path) is not None

    def get_file_info(self, path: str) -> Optional[UploadResult]:
        full_path = self._full_path(path)
        if not full_path.is_file():
            return None
        file_format = get_file_format_from_extension(full_path.suffix)
        if file_format is None:
            return None
        mime_type = FORMAT_TO_MIME_TYPE[file_format]
        return UploadResult(
            filename=full_path.name,
            original_name=full_path.name,
            path=path,
            url=self.get_url(path),
            size=full_path.stat().st_size,
            mime_type=mime_type,
            type=get_file_type_from_mime_type(mime_type),
            format=file_format,
        )

    def copy(self, source_path: str, destination_path: str) -> UploadResult:
        source = self._full_path(source_path)
        destination = self._full_path(destination_path)
        if not source.is_file():
            raise StorageError(f"Source file not found: {source_path}")
        if destination == source:
            raise StorageError(f"Source and destination are the same: {source_path}")
        if get_file_format_from_extension(destination.suffix) is None:
            raise StorageError(f"Unsupported destination extension: {destination_path}")
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, destination)
        except OSError as exc:
            raise StorageError(f"Could not copy {source_path} to {destination_path}") from exc
        return self.get_file_info(destination_path)

    def move(self, source_path: str, destination_path: str) -> UploadResult:
        result = self.copy(source_path, destination_path)
        self.delete(source_path)
        return result

    def list_files(self, directory: str = "") -> List[UploadResult]:
        base = self._full_path(directory) if directory else self.root
        if not base.is_dir():
            return []
        files = []
        for full_path in sorted(base.rglob("*")):
            if full_path.is_file():
                info = self.get_file_info(self._relative(full_path))
                if info:
                    files.append(info)
        return files

    def get_stats(self) -> dict:
        total_files = 0
        total_size = 0
        for dirpath, _, filenames in os.walk(self.root):
            for name in filenames:
                total_files += 1
                total_size += os.path.getsize(os.path.join(dirpath, name))
        return {
            "total_files": total_files,
            "total_size": total_size,
            "used_space": format_file_size(total_size),
        }

class StorageProviderName(str, enum.Enum):
    LOCAL = "local"
    S3 = "s3"
    MINIO = "minio"

def _local_provider() -> StorageProvider:
    return LocalStorageProvider(settings.UPLOADS_DIR, settings.APP_URL)

PROVIDER_FACTORIES = {
    StorageProviderName.LOCAL: _local_provider,
}

@lru_cache
def get_storage_provider(name: Optional[str] = None) -> StorageProvider:
    requested = (name or settings.STORAGE_PROVIDER or "local").lower()
    try:
        provider_name = StorageProviderName(requested)
    except ValueError:
        logger.warning("Unknown storage provider '%s', using local storage", requested)
        provider_name = StorageProviderName.LOCAL

    factory = PROVIDER_FACTORIES.get(provider_name)
    if factory is None:
        logger.warning("Storage provider '%s' is not implemented, using local storage", provider_name.value)
        factory = _local_provider
    provider = factory()
    logger.info("Using %s", type(provider).__name__)
    return provider
