import re
import secrets
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePosixPath
from typing import Iterable, Optional
from contenthub.common.enums import FileFormat, FileType

MB = 1024 * 1024

FILE_SIZE_LIMITS = {
    FileType.AUDIO: 50 * MB,
    FileType.VIDEO: 100 * MB,
    FileType.IMAGE: 10 * MB,
    FileType.DOCUMENT: 20 * MB,
}

@dataclass(frozen=True)
class FileConfig:
    type: FileType
    formats: tuple
    max_size: int
    requires_processing: bool

FILE_CONFIGS = {
    FileType.AUDIO: FileConfig(FileType.AUDIO, (FileFormat.MP3, FileFormat.OGG), FILE_SIZE_LIMITS[FileType.AUDIO], False),
    FileType.VIDEO: FileConfig(FileType.VIDEO, (FileFormat.MP4,), FILE_SIZE_LIMITS[FileType.VIDEO], True),
    FileType.IMAGE: FileConfig(
        FileType.IMAGE,
        (FileFormat.JPG, FileFormat.JPEG, FileFormat.PNG, FileFormat.WEBP),
        FILE_SIZE_LIMITS[FileType.IMAGE],
        True,
    ),
    FileType.DOCUMENT: FileConfig(
        FileType.DOCUMENT,
        (FileFormat.PDF, FileFormat.DOC, FileFormat.DOCX, FileFormat.XLS, FileFormat.XLSX, FileFormat.TXT),
        FILE_SIZE_LIMITS[FileType.DOCUMENT],
        False,
    ),
}

MIME_TYPE_MAP = {
    # Audio
    "audio/mpeg": FileFormat.MP3,
    "audio/mp3": FileFormat.MP3,
    "audio/ogg": FileFormat.OGG,
    "application/ogg": FileFormat.OGG,
    # Video
    "video/mp4": FileFormat.MP4,
    "video/mpeg": FileFormat.MP4,
    # Images
    "image/jpeg": FileFormat.JPEG,
    "image/jpg": FileFormat.JPG,
    "image/png": FileFormat.PNG,
    "image/webp": FileFormat.WEBP,
    # Documents
    "application/pdf": FileFormat.PDF,
    "application/msword": FileFormat.DOC,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": FileFormat.DOCX,
    "application/vnd.ms-excel": FileFormat.XLS,
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": FileFormat.XLSX,
    "text/plain": FileFormat.TXT,
}

FORMAT_TO_MIME_TYPE = {
    FileFormat.MP3: "audio/mpeg",
    FileFormat.OGG: "audio/ogg",
    FileFormat.MP4: "video/mp4",
    FileFormat.JPG: "image/jpeg",
    FileFormat.JPEG: "image/jpeg",
    FileFormat.PNG: "image/png",
    FileFormat.WEBP: "image/webp",
    FileFormat.PDF: "application/pdf",
    FileFormat.DOC: "application/msword",
    FileFormat.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    FileFormat.XLS: "application/vnd.ms-excel",
    FileFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    FileFormat.TXT: "text/plain",
}

@dataclass
class FileValidation:
    is_valid: bool
    file_type: Optional[FileType] = None
    file_format: Optional[FileFormat] = None
    error: Optional[str] = None

def _base_mime_type(mime_type: str) -> str:
    # "text/plain; charset=utf-8" -> "text/plain"
    return (mime_type or "").split(";", 1)[0].strip().lower()

def get_file_format_from_mime_type(mime_type: str) -> Optional[FileFormat]:
    return MIME_TYPE_MAP.get(_base_mime_type(mime_type))

def get_file_type_from_mime_type(mime_type: str) -> Optional[FileType]:
    file_format = get_file_format_from_mime_type(mime_type)
    if file_format is None:
        return None
    for file_type, config in FILE_CONFIGS.items():
        if file_format in config.formats:
            return file_type
    return None

def get_file_format_from_extension(extension: str) -> Optional[FileFormat]:
    ext = extension.lower().lstrip(".")
    try:
        return FileFormat(ext)
    except ValueError:
        return None

def validate_file(mime_type: str, size: int, allowed_types: Optional[Iterable[FileType]] = None) -> FileValidation:
    """Classifies a file and checks it against the per-type size ceiling.

    Normal validation failures come back as `is_valid=False` with a readable
    `error`; nothing is raised.
    """
    file_type = get_file_type_from_mime_type(mime_type)
    file_format = get_file_format_from_mime_type(mime_type)
    if file_type is None or file_format is None:
        return FileValidation(is_valid=False, error=f"Unsupported file type: {mime_type}")

    if allowed_types is not None and file_type not in set(allowed_types):
        return FileValidation(
            is_valid=False,
            file_type=file_type,
            file_format=file_format,
            error=f"File type not allowed: {file_type.value}",
        )

    config = FILE_CONFIGS[file_type]
    if size > config.max_size:
        return FileValidation(
            is_valid=False,
            file_type=file_type,
            file_format=file_format,
            error=f"File too large. Maximum allowed: {config.max_size // MB}MB",
        )

    return FileValidation(is_valid=True, file_type=file_type, file_format=file_format)

def generate_file_path(filename: str, blog_id: Optional[str] = None, folder: Optional[str] = None) -> str:
    now = datetime.now()
    date_folder = f"{now.year}/{now.month:02d}/{now.day:02d}"
    if folder:
        return f"{folder.strip('/')}/{date_folder}/{filename}"
    if blog_id:
        return f"blog/{blog_id}/{date_folder}/{filename}"
    return f"uploads/{date_folder}/{filename}"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9]")

def generate_unique_filename(original_name: str, file_format: FileFormat) -> str:
    stem = PurePosixPath(original_name or "").stem
    safe_name = _UNSAFE_CHARS.sub("", stem)[:50] or "file"
    timestamp = int(time.time() * 1000)
    return f"{safe_name}_{timestamp}_{secrets.token_hex(6)}.{FileFormat(file_format).value}"

def format_file_size(size: int) -> str:
    if size == 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB"]
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(units) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {units[unit]}"
