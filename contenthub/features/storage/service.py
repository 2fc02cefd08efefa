import logging
from pathlib import PurePosixPath
from typing import Iterable, Optional
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from contenthub.common.enums import FileType
from contenthub.common.exceptions import BadRequestException, ConflictException, NotFoundException
from contenthub.features.storage.providers import StorageProvider, UploadedFile, UploadOptions, get_storage_provider
from contenthub.features.storage.utils import get_file_format_from_extension, validate_file
from contenthub.models.blog import Blog
from contenthub.models.file import File

logger = logging.getLogger(__name__)

def _check_relative_path(path: Optional[str], label: str):
    if path and (PurePosixPath(path).is_absolute() or ".." in PurePosixPath(path).parts):
        raise BadRequestException(f"Invalid {label}")

class StorageService:
    def __init__(self, db: Session, provider: StorageProvider = None):
        self.db = db
        self.provider = provider or get_storage_provider()

    def upload(
        self,
        file: UploadedFile,
        options: UploadOptions,
        allowed_types: Optional[Iterable[FileType]] = None,
        uploaded_by_id: Optional[str] = None,
    ) -> File:
        validation = validate_file(file.mime_type, file.size, allowed_types)
        if not validation.is_valid:
            raise BadRequestException(validation.error)
        _check_relative_path(options.folder, "folder")
        if options.blog_id and not self.db.query(Blog).filter(Blog.id == options.blog_id, Blog.live()).first():
            raise NotFoundException("Blog not found")

        result = self.provider.upload(file, validation.file_type, validation.file_format, options)
        stored = File(
            filename=result.filename,
            original_name=result.original_name,
            path=result.path,
            url=result.url,
            size=result.size,
            mime_type=result.mime_type,
            type=result.type.value,
            format=result.format.value,
            blog_id=result.blog_id,
            uploaded_by_id=uploaded_by_id,
            processed_versions=result.processed_versions,
            file_metadata=result.metadata,
            folder=options.folder,
        )
        self.db.add(stored)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            self.provider.delete(result.path)
            raise
        self.db.refresh(stored)
        logger.info("Uploaded %s as %s", file.original_name, stored.path)
        return stored

    def get(self, file_id: str) -> File:
        stored = self.db.query(File).filter(File.id == file_id, File.live()).first()
        if not stored:
            raise NotFoundException("File not found")
        return stored

    def delete(self, file_id: str):
        stored = self.get(file_id)
        if not self.provider.delete(stored.path):
            logger.warning("File %s was already missing from storage", stored.path)
        stored.soft_delete()
        self.db.commit()

    def list_files(
        self,
        file_type: Optional[FileType] = None,
        blog_id: Optional[str] = None,
        uploaded_by_id: Optional[str] = None,
        folder: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> dict:
        query = self.db.query(File).filter(File.live())
        if file_type:
            query = query.filter(File.type == FileType(file_type).value)
        if blog_id:
            query = query.filter(File.blog_id == blog_id)
        if uploaded_by_id:
            query = query.filter(File.uploaded_by_id == uploaded_by_id)
        if folder:
            query = query.filter(File.folder == folder)

        total = query.count()
        files = query.order_by(File.created_at.desc()).offset(offset).limit(limit).all()
        return {
            "files": files,
            "total": total,
            "limit": limit,
            "offset": offset,
            "has_more": offset + len(files) < total,
        }

    def stats(self) -> dict:
        counts = dict(
            self.db.query(File.type, func.count(File.id)).filter(File.live()).group_by(File.type).all()
        )
        return {
            **self.provider.get_stats(),
            "by_type": {file_type.value: counts.get(file_type.value, 0) for file_type in FileType},
        }

    def _check_destination(self, source: File, destination_path: str):
        """Rejects a relocation before any bytes are written or removed."""
        _check_relative_path(destination_path, "destination path")
        destination_format = get_file_format_from_extension(PurePosixPath(destination_path).suffix)
        if destination_format is None or destination_format.value != source.format:
            raise BadRequestException(f"Destination must keep the .{source.format} extension")
        if self.provider.exists(destination_path):
            raise ConflictException(f"A file already exists at {destination_path}")

    def copy(self, file_id: str, destination_path: str) -> File:
        source = self.get(file_id)
        self._check_destination(source, destination_path)
        result = self.provider.copy(source.path, destination_path)
        stored = File(
            filename=result.filename,
            original_name=source.original_name,
            path=result.path,
            url=result.url,
            size=result.size,
            mime_type=source.mime_type,
            type=source.type,
            format=source.format,
            blog_id=source.blog_id,
            uploaded_by_id=source.uploaded_by_id,
            processed_versions=[],
            file_metadata=dict(source.file_metadata or {}),
            folder=str(PurePosixPath(destination_path).parent),
        )
        self.db.add(stored)
        self.db.commit()
        self.db.refresh(stored)
        return stored

    def move(self, file_id: str, destination_path: str) -> File:
        stored = self.get(file_id)
        self._check_destination(stored, destination_path)
        result = self.provider.move(stored.path, destination_path)
        stored.path = result.path
        stored.url = result.url
        stored.filename = result.filename
        stored.folder = str(PurePosixPath(destination_path).parent)
        # Derivatives are removed with the old path
        stored.processed_versions = []
        self.db.commit()
        self.db.refresh(stored)
        return stored
