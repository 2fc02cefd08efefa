from datetime import datetime
from fastapi import APIRouter, Depends, File as FileField, Form, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from contenthub.common.enums import FileType
from contenthub.common.exceptions import NotFoundException
from contenthub.common.schemas import MessageResponse, ORMModel, RequestModel
from contenthub.config.database import get_db
from contenthub.features.auth.dependencies import get_current_user
from contenthub.features.storage.providers import DEFAULT_QUALITY, UploadedFile, UploadOptions, get_storage_provider
from contenthub.features.storage.service import StorageService
from contenthub.models.user import User

router = APIRouter(prefix="/storage", tags=["Storage"])
uploads_router = APIRouter(tags=["Uploads"])

class StoredFileResponse(ORMModel):
    id: str
    filename: str
    original_name: str
    path: str
    url: str
    size: int
    mime_type: str
    type: str
    format: str
    blog_id: Optional[str] = None
    uploaded_by_id: Optional[str] = None
    processed_versions: List[Dict[str, Any]] = []
    metadata: Dict[str, Any] = Field(default_factory=dict, validation_alias="file_metadata")
    folder: Optional[str] = None
    created_at: Optional[datetime] = None

class FileListResponse(BaseModel):
    files: List[StoredFileResponse]
    total: int
    limit: int
    offset: int
    has_more: bool

class StorageStats(BaseModel):
    total_files: int
    total_size: int
    used_space: str
    by_type: Dict[str, int]

class FileRelocation(RequestModel):
    destination_path: str = Field(min_length=1, max_length=500)

def get_storage_service(db: Session = Depends(get_db)) -> StorageService:
    return StorageService(db)

def _upload(
    service: StorageService,
    upload: UploadFile,
    current_user: User,
    allowed_types=None,
    blog_id: Optional[str] = None,
    folder: Optional[str] = None,
    generate_thumbnail: bool = True,
    compress: bool = True,
    quality: int = DEFAULT_QUALITY,
):
    content = upload.file.read()
    uploaded = UploadedFile(
        original_name=upload.filename or "file",
        mime_type=upload.content_type or "application/octet-stream",
        size=len(content),
        content=content,
    )
    options = UploadOptions(
        blog_id=blog_id,
        folder=folder,
        generate_thumbnail=generate_thumbnail,
        compress=compress,
        quality=quality,
    )
    return service.upload(uploaded, options, allowed_types=allowed_types, uploaded_by_id=current_user.id)

@router.post("/upload", response_model=StoredFileResponse, status_code=201)
def upload_file(
    file: UploadFile = FileField(...),
    blog_id: Optional[str] = Form(None),
    folder: Optional[str] = Form(None),
    generate_thumbnail: bool = Form(True),
    compress: bool = Form(True),
    quality: int = Form(DEFAULT_QUALITY, ge=1, le=100),
    service: StorageService = Depends(get_storage_service),
    current_user: User = Depends(get_current_user),
):
    return _upload(service, file, current_user, None, blog_id, folder, generate_thumbnail, compress, quality)

@router.post("/upload/images", response_model=StoredFileResponse, status_code=201)
def upload_image(
    file: UploadFile = FileField(...),
    blog_id: Optional[str] = Form(None),
    folder: Optional[str] = Form(None),
    generate_thumbnail: bool = Form(True),
    compress: bool = Form(True),
    quality: int = Form(DEFAULT_QUALITY, ge=1, le=100),
    service: StorageService = Depends(get_storage_service),
    current_user: User = Depends(get_current_user),
):
    return _upload(service, file, current_user, [FileType.IMAGE], blog_id, folder, generate_thumbnail, compress, quality)

@router.post("/upload/videos", response_model=StoredFileResponse, status_code=201)
def upload_video(
    file: UploadFile = FileField(...),
    blog_id: Optional[str] = Form(None),
    folder: Optional[str] = Form(None),
    service: StorageService = Depends(get_storage_service),
    current_user: User = Depends(get_current_user),
):
    return _upload(service, file, current_user, [FileType.VIDEO], blog_id, folder)

@router.post("/upload/documents", response_model=StoredFileResponse, status_code=201)
def upload_document(
    file: UploadFile = FileField(...),
    blog_id: Optional[str] = Form(None),
    folder: Optional[str] = Form(None),
    service: StorageService = Depends(get_storage_service),
    current_user: User = Depends(get_current_user),
):
    return _upload(service, file, current_user, [FileType.DOCUMENT], blog_id, folder)

@router.post("/upload/audio", response_model=StoredFileResponse, status_code=201)
def upload_audio(
    file: UploadFile = FileField(...),
    blog_id: Optional[str] = Form(None),
    folder: Optional[str] = Form(None),
    service: StorageService = Depends(get_storage_service),
    current_user: User = Depends(get_current_user),
):
    return _upload(service, file, current_user, [FileType.AUDIO], blog_id, folder)

@router.get("/files", response_model=FileListResponse)
def read_files(
    type: Optional[FileType] = None,
    blog_id: Optional[str] = None,
    folder: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
    service: StorageService = Depends(get_storage_service),
    current_user: User = Depends(get_current_user),
):
    return service.list_files(file_type=type, blog_id=blog_id, folder=folder, limit=limit, offset=offset)

@router.get("/files/{file_id}", response_model=StoredFileResponse)
def read_file(file_id: str, service: StorageService = Depends(get_storage_service), current_user: User = Depends(get_current_user)):
    return service.get(file_id)

@router.get("/blog/{blog_id}/files", response_model=FileListResponse)
def read_blog_files(blog_id: str, limit: int = 50, offset: int = 0, service: StorageService = Depends(get_storage_service), current_user: User = Depends(get_current_user)):
    return service.list_files(blog_id=blog_id, limit=limit, offset=offset)

@router.get("/user/{user_id}/files", response_model=FileListResponse)
def read_user_files(user_id: str, limit: int = 50, offset: int = 0, service: StorageService = Depends(get_storage_service), current_user: User = Depends(get_current_user)):
    return service.list_files(uploaded_by_id=user_id, limit=limit, offset=offset)

@router.get("/type/{file_type}/files", response_model=FileListResponse)
def read_files_by_type(file_type: FileType, limit: int = 50, offset: int = 0, service: StorageService = Depends(get_storage_service), current_user: User = Depends(get_current_user)):
    return service.list_files(file_type=file_type, limit=limit, offset=offset)

@router.get("/stats", response_model=StorageStats)
def read_storage_stats(service: StorageService = Depends(get_storage_service), current_user: User = Depends(get_current_user)):
    return service.stats()

@router.post("/files/{file_id}/copy", response_model=StoredFileResponse, status_code=201)
def copy_file(file_id: str, payload: FileRelocation, service: StorageService = Depends(get_storage_service), current_user: User = Depends(get_current_user)):
    return service.copy(file_id, payload.destination_path)

@router.post("/files/{file_id}/move", response_model=StoredFileResponse)
def move_file(file_id: str, payload: FileRelocation, service: StorageService = Depends(get_storage_service), current_user: User = Depends(get_current_user)):
    return service.move(file_id, payload.destination_path)

@router.delete("/files/{file_id}", response_model=MessageResponse)
def delete_file(file_id: str, service: StorageService = Depends(get_storage_service), current_user: User = Depends(get_current_user)):
    service.delete(file_id)
    return {"detail": "File deleted"}

@uploads_router.get("/uploads/{file_path:path}")
def serve_upload(file_path: str):
    full_path = get_storage_provider().local_path(file_path)
    if full_path is None:
        raise NotFoundException("File not found")
    return FileResponse(full_path)
