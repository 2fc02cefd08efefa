import enum

class RoleType(str, enum.Enum):
    ADMIN = "admin"
    AUTHOR = "author"
    EDITOR = "editor"
    TRANSLATOR = "translator"

class ArticleStatus(str, enum.Enum):
    PUBLISHED = "published"
    DRAFT = "draft"
    UNPUBLISHED = "unpublished"
    DELETED = "deleted"

class PageStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    SCHEDULED = "scheduled"
    ARCHIVED = "archived"

class MenuType(str, enum.Enum):
    HOME = "home"
    FOOTER = "footer"

class MediaType(str, enum.Enum):
    IMAGE = "image"
    VIDEO = "video"

class FileType(str, enum.Enum):
    AUDIO = "audio"
    VIDEO = "video"
    IMAGE = "image"
    DOCUMENT = "document"

class FileFormat(str, enum.Enum):
    # Audio
    MP3 = "mp3"
    OGG = "ogg"
    # Video
    MP4 = "mp4"
    # Images
    JPG = "jpg"
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"
    # Documents
    PDF = "pdf"
    DOC = "doc"
    DOCX = "docx"
    XLS = "xls"
    XLSX = "xlsx"
    TXT = "txt"
