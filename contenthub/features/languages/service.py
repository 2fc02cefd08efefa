import logging
from sqlalchemy.orm import Session
from contenthub.common.exceptions import ConflictException, NotFoundException
from contenthub.models.language import Language

logger = logging.getLogger(__name__)

def _unset_other_defaults(db: Session, keep_id: str = None):
    query = db.query(Language).filter(Language.is_default.is_(True))
    if keep_id:
        query = query.filter(Language.id != keep_id)
    for language in query.all():
        language.is_default = False

def list_languages(db: Session):
    return db.query(Language).filter(Language.live()).order_by(Language.code).all()

def list_active_languages(db: Session):
    return db.query(Language).filter(
        Language.live(),
        Language.is_active.is_(True),
    ).order_by(Language.code).all()

def get_default_language(db: Session) -> Language:
    language = db.query(Language).filter(Language.live(), Language.is_default.is_(True)).first()
    if not language:
        raise NotFoundException("Default language not found")
    return language

def get_language(db: Session, language_id: str) -> Language:
    language = db.query(Language).filter(Language.id == language_id, Language.live()).first()
    if not language:
        raise NotFoundException("Language not found")
    return language

def get_language_by_code(db: Session, code: str):
    return db.query(Language).filter(Language.code == code.lower(), Language.live()).first()

def create_language(db: Session, data: dict) -> Language:
    data["code"] = data["code"].lower()
    if db.query(Language).filter(Language.code == data["code"]).first():
        raise ConflictException(f"Language '{data['code']}' already exists")

    language = Language(**data)
    db.add(language)
    if language.is_default:
        db.flush()
        _unset_other_defaults(db, keep_id=language.id)
    db.commit()
    db.refresh(language)
    logger.info("Created language %s", language.code)
    return language

def update_language(db: Session, language: Language, changes: dict) -> Language:
    if "code" in changes:
        changes["code"] = changes["code"].lower()
        existing = db.query(Language).filter(Language.code == changes["code"], Language.id != language.id).first()
        if existing:
            raise ConflictException(f"Language '{changes['code']}' already exists")

    for field, value in changes.items():
        setattr(language, field, value)
    if changes.get("is_default"):
        _unset_other_defaults(db, keep_id=language.id)
    db.commit()
    db.refresh(language)
    return language

def delete_language(db: Session, language: Language):
    language.soft_delete()
    language.is_default = False
    db.commit()
    logger.info("Deleted language %s", language.code)
