import logging
from contextlib import asynccontextmanager
from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from contenthub.config.database import engine, Base, SessionLocal
from contenthub.config.settings import settings
from contenthub.common.exceptions import StorageError
from contenthub.features.auth.router import router as auth_router
from contenthub.features.api_keys.router import router as api_keys_router
from contenthub.features.users.router import router as users_router
from contenthub.features.roles.router import router as roles_router
from contenthub.features.languages.router import router as languages_router, admin_router as languages_admin_router
from contenthub.features.blogs.router import router as blogs_router, admin_router as blogs_admin_router
from contenthub.features.articles.router import router as articles_router, admin_router as articles_admin_router
from contenthub.features.categories.router import router as categories_router, admin_router as categories_admin_router
from contenthub.features.tags.router import router as tags_router, admin_router as tags_admin_router
from contenthub.features.pages.router import router as pages_router, admin_router as pages_admin_router
from contenthub.features.carousels.router import router as carousels_router, admin_router as carousels_admin_router
from contenthub.features.product_categories.router import (
    router as product_categories_router,
    admin_router as product_categories_admin_router,
)
from contenthub.features.brands.router import router as brands_router, admin_router as brands_admin_router
from contenthub.features.products.router import router as products_router, admin_router as products_admin_router
from contenthub.features.storage.router import router as storage_router, uploads_router
from contenthub.seed import run_seed

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("contenthub")

# Create Database Tables
Base.metadata.create_all(bind=engine)

@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            run_seed(db)
        except SQLAlchemyError:
            # The API still serves without seed data
            logger.exception("Seeding failed")
        finally:
            db.close()
    yield

app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION, lifespan=lifespan)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

@app.exception_handler(IntegrityError)
async def integrity_exception_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=409, content={"detail": "Resource conflicts with existing data"})

@app.exception_handler(StorageError)
async def storage_exception_handler(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

api_router = APIRouter(prefix=settings.API_PREFIX)
for router in (
    auth_router,
    api_keys_router,
    users_router,
    roles_router,
    languages_router,
    languages_admin_router,
    blogs_router,
    blogs_admin_router,
    articles_router,
    articles_admin_router,
    categories_router,
    categories_admin_router,
    tags_router,
    tags_admin_router,
    pages_router,
    pages_admin_router,
    carousels_router,
    carousels_admin_router,
    product_categories_router,
    product_categories_admin_router,
    brands_router,
    brands_admin_router,
    products_router,
    products_admin_router,
    storage_router,
):
    api_router.include_router(router)

@api_router.get("")
def read_root():
    return {"name": settings.PROJECT_NAME, "version": settings.VERSION, "status": "ok"}

app.include_router(api_router)
app.include_router(uploads_router)
