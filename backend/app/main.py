import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.cors import CORSMiddleware

from backend.app.api.v1.router import api_router
from backend.app.core.config import settings
from backend.app.core.errors import AppError
from backend.app.core.logging import configure_logging, get_access_logger
from backend.app.db.base import engine
from backend.app.db.init_db import init_models

configure_logging(settings)
logger = logging.getLogger(__name__)
access_logger = get_access_logger()


# --- LIFESPAN: create tables on startup ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models(engine)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    client = request.client.host if request.client else "-"
    try:
        response = await call_next(request)
    except Exception:
        # Unhandled errors still get an access line before the 500 handler runs
        elapsed_ms = (time.perf_counter() - started) * 1000
        access_logger.info(f'{client} "{request.method} {request.url.path}" 500 {elapsed_ms:.1f}ms')
        raise
    elapsed_ms = (time.perf_counter() - started) * 1000
    access_logger.info(
        f'{client} "{request.method} {request.url.path}" {response.status_code} {elapsed_ms:.1f}ms'
    )
    return response


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        # loc starts with the source (body, path, query), then the field path
        field = ".".join(part for part in first.get("loc", ())[1:] if isinstance(part, str))
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=422, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


app.include_router(api_router, prefix=settings.API_PREFIX)

# Locally stored uploads are public at APP_URL/files/<key>. Mounted after
# the API routes so GET /files and /files/{id} still reach the router.
if settings.STORAGE_TYPE == "local":
    Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
    app.mount("/files", StaticFiles(directory=settings.UPLOAD_DIR), name="files")


@app.get("/")
def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME} API"}
