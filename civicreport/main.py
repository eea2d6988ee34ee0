"""
Civic Report API - FastAPI application entry point.

Citizens submit location-tagged reports (optionally with a photo);
administrators move them through pending, in-progress and resolved.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from civicreport.api import auth, report
from civicreport.config import settings
from civicreport.database import init_db
from civicreport.services.storage import get_upload_store

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


def configure_logging():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_db()
    get_upload_store().ensure_root()
    logger.info("Starting %s v%s", settings.APP_NAME, settings.APP_VERSION)
    yield
    logger.info("Shutting down %s", settings.APP_NAME)


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)


# Every error body is {"error": "..."}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or incomplete input is a client error (400), not 422."""
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request.", "fields": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routers
app.include_router(auth.router)            # /api/register, /api/login
app.include_router(report.router)          # /api/reports/*
app.include_router(report.uploads_router)  # /uploads/*


@app.get("/", include_in_schema=False)
def root():
    """Serve the single-page UI."""
    return FileResponse(STATIC_DIR / "ui.html")


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "message": f"{settings.APP_NAME} is running",
        "version": settings.APP_VERSION,
    }


def run():
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
