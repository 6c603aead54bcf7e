"""Main FastAPI application."""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from app.core.config import settings
from app.core.exceptions import (
    AppError,
    AuthError,
    CredentialError,
    NotFoundError,
    ProviderError,
    ProviderTimeoutError,
    ValidationError,
)
from app.api.router import api_router
from app.db.base import engine, Base, SessionLocal
from app.services import dns_providers, system_settings

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

VERSION = "1.0.0"

# Most specific first.
ERROR_STATUS = (
    (ProviderTimeoutError, 504),
    (ProviderError, 502),
    (NotFoundError, 404),
    (CredentialError, 400),
    (ValidationError, 400),
)


def status_for_error(exc: AppError) -> int:
    if isinstance(exc, AuthError):
        return exc.status_code
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application", app_name=settings.APP_NAME, env=settings.APP_ENV)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    db = SessionLocal()
    try:
        system_settings.initialize_settings(db)
        dns_providers.initialize_providers(db)
    finally:
        db.close()

    yield

    logger.info("Shutting down application")


app = FastAPI(
    title=settings.APP_NAME,
    description="Multi-tenant subdomain manager backed by Cloudflare and Aliyun DNS",
    version=VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    return {"app": settings.APP_NAME, "version": VERSION, "docs": "/api/docs"}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "env": settings.APP_ENV}


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    status_code = status_for_error(exc)
    log = logger.warning if status_code < 500 else logger.error
    log("Request failed", path=request.url.path, code=exc.code, error=exc.message, status_code=status_code)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
