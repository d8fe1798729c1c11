"""
ResuMatch - Main FastAPI Application

Scores an uploaded resume against a job description and reports how well it
will read to an applicant tracking system.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from resumatch.api.routes import router
from resumatch.config import get_settings
from resumatch.exceptions import ResuMatchError

# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"OCR fallback: {settings.ocr_fallback} ({settings.ocr_dpi} DPI)")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="""
## ResuMatch API

Matches a resume against a job description and scores it the way an
applicant tracking system would.

### Features

- **Job Match Score**: Semantic similarity, keywords, skills, experience and education
- **ATS Best Practices**: Section-by-section review with a letter grade
- **ATS Readability**: Formatting checks on the uploaded file
- **Recommendations**: Prioritized, actionable suggestions

### Quick Start

1. Upload a resume (PDF, DOCX, DOC or TXT) together with a job description to `/api/analyze`
2. Check service status at `/api/health`
        """,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.exception_handler(ResuMatchError)
    async def resumatch_exception_handler(request: Request, exc: ResuMatchError):
        logger.warning(f"Request rejected: {exc.error_code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "message": exc.message,
                "error": exc.to_dict(),
            }
        )

    # Add global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "An internal error occurred",
                "detail": str(exc) if settings.debug else "Please try again later"
            }
        )

    # Include API routes
    app.include_router(router, prefix="/api")

    # Root endpoint
    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "docs": "/docs",
            "api": "/api"
        }

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "resumatch.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
