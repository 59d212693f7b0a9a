"""
University Placement Portal - Main Application

FastAPI backend with:
- PostgreSQL (SQLAlchemy ORM) for all portal data
- JWT authentication in an HTTP-only cookie
- Student and admin roles
- PDF uploads (resumes, company presentations) on local disk

Run: uvicorn portal.main:app --reload
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from portal import __version__
from portal.api.routes import api_router
from portal.core.config import get_settings
from portal.core.logging import configure_logging
from portal.db.database import init_db, test_database_connection
from portal.utils.file_upload import get_upload_dir

settings = get_settings()
configure_logging(settings.log_level)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("portal_starting", version=__version__)
    init_db()
    get_upload_dir()
    yield
    logger.info("portal_stopping")


# Create FastAPI app
app = FastAPI(
    title="University Placement Portal",
    description="""
    Placement portal for students and the placement cell.

    ## Features
    - **Authentication**: cookie-based JWT for students and admins
    - **Jobs**: postings with CGPA/branch/course eligibility, one application per student
    - **Forums**: interview experiences, moderated by admins
    - **PPTs**: company presentations (PDF)
    - **Calendar**: placement events
    - **Placements**: statistics with company/branch/year analysis
    - **Notifications**: announcements from the placement cell
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/uploads/{filename}", tags=["Uploads"])
async def serve_upload(filename: str):
    """Serve an uploaded PDF inline (resumes, presentations)."""
    upload_dir = get_upload_dir().resolve()
    path = (upload_dir / filename).resolve()
    if path.parent != upload_dir or not path.is_file():
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(
        path,
        media_type="application/pdf",
        headers={"Content-Disposition": "inline"},
    )


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "version": __version__,
        "database": "connected" if test_database_connection() else "disconnected",
    }
