"""
File Upload Utility - validate and store PDF uploads on local disk.

Used for student resumes and company presentations (PPTs).

Rules:
- PDF only: application/pdf content type AND a file PyPDF2 can open
- Max file size: settings.max_upload_mb (10MB by default)
- Empty files rejected

Nothing is written to disk (or the database) until every check passes.
"""

import io
import random
import time
from pathlib import Path

import structlog
from fastapi import HTTPException, UploadFile
from PyPDF2 import PdfReader

from portal.core.config import get_settings

logger = structlog.get_logger(__name__)

ALLOWED_CONTENT_TYPE = "application/pdf"
UPLOAD_URL_PREFIX = "/uploads"
CHUNK_SIZE = 1024 * 1024


def get_upload_dir() -> Path:
    """Upload directory, created on first use."""
    path = Path(get_settings().upload_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


async def read_pdf_upload(file: UploadFile) -> bytes:
    """
    Read and validate an uploaded PDF.

    Args:
        file: FastAPI UploadFile

    Returns:
        Raw file bytes

    Raises:
        HTTPException 400 (wrong type / empty / unreadable) or 413 (too large)
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    if file.content_type != ALLOWED_CONTENT_TYPE:
        raise HTTPException(status_code=400, detail="Only PDF files are allowed")

    settings = get_settings()
    max_bytes = settings.max_upload_bytes

    # Read in chunks so an oversized upload is rejected early
    size = 0
    chunks = []
    while True:
        chunk = await file.read(CHUNK_SIZE)
        if not chunk:
            break
        size += len(chunk)
        if size > max_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"File too large. Maximum size: {settings.max_upload_mb}MB"
            )
        chunks.append(chunk)

    content = b"".join(chunks)
    if not content:
        raise HTTPException(status_code=400, detail="Empty file")

    page_count = count_pdf_pages(content)
    logger.debug("pdf_upload_validated", filename=file.filename, size=size, pages=page_count)
    return content


def count_pdf_pages(content: bytes) -> int:
    """Open the PDF with PyPDF2; 400 if it is not a readable PDF."""
    try:
        reader = PdfReader(io.BytesIO(content))
        return len(reader.pages)
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Error reading PDF: {str(e)}")


def unique_filename(field_name: str) -> str:
    """`<field>-<millis>-<random>.pdf`, e.g. resume-1718000000000-123456789.pdf"""
    suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{field_name}-{suffix}.pdf"


def save_upload(content: bytes, field_name: str) -> str:
    """
    Write validated bytes to the upload directory.

    Returns:
        Public URL of the stored file (/uploads/<name>)
    """
    filename = unique_filename(field_name)
    (get_upload_dir() / filename).write_bytes(content)
    logger.info("file_stored", filename=filename, size=len(content))
    return f"{UPLOAD_URL_PREFIX}/{filename}"


def delete_upload(file_url: str) -> bool:
    """Remove a stored file by its public URL. Returns False if it was already gone."""
    name = Path(file_url).name
    if not name:
        return False
    path = get_upload_dir() / name
    if not path.exists():
        return False
    path.unlink()
    logger.info("file_deleted", filename=name)
    return True
