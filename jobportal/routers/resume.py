"""
JobPortal - Resume upload and parse API.

Endpoints for attaching a resume to the profile and for the simulated
resume parser that pre-fills the profile form.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, File
from typing import Optional
import logging

from ..auth.dependencies import get_record_store, require_session
from ..auth.session import SessionContext
from ..config import settings
from ..rate_limit import limiter, RATE_LIMIT_GENERAL
from ..schemas import ResumeRecordResponse, ResumeParseResponse, ParsedResume
from ..services import resume_gate
from ..services.resume_gate import PendingAttachment, ResumeDescriptor, ResumeGateError, format_file_size
from ..services.resume_parser import autofill_fields, parse_resume
from ..storage import RecordStore, RESUME_KEY

router = APIRouter()
logger = logging.getLogger("jobportal.resume")


async def _gate_upload(file: Optional[UploadFile]) -> PendingAttachment:
    """Read at most one byte past the limit and run the gate."""
    if file is None:
        descriptor = ResumeDescriptor(type=None, size=0, name="")
    else:
        content = await file.read(settings.profile.max_resume_bytes + 1)
        descriptor = ResumeDescriptor(type=file.content_type, size=len(content), name=file.filename or "")

    try:
        return resume_gate.validate_resume(descriptor)
    except ResumeGateError as e:
        logger.info("Rejected resume %r: %s", descriptor.name, e)
        raise HTTPException(status_code=e.status_code, detail=str(e))


def _record_to_response(record: dict) -> ResumeRecordResponse:
    return ResumeRecordResponse(
        file_name=record["file_name"],
        file_size=record["file_size"],
        upload_date=record["upload_date"],
        file_type=record["file_type"],
        size_label=format_file_size(record["file_size"])
    )


@router.post("/", response_model=ResumeRecordResponse)
@limiter.limit(RATE_LIMIT_GENERAL)
async def upload_resume(
    request: Request,
    file: Optional[UploadFile] = File(None),
    ctx: SessionContext = Depends(require_session),
    store: RecordStore = Depends(get_record_store)
):
    """
    Attach a resume.

    Accepts PDF, DOC and DOCX files up to 5 MB. Rejected files (400 for the
    type, 413 for the size) leave the stored resume untouched.
    """
    pending = await _gate_upload(file)
    record = await resume_gate.commit(pending, store)
    return _record_to_response(record)


@router.get("/", response_model=ResumeRecordResponse)
def get_resume(
    ctx: SessionContext = Depends(require_session),
    store: RecordStore = Depends(get_record_store)
):
    """Get the stored resume metadata."""
    record = store.get(RESUME_KEY)
    if not record or not record.get("file_name"):
        raise HTTPException(status_code=404, detail="No resume uploaded")
    return _record_to_response(record)


@router.delete("/")
def delete_resume(
    ctx: SessionContext = Depends(require_session),
    store: RecordStore = Depends(get_record_store)
):
    """Remove the stored resume metadata."""
    store.delete(RESUME_KEY)
    return {"message": "Resume removed"}


@router.post("/parse", response_model=ResumeParseResponse)
@limiter.limit(RATE_LIMIT_GENERAL)
async def parse_uploaded_resume(
    request: Request,
    file: Optional[UploadFile] = File(None),
    ctx: SessionContext = Depends(require_session)
):
    """
    Parse a resume into profile form values.

    The result is returned for review and is not saved.
    """
    pending = await _gate_upload(file)
    parsed = await parse_resume(pending)
    return ResumeParseResponse(
        parsed=ParsedResume(**parsed),
        autofill=autofill_fields(parsed)
    )
