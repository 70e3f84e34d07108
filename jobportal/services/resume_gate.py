"""
JobPortal - Resume attachment gate.

Pure validation of an uploaded file's type and size. A rejected file leaves
no trace; an accepted one becomes a pending attachment that can be committed
as the client's resume record.
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..config import settings
from ..storage import RecordStore, RESUME_KEY

logger = logging.getLogger("jobportal.resume")

ALLOWED_RESUME_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


class ResumeGateError(Exception):
    """Base class for rejected resume files."""
    status_code = 400


class UnsupportedResumeType(ResumeGateError):
    def __init__(self, message: str = "Please select a valid file (PDF, DOC, or DOCX)"):
        super().__init__(message)


class ResumeTooLarge(ResumeGateError):
    status_code = 413

    def __init__(self, message: str = "File size must be less than 5MB"):
        super().__init__(message)


class MissingResumeFile(ResumeGateError):
    def __init__(self, message: str = "Please select a file first"):
        super().__init__(message)


@dataclass(frozen=True)
class ResumeDescriptor:
    type: Optional[str]
    size: int
    name: str


@dataclass(frozen=True)
class PendingAttachment:
    """A file that passed the gate and has not been stored yet."""
    file_name: str
    file_size: int
    file_type: str

    def to_record(self, uploaded_at: Optional[datetime] = None) -> Dict[str, Any]:
        uploaded_at = uploaded_at or datetime.now(timezone.utc)
        return {
            "file_name": self.file_name,
            "file_size": self.file_size,
            "upload_date": uploaded_at.isoformat(),
            "file_type": self.file_type,
        }


def validate_resume(descriptor: ResumeDescriptor, max_bytes: Optional[int] = None) -> PendingAttachment:
    """
    Check a file against the type and size rules.

    Raises:
        MissingResumeFile: If there is no file name
        UnsupportedResumeType: If the MIME type is not PDF, DOC or DOCX
        ResumeTooLarge: If the file is bigger than the limit (5 MiB by default)
    """
    max_bytes = settings.profile.max_resume_bytes if max_bytes is None else max_bytes

    if not descriptor.name:
        raise MissingResumeFile()
    if descriptor.type not in ALLOWED_RESUME_TYPES:
        raise UnsupportedResumeType()
    if descriptor.size > max_bytes:
        raise ResumeTooLarge()

    return PendingAttachment(
        file_name=descriptor.name,
        file_size=descriptor.size,
        file_type=descriptor.type
    )


async def commit(pending: PendingAttachment, store: RecordStore) -> Dict[str, Any]:
    """Simulated upload: wait, then store the resume record."""
    await asyncio.sleep(settings.mock.upload_delay_seconds)
    record = pending.to_record()
    await asyncio.to_thread(store.put, RESUME_KEY, record)
    logger.info("Stored resume %s (%d bytes) for client %s", pending.file_name, pending.file_size, store.client_id)
    return record


def format_file_size(size: int) -> str:
    """Human readable size: '0 Bytes', '512 Bytes', '1.5 KB', '5 MB'."""
    if size <= 0:
        return "0 Bytes"
    index = 0
    while index < len(_SIZE_UNITS) - 1 and size >= 1024 ** (index + 1):
        index += 1
    value = round(size / (1024 ** index), 2)
    return f"{value:g} {_SIZE_UNITS[index]}"
