import io
import logging
import zipfile
from pathlib import Path

from fastapi import HTTPException, UploadFile, status

from app.core.config import get_settings

logger = logging.getLogger(__name__)

ZIP_CONTENT_TYPES = {"application/zip", "application/x-zip-compressed"}
CHUNK_SIZE = 1024 * 1024


class ArchiveError(ValueError):
    pass


class EmptyUploadError(ValueError):
    def __init__(self) -> None:
        super().__init__("The uploaded file is empty")


def is_zip_upload(filename: str | None, content_type: str | None) -> bool:
    return (content_type or "") in ZIP_CONTENT_TYPES or Path(filename or "").suffix.lower() == ".zip"


def decode_text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace").removeprefix("\ufeff")


def extract_largest_text_member(data: bytes) -> str:
    """Return the longest ``.txt`` member of a zip archive, which is the chat in a WhatsApp export."""
    max_bytes = get_settings().max_upload_size_mb * 1024 * 1024
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            members = [
                info for info in archive.infolist() if not info.is_dir() and info.filename.lower().endswith(".txt")
            ]
            if not members:
                raise ArchiveError("No .txt file found in the zip archive")
            oversized = [info.filename for info in members if info.file_size > max_bytes]
            if oversized:
                raise ArchiveError(f"Chat file {oversized[0]} exceeds max size")
            contents = {info.filename: decode_text(archive.read(info)) for info in members}
    except (zipfile.BadZipFile, RuntimeError, NotImplementedError) as exc:
        raise ArchiveError("Failed to extract chat data from zip file") from exc

    filename, content = max(contents.items(), key=lambda item: len(item[1]))
    logger.info("zip_chat_member_selected", extra={"member": filename, "candidates": len(contents)})
    if not content.strip():
        raise ArchiveError("Chat file is empty")
    return content


async def read_upload_bytes(file: UploadFile) -> bytes:
    settings = get_settings()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    buffer = bytearray()
    while True:
        chunk = await file.read(CHUNK_SIZE)
        if not chunk:
            break
        buffer.extend(chunk)
        if len(buffer) > max_bytes:
            await file.close()
            raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="File exceeds max size")
    await file.close()
    return bytes(buffer)


async def read_upload_text(file: UploadFile) -> str:
    raw = await read_upload_bytes(file)
    if is_zip_upload(file.filename, file.content_type):
        logger.info("processing_zip_upload", extra={"upload_name": file.filename, "size": len(raw)})
        content = extract_largest_text_member(raw)
    else:
        logger.info("processing_text_upload", extra={"upload_name": file.filename, "size": len(raw)})
        content = decode_text(raw)

    if not content.strip():
        raise EmptyUploadError()
    return content
