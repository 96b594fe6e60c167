import os
import time
import uuid
import logging
from typing import Optional, Tuple
from pathlib import Path

from fastapi import UploadFile

from examcheck.config import MAX_UPLOAD_SIZE

logger = logging.getLogger(__name__)

def get_unique_filename(original_filename: str, prefix: str = "") -> str:
    """Name a stored upload: prefix (or original stem), ms timestamp and a random suffix, keeping the extension."""
    filename, ext = os.path.splitext(original_filename or "upload")
    timestamp = int(time.time() * 1000)
    suffix = uuid.uuid4().hex

    return f"{prefix or filename}_{timestamp}_{suffix}{ext}"

async def read_upload_text(file: UploadFile) -> str:
    """Read a small text upload (e.g. a roster CSV), enforcing MAX_UPLOAD_SIZE."""
    content = await file.read(MAX_UPLOAD_SIZE + 1)
    if len(content) > MAX_UPLOAD_SIZE:
        raise ValueError(f"File exceeds maximum allowed size of {MAX_UPLOAD_SIZE / (1024*1024)}MB")
    # utf-8-sig drops the BOM spreadsheet exports tend to add
    return content.decode("utf-8-sig")

async def save_upload_file(file: UploadFile, directory: Path, prefix: str = "") -> Tuple[bool, Optional[str], Optional[str]]:
    """
    Store a scanned sheet upload under `directory`.

    Returns:
        (success, saved_path, error_message); oversized files are removed and reported
    """
    try:
        os.makedirs(directory, exist_ok=True)

        file_size = 0
        chunk_size = 1024 * 1024  # 1MB chunks

        filename = get_unique_filename(file.filename, prefix)
        file_path = os.path.join(directory, filename)

        with open(file_path, "wb") as f:
            while True:
                chunk = await file.read(chunk_size)
                if not chunk:
                    break
                file_size += len(chunk)
                if file_size > MAX_UPLOAD_SIZE:
                    f.close()
                    os.remove(file_path)
                    return False, None, f"File exceeds maximum allowed size of {MAX_UPLOAD_SIZE / (1024*1024)}MB"
                f.write(chunk)

        return True, file_path, None

    except Exception as e:
        logger.error(f"Error saving file: {str(e)}")
        return False, None, str(e)
