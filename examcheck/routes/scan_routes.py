import os
import logging

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import Response

from examcheck.config import UPLOADS_DIR
from examcheck.services.scan_service import preprocess_scan
from examcheck.utils.file_utils import save_upload_file

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/scan", tags=["scan"])

@router.post("/preprocess")
async def preprocess_sheet(file: UploadFile = File(...)):
    """Upload a photo of an answer sheet and get back the thresholded image as PNG"""
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are allowed")

    success, file_path, error_message = await save_upload_file(file, UPLOADS_DIR, prefix="scan")
    if not success:
        raise HTTPException(status_code=400, detail=f"Failed to upload file: {error_message}")

    try:
        png = preprocess_scan(file_path)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error preprocessing scan {file_path}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to process image: {str(e)}")
    finally:
        os.remove(file_path)

    return Response(content=png, media_type="image/png")
