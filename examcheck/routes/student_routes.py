from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from typing import Optional
import logging

from examcheck.config import DEFAULT_BATCH, STUDENT_SEARCH_LIMIT
from examcheck.database.db import get_student, save_students, search_students
from examcheck.services.roster_service import parse_names_from_csv
from examcheck.utils.file_utils import read_upload_text

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/students", tags=["students"])

@router.post("/import")
async def import_students(
    file: Optional[UploadFile] = File(None),
    csv_text: Optional[str] = Form(None),
    batch: str = Form(DEFAULT_BATCH),
):
    """Register students from an uploaded CSV file or pasted CSV text"""
    try:
        text = await read_upload_text(file) if file is not None else (csv_text or "")
        names = parse_names_from_csv(text)
        if not names:
            raise HTTPException(status_code=400, detail="No names found in CSV.")

        batch = batch.strip() or DEFAULT_BATCH
        students = save_students(names, batch)
        if students is None:
            raise HTTPException(status_code=500, detail="Failed to save students")

        logger.info(f"Imported {len(students)} students into batch {batch}")
        return {"message": "Saved students successfully.", "saved_count": len(students), "students": students}
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Could not read CSV: {str(e)}")
    except Exception as e:
        logger.error(f"Error importing students: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to import students: {str(e)}")

@router.get("/search")
def find_students(q: str = "", batch: Optional[str] = None, limit: int = STUDENT_SEARCH_LIMIT):
    """Autocomplete lookup by partial name"""
    try:
        return {"students": search_students(q, batch=batch, limit=max(1, limit))}
    except Exception as e:
        logger.error(f"Error searching students: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Student search failed: {str(e)}")

@router.get("/{student_id}")
def get_student_by_id(student_id: str):
    """Get a specific student by ID"""
    student = get_student(student_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return {"student": student}
