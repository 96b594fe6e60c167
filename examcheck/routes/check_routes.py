from fastapi import APIRouter, HTTPException
from typing import Any, Dict, Optional, Tuple
import logging

from examcheck.database.db import get_results, get_student, get_test, get_test_answer_key, save_result
from examcheck.schemas import CheckRequest
from examcheck.services.scoring_service import grade

logger = logging.getLogger(__name__)
router = APIRouter(tags=["check"])

def resolve_selection(request: CheckRequest) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Look up the selected student and test, failing with operator guidance."""
    if not request.student_id:
        raise HTTPException(status_code=400, detail="Please select a student.")
    if not request.test_id:
        raise HTTPException(status_code=400, detail="Please select a test.")

    student = get_student(request.student_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    test = get_test(request.test_id)
    if not test:
        raise HTTPException(status_code=404, detail="Test not found")
    return student, test

@router.post("/check/compute")
def compute_result(request: CheckRequest):
    """Grade the entered answers against the selected test's answer key"""
    student, test = resolve_selection(request)
    report = grade(get_test_answer_key(test), request.answers)
    logger.info(f"Computed result for student {student['id']} on test {test['id']}: {report.total}/{report.max_total}")
    return {
        "student": student,
        "test": {"id": test["id"], "test_name": test.get("test_name", "")},
        "report": report,
    }

@router.post("/check/results")
def save_check_result(request: CheckRequest):
    """Grade the entered answers and store the result"""
    student, test = resolve_selection(request)
    try:
        report = grade(get_test_answer_key(test), request.answers)
        result = save_result(student, test, request.answers, report)
        if result is None:
            raise HTTPException(status_code=500, detail="Failed to save result")
        logger.info(f"Saved result {result['id']} for student {student['id']} on test {test['id']}")
        return {"message": "Result saved successfully.", "result": result, "report": report}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error saving result: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Save failed: {str(e)}")

@router.get("/results")
def list_results(student_id: Optional[str] = None, test_id: Optional[str] = None):
    """List saved results, optionally for one student and/or test"""
    try:
        return {"results": get_results(student_id=student_id, test_id=test_id)}
    except Exception as e:
        logger.error(f"Error retrieving results: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve results: {str(e)}")
