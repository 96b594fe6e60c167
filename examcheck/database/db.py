import json
import time
import uuid
import logging
import shutil
from typing import Dict, Any, List, Optional
from pathlib import Path
from datetime import datetime

from examcheck.config import STUDENTS_FILE, TESTS_FILE, RESULTS_FILE, IMPORT_CHUNK_SIZE, STUDENT_SEARCH_LIMIT, TEST_LIST_LIMIT
from examcheck.schemas import AnswerKey, AnswerSet, ScoreReport

logger = logging.getLogger(__name__)

def ensure_valid_json_file(file_path: Path, default_content: Any = None) -> None:
    """Create a missing students/tests/results file; back up and reset a corrupted one."""
    if default_content is None:
        default_content = {}

    if not file_path.exists():
        logger.info(f"Creating new JSON file: {file_path}")
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(default_content, f, indent=2)
        return

    with open(file_path, 'r', encoding='utf-8') as f:
        try:
            json.load(f)
            return
        except json.JSONDecodeError:
            logger.warning(f"Invalid JSON in {file_path}, reinitializing file")

    backup_path = file_path.with_suffix(f".bak.{int(time.time())}")
    shutil.copy2(file_path, backup_path)
    logger.info(f"Backed up corrupted file to {backup_path}")
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(default_content, f, indent=2)

def load_json_data(file_path: Path) -> Dict[str, Any]:
    """Load a collection from disk, returning {} when it cannot be read."""
    try:
        ensure_valid_json_file(file_path)
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except Exception as e:
        logger.error(f"Error loading data from {file_path}: {str(e)}")
        return {}

def save_json_data(file_path: Path, data: Dict[str, Any]) -> bool:
    """Overwrite a collection file with uuid-keyed records; False when the write fails."""
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        return True
    except Exception as e:
        logger.error(f"Error saving data to {file_path}: {str(e)}")
        return False

def _with_id(record_id: str, record: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": record_id, **record}

# Student functions

def get_students() -> Dict[str, Any]:
    """Get all students."""
    return load_json_data(STUDENTS_FILE)

def get_student(student_id: str) -> Optional[Dict[str, Any]]:
    """Get a specific student by ID."""
    student = get_students().get(student_id)
    return _with_id(student_id, student) if student else None

def save_students(names: List[str], batch: str) -> Optional[List[Dict[str, Any]]]:
    """
    Register students in chunks of IMPORT_CHUNK_SIZE.

    Args:
        names: Student names, already de-duplicated
        batch: Batch the students belong to, e.g. "JEE"

    Returns:
        The created student records, or None if a chunk failed to save
    """
    created = []
    try:
        students = get_students()
        for start in range(0, len(names), IMPORT_CHUNK_SIZE):
            chunk = names[start:start + IMPORT_CHUNK_SIZE]
            for name in chunk:
                student_id = str(uuid.uuid4())
                students[student_id] = {
                    "name": name,
                    "batch": batch,
                    "created_at": datetime.now().isoformat()
                }
                created.append(_with_id(student_id, students[student_id]))

            if not save_json_data(STUDENTS_FILE, students):
                return None
            logger.info(f"Saved {len(created)}/{len(names)} students to batch {batch}")

        return created
    except Exception as e:
        logger.error(f"Error saving students: {str(e)}")
        return None

def search_students(query: str, batch: Optional[str] = None, limit: int = STUDENT_SEARCH_LIMIT) -> List[Dict[str, Any]]:
    """Case-insensitive partial-name lookup, optionally restricted to one batch."""
    needle = (query or "").strip().lower()
    if not needle:
        return []

    matches = []
    for student_id, student in get_students().items():
        if needle not in student.get("name", "").lower():
            continue
        if batch and student.get("batch") != batch:
            continue
        matches.append(_with_id(student_id, student))
        if len(matches) >= limit:
            break
    return matches

# Test functions

def get_tests(limit: int = TEST_LIST_LIMIT) -> List[Dict[str, Any]]:
    """Get tests, newest first."""
    tests = [_with_id(test_id, test) for test_id, test in load_json_data(TESTS_FILE).items()]
    tests.sort(key=lambda t: t.get("created_at", ""), reverse=True)
    return tests[:limit]

def get_test(test_id: str) -> Optional[Dict[str, Any]]:
    """Get a specific test by ID."""
    test = load_json_data(TESTS_FILE).get(test_id)
    return _with_id(test_id, test) if test else None

def get_test_answer_key(test: Dict[str, Any]) -> AnswerKey:
    """Rebuild the answer key stored on a test record."""
    return AnswerKey.from_blocks(test.get("mcq_key"), test.get("numerical_key"))

def save_test(test_name: str, answer_key: AnswerKey) -> Optional[Dict[str, Any]]:
    """Save a test with its answer key."""
    try:
        tests = load_json_data(TESTS_FILE)
        test_id = str(uuid.uuid4())
        tests[test_id] = {
            "test_name": test_name,
            "mcq_key": answer_key.mcq_blocks(),
            "numerical_key": answer_key.numeric_blocks(),
            "created_at": datetime.now().isoformat()
        }

        if not save_json_data(TESTS_FILE, tests):
            return None
        return _with_id(test_id, tests[test_id])
    except Exception as e:
        logger.error(f"Error saving test: {str(e)}")
        return None

# Result functions

def get_results(student_id: Optional[str] = None, test_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """Get saved results, optionally filtered by student and/or test."""
    results = []
    for result_id, result in load_json_data(RESULTS_FILE).items():
        if student_id and result.get("student_id") != student_id:
            continue
        if test_id and result.get("test_id") != test_id:
            continue
        results.append(_with_id(result_id, result))
    return results

def save_result(student: Dict[str, Any], test: Dict[str, Any],
                answers: AnswerSet, report: ScoreReport) -> Optional[Dict[str, Any]]:
    """Append a score report for a (student, test) pair."""
    try:
        results = load_json_data(RESULTS_FILE)
        result_id = str(uuid.uuid4())
        results[result_id] = {
            "student_id": student["id"],
            "student_name": student.get("name", ""),
            "test_id": test["id"],
            "test_name": test.get("test_name", ""),
            "mcq_answers": answers.mcq_blocks(),
            "numerical_answers": answers.numeric_blocks(),
            "marks": report.marks(),
            "wrong_questions": report.wrong_questions(),
            "created_at": datetime.now().isoformat()
        }

        if not save_json_data(RESULTS_FILE, results):
            return None
        return _with_id(result_id, results[result_id])
    except Exception as e:
        logger.error(f"Error saving result: {str(e)}")
        return None
