import os
import tempfile

import pytest

# Keep config's import-time directory setup out of the source tree
os.environ.setdefault("EXAMCHECK_DATA_DIR", tempfile.mkdtemp(prefix="examcheck-test-"))

from examcheck.database import db
from examcheck.routes import scan_routes

MCQ_KEY = ["A", "B", "C", "D"] * 5
NUMERIC_KEY = ["3", "-1.5", "0", "7.25", "10"]


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    """Point every JSON collection and upload at a per-test directory."""
    monkeypatch.setattr(db, "STUDENTS_FILE", tmp_path / "students.json")
    monkeypatch.setattr(db, "TESTS_FILE", tmp_path / "tests.json")
    monkeypatch.setattr(db, "RESULTS_FILE", tmp_path / "results.json")
    monkeypatch.setattr(scan_routes, "UPLOADS_DIR", tmp_path / "files")
    return tmp_path


@pytest.fixture
def answer_key_payload():
    return {
        subject: {"mcq": list(MCQ_KEY), "numeric": list(NUMERIC_KEY)}
        for subject in ("physics", "chemistry", "maths")
    }
