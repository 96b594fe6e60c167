"""
Configuration settings for the exam checking service.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

# Base directories
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("EXAMCHECK_DATA_DIR", BASE_DIR / "data"))

# Database files
UPLOADS_DIR = DATA_DIR / "files"
STUDENTS_FILE = DATA_DIR / "students.json"
TESTS_FILE = DATA_DIR / "tests.json"
RESULTS_FILE = DATA_DIR / "results.json"

# Ensure all directories exist
UPLOADS_DIR.mkdir(parents=True, exist_ok=True)

# API settings
API_TITLE = "Exam Check"
API_VERSION = "1.0.0"
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8000))
DEBUG = os.getenv("DEBUG", "True").lower() in ("true", "1", "t")

# File upload settings
MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", 5 * 1024 * 1024))  # 5MB default

# Roster and lookup settings
DEFAULT_BATCH = os.getenv("DEFAULT_BATCH", "JEE")
STUDENT_SEARCH_LIMIT = int(os.getenv("STUDENT_SEARCH_LIMIT", 10))
TEST_LIST_LIMIT = int(os.getenv("TEST_LIST_LIMIT", 100))
IMPORT_CHUNK_SIZE = int(os.getenv("IMPORT_CHUNK_SIZE", 200))

# Scan preprocessing (grayscale -> blur -> adaptive threshold)
SCAN_BLUR_KERNEL = int(os.getenv("SCAN_BLUR_KERNEL", 5))
SCAN_BLOCK_SIZE = int(os.getenv("SCAN_BLOCK_SIZE", 31))
SCAN_THRESHOLD_C = int(os.getenv("SCAN_THRESHOLD_C", 7))
