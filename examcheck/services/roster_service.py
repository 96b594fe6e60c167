import re
import logging
from typing import List

logger = logging.getLogger(__name__)

HEADER_MARKERS = ("name", "student")


def parse_names_from_csv(text: str) -> List[str]:
    """
    Extract student names from CSV text.

    Works for a single column file or a multi-column file (the first column is
    used). A first line mentioning "name" or "student" is treated as a header.
    Names are de-duplicated case-insensitively, keeping the first spelling seen.

    Args:
        text: Raw CSV content

    Returns:
        Ordered list of unique names
    """
    lines = [line.strip() for line in re.split(r"\r?\n", text or "")]
    lines = [line for line in lines if line]
    if not lines:
        return []

    first = lines[0].lower()
    start_index = 1 if any(marker in first for marker in HEADER_MARKERS) else 0

    names = []
    for line in lines[start_index:]:
        first_col = line.split(",")[0].strip()
        # Remove one pair of surrounding quotes
        name = re.sub(r'^"|"$', "", first_col).strip()
        if name:
            names.append(name)

    seen = set()
    unique_names = []
    for name in names:
        key = name.lower()
        if key not in seen:
            seen.add(key)
            unique_names.append(name)

    if len(unique_names) < len(names):
        logger.info(f"Dropped {len(names) - len(unique_names)} duplicate names from CSV")
    return unique_names
