"""
File operation utilities.

JSON helpers back the file session store; CSV/JSON export writes the
course collection for the admin.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import pandas as pd

from ..models.course import Course


logger = logging.getLogger(__name__)


def save_json(data: Any, filepath: Path) -> bool:
    """
    Save data to JSON file.

    Returns:
        True if save successful, False otherwise
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.debug(f"Saved JSON file: {filepath}")
        return True

    except (OSError, TypeError) as e:
        logger.error(f"Failed to save JSON file {filepath}: {e}", exc_info=True)
        return False


def load_json(filepath: Path) -> Optional[Dict[str, Any]]:
    """
    Load data from JSON file.

    Returns:
        Loaded data, or None if the file is missing or unreadable
    """
    if not filepath.exists():
        logger.debug(f"JSON file not found: {filepath}")
        return None

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)

        logger.debug(f"Loaded JSON file: {filepath}")
        return data

    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {filepath}: {e}")
        return None

    except OSError as e:
        logger.error(f"Failed to load JSON file {filepath}: {e}", exc_info=True)
        return None


def save_csv(df: pd.DataFrame, filepath: Path) -> bool:
    """
    Save DataFrame to CSV file.

    Returns:
        True if save successful, False otherwise
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(filepath, index=False, encoding='utf-8')

        logger.debug(f"Saved CSV file: {filepath}")
        return True

    except OSError as e:
        logger.error(f"Failed to save CSV file {filepath}: {e}", exc_info=True)
        return False


def generate_filename(prefix: str, extension: str) -> str:
    """
    Generate timestamped filename.

    Examples:
        >>> generate_filename("courses", "csv")
        'courses_20251101_103045.csv'
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}.{extension}"


COURSE_COLUMNS = [
    "id", "name", "instructor", "category", "price",
    "studentCount", "status", "ownerId", "creatorEmail",
    "createdAt", "updatedAt",
]


def courses_to_frame(courses: Iterable[Course]) -> pd.DataFrame:
    """One row per course, columns in a fixed order even when empty."""
    return pd.DataFrame([course.to_dict() for course in courses], columns=COURSE_COLUMNS)


def export_courses(courses: Iterable[Course], output_dir: Path) -> Dict[str, Path]:
    """
    Write the collection as CSV and JSON into output_dir.

    Returns:
        Mapping of format ("csv", "json") to the written path, only for
        the files that were actually written
    """
    courses = list(courses)
    written = {}

    csv_path = output_dir / generate_filename("courses", "csv")
    if save_csv(courses_to_frame(courses), csv_path):
        written["csv"] = csv_path

    json_path = output_dir / generate_filename("courses", "json")
    if save_json([course.to_dict() for course in courses], json_path):
        written["json"] = json_path

    logger.info(f"Exported {len(courses)} courses to {output_dir}")
    return written
