"""
Registration workflow: assign a project id, build rows, write them to the sheet.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict

from core.logger import logger
from registration.rows import build_project_row, build_student_rows


@dataclass
class RegistrationResult:
    project_id: int
    timestamp: str
    student_count: int


def utc_timestamp() -> str:
    """Current UTC time as ISO 8601 with milliseconds, e.g. 2026-01-05T14:03:22.120Z"""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def submit_registration(data: Dict[str, Any], sheets_manager) -> RegistrationResult:
    """
    Store a validated registration.

    Project ids come from the sheet itself (max existing id + 1), so two
    concurrent submissions can receive the same id.
    """
    timestamp = utc_timestamp()
    project_id = sheets_manager.get_next_project_id()

    project_row = build_project_row(data, project_id, timestamp)
    student_rows = build_student_rows(data, project_id)

    sheets_manager.append_registration(project_row, student_rows)

    logger.info(
        f"Registration successful: project {project_id}, "
        f"{len(student_rows)} student(s), at {timestamp}"
    )
    return RegistrationResult(project_id=project_id, timestamp=timestamp, student_count=len(student_rows))
