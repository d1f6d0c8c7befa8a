"""
In-memory stand-in for GoogleSheetsManager.

Selected with USE_MOCK_SHEETS=true (or CI=true) so the API and end-to-end
tests can run without spreadsheet access.
"""
from typing import Any, Dict, List

from core.logger import logger
from registration.rows import ProjectRow, StudentRow
from sheets.google_sheets_manager import FIRST_PROJECT_ID

MOCK_TEACHERS = [
    {'name': 'Ms. Johnson', 'grade': '3rd'},
    {'name': 'Mr. Smith', 'grade': '4th'},
    {'name': 'Mrs. Davis', 'grade': '5th'},
    {'name': 'Mr. Wilson', 'grade': '6th'},
]

MOCK_FAIR_METADATA = {
    'school': 'Test Elementary School',
    'contactEmail': 'science@test-school.edu',
    'registrationDeadline': '2026-03-31',
    'scienceFairDate': '2026-04-15',
}


class InMemorySheetsManager:
    """Keeps appended rows in lists instead of a spreadsheet."""

    def __init__(self):
        self.reset()

    def reset(self):
        self._next_project_id = FIRST_PROJECT_ID
        self.project_rows: List[List[Any]] = []
        self.student_rows: List[List[Any]] = []

    def get_next_project_id(self) -> int:
        project_id = self._next_project_id
        self._next_project_id += 1
        return project_id

    def append_registration(self, project_row: ProjectRow, student_rows: List[StudentRow]):
        self.project_rows.append(project_row.to_values())
        self.student_rows.extend(row.to_values() for row in student_rows)
        logger.info(f"Mock: added project {project_row.project_id} with {len(student_rows)} student row(s)")

    def get_teachers(self) -> List[Dict[str, str]]:
        return [dict(t) for t in MOCK_TEACHERS]

    def get_fair_metadata(self) -> Dict[str, str]:
        return dict(MOCK_FAIR_METADATA)
