"""
Google Sheets Manager for the science fair registration spreadsheet.

One spreadsheet holds every registration:
- Projects: one wide row per registration (students side by side)
- Students: one row per student
- Teachers (optional): teacher name and grade for the form's dropdown
- Info (optional): key/value fair metadata
"""
import base64
import json
import os
import re
import time
from typing import Any, Dict, List, Optional

import gspread
import gspread.exceptions
from google.oauth2 import service_account

from core.config import Config
from core.logger import logger
from registration.rows import ProjectRow, StudentRow
from sheets.sheets_dataframe import normalize_dataframe, values_to_dataframe

SCOPES = ['https://www.googleapis.com/auth/spreadsheets']

FIRST_PROJECT_ID = 100

DEFAULT_TEACHERS = [
    {'name': 'Mrs. Smith', 'grade': '3'},
    {'name': 'Mr. Johnson', 'grade': '4'},
    {'name': 'Ms. Williams', 'grade': '5'},
    {'name': 'Dr. Brown', 'grade': 'K'},
    {'name': 'Mrs. Davis', 'grade': '1'},
    {'name': 'Mr. Wilson', 'grade': '2'},
]

DEFAULT_FAIR_METADATA = {
    'school': 'School',
    'contactEmail': 'sciencefair@school.edu',
    'registrationDeadline': 'December 15, 2025',
    'scienceFairDate': 'February 10, 2026',
}

# Info sheet column A label -> API field
INFO_KEYS = {
    'School': 'school',
    'Contact': 'contactEmail',
    'Registration Deadline': 'registrationDeadline',
    'Science Fair Date': 'scienceFairDate',
}


class SheetsWriteError(Exception):
    """Raised when registration rows could not be stored"""
    pass


A1_CELLS = re.compile(r'^\$?[A-Za-z]{1,3}\$?\d*(:\$?[A-Za-z]{0,3}\$?\d*)?$')


def first_column_range(a1_range: str) -> str:
    """
    'Projects!A:X' -> 'Projects!A:A'

    A value without '!' is a sheet name ('Projects' -> 'Projects!A:A') unless
    it is plain A1 notation such as 'A:X' or 'B2'.
    """
    sheet, sep, cells = a1_range.rpartition('!')
    if not sep and not (A1_CELLS.match(cells) and (':' in cells or re.search(r'\d', cells))):
        return f"{a1_range}!A:A"
    match = re.match(r'^\$?([A-Za-z]+)', cells)
    column = match.group(1).upper() if match else 'A'
    return f"{sheet}{sep}{column}:{column}"


def decode_service_account_key(encoded: str) -> Dict[str, Any]:
    """Decode a base64 service account key, tolerating newlines and missing padding."""
    cleaned = re.sub(r'\s', '', encoded)
    missing_padding = len(cleaned) % 4
    if missing_padding:
        cleaned += '=' * (4 - missing_padding)
    try:
        return json.loads(base64.b64decode(cleaned).decode('utf-8'))
    except Exception as e:
        raise ValueError(f"Invalid GOOGLE_SERVICE_ACCOUNT_KEY_BASE64: {type(e).__name__}")


class GoogleSheetsManager:
    """Manages Google Sheets operations for registrations."""

    def __init__(self, config: Config, client: Optional[gspread.Client] = None):
        """Initialize Google Sheets client with service account credentials."""
        self.config = config
        self.spreadsheet_id = config.google_sheets_id
        if not self.spreadsheet_id:
            raise ValueError("GOOGLE_SHEETS_ID environment variable is required")

        self.client = client or self._initialize_client()
        self._spreadsheet = None

        # Teacher list and fair info change rarely; cache successful reads
        self._cache: Dict[str, Any] = {}
        self._cache_ttl = config.cache_ttl

        # Used when the Projects sheet cannot be read
        self._project_id_counter = FIRST_PROJECT_ID

        self._retry_delay = 5

    def _initialize_client(self) -> gspread.Client:
        """Initialize gspread client with service account credentials."""
        try:
            key_path = self.config.service_account_key_path
            if key_path:
                if not os.path.exists(key_path):
                    raise FileNotFoundError(f"Service account file not found: {key_path}")
                credentials = service_account.Credentials.from_service_account_file(
                    key_path,
                    scopes=SCOPES
                )
            elif self.config.service_account_key_base64:
                service_account_info = decode_service_account_key(self.config.service_account_key_base64)
                credentials = service_account.Credentials.from_service_account_info(
                    service_account_info,
                    scopes=SCOPES
                )
            else:
                raise ValueError(
                    "Either GOOGLE_SERVICE_ACCOUNT_KEY_BASE64 or "
                    "GOOGLE_SERVICE_ACCOUNT_KEY_PATH must be provided"
                )

            client = gspread.authorize(credentials)
            logger.info("Google Sheets client initialized successfully")
            return client

        except Exception as e:
            logger.error(f"Error initializing Google Sheets client: {str(e)}", exc_info=True)
            raise

    def _get_spreadsheet(self) -> gspread.Spreadsheet:
        if self._spreadsheet is None:
            try:
                self._spreadsheet = self.client.open_by_key(self.spreadsheet_id)
            except gspread.exceptions.SpreadsheetNotFound:
                logger.error(f"Spreadsheet not found: {self.spreadsheet_id}")
                raise ValueError(f"Spreadsheet not found: {self.spreadsheet_id}")
        return self._spreadsheet

    def _get_cached_data(self, cache_key: str) -> Any:
        """Get cached data if still valid, else None."""
        if cache_key in self._cache:
            data, timestamp = self._cache[cache_key]
            if time.time() - timestamp < self._cache_ttl:
                return data
            del self._cache[cache_key]
        return None

    def _set_cached_data(self, cache_key: str, data: Any):
        self._cache[cache_key] = (data, time.time())

    def clear_cache(self):
        self._cache.clear()

    def _retry_with_backoff(self, func, max_retries=3):
        """
        Retry a function with exponential backoff on rate limit errors.

        Delays start at self._retry_delay seconds and double each retry.
        """
        for attempt in range(max_retries):
            try:
                return func()
            except gspread.exceptions.APIError as e:
                is_rate_limit = getattr(e, 'code', None) == 429
                if is_rate_limit and attempt < max_retries - 1:
                    delay = self._retry_delay * (2 ** attempt)
                    logger.warning(
                        f"Rate limit hit (429), retrying in {delay} seconds "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    time.sleep(delay)
                    continue
                raise

    def _read_values(self, a1_range: str) -> List[List[Any]]:
        """Read a range, returning [] when it holds no data."""
        def _fetch():
            result = self._get_spreadsheet().values_get(a1_range)
            return result.get('values', [])

        return self._retry_with_backoff(_fetch)

    def _append_values(self, a1_range: str, values: List[List[Any]]):
        def _append():
            return self._get_spreadsheet().values_append(
                a1_range,
                params={'valueInputOption': 'RAW', 'insertDataOption': 'INSERT_ROWS'},
                body={'values': values},
            )

        return self._retry_with_backoff(_append)

    def get_next_project_id(self) -> int:
        """
        Next project id: highest id in the Projects sheet + 1.

        Falls back to an in-process counter when the sheet can't be read.
        """
        id_range = first_column_range(self.config.projects_range)
        try:
            values = self._read_values(id_range)
        except Exception as e:
            logger.error(f"Error getting next project ID: {str(e)}", exc_info=True)
            project_id = self._project_id_counter
            self._project_id_counter += 1
            return project_id

        # First row is the header
        project_ids = []
        for row in values[1:]:
            if not row:
                continue
            try:
                project_ids.append(int(str(row[0]).strip()))
            except ValueError:
                continue

        if not project_ids:
            return FIRST_PROJECT_ID
        return max(project_ids) + 1

    def append_registration(self, project_row: ProjectRow, student_rows: List[StudentRow]):
        """
        Append one project row and its student rows, one write per range.

        The two writes are not atomic. If the student rows fail after the
        project row was stored, the project row stays in the sheet; its id is
        logged so it can be removed by hand, and a resubmission gets a new id.
        """
        project_id = project_row.project_id
        try:
            self._append_values(self.config.projects_range, [project_row.to_values()])
        except Exception as e:
            logger.error(f"Error appending project {project_id} to Google Sheets: {str(e)}", exc_info=True)
            raise SheetsWriteError("Failed to save registration to Google Sheets") from e

        if student_rows:
            try:
                self._append_values(
                    self.config.students_range,
                    [row.to_values() for row in student_rows],
                )
            except Exception as e:
                logger.error(
                    f"Error appending student rows for project {project_id}; project row "
                    f"{project_id} was already written to {self.config.projects_range} "
                    f"and is orphaned: {str(e)}",
                    exc_info=True,
                )
                raise SheetsWriteError("Failed to save registration to Google Sheets") from e

        logger.info(
            f"Appended project {project_id} and "
            f"{len(student_rows)} student row(s) to Google Sheets"
        )

    def get_teachers(self) -> List[Dict[str, str]]:
        """Teachers from the Teachers sheet (name, grade), or a default list."""
        cached = self._get_cached_data('teachers')
        if cached is not None:
            return cached

        try:
            values = self._read_values(self.config.teachers_range)
        except Exception as e:
            logger.warning(f"Error fetching teachers, using default list: {str(e)}")
            return [dict(t) for t in DEFAULT_TEACHERS]

        df = normalize_dataframe(values_to_dataframe(values, ['name', 'grade']))
        df = df.dropna(subset=['name']).fillna({'grade': ''})
        teachers = df.to_dict('records')

        logger.info(f"Read {len(teachers)} teachers from Google Sheets")
        self._set_cached_data('teachers', teachers)
        return teachers

    def get_fair_metadata(self) -> Dict[str, str]:
        """Fair details from the Info sheet's key/value rows, or defaults."""
        cached = self._get_cached_data('metadata')
        if cached is not None:
            return cached

        try:
            values = self._read_values(self.config.info_range)
        except Exception as e:
            logger.warning(f"Error fetching fair metadata, using defaults: {str(e)}")
            return dict(DEFAULT_FAIR_METADATA)

        metadata = {field: '' for field in INFO_KEYS.values()}
        found = set()
        for row in values:
            if not row or row[0] not in INFO_KEYS or row[0] in found:
                continue
            found.add(row[0])
            metadata[INFO_KEYS[row[0]]] = row[1] if len(row) > 1 and row[1] else ''

        self._set_cached_data('metadata', metadata)
        return metadata
