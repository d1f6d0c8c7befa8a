"""
Registration package: submission validation and spreadsheet row mapping.

Re-exports the helpers used by the API routes for convenient imports.
"""

from .rows import (  # noqa: F401
    ProjectRow,
    StudentEntry,
    StudentRow,
    build_project_row,
    build_student_rows,
)
from .service import RegistrationResult, submit_registration  # noqa: F401
from .validators import ValidationError, validate_email, validate_registration  # noqa: F401
