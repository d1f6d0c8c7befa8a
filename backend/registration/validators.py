"""Input validation for registration submissions"""
import re
from typing import Any, Dict, List, Optional

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

MAX_NAME_LENGTH = 200
MAX_EMAIL_LENGTH = 200
MAX_GRADE_LENGTH = 50
MAX_PROJECT_NAME_LENGTH = 500
MAX_ADDITIONAL_STUDENTS = 3


class ValidationError(Exception):
    """Raised with field-level errors when a submission is rejected"""

    def __init__(self, errors: List[Dict[str, str]]):
        self.errors = errors
        super().__init__('; '.join(f"{e['field']}: {e['message']}" for e in errors))


def validate_email(email: Any) -> bool:
    """Check email has a single '@' and a '.' in the domain part."""
    if not email or not isinstance(email, str):
        return False
    return bool(EMAIL_PATTERN.match(email))


def _check_string(data: Dict[str, Any], key: str, path: str, label: str,
                  max_length: int, required: bool, errors: List[Dict[str, str]]) -> Optional[str]:
    """Validate a single string field, appending at most one error."""
    value = data.get(key)
    if value is None:
        if required:
            errors.append({'field': path, 'message': f'{label} is required'})
        return None
    if not isinstance(value, str):
        errors.append({'field': path, 'message': f'{label} must be a string'})
        return None
    if required and not value:
        errors.append({'field': path, 'message': f'{label} is required'})
        return None
    if len(value) > max_length:
        errors.append({'field': path, 'message': f'{label} must be at most {max_length} characters'})
        return None
    return value


def _check_volunteer(data: Dict[str, Any], path: str, errors: List[Dict[str, str]]) -> Optional[bool]:
    value = data.get('parentWillingToVolunteer')
    if value is None:
        return None
    if not isinstance(value, bool):
        errors.append({'field': path, 'message': 'parentWillingToVolunteer must be a boolean'})
        return None
    return value


def _clean(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def validate_additional_student(data: Any, prefix: str, errors: List[Dict[str, str]]) -> Dict[str, Any]:
    """Validate one entry of additionalStudents. Errors are appended in place."""
    if not isinstance(data, dict):
        errors.append({'field': prefix, 'message': 'Expected an object'})
        return {}

    cleaned = {
        'studentName': _check_string(data, 'studentName', f'{prefix}.studentName',
                                     'Student name', MAX_NAME_LENGTH, True, errors),
        'teacher': _check_string(data, 'teacher', f'{prefix}.teacher',
                                 'Teacher', MAX_NAME_LENGTH, True, errors),
        'grade': _check_string(data, 'grade', f'{prefix}.grade',
                               'Grade', MAX_GRADE_LENGTH, False, errors),
        'parentGuardianName': _check_string(data, 'parentGuardianName', f'{prefix}.parentGuardianName',
                                            'Parent/Guardian name', MAX_NAME_LENGTH, False, errors),
        'parentWillingToVolunteer': _check_volunteer(data, f'{prefix}.parentWillingToVolunteer', errors),
    }

    # Parent email is optional for additional students, but must be valid when filled in
    email_path = f'{prefix}.parentGuardianEmail'
    email = _check_string(data, 'parentGuardianEmail', email_path,
                          'Parent/Guardian email', MAX_EMAIL_LENGTH, False, errors)
    if email and not validate_email(email):
        errors.append({'field': email_path, 'message': 'Invalid email format'})
        email = None
    cleaned['parentGuardianEmail'] = email

    return _clean(cleaned)


def validate_registration(data: Any) -> Dict[str, Any]:
    """
    Validate a registration submission.

    Returns a cleaned copy holding only known fields. Raises ValidationError
    listing every rejected field (one message per field).
    """
    if not isinstance(data, dict):
        raise ValidationError([{'field': '', 'message': 'Expected a JSON object'}])

    errors: List[Dict[str, str]] = []

    cleaned = {
        'studentName': _check_string(data, 'studentName', 'studentName',
                                     'Student name', MAX_NAME_LENGTH, True, errors),
        'teacher': _check_string(data, 'teacher', 'teacher',
                                 'Teacher', MAX_NAME_LENGTH, True, errors),
        'grade': _check_string(data, 'grade', 'grade',
                               'Grade', MAX_GRADE_LENGTH, False, errors),
        'projectName': _check_string(data, 'projectName', 'projectName',
                                     'Project name', MAX_PROJECT_NAME_LENGTH, False, errors),
        'parentGuardianName': _check_string(data, 'parentGuardianName', 'parentGuardianName',
                                            'Parent/Guardian name', MAX_NAME_LENGTH, True, errors),
        'parentWillingToVolunteer': _check_volunteer(data, 'parentWillingToVolunteer', errors),
    }

    email = _check_string(data, 'parentGuardianEmail', 'parentGuardianEmail',
                          'Parent/Guardian email', MAX_EMAIL_LENGTH, True, errors)
    if email is not None and not validate_email(email):
        errors.append({'field': 'parentGuardianEmail', 'message': 'Invalid email format'})
        email = None
    cleaned['parentGuardianEmail'] = email

    consent = data.get('consentGiven')
    if consent is None:
        errors.append({'field': 'consentGiven', 'message': 'Consent is required'})
    elif not isinstance(consent, bool):
        errors.append({'field': 'consentGiven', 'message': 'consentGiven must be a boolean'})
    elif consent is not True:
        errors.append({'field': 'consentGiven', 'message': 'Consent must be given to register'})
    else:
        cleaned['consentGiven'] = True

    additional = data.get('additionalStudents')
    if additional is None:
        additional = []
    if not isinstance(additional, list):
        errors.append({'field': 'additionalStudents', 'message': 'additionalStudents must be a list'})
    else:
        if len(additional) > MAX_ADDITIONAL_STUDENTS:
            errors.append({
                'field': 'additionalStudents',
                'message': f'Maximum {MAX_ADDITIONAL_STUDENTS} additional students allowed',
            })
        cleaned['additionalStudents'] = [
            validate_additional_student(student, f'additionalStudents.{i}', errors)
            for i, student in enumerate(additional)
        ]

    if errors:
        raise ValidationError(errors)

    return _clean(cleaned)
