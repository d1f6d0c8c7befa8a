"""
Flatten validated registrations into spreadsheet rows.

A registration becomes one wide project row (students 1-4 side by side) and
one narrow student row per student, primary student first.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

STUDENTS_PER_PROJECT = 4
PROJECT_ROW_WIDTH = 3 + STUDENTS_PER_PROJECT * 5 + 1  # A:X
STUDENT_ROW_WIDTH = 8  # A:H


def _flag(value: Optional[bool]) -> str:
    if value is None:
        return ''
    return 'TRUE' if value else 'FALSE'


@dataclass
class StudentEntry:
    name: str
    teacher: str
    grade: str = ''
    parent_guardian_name: str = ''
    parent_guardian_email: str = ''
    parent_willing_to_volunteer: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StudentEntry':
        return cls(
            name=data.get('studentName', ''),
            teacher=data.get('teacher', ''),
            grade=data.get('grade') or '',
            parent_guardian_name=data.get('parentGuardianName') or '',
            parent_guardian_email=data.get('parentGuardianEmail') or '',
            parent_willing_to_volunteer=data.get('parentWillingToVolunteer'),
        )

    def to_values(self) -> List[str]:
        return [
            self.name,
            self.teacher,
            self.grade,
            self.parent_guardian_name,
            self.parent_guardian_email,
        ]


@dataclass
class ProjectRow:
    project_id: int
    project_name: str
    timestamp: str
    students: List[StudentEntry] = field(default_factory=list)
    primary_project_record: bool = True

    def to_values(self) -> List[Any]:
        values: List[Any] = [
            self.project_id,
            self.project_name,
            'TRUE' if self.primary_project_record else 'FALSE',
        ]
        for i in range(STUDENTS_PER_PROJECT):
            if i < len(self.students):
                values.extend(self.students[i].to_values())
            else:
                values.extend([''] * 5)
        values.append(self.timestamp)
        return values


@dataclass
class StudentRow:
    project_id: int
    project_name: str
    student: StudentEntry

    def to_values(self) -> List[Any]:
        return [
            self.project_id,
            self.project_name,
            self.student.name,
            self.student.teacher,
            self.student.grade,
            self.student.parent_guardian_name,
            self.student.parent_guardian_email,
            _flag(self.student.parent_willing_to_volunteer),
        ]


def get_students(data: Dict[str, Any]) -> List[StudentEntry]:
    """All students of a submission, primary student first."""
    students = [StudentEntry.from_dict(data)]
    students.extend(StudentEntry.from_dict(s) for s in data.get('additionalStudents') or [])
    return students[:STUDENTS_PER_PROJECT]


def build_project_row(data: Dict[str, Any], project_id: int, timestamp: str) -> ProjectRow:
    return ProjectRow(
        project_id=project_id,
        project_name=data.get('projectName') or '',
        timestamp=timestamp,
        students=get_students(data),
    )


def build_student_rows(data: Dict[str, Any], project_id: int) -> List[StudentRow]:
    project_name = data.get('projectName') or ''
    return [StudentRow(project_id, project_name, student) for student in get_students(data)]
