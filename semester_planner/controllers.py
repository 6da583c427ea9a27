"""HTTP-facing controllers that turn request bodies into use-case calls."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .repositories import StudentRepository, SubjectRepository
from .student_services import (
    EditStudentSemester,
    EditSubjectAttempt,
    ListStudentSemesters,
    ListSubjectAttemptsBySemester,
    PlanSemester,
    PlanSubjectAttempt,
    RegisterStudent,
    RemoveStudentSemester,
    RemoveSubjectAttempt,
)
from .students import NO_GRADE
from .subject_services import ListSubjects, RegisterSubject, RemoveSubject

OK = 200
CREATED = 201
NO_CONTENT = 204

_DATE = re.compile(r"(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})")


class InvalidRequestBody(ValueError):
    """The request body is missing a field or holds one of the wrong type."""

    def __init__(self, message: str = "Invalid request body.") -> None:
        super().__init__(message)


@dataclass
class Response:
    """A status code with an optional JSON body and headers."""

    status: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)


def _field(body: Any, key: str) -> Any:
    # A missing body or a missing key reads as null.
    if body is None:
        return None
    if not isinstance(body, dict):
        raise InvalidRequestBody(f"Expected an object holding {key!r}.")
    return body.get(key)


def _string(body: Any, key: str) -> str:
    value = _field(body, key)
    if not isinstance(value, str):
        raise InvalidRequestBody(f"Field {key!r} must be a string.")
    return value


def _number(body: Any, key: str) -> float:
    value = _field(body, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidRequestBody(f"Field {key!r} must be a number.")
    return float(value)


def _integer(body: Any, key: str) -> int:
    value = _field(body, key)
    if isinstance(value, bool):
        raise InvalidRequestBody(f"Field {key!r} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise InvalidRequestBody(f"Field {key!r} must be an integer.")


def _strings(body: Any, key: str) -> set[str]:
    value = _field(body, key)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise InvalidRequestBody(f"Field {key!r} must be an array of strings.")
    return set(value)


def _parse_date(text: str) -> date:
    match = _DATE.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"Invalid date: {text!r}")
    year, month, day = (int(part) for part in match.groups())
    return date(year, month, day)


def _semester_json(view) -> dict[str, str]:
    return {
        "id": view.id,
        "name": view.name,
        "startDate": view.start_date,
        "endDate": view.end_date,
    }


@dataclass
class StudentController:
    """Endpoints for a student's semesters and subject attempts."""

    students: StudentRepository
    subjects: SubjectRepository

    def register_student(self, body: Any) -> Response:
        student_id = _string(body, "id")
        RegisterStudent(self.students).execute(student_id)
        return Response(CREATED)

    def list_semesters(self, student_id: str) -> Response:
        semesters = ListStudentSemesters(self.students).execute(student_id)
        return Response(OK, {"semesters": [_semester_json(view) for view in semesters]})

    def plan_semester(self, student_id: str, body: Any) -> Response:
        start_text = _string(body, "startDate")
        end_text = _string(body, "endDate")
        view = PlanSemester(self.students).execute(
            student_id, _parse_date(start_text), _parse_date(end_text)
        )
        return Response(CREATED, _semester_json(view))

    def edit_semester(self, student_id: str, semester_id: str, body: Any) -> Response:
        name = _string(body, "name")
        start_text = _string(body, "startDate")
        end_text = _string(body, "endDate")
        EditStudentSemester(self.students).execute(
            student_id, semester_id, name, _parse_date(start_text), _parse_date(end_text)
        )
        return Response(NO_CONTENT)

    def remove_semester(self, student_id: str, semester_id: str) -> Response:
        RemoveStudentSemester(self.students).execute(student_id, semester_id)
        return Response(NO_CONTENT)

    def list_subject_attempts(self, student_id: str, semester_id: str) -> Response:
        attempts = ListSubjectAttemptsBySemester(self.students).execute(student_id, semester_id)
        return Response(
            OK,
            {
                "subjectAttempts": [
                    {
                        "id": attempt.id,
                        "subjectId": attempt.subject_id,
                        "professor": attempt.professor or None,
                        "grade": None if attempt.grade == NO_GRADE else float(attempt.grade),
                    }
                    for attempt in attempts
                ]
            },
        )

    def plan_subject_attempt(self, student_id: str, semester_id: str, body: Any) -> Response:
        subject_id = _string(body, "subjectId")
        attempt_id = PlanSubjectAttempt(self.students).execute(
            student_id, semester_id, subject_id
        )
        return Response(OK, {"id": attempt_id})

    def edit_subject_attempt(
        self, student_id: str, semester_id: str, attempt_id: str, body: Any
    ) -> Response:
        professor = "" if _field(body, "professor") is None else _string(body, "professor")
        grade = NO_GRADE if _field(body, "grade") is None else _number(body, "grade")
        new_semester_id = _string(body, "semesterId")
        EditSubjectAttempt(self.students).execute(
            student_id, semester_id, attempt_id, professor, grade, new_semester_id
        )
        return Response(NO_CONTENT)

    def remove_subject_attempt(
        self, student_id: str, semester_id: str, attempt_id: str
    ) -> Response:
        RemoveSubjectAttempt(self.students).execute(student_id, semester_id, attempt_id)
        return Response(NO_CONTENT)


@dataclass
class SubjectController:
    """Endpoints for the subject catalogue."""

    subjects: SubjectRepository

    def list_subjects(self) -> Response:
        subjects = ListSubjects(self.subjects).execute()
        return Response(
            OK,
            {
                "subjects": [
                    {
                        "id": view.id,
                        "code": view.code,
                        "name": view.name,
                        "credits": view.credits,
                    }
                    for view in subjects
                ]
            },
        )

    def register_subject(self, body: Any) -> Response:
        code = _string(body, "code")
        name = _string(body, "name")
        credits = _integer(body, "credits")
        prerequisites = _strings(body, "prerequisites")
        corequisites = _strings(body, "corequisites")
        subject_id = RegisterSubject(self.subjects).execute(
            code, name, credits, prerequisites, corequisites
        )
        return Response(CREATED, {"id": subject_id})

    def remove_subject(self, subject_id: str) -> Response:
        RemoveSubject(self.subjects).execute(subject_id)
        return Response(NO_CONTENT)