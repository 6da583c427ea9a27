"""Use cases that read and change a student's semester plan."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date

from .repositories import StudentRepository
from .students import Student, StudentSemester
from .views import StudentSemesterView, SubjectAttemptView


def _new_id() -> str:
    return str(uuid.uuid4())


def _semester_view(semester: StudentSemester) -> StudentSemesterView:
    return StudentSemesterView(
        id=semester.id,
        name=semester.name,
        start_date=semester.start_date.isoformat(),
        end_date=semester.end_date.isoformat(),
    )


@dataclass
class RegisterStudent:
    """Store a new student with no semesters."""

    students: StudentRepository

    def execute(self, student_id: str) -> str:
        self.students.save(Student(student_id))
        return student_id


@dataclass
class ListStudentSemesters:
    """List a student's semesters."""

    students: StudentRepository

    def execute(self, student_id: str) -> list[StudentSemesterView]:
        student = self.students.find_by_id(student_id)
        return [_semester_view(semester) for semester in student.semesters]


@dataclass
class PlanSemester:
    """Add a new semester to a student's plan."""

    students: StudentRepository

    def execute(self, student_id: str, start_date: date, end_date: date) -> StudentSemesterView:
        student = self.students.find_by_id(student_id)
        semester = student.plan_semester(_new_id(), start_date, end_date)
        self.students.save(student)
        return _semester_view(semester)


@dataclass
class EditStudentSemester:
    """Rename a semester and change its dates."""

    students: StudentRepository

    def execute(
        self,
        student_id: str,
        semester_id: str,
        name: str,
        start_date: date,
        end_date: date,
    ) -> None:
        student = self.students.find_by_id(student_id)
        student.edit_semester(semester_id, name, start_date, end_date)
        self.students.save(student)


@dataclass
class RemoveStudentSemester:
    """Drop a semester from a student's plan."""

    students: StudentRepository

    def execute(self, student_id: str, semester_id: str) -> None:
        student = self.students.find_by_id(student_id)
        student.remove_semester(semester_id)
        self.students.save(student)


@dataclass
class ListSubjectAttemptsBySemester:
    """List the subject attempts planned in one semester."""

    students: StudentRepository

    def execute(self, student_id: str, semester_id: str) -> list[SubjectAttemptView]:
        student = self.students.find_by_id(student_id)
        return [
            SubjectAttemptView(
                id=attempt.id,
                subject_id=attempt.subject_id,
                professor=attempt.professor,
                grade=attempt.grade,
            )
            for attempt in student.find_semester(semester_id).attempts
        ]


@dataclass
class PlanSubjectAttempt:
    """Plan an attempt at a subject in a semester and return its id."""

    students: StudentRepository

    def execute(self, student_id: str, semester_id: str, subject_id: str) -> str:
        student = self.students.find_by_id(student_id)
        attempt_id = _new_id()
        student.plan_subject_attempt(attempt_id, semester_id, subject_id)
        self.students.save(student)
        return attempt_id


@dataclass
class EditSubjectAttempt:
    """Change an attempt's grade and professor and possibly move it to another semester."""

    students: StudentRepository

    def execute(
        self,
        student_id: str,
        semester_id: str,
        attempt_id: str,
        professor: str,
        grade: float,
        new_semester_id: str,
    ) -> None:
        student = self.students.find_by_id(student_id)
        student.change_subject_grade(semester_id, attempt_id, grade)
        student.change_subject_professor(semester_id, attempt_id, professor)
        student.move_subject_attempt(semester_id, attempt_id, new_semester_id)
        self.students.save(student)


@dataclass
class RemoveSubjectAttempt:
    """Drop a subject attempt from a semester."""

    students: StudentRepository

    def execute(self, student_id: str, semester_id: str, attempt_id: str) -> None:
        student = self.students.find_by_id(student_id)
        student.remove_subject_attempt(semester_id, attempt_id)
        self.students.save(student)