"""Students, their planned semesters and the subjects attempted in them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from .errors import DomainError

NO_GRADE = -1.0


@dataclass
class SubjectAttempt:
    """One try at passing a subject; an empty professor or NO_GRADE means unset."""

    id: str
    subject_id: str
    professor: str = ""
    grade: float = NO_GRADE


def _check_period(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise DomainError("Semester should start before ending.")


def _periods_intersect(start: date, end: date, other_start: date, other_end: date) -> bool:
    # Periods run from start up to, but not including, end.
    return start <= other_start < end or other_start <= start < other_end


@dataclass
class StudentSemester:
    """A named period of study holding subject attempts."""

    id: str
    name: str
    start_date: date
    end_date: date
    attempts: list[SubjectAttempt] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.attempts = list(self.attempts)

    @classmethod
    def create(cls, id: str, name: str, start_date: date, end_date: date) -> StudentSemester:
        """Make a new empty semester, checking that it starts before it ends."""
        _check_period(start_date, end_date)
        return cls(id, name, start_date, end_date)

    def find_subject_attempt(self, subject_id: str) -> SubjectAttempt:
        """Return the attempt at the given subject."""
        for attempt in self.attempts:
            if attempt.subject_id == subject_id:
                return attempt
        raise DomainError("Subject attempt not found")

    def find_subject_attempt_by_id(self, attempt_id: str) -> SubjectAttempt:
        """Return the attempt with the given id."""
        for attempt in self.attempts:
            if attempt.id == attempt_id:
                return attempt
        raise DomainError("Subject attempt not found")

    def has_attempt_for_subject(self, subject_id: str) -> bool:
        return any(attempt.subject_id == subject_id for attempt in self.attempts)

    def change_dates(self, start_date: date, end_date: date) -> None:
        _check_period(start_date, end_date)
        self.start_date = start_date
        self.end_date = end_date

    def add_subject_attempt(self, attempt: SubjectAttempt) -> None:
        if self.has_attempt_for_subject(attempt.subject_id):
            raise DomainError("A subject can not be attempted twice on a semester.")
        self.attempts.append(attempt)

    def remove_subject_attempt(self, attempt_id: str) -> None:
        """Remove the attempt with the given id; unknown ids are ignored."""
        self.attempts = [a for a in self.attempts if a.id != attempt_id]

    def change_subject_grade(self, attempt_id: str, grade: float) -> None:
        self.find_subject_attempt_by_id(attempt_id).grade = grade

    def change_subject_professor(self, attempt_id: str, professor: str) -> None:
        self.find_subject_attempt_by_id(attempt_id).professor = professor


@dataclass
class Student:
    """A student and the semesters they have planned."""

    id: str
    semesters: list[StudentSemester] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.semesters = list(self.semesters)

    def find_semester(self, semester_id: str) -> StudentSemester:
        for semester in self.semesters:
            if semester.id == semester_id:
                return semester
        raise DomainError("Semester not found.")

    def _check_semester_period(
        self, start_date: date, end_date: date, semester_id: str = ""
    ) -> None:
        for semester in self.semesters:
            if semester.id == semester_id:
                continue
            if _periods_intersect(start_date, end_date, semester.start_date, semester.end_date):
                raise DomainError("Semester overlaps with previously registered semester.")

    def plan_semester(self, semester_id: str, start_date: date, end_date: date) -> StudentSemester:
        """Add a semester named after its start year and half, e.g. "2024.2"."""
        self._check_semester_period(start_date, end_date)
        half = 1 if start_date.month <= 6 else 2
        semester = StudentSemester.create(
            semester_id, f"{start_date.year}.{half}", start_date, end_date
        )
        self.semesters.append(semester)
        return semester

    def edit_semester(
        self, semester_id: str, name: str, start_date: date, end_date: date
    ) -> None:
        semester = self.find_semester(semester_id)
        self._check_semester_period(start_date, end_date, semester_id)
        semester.name = name
        semester.change_dates(start_date, end_date)

    def remove_semester(self, semester_id: str) -> None:
        """Remove the semester with the given id; unknown ids are ignored."""
        self.semesters = [s for s in self.semesters if s.id != semester_id]

    def plan_subject_attempt(self, attempt_id: str, semester_id: str, subject_id: str) -> None:
        semester = self.find_semester(semester_id)
        semester.add_subject_attempt(SubjectAttempt(attempt_id, subject_id))

    def remove_subject_attempt(self, semester_id: str, attempt_id: str) -> None:
        self.find_semester(semester_id).remove_subject_attempt(attempt_id)

    def change_subject_grade(self, semester_id: str, attempt_id: str, grade: float) -> None:
        self.find_semester(semester_id).change_subject_grade(attempt_id, grade)

    def change_subject_professor(
        self, semester_id: str, attempt_id: str, professor: str
    ) -> None:
        self.find_semester(semester_id).change_subject_professor(attempt_id, professor)

    def move_subject_attempt(
        self, old_semester_id: str, attempt_id: str, new_semester_id: str
    ) -> None:
        if old_semester_id == new_semester_id:
            return
        old_semester = self.find_semester(old_semester_id)
        new_semester = self.find_semester(new_semester_id)
        attempt = old_semester.find_subject_attempt_by_id(attempt_id)
        new_semester.add_subject_attempt(attempt)
        old_semester.remove_subject_attempt(attempt_id)