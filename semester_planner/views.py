"""Read-only views of planning data handed out by the services."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StudentSemesterView:
    """A student's semester with its dates as ISO strings (YYYY-MM-DD)."""

    id: str
    name: str
    start_date: str
    end_date: str


@dataclass(frozen=True)
class SubjectAttemptView:
    """An attempt at a subject; an empty professor or a grade of -1 means unset."""

    id: str
    subject_id: str
    professor: str
    grade: float


@dataclass(frozen=True)
class SubjectView:
    """A subject's identity, code, name and credits."""

    id: str
    code: str
    name: str
    credits: int