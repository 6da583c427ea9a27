"""Use cases that read and change the catalogue of subjects."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass

from .errors import DomainError
from .repositories import SubjectRepository
from .subjects import Subject
from .views import SubjectView


@dataclass
class ListSubjects:
    """List every subject in the catalogue."""

    subjects: SubjectRepository

    def execute(self) -> list[SubjectView]:
        return [
            SubjectView(
                id=subject.id,
                code=subject.code,
                name=subject.name,
                credits=subject.credits,
            )
            for subject in self.subjects.find_all()
        ]


@dataclass
class RegisterSubject:
    """Add a subject with a code not used before and return its new id."""

    subjects: SubjectRepository

    def execute(
        self,
        code: str,
        name: str,
        credits: int,
        prerequisites: Iterable[str],
        corequisites: Iterable[str],
    ) -> str:
        if self.subjects.code_exists(code):
            raise DomainError("Subject with this code already exist.")
        subject_id = str(uuid.uuid4())
        self.subjects.save(
            Subject(subject_id, code, name, credits, set(prerequisites), set(corequisites))
        )
        return subject_id


@dataclass
class AddPrerequisite:
    """Make one stored subject a prerequisite of another."""

    subjects: SubjectRepository

    def execute(self, subject_id: str, prerequisite_id: str) -> None:
        subject = self.subjects.find_by_id(subject_id)
        requisite = self.subjects.find_by_id(prerequisite_id)
        subject.add_prerequisite(requisite.id)
        self.subjects.save(subject)


@dataclass
class RemoveSubject:
    """Delete a subject from the catalogue."""

    subjects: SubjectRepository

    def execute(self, subject_id: str) -> None:
        self.subjects.remove(subject_id)