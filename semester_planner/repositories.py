"""Storage interfaces for students and subjects."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .students import Student
from .subjects import Subject


class StudentRepository(ABC):
    """Loads and stores students with their semesters and attempts."""

    @abstractmethod
    def find_by_id(self, student_id: str) -> Student:
        """Return the student with the given id."""

    @abstractmethod
    def save(self, student: Student) -> None:
        """Store the student, replacing what was stored before."""

    @abstractmethod
    def remove(self, student_id: str) -> None:
        """Delete the student with the given id."""


class SubjectRepository(ABC):
    """Loads and stores subjects."""

    @abstractmethod
    def find_all(self) -> list[Subject]:
        """Return every stored subject."""

    @abstractmethod
    def find_by_id(self, subject_id: str) -> Subject:
        """Return the subject with the given id."""

    @abstractmethod
    def code_exists(self, code: str) -> bool:
        """Tell whether a subject with this code is stored."""

    @abstractmethod
    def save(self, subject: Subject) -> None:
        """Store the subject, replacing what was stored before."""

    @abstractmethod
    def remove(self, subject_id: str) -> None:
        """Delete the subject with the given id."""