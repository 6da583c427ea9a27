"""Subjects offered for study and their requisites."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import DomainError


@dataclass
class Subject:
    """A subject with a code, a name, credits and requisite subject ids."""

    id: str
    code: str
    name: str
    credits: int
    prerequisites: set[str] = field(default_factory=set)
    corequisites: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.prerequisites = set(self.prerequisites)
        self.corequisites = set(self.corequisites)

    def add_prerequisite(self, prerequisite: str) -> None:
        """Require another subject before this one."""
        if prerequisite == self.id:
            raise DomainError("Cannot add same subject as prerequisite.")
        self.prerequisites.add(prerequisite)

    def remove_prerequisite(self, prerequisite: str) -> None:
        """Drop a prerequisite; unknown ids are ignored."""
        self.prerequisites.discard(prerequisite)

    def add_corequisite(self, corequisite: str) -> None:
        """Require another subject alongside this one."""
        self.corequisites.add(corequisite)

    def remove_corequisite(self, corequisite: str) -> None:
        """Drop a corequisite; unknown ids are ignored."""
        self.corequisites.discard(corequisite)