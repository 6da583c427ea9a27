"""Relational storage of students and subjects."""

from __future__ import annotations

from collections import defaultdict

import sqlalchemy as sa
from sqlalchemy.engine import Connection, Engine

from .errors import DomainError
from .repositories import StudentRepository, SubjectRepository
from .students import NO_GRADE, Student, StudentSemester, SubjectAttempt
from .subjects import Subject

_metadata = sa.MetaData()

_student = sa.Table(
    "student",
    _metadata,
    sa.Column("id", sa.String, primary_key=True),
)

_student_semester = sa.Table(
    "student_semester",
    _metadata,
    sa.Column("id", sa.String, primary_key=True),
    sa.Column("student_id", sa.String, nullable=False, index=True),
    sa.Column("name", sa.String, nullable=False),
    sa.Column("start_date", sa.Date, nullable=False),
    sa.Column("end_date", sa.Date, nullable=False),
)

_subject_attempt = sa.Table(
    "subject_attempt",
    _metadata,
    sa.Column("id", sa.String, primary_key=True),
    sa.Column("semester_id", sa.String, nullable=False, index=True),
    sa.Column("subject_id", sa.String, nullable=False),
    sa.Column("professor", sa.String, nullable=True),
    sa.Column("grade", sa.Float, nullable=True),
)

_subject = sa.Table(
    "subject",
    _metadata,
    sa.Column("id", sa.String, primary_key=True),
    sa.Column("code", sa.String, nullable=False),
    sa.Column("name", sa.String, nullable=False),
    sa.Column("credits", sa.Integer, nullable=False),
)

_subject_prerequisite = sa.Table(
    "subject_prerequisite",
    _metadata,
    sa.Column("subject_id", sa.String, primary_key=True),
    sa.Column("prerequisite_id", sa.String, primary_key=True),
)

_subject_corequisite = sa.Table(
    "subject_corequisite",
    _metadata,
    sa.Column("subject_id", sa.String, primary_key=True),
    sa.Column("corequisite_id", sa.String, primary_key=True),
)


class StudentNotFound(LookupError):
    """No student is stored under the requested id."""


def create_schema(engine: Engine) -> None:
    """Create the tables the repositories use, leaving existing ones alone."""
    _metadata.create_all(engine)


def _upsert(conn: Connection, table: sa.Table, key: str, key_value: str, **values) -> None:
    result = conn.execute(
        sa.update(table).where(table.c[key] == key_value).values(**values)
    )
    if result.rowcount == 0:
        conn.execute(sa.insert(table).values({key: key_value, **values}))


class SqlStudentRepository(StudentRepository):
    """Students stored in a relational database."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def find_by_id(self, student_id: str) -> Student:
        with self.engine.connect() as conn:
            found = conn.execute(
                sa.select(_student.c.id).where(_student.c.id == student_id)
            ).first()
            if found is None:
                raise StudentNotFound("Student not found")

            semester_rows = conn.execute(
                sa.select(_student_semester)
                .where(_student_semester.c.student_id == student_id)
                .order_by(_student_semester.c.start_date.asc())
            ).all()

            attempt_rows = conn.execute(
                sa.select(_subject_attempt)
                .join(
                    _student_semester,
                    _student_semester.c.id == _subject_attempt.c.semester_id,
                )
                .where(_student_semester.c.student_id == student_id)
            ).all()

        attempts_by_semester: dict[str, list[SubjectAttempt]] = defaultdict(list)
        for row in attempt_rows:
            attempts_by_semester[row.semester_id].append(
                SubjectAttempt(
                    id=row.id,
                    subject_id=row.subject_id,
                    professor=row.professor or "",
                    grade=NO_GRADE if row.grade is None else float(row.grade),
                )
            )

        semesters = [
            StudentSemester(
                row.id,
                row.name,
                row.start_date,
                row.end_date,
                attempts_by_semester.get(row.id, []),
            )
            for row in semester_rows
        ]
        return Student(found.id, semesters)

    def save(self, student: Student) -> None:
        with self.engine.begin() as conn:
            exists = conn.execute(
                sa.select(_student.c.id).where(_student.c.id == student.id)
            ).first()
            if exists is None:
                conn.execute(sa.insert(_student).values(id=student.id))

            semester_ids = []
            for semester in student.semesters:
                semester_ids.append(semester.id)
                _upsert(
                    conn,
                    _student_semester,
                    "id",
                    semester.id,
                    student_id=student.id,
                    name=semester.name,
                    start_date=semester.start_date,
                    end_date=semester.end_date,
                )

                attempt_ids = []
                for attempt in semester.attempts:
                    attempt_ids.append(attempt.id)
                    _upsert(
                        conn,
                        _subject_attempt,
                        "id",
                        attempt.id,
                        semester_id=semester.id,
                        subject_id=attempt.subject_id,
                        professor=attempt.professor or None,
                        grade=None if attempt.grade == NO_GRADE else attempt.grade,
                    )

                conn.execute(
                    sa.delete(_subject_attempt).where(
                        _subject_attempt.c.semester_id == semester.id,
                        ~_subject_attempt.c.id.in_(attempt_ids),
                    )
                )

            stale = sa.select(_student_semester.c.id).where(
                _student_semester.c.student_id == student.id,
                ~_student_semester.c.id.in_(semester_ids),
            )
            conn.execute(
                sa.delete(_subject_attempt).where(_subject_attempt.c.semester_id.in_(stale))
            )
            conn.execute(
                sa.delete(_student_semester).where(
                    _student_semester.c.student_id == student.id,
                    ~_student_semester.c.id.in_(semester_ids),
                )
            )

    def remove(self, student_id: str) -> None:
        with self.engine.begin() as conn:
            semesters = sa.select(_student_semester.c.id).where(
                _student_semester.c.student_id == student_id
            )
            conn.execute(
                sa.delete(_subject_attempt).where(
                    _subject_attempt.c.semester_id.in_(semesters)
                )
            )
            conn.execute(
                sa.delete(_student_semester).where(
                    _student_semester.c.student_id == student_id
                )
            )
            conn.execute(sa.delete(_student).where(_student.c.id == student_id))


class SqlSubjectRepository(SubjectRepository):
    """Subjects stored in a relational database."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def find_all(self) -> list[Subject]:
        with self.engine.connect() as conn:
            ids = conn.execute(sa.select(_subject.c.id)).scalars().all()
        return [self.find_by_id(subject_id) for subject_id in ids]

    def find_by_id(self, subject_id: str) -> Subject:
        with self.engine.connect() as conn:
            row = conn.execute(
                sa.select(_subject).where(_subject.c.id == subject_id)
            ).first()
            prerequisites = conn.execute(
                sa.select(_subject_prerequisite.c.prerequisite_id).where(
                    _subject_prerequisite.c.subject_id == subject_id
                )
            ).scalars().all()
            corequisites = conn.execute(
                sa.select(_subject_corequisite.c.corequisite_id).where(
                    _subject_corequisite.c.subject_id == subject_id
                )
            ).scalars().all()

        if row is None:
            raise DomainError("Subject not found")

        return Subject(
            subject_id,
            row.code,
            row.name,
            int(row.credits),
            set(prerequisites),
            set(corequisites),
        )

    def code_exists(self, code: str) -> bool:
        with self.engine.connect() as conn:
            row = conn.execute(
                sa.select(_subject.c.id).where(_subject.c.code == code)
            ).first()
        return row is not None

    def save(self, subject: Subject) -> None:
        with self.engine.begin() as conn:
            _upsert(
                conn,
                _subject,
                "id",
                subject.id,
                code=subject.code,
                name=subject.name,
                credits=subject.credits,
            )
            self._replace_links(
                conn, _subject_prerequisite, "prerequisite_id", subject.id, subject.prerequisites
            )
            self._replace_links(
                conn, _subject_corequisite, "corequisite_id", subject.id, subject.corequisites
            )

    @staticmethod
    def _replace_links(
        conn: Connection, table: sa.Table, column: str, subject_id: str, linked: set[str]
    ) -> None:
        existing = set(
            conn.execute(
                sa.select(table.c[column]).where(table.c.subject_id == subject_id)
            ).scalars()
        )
        for linked_id in sorted(linked - existing):
            conn.execute(sa.insert(table).values({"subject_id": subject_id, column: linked_id}))
        conn.execute(
            sa.delete(table).where(
                table.c.subject_id == subject_id,
                ~table.c[column].in_(sorted(linked)),
            )
        )

    def remove(self, subject_id: str) -> None:
        with self.engine.begin() as conn:
            conn.execute(
                sa.delete(_subject_prerequisite).where(
                    _subject_prerequisite.c.subject_id == subject_id
                )
            )
            conn.execute(
                sa.delete(_subject_corequisite).where(
                    _subject_corequisite.c.subject_id == subject_id
                )
            )
            conn.execute(sa.delete(_subject).where(_subject.c.id == subject_id))