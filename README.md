# semester_planner

A small HTTP service that helps students plan their studies. It keeps a
catalogue of subjects with their prerequisites and corequisites. Students plan
semesters and record which subjects they attempt in each one, with the
professor and the grade.

## Installation

```
pip install .
```

## Running the server

The `semester-planner` command starts the server. It takes an address and a
port. It reads the database location from the `DATABASE_URL` environment
variable, which may be any SQLAlchemy database URL:

```
DATABASE_URL=sqlite:///planner.db semester-planner http://localhost 8080
```

At startup the server creates any tables that do not exist yet. It then serves
requests until it is interrupted. The command exits with status 1 if the
address or the port is missing, or if `DATABASE_URL` is not set.

The server prints every request as `[METHOD] /path`. Every response carries
permissive CORS headers (`Access-Control-Allow-Origin`, `-Headers` and
`-Methods`, each set to `*`). The server answers `OPTIONS` requests with
`200 OK`.

## Endpoints

| Method | Path | Purpose |
| ------ | ---- | ------- |
| POST | `/students` | Register a student: `{"id": "..."}` → `201` |
| GET | `/students/{studentId}/semesters` | `{"semesters": [{"id", "name", "startDate", "endDate"}]}` |
| POST | `/students/{studentId}/semesters` | Plan a semester: `{"startDate": "2024-02-01", "endDate": "2024-06-30"}` → `201` with the semester |
| PUT | `/students/{studentId}/semesters/{semesterId}` | Edit a semester: `{"name", "startDate", "endDate"}` → `204` |
| DELETE | `/students/{studentId}/semesters/{semesterId}` | Remove a semester → `204` |
| GET | `/students/{studentId}/semesters/{semesterId}/subject-attempts` | `{"subjectAttempts": [{"id", "subjectId", "professor", "grade"}]}` |
| POST | `/students/{studentId}/semesters/{semesterId}/subject-attempts` | Plan an attempt: `{"subjectId": "..."}` → `200` with `{"id": "..."}` |
| PUT | `/students/{studentId}/semesters/{semesterId}/subject-attempts/{attemptId}` | Edit an attempt: `{"professor", "grade", "semesterId"}` → `204` |
| DELETE | `/students/{studentId}/semesters/{semesterId}/subject-attempts/{attemptId}` | Remove an attempt → `204` |
| GET | `/subjects` | `{"subjects": [{"id", "code", "name", "credits"}]}` |
| POST | `/subjects` | Register a subject: `{"code", "name", "credits", "prerequisites": [...], "corequisites": [...]}` → `201` with `{"id": "..."}` |
| DELETE | `/subjects/{subjectId}` | Remove a subject → `204` |

Dates are written as year, month and day, separated by `-`, `/` or `.`. The
service always returns them as `YYYY-MM-DD`.

A planned semester gets its name from its start date. A semester that starts
between January and June is named like `2024.1`, and one that starts between
July and December like `2024.2`. A semester may be renamed later. The
following rules apply:

* A semester must not start after it ends.
* Semesters of one student must not overlap.
* A subject can be attempted at most once in a semester.
* A subject cannot be its own prerequisite.
* Subject codes must be unique.

In an attempt, a `null` professor or grade means it is not known yet. When an
attempt is edited, a `semesterId` other than the current one moves the attempt
to that semester.

## Errors

Errors come back as JSON of the form `{"error": {"message": "..."}}`:

* `400 Bad Request` with `Invalid request body.` when the body is not valid
  JSON, or when a required field is missing or has the wrong type.
* `400 Bad Request` with the rule's message when a planning rule is broken,
  for example `Semester overlaps with previously registered semester.`,
  `Semester not found.` or `Subject not found`.
* `500 Internal Server Error` with `Internal error.` for anything else. This
  includes an unknown student and a date that cannot be read.

Unknown routes, and methods that a route does not serve, answer
`404 Not Found`.

## Using the library

You can use the domain model and the use cases without the HTTP layer. The SQL
repositories take a SQLAlchemy engine:

```python
from datetime import date

from sqlalchemy import create_engine

from semester_planner.persistence import SqlStudentRepository, create_schema
from semester_planner.student_services import ListStudentSemesters, PlanSemester, RegisterStudent

engine = create_engine("sqlite:///planner.db")
create_schema(engine)

students = SqlStudentRepository(engine)
RegisterStudent(students).execute("student-1")
PlanSemester(students).execute("student-1", date(2024, 2, 1), date(2024, 6, 30))
for semester in ListStudentSemesters(students).execute("student-1"):
    print(semester.name, semester.start_date, semester.end_date)
```

The modules are:

* `semester_planner.students` defines `Student`, `StudentSemester` and
  `SubjectAttempt`.
* `semester_planner.subjects` defines `Subject`.
* `semester_planner.student_services` holds the student use cases, such as
  `RegisterStudent`, `PlanSemester`, `EditStudentSemester`,
  `RemoveStudentSemester`, `PlanSubjectAttempt`, `EditSubjectAttempt`,
  `RemoveSubjectAttempt`, `ListStudentSemesters` and
  `ListSubjectAttemptsBySemester`.
* `semester_planner.subject_services` holds `RegisterSubject`,
  `ListSubjects`, `AddPrerequisite` and `RemoveSubject`.
* `semester_planner.repositories` defines the abstract `StudentRepository`
  and `SubjectRepository`.
* `semester_planner.persistence` holds their SQL implementations and
  `create_schema`.
* `semester_planner.server.handle_request` serves a single request without
  opening a socket.

When a planning rule is broken, the library raises
`semester_planner.errors.DomainError`. Looking up an unknown student raises
`semester_planner.persistence.StudentNotFound`.

## What the service does not do

* The HTTP API has no endpoint to delete a student. The library can do it
  with `SqlStudentRepository.remove`.
* The HTTP API has no endpoint to add a prerequisite to an existing subject.
  The library can do it with `AddPrerequisite`.
* The HTTP API has no endpoint to edit a subject's corequisites after it is
  registered.
* The service has no authentication.

## Tests

```
pip install ".[test]"
pytest
```