import copy
from datetime import date

import pytest

from semester_planner.controllers import (
    InvalidRequestBody,
    StudentController,
    SubjectController,
)
from semester_planner.errors import DomainError
from semester_planner.repositories import StudentRepository, SubjectRepository


class MemoryStudents(StudentRepository):
    def __init__(self):
        self.items = {}

    def find_by_id(self, student_id):
        return copy.deepcopy(self.items[student_id])

    def save(self, student):
        self.items[student.id] = copy.deepcopy(student)

    def remove(self, student_id):
        self.items.pop(student_id, None)


class MemorySubjects(SubjectRepository):
    def __init__(self):
        self.items = {}

    def find_all(self):
        return [copy.deepcopy(s) for s in self.items.values()]

    def find_by_id(self, subject_id):
        if subject_id not in self.items:
            raise DomainError("Subject not found")
        return copy.deepcopy(self.items[subject_id])

    def code_exists(self, code):
        return any(s.code == code for s in self.items.values())

    def save(self, subject):
        self.items[subject.id] = copy.deepcopy(subject)

    def remove(self, subject_id):
        self.items.pop(subject_id, None)


@pytest.fixture
def students():
    return MemoryStudents()


@pytest.fixture
def subjects():
    return MemorySubjects()


@pytest.fixture
def controller(students, subjects):
    ctrl = StudentController(students, subjects)
    ctrl.register_student({"id": "s1"})
    return ctrl


def test_register_student_stores_student(students, subjects):
    ctrl = StudentController(students, subjects)
    response = ctrl.register_student({"id": "s9"})
    assert response.status == 201
    assert response.body is None
    assert students.items["s9"].semesters == []


@pytest.mark.parametrize("body", [None, {}, {"id": 5}, ["s1"]])
def test_register_student_rejects_bad_body(students, subjects, body):
    with pytest.raises(InvalidRequestBody):
        StudentController(students, subjects).register_student(body)


def test_plan_semester_returns_created_semester(controller):
    response = controller.plan_semester("s1", {"startDate": "2024-02-01", "endDate": "2024-06-30"})
    assert response.status == 201
    assert response.body["startDate"] == "2024-02-01"
    assert response.body["endDate"] == "2024-06-30"
    assert response.body["name"] == "2024.1"


def test_list_semesters_matches_planned(controller):
    assert controller.list_semesters("s1").body == {"semesters": []}
    planned = controller.plan_semester(
        "s1", {"startDate": "2024-08-01", "endDate": "2024-12-15"}
    ).body
    response = controller.list_semesters("s1")
    assert response.status == 200
    assert response.body == {"semesters": [planned]}


def test_plan_semester_with_reversed_dates_is_domain_error(controller):
    with pytest.raises(DomainError):
        controller.plan_semester("s1", {"startDate": "2024-06-30", "endDate": "2024-02-01"})


def test_plan_semester_with_malformed_date_is_value_error(controller):
    with pytest.raises(ValueError):
        controller.plan_semester("s1", {"startDate": "soon", "endDate": "2024-02-01"})


def test_plan_semester_missing_field(controller):
    with pytest.raises(InvalidRequestBody):
        controller.plan_semester("s1", {"startDate": "2024-02-01"})


def test_edit_and_remove_semester(controller, students):
    semester_id = controller.plan_semester(
        "s1", {"startDate": "2024-02-01", "endDate": "2024-06-30"}
    ).body["id"]
    response = controller.edit_semester(
        "s1", semester_id, {"name": "spring", "startDate": "2024-03-01", "endDate": "2024-07-01"}
    )
    assert response.status == 204
    semester = students.items["s1"].semesters[0]
    assert semester.name == "spring"
    assert semester.start_date == date(2024, 3, 1)
    assert controller.remove_semester("s1", semester_id).status == 204
    assert controller.list_semesters("s1").body == {"semesters": []}


def test_subject_attempt_lifecycle(controller):
    first = controller.plan_semester(
        "s1", {"startDate": "2024-02-01", "endDate": "2024-06-30"}
    ).body["id"]
    second = controller.plan_semester(
        "s1", {"startDate": "2024-08-01", "endDate": "2024-12-15"}
    ).body["id"]
    planned = controller.plan_subject_attempt("s1", first, {"subjectId": "math"})
    assert planned.status == 200
    attempt_id = planned.body["id"]

    listed = controller.list_subject_attempts("s1", first).body
    assert listed == {
        "subjectAttempts": [
            {"id": attempt_id, "subjectId": "math", "professor": None, "grade": None}
        ]
    }

    edited = controller.edit_subject_attempt(
        "s1", first, attempt_id, {"professor": "Ada", "grade": 9.5, "semesterId": second}
    )
    assert edited.status == 204
    assert controller.list_subject_attempts("s1", first).body == {"subjectAttempts": []}
    moved = controller.list_subject_attempts("s1", second).body["subjectAttempts"]
    assert moved == [
        {"id": attempt_id, "subjectId": "math", "professor": "Ada", "grade": 9.5}
    ]

    assert controller.remove_subject_attempt("s1", second, attempt_id).status == 204
    assert controller.list_subject_attempts("s1", second).body == {"subjectAttempts": []}


def test_edit_subject_attempt_null_fields_clear_values(controller):
    semester_id = controller.plan_semester(
        "s1", {"startDate": "2024-02-01", "endDate": "2024-06-30"}
    ).body["id"]
    attempt_id = controller.plan_subject_attempt("s1", semester_id, {"subjectId": "math"}).body["id"]
    controller.edit_subject_attempt(
        "s1", semester_id, attempt_id, {"professor": "Ada", "grade": 7, "semesterId": semester_id}
    )
    controller.edit_subject_attempt(
        "s1", semester_id, attempt_id, {"professor": None, "semesterId": semester_id}
    )
    attempt = controller.list_subject_attempts("s1", semester_id).body["subjectAttempts"][0]
    assert attempt["professor"] is None
    assert attempt["grade"] is None


def test_edit_subject_attempt_requires_semester_id(controller):
    semester_id = controller.plan_semester(
        "s1", {"startDate": "2024-02-01", "endDate": "2024-06-30"}
    ).body["id"]
    attempt_id = controller.plan_subject_attempt("s1", semester_id, {"subjectId": "math"}).body["id"]
    with pytest.raises(InvalidRequestBody):
        controller.edit_subject_attempt("s1", semester_id, attempt_id, {"grade": 5})


def test_duplicate_subject_attempt_is_domain_error(controller):
    semester_id = controller.plan_semester(
        "s1", {"startDate": "2024-02-01", "endDate": "2024-06-30"}
    ).body["id"]
    controller.plan_subject_attempt("s1", semester_id, {"subjectId": "math"})
    with pytest.raises(DomainError):
        controller.plan_subject_attempt("s1", semester_id, {"subjectId": "math"})


def test_register_and_list_subjects(subjects):
    ctrl = SubjectController(subjects)
    response = ctrl.register_subject(
        {"code": "MA1", "name": "Calculus", "credits": 4, "prerequisites": [], "corequisites": ["x"]}
    )
    assert response.status == 201
    subject_id = response.body["id"]
    assert subjects.items[subject_id].corequisites == {"x"}
    listed = ctrl.list_subjects()
    assert listed.status == 200
    assert listed.body == {
        "subjects": [{"id": subject_id, "code": "MA1", "name": "Calculus", "credits": 4}]
    }


def test_register_subject_with_taken_code(subjects):
    ctrl = SubjectController(subjects)
    body = {"code": "MA1", "name": "Calculus", "credits": 4, "prerequisites": [], "corequisites": []}
    ctrl.register_subject(body)
    with pytest.raises(DomainError, match="Subject with this code already exist."):
        ctrl.register_subject(body)


@pytest.mark.parametrize(
    "body",
    [
        {"code": "MA1", "name": "Calculus", "credits": "4", "prerequisites": [], "corequisites": []},
        {"code": "MA1", "name": "Calculus", "credits": 4, "corequisites": []},
        {"code": "MA1", "name": "Calculus", "credits": 4, "prerequisites": [1], "corequisites": []},
    ],
)
def test_register_subject_rejects_bad_body(subjects, body):
    with pytest.raises(InvalidRequestBody):
        SubjectController(subjects).register_subject(body)
    assert subjects.items == {}


def test_remove_subject(subjects):
    ctrl = SubjectController(subjects)
    subject_id = ctrl.register_subject(
        {"code": "MA1", "name": "Calculus", "credits": 4, "prerequisites": [], "corequisites": []}
    ).body["id"]
    assert ctrl.remove_subject(subject_id).status == 204
    assert ctrl.list_subjects().body == {"subjects": []}