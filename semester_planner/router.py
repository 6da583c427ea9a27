"""Dispatch of HTTP requests to controller endpoints."""

from __future__ import annotations

from typing import Any

from .controllers import Response, StudentController, SubjectController

OK = 200
NOT_FOUND = 404


def _split_path(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def route(
    method: str,
    path: str,
    body: Any,
    student_controller: StudentController,
    subject_controller: SubjectController,
) -> Response:
    """Call the endpoint that serves this method and path, or answer 404."""
    if method == "OPTIONS":
        return Response(OK)

    if path == "/students" and method == "POST":
        return student_controller.register_student(body)

    if path == "/subjects":
        if method == "GET":
            return subject_controller.list_subjects()
        if method == "POST":
            return subject_controller.register_subject(body)

    match _split_path(path):
        case ["students", student_id, "semesters"]:
            if method == "GET":
                return student_controller.list_semesters(student_id)
            if method == "POST":
                return student_controller.plan_semester(student_id, body)
        case ["students", student_id, "semesters", semester_id]:
            if method == "PUT":
                return student_controller.edit_semester(student_id, semester_id, body)
            if method == "DELETE":
                return student_controller.remove_semester(student_id, semester_id)
        case ["students", student_id, "semesters", semester_id, "subject-attempts"]:
            if method == "GET":
                return student_controller.list_subject_attempts(student_id, semester_id)
            if method == "POST":
                return student_controller.plan_subject_attempt(student_id, semester_id, body)
        case ["students", student_id, "semesters", semester_id, "subject-attempts", attempt_id]:
            if method == "PUT":
                return student_controller.edit_subject_attempt(
                    student_id, semester_id, attempt_id, body
                )
            if method == "DELETE":
                return student_controller.remove_subject_attempt(
                    student_id, semester_id, attempt_id
                )
        case ["subjects", subject_id]:
            if method == "DELETE":
                return subject_controller.remove_subject(subject_id)

    return Response(NOT_FOUND)