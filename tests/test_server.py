import json

import pytest
import sqlalchemy as sa
from sqlalchemy.pool import StaticPool

from semester_planner.persistence import create_schema
from semester_planner.server import handle_request, main

CORS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "*",
}


@pytest.fixture
def engine():
    eng = sa.create_engine(
        "sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}
    )
    create_schema(eng)
    yield eng
    eng.dispose()


def test_options_carries_cors_headers(engine):
    response = handle_request("OPTIONS", "/students", None, engine)
    assert response.status == 200
    assert response.headers == CORS


def test_register_and_list_semesters(engine):
    created = handle_request("POST", "/students", json.dumps({"id": "s1"}), engine)
    assert created.status == 201
    assert created.headers == CORS
    listed = handle_request("GET", "/students/s1/semesters", None, engine)
    assert listed.status == 200
    assert listed.body == {"semesters": []}


def test_bytes_body_round_trip(engine):
    handle_request("POST", "/students", b'{"id": "s1"}', engine)
    planned = handle_request(
        "POST",
        "/students/s1/semesters",
        b'{"startDate": "2024-02-01", "endDate": "2024-06-30"}',
        engine,
    )
    assert planned.status == 201
    listed = handle_request("GET", "/students/s1/semesters", b"", engine)
    assert listed.body == {"semesters": [planned.body]}


@pytest.mark.parametrize("body", ["{not json", '{"name": "x"}', "[1, 2]"])
def test_invalid_body_is_bad_request(engine, body):
    response = handle_request("POST", "/students", body, engine)
    assert response.status == 400
    assert response.body == {"error": {"message": "Invalid request body."}}


def test_domain_error_is_bad_request_with_message(engine):
    handle_request("POST", "/students", '{"id": "s1"}', engine)
    semester = '{"startDate": "2024-02-01", "endDate": "2024-06-30"}'
    handle_request("POST", "/students/s1/semesters", semester, engine)
    response = handle_request("POST", "/students/s1/semesters", semester, engine)
    assert response.status == 400
    assert response.body == {
        "error": {"message": "Semester overlaps with previously registered semester."}
    }
    assert response.headers == CORS


def test_unknown_student_is_internal_error(engine, capsys):
    response = handle_request("GET", "/students/ghost/semesters", None, engine)
    assert response.status == 500
    assert response.body == {"error": {"message": "Internal error."}}
    assert "Student not found" in capsys.readouterr().err


def test_request_is_logged(engine, capsys):
    handle_request("GET", "/subjects", None, engine)
    assert "[GET] /subjects" in capsys.readouterr().out


def test_unknown_route_is_not_found(engine):
    response = handle_request("GET", "/nowhere", None, engine)
    assert response.status == 404
    assert response.headers == CORS


def test_subject_lifecycle(engine):
    body = json.dumps(
        {"code": "MA1", "name": "Calculus", "credits": 4, "prerequisites": [], "corequisites": []}
    )
    created = handle_request("POST", "/subjects", body, engine)
    assert created.status == 201
    subject_id = created.body["id"]
    listed = handle_request("GET", "/subjects", None, engine)
    assert listed.body == {
        "subjects": [{"id": subject_id, "code": "MA1", "name": "Calculus", "credits": 4}]
    }
    duplicate = handle_request("POST", "/subjects", body, engine)
    assert duplicate.status == 400
    assert duplicate.body == {"error": {"message": "Subject with this code already exist."}}
    assert handle_request("DELETE", f"/subjects/{subject_id}", None, engine).status == 204
    assert handle_request("GET", "/subjects", None, engine).body == {"subjects": []}


@pytest.mark.parametrize("argv", [[], ["localhost"]])
def test_main_requires_address_and_port(argv, capsys):
    assert main(argv) == 1
    assert "Missing arguments. Usage: server <address> <port>" in capsys.readouterr().err


def test_main_requires_database_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    assert main(["localhost", "8080"]) == 1