"""HTTP server exposing the planning API over a relational database."""

from __future__ import annotations

import json
import logging
import os
import sys
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import urlsplit

import sqlalchemy as sa
from sqlalchemy.engine import Engine

from .controllers import InvalidRequestBody, Response, StudentController, SubjectController
from .errors import DomainError
from .persistence import SqlStudentRepository, SqlSubjectRepository, create_schema
from .router import route

BAD_REQUEST = 400
INTERNAL_ERROR = 500

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "*",
}

_log = logging.getLogger(__name__)


def _error(status: int, message: str) -> Response:
    return Response(status, {"error": {"message": message}})


def _decode_body(body: bytes | str | None) -> Any:
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError as exc:
        raise InvalidRequestBody() from exc


def handle_request(method: str, path: str, body: bytes | str | None, engine: Engine) -> Response:
    """Serve one request and return the response with CORS headers added."""
    print(f"[{method}] {path}")
    try:
        students = SqlStudentRepository(engine)
        subjects = SqlSubjectRepository(engine)
        response = route(
            method,
            path,
            _decode_body(body),
            StudentController(students, subjects),
            SubjectController(subjects),
        )
    except InvalidRequestBody:
        response = _error(BAD_REQUEST, "Invalid request body.")
    except DomainError as exc:
        response = _error(BAD_REQUEST, exc.message)
    except Exception as exc:
        print(exc, file=sys.stderr)
        response = _error(INTERNAL_ERROR, "Internal error.")

    response.headers.update(CORS_HEADERS)
    return response


def _make_handler(engine: Engine) -> type[BaseHTTPRequestHandler]:
    class _Handler(BaseHTTPRequestHandler):
        def _dispatch(self) -> None:
            length = int(self.headers.get("Content-Length") or 0)
            raw = self.rfile.read(length) if length else b""
            response = handle_request(self.command, urlsplit(self.path).path, raw, engine)
            payload = b"" if response.body is None else json.dumps(response.body).encode()
            self.send_response(response.status)
            for name, value in response.headers.items():
                self.send_header(name, value)
            if response.body is not None:
                self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_OPTIONS = _dispatch

        def log_message(self, format: str, *args: Any) -> None:
            """Send access log lines to the module logger instead of stderr."""
            _log.debug("%s - %s", self.address_string(), format % args)

    return _Handler


def main(argv: list[str] | None = None) -> int:
    """Run the server on the given address and port until interrupted."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        print("Missing arguments. Usage: server <address> <port>", file=sys.stderr)
        return 1

    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        print("DATABASE_URL is not set.", file=sys.stderr)
        return 1

    address = f"{args[0]}:{args[1]}"
    parts = urlsplit(address if "://" in address else f"http://{address}")
    host = parts.hostname or ""
    port = parts.port or 0

    engine = sa.create_engine(database_url)
    create_schema(engine)
    server = ThreadingHTTPServer((host, port), _make_handler(engine))
    print(f"Listening on {address}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
        engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())