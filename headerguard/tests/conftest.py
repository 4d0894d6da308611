"""
Shared fixtures for headerguard tests.
"""
import pytest
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient
from starlette.requests import Request
from starlette.responses import Response


class RecordingDiagnostics:
    """Diagnostics sink that keeps every warning in memory."""

    def __init__(self):
        self.messages = []

    def warn(self, message: str) -> None:
        self.messages.append(message)


def build_app(middleware) -> FastAPI:
    app = FastAPI()
    app.middleware("http")(middleware)

    @app.get("/")
    def index():
        return PlainTextResponse("Hello world!", headers={"X-Powered-By": "Starlette"})

    return app


@pytest.fixture
def check():
    """
    Returns `check(middleware, expected)`: requests "/" through `middleware`
    and asserts each expected header. A value of None means "absent".
    """
    def _check(middleware, expected):
        client = TestClient(build_app(middleware))
        response = client.get("/")
        assert response.status_code == 200, response.text
        assert response.text == "Hello world!"
        for name, value in expected.items():
            if value is None:
                assert name not in response.headers, f"{name} should be absent"
            else:
                assert response.headers.get(name) == value, name
        return response

    return _check


@pytest.fixture
def diagnostics():
    return RecordingDiagnostics()


def make_request(path: str = "/") -> Request:
    return Request({
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "root_path": "",
        "path": path,
        "query_string": b"",
        "headers": [],
    })


@pytest.fixture
def request_response():
    return make_request(), Response("ok")


@pytest.fixture
def request_factory():
    return make_request
