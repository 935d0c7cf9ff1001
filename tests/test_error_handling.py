import asyncio
import json

import pytest
from starlette.requests import Request

from unistay.core import error_handling
from unistay.core.exceptions import AppException, ConflictError, ErrorCode, NotFoundError


class RecordingLogger:
    def __init__(self):
        self.calls = []

    def __getattr__(self, level):
        return lambda message, **kwargs: self.calls.append(level)


def make_request():
    return Request({"type": "http", "method": "PUT", "path": "/api/v1/bookings/x", "headers": [], "query_string": b""})


@pytest.fixture()
def recorder(monkeypatch):
    logger = RecordingLogger()
    monkeypatch.setattr(error_handling, "logger", logger)
    return logger


@pytest.mark.parametrize(
    "exc, level",
    [
        (ConflictError("taken", error_code=ErrorCode.NO_ROOMS_AVAILABLE), "warning"),
        (NotFoundError("Booking", "x"), "warning"),
        (AppException("boom"), "error"),
    ],
)
def test_application_errors_are_logged_by_severity(recorder, exc, level):
    response = asyncio.run(error_handling.handle_application_exception(make_request(), exc))

    assert recorder.calls == [level]
    assert response.status_code == exc.status_code
    assert json.loads(response.body)["error"]["code"] == exc.error_code.value
