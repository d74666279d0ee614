"""Tests for the structlog context middleware."""

import typing as t

import pytest
import structlog
from django.http import HttpRequest, HttpResponse
from django.test import RequestFactory

from accounts.models import ReviewUser
from common.middleware.observability import StructlogContextMiddleware

pytestmark = pytest.mark.django_db


class _ContextCapture:
    def __init__(self) -> None:
        self.context: dict[str, t.Any] = {}

    def __call__(self, request: HttpRequest) -> HttpResponse:
        self.context = structlog.contextvars.get_contextvars()
        return HttpResponse("ok")


@pytest.fixture
def capture() -> _ContextCapture:
    return _ContextCapture()


def test_binds_request_context_and_echoes_request_id(capture: _ContextCapture) -> None:
    request = RequestFactory().get("/api/questionnaires/", HTTP_X_REQUEST_ID="req-123", REMOTE_ADDR="10.0.0.1")

    response = StructlogContextMiddleware(capture)(request)

    assert response["X-Request-ID"] == "req-123"
    assert capture.context == {
        "request_id": "req-123",
        "method": "GET",
        "path": "/api/questionnaires/",
        "ip_address": "10.0.0.1",
    }
    assert structlog.contextvars.get_contextvars() == {}


def test_generates_request_id_and_prefers_forwarded_ip(capture: _ContextCapture) -> None:
    request = RequestFactory().get("/api/version", HTTP_X_FORWARDED_FOR="203.0.113.5, 10.0.0.1")

    response = StructlogContextMiddleware(capture)(request)

    assert response["X-Request-ID"] == capture.context["request_id"]
    assert capture.context["ip_address"] == "203.0.113.5"


def test_binds_authenticated_user(capture: _ContextCapture, instructor: ReviewUser) -> None:
    request = RequestFactory().get("/api/questionnaires/")
    request.user = instructor

    StructlogContextMiddleware(capture)(request)

    assert capture.context["user_id"] == str(instructor.id)


def test_disabled_observability_binds_nothing(capture: _ContextCapture, settings: t.Any) -> None:
    settings.ENABLE_OBSERVABILITY = False
    request = RequestFactory().get("/api/version")

    response = StructlogContextMiddleware(capture)(request)

    assert capture.context == {}
    assert "X-Request-ID" not in response
