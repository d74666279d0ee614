"""Exception handlers for the API.

Each domain error maps to a fixed status code and a human-readable ``detail``.
Unexpected exceptions are logged in full and answered with a generic 500.
"""

import typing as t
from copy import deepcopy

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja.responses import Response

from folders.exceptions import FilingError
from questionnaires.exceptions import (
    HasResponsesError,
    NotFoundError,
    QuestionnaireCopyError,
    QuestionnaireInUseError,
    UnknownTypeError,
)

logger = structlog.get_logger(__name__)


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle a general exception.

    The exception never reaches the client; the request context is logged instead.

    Args:
        request: The incoming HTTP request.
        exc: The exception.

    Returns:
        The response.
    """
    json_payload = None
    if request.method in ("POST", "PUT", "PATCH") and request.headers.get("Content-Type") == "application/json":
        try:
            json_payload = obfuscate(orjson.loads(request.body))
        except orjson.JSONDecodeError:
            json_payload = None
    logger.exception(
        "INTERNAL_SERVER_ERROR",
        method=request.method,
        path=request.path,
        headers=obfuscate(dict(request.headers)),
        query=obfuscate(request.GET.dict()),
        payload=json_payload,
        user=str(request.user) if getattr(request, "user", None) else None,
    )
    data: dict[str, t.Any] = {"detail": "Internal Server Error."}
    if settings.DEBUG:  # pragma: no cover
        data["exception"] = type(exc).__name__
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a validation error.

    Args:
        request: The incoming HTTP request.
        exc: The exception.
    """
    logger.info("VALIDATION_ERROR", path=request.path, messages=t.cast(ValidationError, exc).messages)
    if hasattr(exc, "error_dict"):
        error_dict = {k: [ee for e in v for ee in e] for k, v in exc.error_dict.items()}
    else:
        error_dict = {"__all__": list(t.cast(ValidationError, exc).messages)}
    return Response(status=400, data={"errors": error_dict})


def handle_not_found_error(request: HttpRequest, exc: NotFoundError | t.Type[NotFoundError]) -> Response:
    """Handle a missing questionnaire or question."""
    return Response(status=404, data={"detail": str(exc)})


def handle_unknown_type_error(request: HttpRequest, exc: UnknownTypeError | t.Type[UnknownTypeError]) -> Response:
    """Handle an unrecognised questionnaire or question type."""
    return Response(status=400, data={"detail": str(exc)})


def handle_questionnaire_in_use_error(
    request: HttpRequest, exc: QuestionnaireInUseError | t.Type[QuestionnaireInUseError]
) -> Response:
    """Handle deletion of a questionnaire an assignment still uses."""
    return Response(status=409, data={"detail": str(exc)})


def handle_has_responses_error(request: HttpRequest, exc: HasResponsesError | t.Type[HasResponsesError]) -> Response:
    """Handle deletion of a questionnaire with recorded responses."""
    return Response(status=409, data={"detail": str(exc)})


def handle_filing_error(request: HttpRequest, exc: FilingError | t.Type[FilingError]) -> Response:
    """Handle a questionnaire without a matching category folder."""
    return Response(status=422, data={"detail": str(exc)})


def handle_questionnaire_copy_error(
    request: HttpRequest, exc: QuestionnaireCopyError | t.Type[QuestionnaireCopyError]
) -> Response:
    """Handle a failed copy."""
    return Response(status=422, data={"detail": str(exc)})


SENSITIVE_KEYS = {"password", "token", "refresh", "access", "authorization", "cookie"}


def obfuscate(data: t.Any) -> t.Any:
    """Obfuscate sensitive data in payloads and headers."""
    if not isinstance(data, dict):
        return data
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data
