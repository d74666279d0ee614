from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from accounts.controllers import AuthController
from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from folders.exceptions import FilingError
from questionnaires.controllers import QuestionController, QuestionnaireController
from questionnaires.exceptions import (
    HasResponsesError,
    NotFoundError,
    QuestionnaireCopyError,
    QuestionnaireInUseError,
    UnknownTypeError,
)

from .exception_handlers import (
    handle_django_validation_error,
    handle_filing_error,
    handle_general_exception,
    handle_has_responses_error,
    handle_not_found_error,
    handle_questionnaire_copy_error,
    handle_questionnaire_in_use_error,
    handle_unknown_type_error,
)

api = NinjaExtraAPI(
    title="Peer Review Questionnaires API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"Questionnaire and question management API {settings.VERSION}",
    app_name=f"peerreview-api-{settings.VERSION}",
    urls_namespace="api",
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Get the API version.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, VersionResponse(version=settings.VERSION)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Check the health of the API."""
    return 200, ResponseOk()


api.register_controllers(
    AuthController,
    QuestionnaireController,
    QuestionController,
)

EXCEPTION_HANDLERS = {
    Exception: handle_general_exception,
    ValidationError: handle_django_validation_error,
    NotFoundError: handle_not_found_error,
    UnknownTypeError: handle_unknown_type_error,
    QuestionnaireInUseError: handle_questionnaire_in_use_error,
    HasResponsesError: handle_has_responses_error,
    FilingError: handle_filing_error,
    QuestionnaireCopyError: handle_questionnaire_copy_error,
}

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
