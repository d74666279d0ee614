from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_jwt.authentication import JWTAuth

from accounts.models import Role
from common.controllers import UserAwareController
from common.schema import ErrorDetail, ValidationErrorResponse
from common.throttling import UserDefaultThrottle, WriteThrottle
from questionnaires import schema
from questionnaires.exceptions import QuestionnaireNotFoundError, QuestionNotFoundError
from questionnaires.models import Question, Questionnaire
from questionnaires.permissions import CanEditQuestionnaire, HasRole
from questionnaires.service import QuestionService

from .questionnaire import RESPONSES_DELETED


@api_controller(
    "/questions",
    auth=JWTAuth(),
    tags=["Questions"],
    throttle=WriteThrottle(),
    permissions=[HasRole(Role.TEACHING_ASSISTANT)],
)
class QuestionController(UserAwareController):
    def get_queryset(self) -> QuerySet[Question]:
        """Questions of the questionnaires visible to the requesting user."""
        return QuestionService.visible_questions(self.user())

    def get_question(self, question_id: UUID) -> Question:
        question = self.get_queryset().filter(id=question_id).first()
        if question is None:
            raise QuestionNotFoundError(question_id)
        self.check_object_permissions(question)
        return question

    @route.get(
        "/",
        url_name="list_questions",
        response=PaginatedResponseSchema[schema.QuestionSchema],
        throttle=UserDefaultThrottle(),
    )
    @paginate(PageNumberPaginationExtra, page_size=10)
    def list_questions(self) -> QuerySet[Question]:
        """List questions, ten per page, ordered by questionnaire and sequence."""
        return self.get_queryset().order_by("questionnaire__name", "questionnaire_id", "seq")

    @route.get("/types", url_name="list_question_types", response=list[str], throttle=UserDefaultThrottle())
    def list_question_types(self) -> list[str]:
        """Every distinct question type currently used by at least one question."""
        return QuestionService.list_question_types()

    @route.get(
        "/{uuid:question_id}",
        url_name="get_question",
        response={200: schema.QuestionSchema, 404: ErrorDetail},
        throttle=UserDefaultThrottle(),
    )
    def get_question_detail(self, question_id: UUID) -> Question:
        """Retrieve a single question."""
        return self.get_question(question_id)

    @route.post(
        "/",
        url_name="create_question",
        response={200: schema.QuestionMessageResponse, 400: ValidationErrorResponse, 404: ErrorDetail},
        permissions=[HasRole(Role.TEACHING_ASSISTANT), CanEditQuestionnaire("edit")],
    )
    def create_question(self, payload: schema.QuestionCreateSchema) -> schema.QuestionMessageResponse:
        """Add a single question to a questionnaire.

        Without 'seq' the question is appended after the last one.
        """
        questionnaire = Questionnaire.objects.for_user(self.user()).filter(id=payload.questionnaire_id).first()
        if questionnaire is None:
            raise QuestionnaireNotFoundError(payload.questionnaire_id)
        self.check_object_permissions(questionnaire)
        question = QuestionService.create_question(questionnaire, payload)
        return schema.QuestionMessageResponse(
            message="The question was successfully created.", question=schema.QuestionSchema.from_orm(question)
        )

    @route.put(
        "/{uuid:question_id}",
        url_name="update_question",
        response={200: schema.QuestionMessageResponse, 400: ValidationErrorResponse, 404: ErrorDetail},
        permissions=[HasRole(Role.TEACHING_ASSISTANT), CanEditQuestionnaire("edit")],
    )
    def update_question(self, question_id: UUID, payload: schema.QuestionPatchSchema) -> schema.QuestionMessageResponse:
        """Change fields of a question. Fields equal to their current value are not written."""
        question = QuestionService(self.get_question(question_id)).update_question(payload)
        return schema.QuestionMessageResponse(
            message="The question was successfully updated.", question=schema.QuestionSchema.from_orm(question)
        )

    @route.delete(
        "/{uuid:question_id}",
        url_name="delete_question",
        response={200: schema.QuestionDeleteResponse, 404: ErrorDetail},
        permissions=[HasRole(Role.TEACHING_ASSISTANT), CanEditQuestionnaire("edit")],
    )
    def delete_question(self, question_id: UUID) -> schema.QuestionDeleteResponse:
        """Delete a question.

        Responses already recorded against the questionnaire are deleted first;
        'responses_invalidated' tells you whether that happened.
        """
        responses_invalidated = QuestionService(self.get_question(question_id)).delete_question()
        message = "You have successfully deleted the question!"
        if responses_invalidated:
            message += RESPONSES_DELETED
        return schema.QuestionDeleteResponse(message=message, responses_invalidated=responses_invalidated)
