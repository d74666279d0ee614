from uuid import UUID

from django.db.models import QuerySet
from ninja import Query
from ninja_extra import api_controller, route
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching
from ninja_jwt.authentication import JWTAuth

from accounts.models import Role
from common.controllers import UserAwareController
from common.schema import ErrorDetail, ResponseMessage, ValidationErrorResponse
from common.throttling import UserDefaultThrottle, WriteThrottle
from folders.exceptions import FilingError
from questionnaires import schema
from questionnaires.exceptions import QuestionnaireCopyError, QuestionnaireNotFoundError
from questionnaires.models import Questionnaire
from questionnaires.permissions import CanEditQuestionnaire, HasRole
from questionnaires.service import QuestionnaireService

RESPONSES_DELETED = " Any existing reviews for the questionnaire have been deleted!"


@api_controller("/questionnaires", auth=JWTAuth(), tags=["Questionnaires"], throttle=WriteThrottle())
class QuestionnaireController(UserAwareController):
    def get_queryset(self) -> QuerySet[Questionnaire]:
        """Questionnaires visible to the requesting user."""
        return Questionnaire.objects.for_user(self.user())

    def get_questionnaire(self, questionnaire_id: UUID) -> Questionnaire:
        """Fetch a visible questionnaire and check the route's object permissions."""
        questionnaire = self.get_queryset().with_questions().filter(id=questionnaire_id).first()
        if questionnaire is None:
            raise QuestionnaireNotFoundError(questionnaire_id)
        self.check_object_permissions(questionnaire)
        return questionnaire

    @route.get(
        "/",
        url_name="list_questionnaires",
        response=PaginatedResponseSchema[schema.QuestionnaireInListSchema],
        throttle=UserDefaultThrottle(),
    )
    @paginate(PageNumberPaginationExtra, page_size=20)
    @searching(Searching, search_fields=["name", "display_type"])
    def list_questionnaires(self) -> QuerySet[Questionnaire]:
        """Browse the questionnaires you can see: public ones and those of your instructor.

        Supports the 'search' query parameter on name and category.
        """
        return self.get_queryset()

    @route.get(
        "/{uuid:questionnaire_id}",
        url_name="get_questionnaire",
        response={200: schema.QuestionnaireSchema, 404: ErrorDetail},
        throttle=UserDefaultThrottle(),
    )
    def get_questionnaire_detail(self, questionnaire_id: UUID) -> Questionnaire:
        """Retrieve a questionnaire with its questions in sequence order."""
        return self.get_questionnaire(questionnaire_id)

    @route.post(
        "/",
        url_name="create_questionnaire",
        response={200: schema.QuestionnaireMessageResponse, 400: ValidationErrorResponse},
        permissions=[HasRole(Role.TEACHING_ASSISTANT)],
    )
    def create_questionnaire(self, payload: schema.QuestionnaireCreateSchema) -> schema.QuestionnaireMessageResponse:
        """Create a questionnaire and file it under its category folder.

        The questionnaire belongs to your instructor (or to you, if you are the instructor).
        """
        questionnaire = QuestionnaireService.create_questionnaire(payload, self.user())
        return schema.QuestionnaireMessageResponse(
            message="You have successfully created a questionnaire!",
            questionnaire=schema.QuestionnaireSchema.from_orm(questionnaire),
        )

    @route.post(
        "/copy",
        url_name="copy_questionnaire",
        response={200: schema.QuestionnaireMessageResponse, 404: ErrorDetail, 422: ErrorDetail},
        permissions=[HasRole(Role.TEACHING_ASSISTANT)],
    )
    def copy_questionnaire(
        self, questionnaire_id: UUID = Query(..., alias="id")
    ) -> schema.QuestionnaireMessageResponse:
        """Copy a questionnaire with all of its questions.

        The copy is named "Copy of <name>" and belongs to your instructor. If the copy
        cannot be filed under its category, nothing is created.
        """
        source = self.get_questionnaire(questionnaire_id)
        try:
            questionnaire = QuestionnaireService.copy_questionnaire(source.id, self.user())
        except FilingError as e:
            raise QuestionnaireCopyError(e) from e
        return schema.QuestionnaireMessageResponse(
            message=f"Copy of questionnaire {source.name} has been created successfully.",
            questionnaire=schema.QuestionnaireSchema.from_orm(questionnaire),
        )

    @route.put(
        "/{uuid:questionnaire_id}",
        url_name="update_questionnaire",
        response={200: schema.QuestionnaireUpdateResponse, 400: ValidationErrorResponse, 404: ErrorDetail},
        permissions=[CanEditQuestionnaire("edit")],
    )
    def update_questionnaire(
        self, questionnaire_id: UUID, payload: schema.QuestionnaireUpdateSchema
    ) -> schema.QuestionnaireUpdateResponse:
        """Update questionnaire fields and, optionally, individual questions.

        Question patches are applied independently. Patches that cannot be applied are
        listed in 'failed_questions' and do not prevent the others from being saved.
        """
        questionnaire = self.get_questionnaire(questionnaire_id)
        result = QuestionnaireService(questionnaire.id).update_questionnaire(payload)
        return schema.QuestionnaireUpdateResponse(
            message="The questionnaire has been successfully updated!",
            questionnaire=schema.QuestionnaireSchema.from_orm(result.questionnaire),
            failed_questions={str(question_id): reason for question_id, reason in result.failures.items()},
        )

    @route.delete(
        "/{uuid:questionnaire_id}",
        url_name="delete_questionnaire",
        response={200: ResponseMessage, 404: ErrorDetail, 409: ErrorDetail},
        permissions=[CanEditQuestionnaire("delete")],
    )
    def delete_questionnaire(self, questionnaire_id: UUID) -> ResponseMessage:
        """Delete a questionnaire with its questions.

        Refused while an assignment uses the questionnaire or while it has recorded responses.
        """
        questionnaire = self.get_questionnaire(questionnaire_id)
        name = QuestionnaireService(questionnaire.id).delete_questionnaire()
        return ResponseMessage(message=f'The questionnaire "{name}" has been successfully deleted.')

    @route.post(
        "/{uuid:questionnaire_id}/toggle_access",
        url_name="toggle_questionnaire_access",
        response={200: ResponseMessage, 404: ErrorDetail},
        permissions=[CanEditQuestionnaire("edit")],
    )
    def toggle_access(self, questionnaire_id: UUID) -> ResponseMessage:
        """Make a private questionnaire public, or a public one private."""
        questionnaire = self.get_questionnaire(questionnaire_id)
        questionnaire = QuestionnaireService(questionnaire.id).toggle_access()
        access = "private" if questionnaire.private else "public"
        return ResponseMessage(message=f'The questionnaire "{questionnaire.name}" has been successfully made {access}.')

    @route.post(
        "/{uuid:questionnaire_id}/add_new_questions",
        url_name="add_new_questions",
        response={200: schema.AddQuestionsResponse, 400: ValidationErrorResponse, 404: ErrorDetail},
        permissions=[CanEditQuestionnaire("edit")],
    )
    def add_new_questions(
        self, questionnaire_id: UUID, payload: schema.AddQuestionsSchema
    ) -> schema.AddQuestionsResponse:
        """Append blank questions of one type to the end of the questionnaire.

        Adding questions deletes any responses already recorded against the questionnaire;
        'responses_invalidated' tells you whether that happened.
        """
        questionnaire = self.get_questionnaire(questionnaire_id)
        result = QuestionnaireService(questionnaire.id).add_questions(
            payload.question_type, payload.count, payload.weight
        )
        message = "You have successfully added a new question."
        if result.responses_invalidated:
            message += RESPONSES_DELETED
        return schema.AddQuestionsResponse(
            message=message,
            responses_invalidated=result.responses_invalidated,
            questions=[schema.QuestionSchema.from_orm(question) for question in result.questions],
        )
