from decimal import Decimal
from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import ConfigDict, Field

from common.schema import OneToTwoFiftyFiveString
from questionnaires.models import Question, Questionnaire

# ---- Responses ----


class QuestionSchema(ModelSchema):
    questionnaire_id: UUID

    class Meta:
        model = Question
        fields = (
            "id",
            "seq",
            "txt",
            "question_type",
            "weight",
            "size",
            "alternatives",
            "max_label",
            "min_label",
            "break_before",
        )


class QuestionnaireInListSchema(ModelSchema):
    instructor_id: UUID | None = None

    class Meta:
        model = Questionnaire
        fields = (
            "id",
            "name",
            "private",
            "min_question_score",
            "max_question_score",
            "questionnaire_type",
            "display_type",
            "instruction_loc",
            "created_at",
            "updated_at",
        )


class QuestionnaireSchema(QuestionnaireInListSchema):
    questions: list[QuestionSchema] = Field(default_factory=list)

    @staticmethod
    def resolve_questions(obj: Questionnaire) -> list[Question]:
        return list(obj.questions.all())


class QuestionnaireMessageResponse(Schema):
    message: str
    questionnaire: QuestionnaireSchema


class QuestionnaireUpdateResponse(QuestionnaireMessageResponse):
    failed_questions: dict[str, str] = Field(
        default_factory=dict, description="Question patches that were not applied, with the reason."
    )


class AddQuestionsResponse(Schema):
    message: str
    responses_invalidated: bool
    questions: list[QuestionSchema]


class QuestionMessageResponse(Schema):
    message: str
    question: QuestionSchema


class QuestionDeleteResponse(Schema):
    message: str
    responses_invalidated: bool


# ---- Payloads ----


class QuestionnaireCreateSchema(Schema):
    """Payload for creating a questionnaire.

    ``questionnaire_type`` accepts either the stored tag ("ReviewQuestionnaire")
    or its short form ("Review").
    """

    model_config = ConfigDict(extra="forbid")

    name: str = ""
    questionnaire_type: str
    private: bool = False
    min_question_score: int = 0
    max_question_score: int = 5
    instruction_loc: str | None = None


class QuestionnaireFieldsSchema(Schema):
    model_config = ConfigDict(extra="forbid")

    name: OneToTwoFiftyFiveString | None = None
    private: bool | None = None
    min_question_score: int | None = None
    max_question_score: int | None = None
    instruction_loc: str | None = None


class QuestionPatchSchema(Schema):
    """Field changes for a single question. Omitted fields are left untouched."""

    model_config = ConfigDict(extra="forbid")

    seq: Decimal | None = Field(None, max_digits=6, decimal_places=2)
    txt: str | None = None
    weight: int | None = None
    size: str | None = None
    alternatives: str | None = None
    max_label: str | None = None
    min_label: str | None = None
    break_before: bool | None = None


class QuestionnaireUpdateSchema(Schema):
    model_config = ConfigDict(extra="forbid")

    questionnaire: QuestionnaireFieldsSchema = Field(default_factory=QuestionnaireFieldsSchema)
    questions: dict[UUID, QuestionPatchSchema] = Field(
        default_factory=dict, description="Per-question patches keyed by question id."
    )


class AddQuestionsSchema(Schema):
    model_config = ConfigDict(extra="forbid")

    question_type: str
    count: int = Field(1, ge=1, le=100)
    weight: int | None = Field(None, ge=0, description="Weight given to every new score-bearing question.")


class QuestionCreateSchema(QuestionPatchSchema):
    questionnaire_id: UUID
    question_type: str
    txt: str | None = ""
    break_before: bool | None = True
