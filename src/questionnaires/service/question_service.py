"""Single-question operations and the field-level patching shared with bulk edits."""

from decimal import Decimal
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from accounts.models import ReviewUser
from questionnaires.models import Question, Questionnaire
from questionnaires.question_types import resolve_question_type

from ..schema import QuestionCreateSchema, QuestionPatchSchema
from .answer_guard import check_and_delete_responses

logger = structlog.get_logger(__name__)


def next_seq(questionnaire: Questionnaire) -> Decimal:
    """The sequence number following the questionnaire's last question (1 when empty)."""
    return Decimal(questionnaire.max_seq or 0) + 1


def apply_question_patch(question: Question, patch: QuestionPatchSchema) -> list[str]:
    """Write the patch fields whose value differs from the question's current value.

    Args:
        question: The question to change.
        patch: The requested changes. Only explicitly set fields are considered.

    Returns:
        The names of the fields that were written. Empty if nothing changed, in which
        case the question is not saved at all.

    Raises:
        ValidationError: If the resulting question is invalid, including an explicit
            null for a non-nullable field. Nothing is written.
    """
    changes = {
        field: value
        for field, value in patch.model_dump(exclude_unset=True).items()
        if getattr(question, field) != value
    }
    null_violations = {
        field: "This field cannot be null."
        for field, value in changes.items()
        if value is None and not Question._meta.get_field(field).null
    }
    if null_violations:
        raise ValidationError(null_violations)
    if not changes:
        return []
    for field, value in changes.items():
        setattr(question, field, value)
    question.save(update_fields=[*changes, "updated_at"])
    return list(changes)


class QuestionService:
    def __init__(self, question: Question) -> None:
        self.question = question

    @staticmethod
    def visible_questions(user: ReviewUser) -> QuerySet[Question]:
        """Questions of every questionnaire the user can see."""
        return Question.objects.select_related("questionnaire").filter(
            questionnaire__in=Questionnaire.objects.for_user(user)
        )

    @classmethod
    @transaction.atomic
    def create_question(cls, questionnaire: Questionnaire, payload: QuestionCreateSchema) -> Question:
        """Create a single question.

        The question is appended after the last one unless the payload sets ``seq``.

        Raises:
            UnknownQuestionTypeError: If the question type is not a known variant.
            ValidationError: If the question violates the model's constraints.
        """
        variant = resolve_question_type(payload.question_type)
        fields = payload.model_dump(exclude={"questionnaire_id", "question_type"}, exclude_none=True)
        fields.setdefault("seq", next_seq(questionnaire))
        question = Question(questionnaire=questionnaire, question_type=variant.question_type, **fields)
        question.save()
        logger.info("question_created", question_id=str(question.id), questionnaire_id=str(questionnaire.id))
        return question

    @transaction.atomic
    def update_question(self, payload: QuestionPatchSchema) -> Question:
        """Apply a patch to the question, writing only fields that change."""
        changed = apply_question_patch(self.question, payload)
        if changed:
            logger.info("question_updated", question_id=str(self.question.id), fields=changed)
        return self.question

    @transaction.atomic
    def delete_question(self) -> bool:
        """Delete the question after invalidating the questionnaire's recorded answers.

        Returns:
            Whether any answers were invalidated.
        """
        questionnaire_id: UUID = self.question.questionnaire_id
        responses_invalidated = check_and_delete_responses(questionnaire_id)
        question_id = self.question.id
        self.question.delete()
        logger.info("question_deleted", question_id=str(question_id), questionnaire_id=str(questionnaire_id))
        return responses_invalidated

    @staticmethod
    def list_question_types() -> list[str]:
        """Distinct question types in use, sorted by name."""
        return list(Question.objects.order_by("question_type").values_list("question_type", flat=True).distinct())
