"""Questionnaire lifecycle: create, copy, bulk edit, bulk add, access toggle and delete."""

from dataclasses import dataclass, field
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from accounts.models import ReviewUser
from assignments.models import AssignmentQuestionnaire
from folders.models import QuestionnaireNode
from folders.service import file_questionnaire
from questionnaires.models import Answer, Question, QuestionAdvice, Questionnaire
from questionnaires.question_types import resolve_question_type, resolve_questionnaire_type

from ..exceptions import HasResponsesError, QuestionNotFoundError, QuestionnaireInUseError, QuestionnaireNotFoundError
from ..schema import QuestionnaireCreateSchema, QuestionnaireUpdateSchema
from .answer_guard import check_and_delete_responses
from .question_service import apply_question_patch, next_seq

logger = structlog.get_logger(__name__)

COPIED_QUESTIONNAIRE_FIELDS = (
    "private",
    "min_question_score",
    "max_question_score",
    "questionnaire_type",
    "display_type",
    "instruction_loc",
)
COPIED_QUESTION_FIELDS = (
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


@dataclass
class QuestionnaireUpdateResult:
    questionnaire: Questionnaire
    updated_questions: list[UUID] = field(default_factory=list)
    failures: dict[UUID, str] = field(default_factory=dict)


@dataclass
class AddQuestionsResult:
    questions: list[Question]
    responses_invalidated: bool


class QuestionnaireService:
    """Lifecycle operations on a single questionnaire and its questions.

    Every mutation runs in one transaction and re-reads the questionnaire row under
    ``select_for_update`` so concurrent deletes and edits serialize.
    """

    def __init__(self, questionnaire_id: UUID) -> None:
        """Load the questionnaire.

        Raises:
            QuestionnaireNotFoundError: If it does not exist.
        """
        questionnaire = Questionnaire.objects.with_questions().filter(id=questionnaire_id).first()
        if questionnaire is None:
            raise QuestionnaireNotFoundError(questionnaire_id)
        self.questionnaire = questionnaire

    def _lock(self) -> Questionnaire:
        """Re-read and lock the questionnaire row inside the current transaction."""
        questionnaire = Questionnaire.objects.select_for_update().filter(id=self.questionnaire.id).first()
        if questionnaire is None:
            raise QuestionnaireNotFoundError(self.questionnaire.id)
        self.questionnaire = questionnaire
        return questionnaire

    @classmethod
    @transaction.atomic
    def create_questionnaire(cls, payload: QuestionnaireCreateSchema, actor: ReviewUser) -> Questionnaire:
        """Create a questionnaire owned by the actor's instructor and file it under its category.

        Args:
            payload: The questionnaire fields.
            actor: The user creating the questionnaire.

        Returns:
            The created, filed questionnaire.

        Raises:
            ValidationError: If the name is blank or the scoring bounds are invalid.
            UnknownQuestionnaireTypeError: If the questionnaire type is not recognised.
            FilingError: If there is no folder for the questionnaire's category. Nothing is persisted.
        """
        name = payload.name.strip()
        if not name:
            raise ValidationError({"name": "A rubric or survey must have a title."})
        questionnaire_type = resolve_questionnaire_type(payload.questionnaire_type)

        questionnaire = Questionnaire(
            name=name,
            instructor_id=actor.acting_instructor_id,
            private=payload.private,
            min_question_score=payload.min_question_score,
            max_question_score=payload.max_question_score,
            questionnaire_type=questionnaire_type,
            display_type=questionnaire_type.display_type,
        )
        if payload.instruction_loc:
            questionnaire.instruction_loc = payload.instruction_loc
        questionnaire.save()
        file_questionnaire(questionnaire)

        logger.info("questionnaire_created", questionnaire_id=str(questionnaire.id), type=questionnaire_type.value)
        return questionnaire

    @classmethod
    @transaction.atomic
    def copy_questionnaire(cls, source_id: UUID, actor: ReviewUser) -> Questionnaire:
        """Deep-copy a questionnaire, its questions and their advices.

        The copy is named "Copy of <name>", belongs to the actor's instructor and is filed
        under the same category as the source.

        Args:
            source_id: The questionnaire to copy.
            actor: The user performing the copy.

        Returns:
            The persisted and filed copy.

        Raises:
            QuestionnaireNotFoundError: If the source does not exist.
            FilingError: If the copy cannot be filed. Nothing is persisted.
        """
        source = Questionnaire.objects.prefetch_related("questions__advices").filter(id=source_id).first()
        if source is None:
            raise QuestionnaireNotFoundError(source_id)

        clone = Questionnaire(
            name=f"Copy of {source.name}"[:255],
            instructor_id=actor.acting_instructor_id,
            **{name: getattr(source, name) for name in COPIED_QUESTIONNAIRE_FIELDS},
        )
        clone.save()

        questions: list[Question] = []
        advices: list[QuestionAdvice] = []
        for source_question in source.questions.all():
            question = Question(
                questionnaire=clone, **{name: getattr(source_question, name) for name in COPIED_QUESTION_FIELDS}
            )
            questions.append(question)
            advices.extend(
                QuestionAdvice(question=question, score=advice.score, advice=advice.advice)
                for advice in source_question.advices.all()
            )
        Question.objects.bulk_create(questions)
        QuestionAdvice.objects.bulk_create(advices)

        file_questionnaire(clone)

        logger.info(
            "questionnaire_copied",
            source_id=str(source.id),
            questionnaire_id=str(clone.id),
            questions=len(questions),
        )
        return clone

    @transaction.atomic
    def update_questionnaire(self, payload: QuestionnaireUpdateSchema) -> QuestionnaireUpdateResult:
        """Update questionnaire fields and apply per-question patches.

        Questionnaire fields are applied first; an invalid value aborts the whole update.
        Each question patch then runs in its own savepoint: a patch that names a question
        outside this questionnaire, or that fails validation, is skipped and reported while
        the other patches are still applied.

        Args:
            payload: Questionnaire fields and question patches keyed by question id.

        Returns:
            The refreshed questionnaire, the ids of questions that changed and the failed patches.
        """
        questionnaire = self._lock()

        fields = payload.questionnaire.model_dump(exclude_unset=True, exclude_none=True)
        changed = [name for name, value in fields.items() if getattr(questionnaire, name) != value]
        for name in changed:
            setattr(questionnaire, name, fields[name])
        if changed:
            questionnaire.save(update_fields=[*changed, "updated_at"])

        result = QuestionnaireUpdateResult(questionnaire=questionnaire)
        for question_id, patch in payload.questions.items():
            try:
                with transaction.atomic():
                    question = questionnaire.questions.select_for_update().filter(id=question_id).first()
                    if question is None:
                        raise QuestionNotFoundError(question_id)
                    if apply_question_patch(question, patch):
                        result.updated_questions.append(question_id)
            except QuestionNotFoundError as e:
                result.failures[question_id] = str(e)
            except ValidationError as e:
                result.failures[question_id] = " ".join(e.messages)

        if result.failures:
            logger.warning(
                "questionnaire_question_patches_failed",
                questionnaire_id=str(questionnaire.id),
                failed=[str(question_id) for question_id in result.failures],
            )
        logger.info(
            "questionnaire_updated",
            questionnaire_id=str(questionnaire.id),
            fields=changed,
            updated_questions=len(result.updated_questions),
        )
        result.questionnaire = Questionnaire.objects.with_questions().get(id=questionnaire.id)
        return result

    @transaction.atomic
    def delete_questionnaire(self) -> str:
        """Delete the questionnaire with its questions, advices and folder node.

        Returns:
            The deleted questionnaire's name.

        Raises:
            QuestionnaireInUseError: If an assignment uses the questionnaire.
            HasResponsesError: If any of its questions has recorded answers.
        """
        questionnaire = self._lock()

        usage = (
            AssignmentQuestionnaire.objects.select_related("assignment")
            .filter(questionnaire=questionnaire)
            .order_by("created_at")
            .first()
        )
        if usage is not None:
            raise QuestionnaireInUseError(usage.assignment.name)
        if Answer.objects.filter(question__questionnaire=questionnaire).exists():
            raise HasResponsesError()

        QuestionAdvice.objects.filter(question__questionnaire=questionnaire).delete()
        questionnaire.questions.all().delete()
        QuestionnaireNode.objects.filter(questionnaire=questionnaire).delete()
        name, questionnaire_id = questionnaire.name, questionnaire.id
        questionnaire.delete()

        logger.info("questionnaire_deleted", questionnaire_id=str(questionnaire_id))
        return name

    @transaction.atomic
    def toggle_access(self) -> Questionnaire:
        """Flip the questionnaire between public and private."""
        questionnaire = self._lock()
        questionnaire.private = not questionnaire.private
        questionnaire.save(update_fields=["private", "updated_at"])
        logger.info(
            "questionnaire_access_toggled", questionnaire_id=str(questionnaire.id), private=questionnaire.private
        )
        return questionnaire

    @transaction.atomic
    def add_questions(self, question_type: str, count: int, shared_weight: int | None = None) -> AddQuestionsResult:
        """Append ``count`` questions of one type after the current last question.

        All questions are created or none are. Answers already recorded against the
        questionnaire are invalidated first.

        Args:
            question_type: The question type tag.
            count: How many questions to add.
            shared_weight: The weight given to each question of a score-bearing type.

        Returns:
            The new questions in sequence order and whether answers were invalidated.

        Raises:
            UnknownQuestionTypeError: If the type is not a known question type. Nothing changes.
            ValidationError: If a question cannot be created. Nothing changes.
        """
        variant = resolve_question_type(question_type)
        if count < 1:
            raise ValidationError({"count": "At least one question must be added."})
        questionnaire = self._lock()

        responses_invalidated = check_and_delete_responses(questionnaire.id)

        start = next_seq(questionnaire)
        questions: list[Question] = []
        for offset in range(count):
            question = Question(
                questionnaire=questionnaire,
                seq=start + offset,
                txt="",
                break_before=True,
                **variant.initial_fields(shared_weight),
            )
            question.save()
            questions.append(question)

        logger.info(
            "questions_added",
            questionnaire_id=str(questionnaire.id),
            question_type=variant.question_type.value,
            count=count,
            responses_invalidated=responses_invalidated,
        )
        return AddQuestionsResult(questions=questions, responses_invalidated=responses_invalidated)
