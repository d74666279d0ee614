"""Questionnaires, their ordered questions, advice per score and recorded answers."""

import re
import typing as t

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Max, Q

from accounts.models import ReviewUser, Role
from common.models import TimeStampedModel

from .question_types import OPTIONAL_FIELDS, QUESTION_VARIANTS, QuestionnaireType, QuestionType, QuestionVariant

SIZE_PATTERN = re.compile(r"^\d+(\s*,\s*\d+)?$")


def default_instruction_loc() -> str:
    return str(settings.DEFAULT_QUESTIONNAIRE_URL)


# ---- Questionnaire model ----


class QuestionnaireQueryset(models.QuerySet["Questionnaire"]):
    """Questionnaire queryset."""

    def with_questions(self) -> t.Self:
        """Prefetch questions in sequence order."""
        return self.prefetch_related("questions")

    def for_user(self, user: ReviewUser) -> t.Self:
        """Questionnaires visible to the user.

        Administrators see everything. Everyone else sees public questionnaires and
        those owned by the instructor they act for.
        """
        if user.is_admin:
            return self.all()
        return self.filter(Q(private=False) | Q(instructor_id=user.acting_instructor_id))


class QuestionnaireManager(models.Manager["Questionnaire"]):
    def get_queryset(self) -> QuestionnaireQueryset:
        """Get questionnaire queryset."""
        return QuestionnaireQueryset(self.model)

    def with_questions(self) -> QuestionnaireQueryset:
        """With questions."""
        return self.get_queryset().with_questions()

    def for_user(self, user: ReviewUser) -> QuestionnaireQueryset:
        """Questionnaires visible to the user."""
        return self.get_queryset().for_user(user)


class Questionnaire(TimeStampedModel):
    name = models.CharField(max_length=255, db_index=True)
    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="questionnaires", null=True, blank=True
    )
    private = models.BooleanField(default=False)
    min_question_score = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    max_question_score = models.IntegerField(default=5)
    questionnaire_type = models.CharField(
        choices=QuestionnaireType.choices, max_length=64, default=QuestionnaireType.REVIEW, db_index=True
    )
    display_type = models.CharField(max_length=64, blank=True)
    instruction_loc = models.TextField(default=default_instruction_loc, blank=True)

    objects = QuestionnaireManager()

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name

    def clean(self) -> None:
        """Validate the name and scoring bounds, and derive the display category."""
        if not self.name or not self.name.strip():
            raise ValidationError({"name": "A rubric or survey must have a title."})
        if self.min_question_score is not None and self.max_question_score is not None:
            if self.min_question_score >= self.max_question_score:
                raise ValidationError(
                    {"max_question_score": "The maximum question score must be greater than the minimum."}
                )
        if not self.display_type and self.questionnaire_type in QuestionnaireType.values:
            self.display_type = QuestionnaireType(self.questionnaire_type).display_type

    @property
    def max_seq(self) -> t.Any:
        """The highest question sequence number, or None when there are no questions."""
        return self.questions.aggregate(max_seq=Max("seq"))["max_seq"]

    def can_be_edited_by(self, user: ReviewUser) -> bool:
        """Administrators, the owning instructor and that instructor's assistants may edit."""
        if not user.has_role_at_least(Role.TEACHING_ASSISTANT):
            return False
        if user.is_admin:
            return True
        return self.instructor_id is not None and self.instructor_id == user.acting_instructor_id


# ---- Question ----


class Question(TimeStampedModel):
    questionnaire = models.ForeignKey(Questionnaire, on_delete=models.CASCADE, related_name="questions")
    seq = models.DecimalField(max_digits=6, decimal_places=2, db_index=True)
    txt = models.TextField(blank=True, default="")
    question_type = models.CharField(choices=QuestionType.choices, max_length=32)
    weight = models.IntegerField(null=True, blank=True, validators=[MinValueValidator(0)])
    size = models.CharField(max_length=32, null=True, blank=True)
    alternatives = models.TextField(null=True, blank=True, help_text="Choices separated by '|'.")
    max_label = models.CharField(max_length=255, null=True, blank=True)
    min_label = models.CharField(max_length=255, null=True, blank=True)
    break_before = models.BooleanField(default=True)

    class Meta:
        ordering = ["seq"]

    def __str__(self) -> str:
        return f"{self.question_type} #{self.seq}"

    @property
    def variant(self) -> QuestionVariant:
        return QUESTION_VARIANTS[QuestionType(self.question_type)]

    @property
    def alternatives_list(self) -> list[str]:
        if not self.alternatives:
            return []
        return [alternative.strip() for alternative in self.alternatives.split("|")]

    def clean(self) -> None:
        """Reject values in fields the question's variant does not use, and malformed sizes."""
        if self.question_type not in QuestionType.values:
            # the field's own choices validation reports this
            return
        errors: dict[str, str] = {
            name: f"{self.question_type} questions do not use {name}."
            for name in self.variant.unused_fields({field: getattr(self, field) for field in OPTIONAL_FIELDS})
        }
        if self.size and "size" not in errors:
            self.size = self.size.strip()
            if not SIZE_PATTERN.match(self.size):
                errors["size"] = 'Size must be "width,height" or a single width.'
        if errors:
            raise ValidationError(errors)


class QuestionAdvice(TimeStampedModel):
    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name="advices")
    score = models.IntegerField()
    advice = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["score"]


class Answer(TimeStampedModel):
    """A reviewer's recorded response to a question."""

    question = models.ForeignKey(Question, on_delete=models.PROTECT, related_name="answers")
    reviewer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="answers"
    )
    answer = models.IntegerField(null=True, blank=True)
    comments = models.TextField(blank=True, default="")
