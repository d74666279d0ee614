"""The closed set of questionnaire and question variants.

Type names arriving from clients are resolved here against explicit tables.
Anything outside those tables is rejected, never mapped to a generic fallback.
"""

import typing as t
from dataclasses import dataclass, field

from django.db import models

from .exceptions import UnknownQuestionnaireTypeError, UnknownQuestionTypeError

# ---- Questionnaire types ----


class QuestionnaireType(models.TextChoices):
    REVIEW = "ReviewQuestionnaire", "Review"
    METAREVIEW = "MetareviewQuestionnaire", "Metareview"
    AUTHOR_FEEDBACK = "AuthorFeedbackQuestionnaire", "Author Feedback"
    TEAMMATE_REVIEW = "TeammateReviewQuestionnaire", "Teammate Review"
    SURVEY = "SurveyQuestionnaire", "Survey"
    ASSIGNMENT_SURVEY = "AssignmentSurveyQuestionnaire", "Assignment Survey"
    GLOBAL_SURVEY = "GlobalSurveyQuestionnaire", "Global Survey"
    COURSE_SURVEY = "CourseSurveyQuestionnaire", "Course Survey"
    BOOKMARK_RATING = "BookmarkRatingQuestionnaire", "Bookmark Rating"
    QUIZ = "QuizQuestionnaire", "Quiz"

    @property
    def display_type(self) -> str:
        """The category shown to users and used as the folder name."""
        return str(self.label)

    @classmethod
    def display_types(cls) -> list[str]:
        return [str(label) for label in cls.labels]


def resolve_questionnaire_type(name: str) -> QuestionnaireType:
    """Resolve a questionnaire type tag.

    The short form ("AuthorFeedback") is accepted alongside the stored tag
    ("AuthorFeedbackQuestionnaire").

    Raises:
        UnknownQuestionnaireTypeError: If the name is not a known questionnaire type.
    """
    candidate = name if name.endswith("Questionnaire") else f"{name}Questionnaire"
    try:
        return QuestionnaireType(candidate)
    except ValueError:
        raise UnknownQuestionnaireTypeError(name) from None


# ---- Question types ----


class QuestionType(models.TextChoices):
    CRITERION = "Criterion"
    SCALE = "Scale"
    CHECKBOX = "Checkbox"
    CAKE = "Cake"
    DROPDOWN = "Dropdown"
    MULTIPLE_CHOICE_CHECKBOX = "MultipleChoiceCheckbox", "Multiple Choice Checkbox"
    MULTIPLE_CHOICE_RADIO = "MultipleChoiceRadio", "Multiple Choice Radio"
    TEXT_AREA = "TextArea", "Text Area"
    TEXT_FIELD = "TextField", "Text Field"
    SECTION_HEADER = "SectionHeader", "Section Header"
    TABLE_HEADER = "TableHeader", "Table Header"
    COLUMN_HEADER = "ColumnHeader", "Column Header"
    UPLOAD_FILE = "UploadFile", "Upload File"


class QuestionFamily(models.TextChoices):
    SCORED = "scored"
    CHOICE = "choice"
    TEXT = "text"
    HEADER = "header"
    UPLOAD = "upload"


OPTIONAL_FIELDS: tuple[str, ...] = ("weight", "size", "alternatives", "max_label", "min_label")

_SCORED_DEFAULTS: dict[str, t.Any] = {"weight": 1, "max_label": "Strongly agree", "min_label": "Strongly disagree"}
_LABELLED_FIELDS = frozenset({"weight", "max_label", "min_label"})


@dataclass(frozen=True)
class QuestionVariant:
    """A question variant: its family, bulk-add defaults and the optional fields it uses."""

    question_type: QuestionType
    family: QuestionFamily
    defaults: dict[str, t.Any] = field(default_factory=dict)
    meaningful_fields: frozenset[str] = frozenset()

    @property
    def is_scored(self) -> bool:
        return self.family == QuestionFamily.SCORED

    def initial_fields(self, shared_weight: int | None = None) -> dict[str, t.Any]:
        """Field values for a freshly added question of this variant.

        Args:
            shared_weight: Overrides the default weight of score-bearing variants.

        Returns:
            Keyword arguments for constructing a Question.
        """
        fields = {"question_type": self.question_type, **self.defaults}
        if self.is_scored and shared_weight is not None:
            fields["weight"] = shared_weight
        return fields

    def unused_fields(self, values: t.Mapping[str, t.Any]) -> list[str]:
        """Names of optional fields that carry a value this variant does not use."""
        return [
            name
            for name in OPTIONAL_FIELDS
            if name not in self.meaningful_fields and values.get(name) not in (None, "")
        ]


QUESTION_VARIANTS: dict[QuestionType, QuestionVariant] = {
    QuestionType.CRITERION: QuestionVariant(
        QuestionType.CRITERION,
        QuestionFamily.SCORED,
        defaults={**_SCORED_DEFAULTS, "size": "50, 3"},
        meaningful_fields=_LABELLED_FIELDS | {"size"},
    ),
    QuestionType.SCALE: QuestionVariant(
        QuestionType.SCALE, QuestionFamily.SCORED, defaults=dict(_SCORED_DEFAULTS), meaningful_fields=_LABELLED_FIELDS
    ),
    QuestionType.CHECKBOX: QuestionVariant(
        QuestionType.CHECKBOX,
        QuestionFamily.SCORED,
        defaults=dict(_SCORED_DEFAULTS),
        meaningful_fields=_LABELLED_FIELDS,
    ),
    QuestionType.CAKE: QuestionVariant(
        QuestionType.CAKE,
        QuestionFamily.SCORED,
        defaults={**_SCORED_DEFAULTS, "size": "50, 3"},
        meaningful_fields=_LABELLED_FIELDS | {"size"},
    ),
    QuestionType.DROPDOWN: QuestionVariant(
        QuestionType.DROPDOWN,
        QuestionFamily.CHOICE,
        defaults={"alternatives": "0|1|2|3|4|5"},
        meaningful_fields=frozenset({"alternatives"}),
    ),
    QuestionType.MULTIPLE_CHOICE_CHECKBOX: QuestionVariant(
        QuestionType.MULTIPLE_CHOICE_CHECKBOX, QuestionFamily.CHOICE, meaningful_fields=frozenset({"alternatives"})
    ),
    QuestionType.MULTIPLE_CHOICE_RADIO: QuestionVariant(
        QuestionType.MULTIPLE_CHOICE_RADIO, QuestionFamily.CHOICE, meaningful_fields=frozenset({"alternatives"})
    ),
    QuestionType.TEXT_AREA: QuestionVariant(
        QuestionType.TEXT_AREA, QuestionFamily.TEXT, defaults={"size": "60, 5"}, meaningful_fields=frozenset({"size"})
    ),
    QuestionType.TEXT_FIELD: QuestionVariant(
        QuestionType.TEXT_FIELD, QuestionFamily.TEXT, defaults={"size": "30"}, meaningful_fields=frozenset({"size"})
    ),
    QuestionType.SECTION_HEADER: QuestionVariant(QuestionType.SECTION_HEADER, QuestionFamily.HEADER),
    QuestionType.TABLE_HEADER: QuestionVariant(QuestionType.TABLE_HEADER, QuestionFamily.HEADER),
    QuestionType.COLUMN_HEADER: QuestionVariant(QuestionType.COLUMN_HEADER, QuestionFamily.HEADER),
    QuestionType.UPLOAD_FILE: QuestionVariant(QuestionType.UPLOAD_FILE, QuestionFamily.UPLOAD),
}


def resolve_question_type(name: str) -> QuestionVariant:
    """Resolve a question type tag to its variant.

    Raises:
        UnknownQuestionTypeError: If the name is not one of the known question types.
    """
    try:
        return QUESTION_VARIANTS[QuestionType(name)]
    except ValueError:
        raise UnknownQuestionTypeError(name) from None
