"""Tests for updating a questionnaire and its questions in one request."""

import uuid
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from accounts.models import ReviewUser
from folders.models import TreeFolder
from questionnaires.models import Question, Questionnaire
from questionnaires.question_types import QuestionType
from questionnaires.schema import QuestionnaireUpdateSchema
from questionnaires.service import QuestionnaireService

pytestmark = pytest.mark.django_db


def _questions(questionnaire: Questionnaire) -> tuple[Question, Question, Question]:
    first, second, third = questionnaire.questions.all()
    return first, second, third


def test_update_questionnaire_fields(questionnaire: Questionnaire) -> None:
    """Test that questionnaire fields are written."""
    payload = QuestionnaireUpdateSchema(questionnaire={"name": "Design Review v2", "max_question_score": 10})

    result = QuestionnaireService(questionnaire.id).update_questionnaire(payload)

    questionnaire.refresh_from_db()
    assert questionnaire.name == "Design Review v2"
    assert questionnaire.max_question_score == 10
    assert result.questionnaire.name == "Design Review v2"
    assert result.failures == {}


def test_invalid_questionnaire_fields_abort_the_update(questionnaire: Questionnaire) -> None:
    """Test that invalid scoring bounds reject the whole update, question patches included."""
    first, _, _ = _questions(questionnaire)
    payload = QuestionnaireUpdateSchema(
        questionnaire={"min_question_score": 5, "max_question_score": 5},
        questions={first.id: {"txt": "Changed"}},
    )

    with pytest.raises(ValidationError):
        QuestionnaireService(questionnaire.id).update_questionnaire(payload)

    questionnaire.refresh_from_db()
    first.refresh_from_db()
    assert questionnaire.max_question_score == 5
    assert questionnaire.min_question_score == 0
    assert first.txt == "How clear is the design?"


def test_question_patches_write_only_changed_fields(questionnaire: Questionnaire) -> None:
    """Test that a patch equal to the stored values is not written at all."""
    first, second, _ = _questions(questionnaire)
    untouched_at = second.updated_at
    payload = QuestionnaireUpdateSchema(
        questions={
            first.id: {"txt": "How clear is the class design?", "weight": 3},
            second.id: {"txt": second.txt, "alternatives": second.alternatives},
        }
    )

    result = QuestionnaireService(questionnaire.id).update_questionnaire(payload)

    first.refresh_from_db()
    second.refresh_from_db()
    assert first.txt == "How clear is the class design?"
    assert first.weight == 3
    assert first.size == "50, 3"
    assert second.updated_at == untouched_at
    assert result.updated_questions == [first.id]


def test_missing_and_foreign_question_ids_are_reported(
    questionnaire: Questionnaire, other_instructor: ReviewUser, folder_tree: list[TreeFolder]
) -> None:
    """Test that patches naming questions outside the questionnaire fail without touching them."""
    first, _, _ = _questions(questionnaire)
    other = Questionnaire.objects.create(name="Other", instructor=other_instructor, display_type="Review")
    foreign = Question.objects.create(
        questionnaire=other, seq=Decimal("1"), txt="Foreign", question_type=QuestionType.SECTION_HEADER
    )
    missing_id = uuid.uuid4()
    payload = QuestionnaireUpdateSchema(
        questions={
            foreign.id: {"txt": "Hijacked"},
            missing_id: {"txt": "Ghost"},
            first.id: {"txt": "Still applied"},
        }
    )

    result = QuestionnaireService(questionnaire.id).update_questionnaire(payload)

    foreign.refresh_from_db()
    first.refresh_from_db()
    assert foreign.txt == "Foreign"
    assert first.txt == "Still applied"
    assert result.failures == {
        foreign.id: "No such Question exists.",
        missing_id: "No such Question exists.",
    }


def test_invalid_question_patch_does_not_block_the_others(questionnaire: Questionnaire) -> None:
    """Test that a patch failing validation is reported while the remaining patches are saved."""
    first, second, third = _questions(questionnaire)
    payload = QuestionnaireUpdateSchema(
        questions={
            first.id: {"size": "wide"},
            second.id: {"txt": "Which pattern fits?"},
            third.id: {"weight": 4},
        }
    )

    result = QuestionnaireService(questionnaire.id).update_questionnaire(payload)

    first.refresh_from_db()
    second.refresh_from_db()
    third.refresh_from_db()
    assert first.size == "50, 3"
    assert second.txt == "Which pattern fits?"
    assert third.weight is None
    assert set(result.failures) == {first.id, third.id}
    assert "Size must be" in result.failures[first.id]
    assert result.failures[third.id] == "TextArea questions do not use weight."
    assert result.updated_questions == [second.id]


def test_update_returns_questions_in_sequence_order(questionnaire: Questionnaire) -> None:
    """Test that moving a question is reflected in the returned ordering."""
    first, _, _ = _questions(questionnaire)
    payload = QuestionnaireUpdateSchema(questions={first.id: {"seq": Decimal("3.5")}})

    result = QuestionnaireService(questionnaire.id).update_questionnaire(payload)

    assert [q.txt for q in result.questionnaire.questions.all()] == [
        "Which pattern fits best?",
        "Other comments",
        "How clear is the design?",
    ]


def test_null_for_a_required_field_is_reported(questionnaire: Questionnaire) -> None:
    """Test that an explicit null on a non-nullable field fails only its own patch."""
    first, second, _ = _questions(questionnaire)
    payload = QuestionnaireUpdateSchema(questions={first.id: {"txt": None}, second.id: {"txt": "Applied"}})

    result = QuestionnaireService(questionnaire.id).update_questionnaire(payload)

    first.refresh_from_db()
    second.refresh_from_db()
    assert first.txt == "How clear is the design?"
    assert second.txt == "Applied"
    assert result.failures == {first.id: "This field cannot be null."}
    assert result.updated_questions == [second.id]
