"""conftest.py: Fixtures for the questionnaires app."""

import pytest

from accounts.models import ReviewUser
from questionnaires.models import Answer, Question, Questionnaire


@pytest.fixture
def answered_questionnaire(questionnaire: Questionnaire, student: ReviewUser) -> Questionnaire:
    """The shared questionnaire with two recorded answers."""
    first, second = list(questionnaire.questions.all()[:2])
    Answer.objects.create(question=first, reviewer=student, answer=4, comments="Good.")
    Answer.objects.create(question=second, reviewer=student, answer=1)
    return questionnaire


@pytest.fixture
def first_question(questionnaire: Questionnaire) -> Question:
    """The criterion question at sequence 1."""
    return questionnaire.questions.get(seq=1)
