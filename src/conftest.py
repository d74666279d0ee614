"""Project-wide fixtures: users for every role, JWT clients and the folder tree."""

import secrets
import string
import typing as t
from decimal import Decimal

import faker
import pytest
from django.core.cache import cache
from django.test.client import Client
from ninja_jwt.tokens import RefreshToken

from accounts.models import ReviewUser, Role
from folders.models import TreeFolder
from folders.service import bootstrap_folder_tree, file_questionnaire
from questionnaires.models import Question, QuestionAdvice, Questionnaire
from questionnaires.question_types import QuestionnaireType, QuestionType


@pytest.fixture(autouse=True)
def clear_throttle_cache() -> None:
    """Throttle counters live in the cache; start every test with a clean slate."""
    cache.clear()


class ReviewUserFactory:
    """Factory for creating ReviewUser instances for testing."""

    fake = faker.Faker()

    def create_user(self, **kwargs: t.Any) -> ReviewUser:
        username = kwargs.pop("username", "".join(secrets.choice(string.ascii_lowercase) for _ in range(10)))
        email = kwargs.pop("email", f"{username}@example.com")
        password = kwargs.pop("password", "password")
        first_name = kwargs.pop("first_name", self.fake.first_name())
        last_name = kwargs.pop("last_name", self.fake.last_name())
        return ReviewUser.objects.create_user(
            username=username,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            **kwargs,
        )

    def __call__(self, **kwargs: t.Any) -> ReviewUser:
        return self.create_user(**kwargs)


@pytest.fixture
def review_user_factory() -> ReviewUserFactory:
    return ReviewUserFactory()


@pytest.fixture
def instructor(review_user_factory: ReviewUserFactory) -> ReviewUser:
    """An instructor."""
    return review_user_factory(role=Role.INSTRUCTOR)


@pytest.fixture
def other_instructor(review_user_factory: ReviewUserFactory) -> ReviewUser:
    """A second, unrelated instructor."""
    return review_user_factory(role=Role.INSTRUCTOR)


@pytest.fixture
def teaching_assistant(review_user_factory: ReviewUserFactory, instructor: ReviewUser) -> ReviewUser:
    """A teaching assistant working under ``instructor``."""
    return review_user_factory(role=Role.TEACHING_ASSISTANT, instructor=instructor)


@pytest.fixture
def student(review_user_factory: ReviewUserFactory, instructor: ReviewUser) -> ReviewUser:
    """A student enrolled with ``instructor``."""
    return review_user_factory(role=Role.STUDENT, instructor=instructor)


@pytest.fixture
def administrator(review_user_factory: ReviewUserFactory) -> ReviewUser:
    """An administrator."""
    return review_user_factory(role=Role.ADMINISTRATOR)


@pytest.fixture
def superuser(review_user_factory: ReviewUserFactory) -> ReviewUser:
    """A superuser with the default student role."""
    return review_user_factory(is_superuser=True, is_staff=True)


def _client_for(user: ReviewUser) -> Client:
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")  # type: ignore[attr-defined]


@pytest.fixture
def instructor_client(instructor: ReviewUser) -> Client:
    """API client for the instructor."""
    return _client_for(instructor)


@pytest.fixture
def other_instructor_client(other_instructor: ReviewUser) -> Client:
    """API client for the unrelated instructor."""
    return _client_for(other_instructor)


@pytest.fixture
def teaching_assistant_client(teaching_assistant: ReviewUser) -> Client:
    """API client for the instructor's teaching assistant."""
    return _client_for(teaching_assistant)


@pytest.fixture
def student_client(student: ReviewUser) -> Client:
    """API client for a student."""
    return _client_for(student)


@pytest.fixture
def administrator_client(administrator: ReviewUser) -> Client:
    """API client for an administrator."""
    return _client_for(administrator)


@pytest.fixture
def folder_tree() -> list[TreeFolder]:
    """The root folder plus one folder per questionnaire category."""
    return bootstrap_folder_tree()


@pytest.fixture
def questionnaire(instructor: ReviewUser, folder_tree: list[TreeFolder]) -> Questionnaire:
    """A filed review questionnaire owned by ``instructor`` with three questions.

    The first question carries two advices.
    """
    questionnaire = Questionnaire.objects.create(
        name="Design Review",
        instructor=instructor,
        min_question_score=0,
        max_question_score=5,
        questionnaire_type=QuestionnaireType.REVIEW,
        display_type="Review",
    )
    first = Question.objects.create(
        questionnaire=questionnaire,
        seq=Decimal("1"),
        txt="How clear is the design?",
        question_type=QuestionType.CRITERION,
        weight=2,
        size="50, 3",
        max_label="Strongly agree",
        min_label="Strongly disagree",
    )
    Question.objects.create(
        questionnaire=questionnaire,
        seq=Decimal("2"),
        txt="Which pattern fits best?",
        question_type=QuestionType.DROPDOWN,
        alternatives="Strategy|Observer|Visitor",
    )
    Question.objects.create(
        questionnaire=questionnaire,
        seq=Decimal("3"),
        txt="Other comments",
        question_type=QuestionType.TEXT_AREA,
        size="60, 5",
        break_before=False,
    )
    QuestionAdvice.objects.create(question=first, score=1, advice="Hard to follow.")
    QuestionAdvice.objects.create(question=first, score=5, advice="Crystal clear.")
    file_questionnaire(questionnaire)
    return questionnaire
