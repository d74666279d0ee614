"""Tests for the question endpoints."""

import typing as t
import uuid
from decimal import Decimal

import orjson
import pytest
from django.shortcuts import reverse  # type: ignore[attr-defined]
from django.test.client import Client

from questionnaires.models import Answer, Question, Questionnaire

pytestmark = pytest.mark.django_db


def _post(client: Client, url: str, payload: dict[str, t.Any]) -> t.Any:
    return client.post(url, data=orjson.dumps(payload), content_type="application/json")


def _put(client: Client, url: str, payload: dict[str, t.Any]) -> t.Any:
    return client.put(url, data=orjson.dumps(payload), content_type="application/json")


def test_students_cannot_browse_questions(questionnaire: Questionnaire, student_client: Client) -> None:
    response = student_client.get(reverse("api:list_questions"))

    assert response.status_code == 403


def test_list_questions_is_paginated(questionnaire: Questionnaire, teaching_assistant_client: Client) -> None:
    response = teaching_assistant_client.get(reverse("api:list_questions"))

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 3
    assert [Decimal(q["seq"]) for q in data["results"]] == [Decimal("1"), Decimal("2"), Decimal("3")]
    assert data["results"][0]["questionnaire_id"] == str(questionnaire.id)


def test_list_question_types(questionnaire: Questionnaire, instructor_client: Client) -> None:
    response = instructor_client.get(reverse("api:list_question_types"))

    assert response.status_code == 200
    assert response.json() == ["Criterion", "Dropdown", "TextArea"]


def test_get_question(first_question: Question, instructor_client: Client) -> None:
    response = instructor_client.get(reverse("api:get_question", kwargs={"question_id": first_question.id}))

    assert response.status_code == 200
    assert response.json()["txt"] == "How clear is the design?"


def test_get_missing_question_returns_404(instructor_client: Client) -> None:
    response = instructor_client.get(reverse("api:get_question", kwargs={"question_id": uuid.uuid4()}))

    assert response.status_code == 404
    assert response.json() == {"detail": "No such Question exists."}


class TestCreateQuestion:
    def test_creates_question_at_the_end(self, questionnaire: Questionnaire, instructor_client: Client) -> None:
        response = _post(
            instructor_client,
            reverse("api:create_question"),
            {"questionnaire_id": str(questionnaire.id), "question_type": "TextField", "txt": "Team name", "size": "40"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "The question was successfully created."
        assert Decimal(data["question"]["seq"]) == Decimal("4")
        assert data["question"]["size"] == "40"

    def test_other_instructor_is_forbidden(self, questionnaire: Questionnaire, other_instructor_client: Client) -> None:
        response = _post(
            other_instructor_client,
            reverse("api:create_question"),
            {"questionnaire_id": str(questionnaire.id), "question_type": "TextField"},
        )

        assert response.status_code == 403
        assert questionnaire.questions.count() == 3

    def test_unknown_questionnaire_returns_404(self, instructor_client: Client) -> None:
        response = _post(
            instructor_client,
            reverse("api:create_question"),
            {"questionnaire_id": str(uuid.uuid4()), "question_type": "TextField"},
        )

        assert response.status_code == 404

    def test_unknown_type_returns_400(self, questionnaire: Questionnaire, instructor_client: Client) -> None:
        response = _post(
            instructor_client,
            reverse("api:create_question"),
            {"questionnaire_id": str(questionnaire.id), "question_type": "Essay"},
        )

        assert response.status_code == 400
        assert response.json() == {"detail": '"Essay" is not a valid question type.'}


class TestUpdateQuestion:
    def test_update(self, first_question: Question, teaching_assistant_client: Client) -> None:
        url = reverse("api:update_question", kwargs={"question_id": first_question.id})

        response = _put(teaching_assistant_client, url, {"weight": 4})

        assert response.status_code == 200
        assert response.json()["question"]["weight"] == 4

    def test_invalid_size_returns_400(self, first_question: Question, instructor_client: Client) -> None:
        url = reverse("api:update_question", kwargs={"question_id": first_question.id})

        response = _put(instructor_client, url, {"size": "big"})

        assert response.status_code == 400
        assert "size" in response.json()["errors"]
        first_question.refresh_from_db()
        assert first_question.size == "50, 3"

    def test_null_text_returns_400(self, first_question: Question, instructor_client: Client) -> None:
        url = reverse("api:update_question", kwargs={"question_id": first_question.id})

        response = _put(instructor_client, url, {"txt": None})

        assert response.status_code == 400
        assert response.json() == {"errors": {"txt": ["This field cannot be null."]}}


class TestDeleteQuestion:
    def test_delete_reports_invalidated_responses(
        self, answered_questionnaire: Questionnaire, instructor_client: Client
    ) -> None:
        question = answered_questionnaire.questions.get(seq=3)

        response = instructor_client.delete(reverse("api:delete_question", kwargs={"question_id": question.id}))

        assert response.status_code == 200
        assert response.json() == {
            "message": "You have successfully deleted the question! "
            "Any existing reviews for the questionnaire have been deleted!",
            "responses_invalidated": True,
        }
        assert not Answer.objects.exists()

    def test_delete_without_responses(self, first_question: Question, instructor_client: Client) -> None:
        response = instructor_client.delete(reverse("api:delete_question", kwargs={"question_id": first_question.id}))

        assert response.json() == {
            "message": "You have successfully deleted the question!",
            "responses_invalidated": False,
        }
        assert not Question.objects.filter(id=first_question.id).exists()

    def test_other_instructor_is_forbidden(self, first_question: Question, other_instructor_client: Client) -> None:
        response = other_instructor_client.delete(
            reverse("api:delete_question", kwargs={"question_id": first_question.id})
        )

        assert response.status_code == 403
        assert Question.objects.filter(id=first_question.id).exists()
