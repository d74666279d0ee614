"""Tests for obtaining and refreshing JWT pairs."""

import orjson
import pytest
from django.shortcuts import reverse  # type: ignore[attr-defined]
from django.test.client import Client

from accounts.models import ReviewUser

pytestmark = pytest.mark.django_db


def test_obtain_token_pair(client: Client, instructor: ReviewUser) -> None:
    """Test that valid credentials yield an access and a refresh token."""
    response = client.post(
        reverse("api:token_obtain_pair"),
        data=orjson.dumps({"username": instructor.username, "password": "password"}),
        content_type="application/json",
    )

    assert response.status_code == 200
    data = response.json()
    assert data["access"]
    assert data["refresh"]


def test_access_token_authenticates_api_calls(client: Client, instructor: ReviewUser) -> None:
    """Test that the issued access token is accepted by the questionnaire endpoints."""
    tokens = client.post(
        reverse("api:token_obtain_pair"),
        data=orjson.dumps({"username": instructor.username, "password": "password"}),
        content_type="application/json",
    ).json()

    response = client.get(reverse("api:list_questionnaires"), HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

    assert response.status_code == 200


def test_wrong_password_is_rejected(client: Client, instructor: ReviewUser) -> None:
    response = client.post(
        reverse("api:token_obtain_pair"),
        data=orjson.dumps({"username": instructor.username, "password": "wrong"}),
        content_type="application/json",
    )

    assert response.status_code == 401
