"""Shared fixtures for LaunchLens tests."""

import json
from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from launchlens.core.models import Review
from launchlens.services.llm import ProviderGateway


def make_completion(content):
    """Build an object shaped like an openai ChatCompletion."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


@pytest.fixture
def fake_client():
    client = Mock()
    client.chat.completions.create.return_value = make_completion("[]")
    return client


@pytest.fixture
def gateway(fake_client):
    return ProviderGateway(api_key="test-key", model="test-model", client=fake_client)


@pytest.fixture
def pre_reviews():
    return [
        Review(id="p1", review_text="Loved it", rating=5),
        Review(id="p2", review_text="Terrible app", rating=1),
    ]


@pytest.fixture
def post_reviews():
    return [
        Review(id="q1", review_text="New feature is great", rating=5),
        Review(id="q2", review_text="Much better now", rating=5),
    ]


def sentiments_json(*pairs):
    return json.dumps([{"review_id": rid, "sentiment": s, "score": 0.9} for rid, s in pairs])
