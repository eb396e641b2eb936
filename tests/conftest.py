"""
Shared fixtures: canned assessments, model payloads and a fake completion client.
"""
import json

import pytest

from posture_coach.models import Assessment

CHIN_TUCK_CONTENT = (
    '{"analysis":"ok","severity":"mild","issues":[],'
    '"exercises":[{"name":"Chin Tuck","steps":["Tuck chin","Hold 5s"],'
    '"duration":"5 minutes","frequency":"3x/day"}],"tips":["Sit upright"]}'
)


class FakeCompletionClient:
    """Returns canned content (or raises) and records every call."""

    def __init__(self, content=CHIN_TUCK_CONTENT, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def complete(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.content


@pytest.fixture
def assessment_data():
    return {
        "neckPain": "yes",
        "backPain": "no",
        "shoulderStiffness": "yes",
        "poorPosture": "no",
        "duration": "1-4weeks",
    }


@pytest.fixture
def assessment(assessment_data):
    return Assessment(**assessment_data)


@pytest.fixture
def valid_payload():
    return json.loads(CHIN_TUCK_CONTENT)


@pytest.fixture
def fake_client():
    return FakeCompletionClient()
