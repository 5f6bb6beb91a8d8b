"""
Shared test fixtures and configuration.
"""

import pytest
import os
import sys

# Add the parent directory to the path so we can import the profile_selector package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from profile_selector.profiles import LastUsedState, parse

SAMPLE_CREDENTIALS = """\
[default]
aws_access_key_id = AKIADEFAULT
aws_secret_access_key = defaultsecret

[example-prod]
aws_account_id = 123456789012
aws_access_key_id = AKIAPROD
aws_secret_access_key = prodsecret
region = us-west-2

[example-test]
aws_account_id = 210987654321
region = eu-west-1

[sandbox]
role_arn = arn:aws:iam::111122223333:role/Admin
source_profile = example-prod
"""


class FakePrompt:
    """Prompt that replays canned answers and records what it was asked."""

    def __init__(self, select_answer=None, confirm_answer=None):
        self.select_answer = select_answer
        self.confirm_answer = confirm_answer
        self.select_calls = []
        self.confirm_calls = []

    def select(self, choices, default_index=0):
        self.select_calls.append((list(choices), default_index))
        return self.select_answer

    def confirm(self, message):
        self.confirm_calls.append(message)
        return self.confirm_answer


@pytest.fixture
def sample_text():
    return SAMPLE_CREDENTIALS


@pytest.fixture
def store():
    return parse(SAMPLE_CREDENTIALS)


@pytest.fixture
def credentials_file(tmp_path):
    path = tmp_path / "credentials"
    path.write_text(SAMPLE_CREDENTIALS)
    return path


@pytest.fixture
def state(tmp_path):
    return LastUsedState(tmp_path / ".aws-profile-selector-last")


@pytest.fixture
def fake_prompt():
    return FakePrompt
