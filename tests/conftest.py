"""Pytest configuration and shared fixtures."""
import io
import json
import os

import pytest

from agent.gateways.bedrock import BedrockGateway
from config.settings import SamplingConfig


class FakeBedrockClient:
    """Stands in for a boto3 ``bedrock-runtime`` client.

    Records every ``invoke_model`` call and answers with ``reply``; raises
    ``error`` instead when one is set.
    """

    def __init__(self, reply=None, raw=None, error=None):
        self.reply = reply
        self.raw = raw
        self.error = error
        self.calls = []

    def invoke_model(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        body = self.raw if self.raw is not None else json.dumps(self.reply).encode("utf-8")
        return {"body": io.BytesIO(body), "contentType": "application/json"}

    @property
    def last_payload(self):
        return json.loads(self.calls[-1]["body"])


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "aws_access_key_id": os.getenv("AWS_ACCESS_KEY_ID"),
        "aws_secret_access_key": os.getenv("AWS_SECRET_ACCESS_KEY"),
        "google": os.getenv("GOOGLE_API_KEY"),
    }


@pytest.fixture
def sampling():
    """Deterministic model parameters."""
    return SamplingConfig(
        model_id="anthropic.claude-3-haiku-20240307-v1:0",
        temperature=0.0,
        top_p=1.0,
        max_tokens=64,
        stop_sequences=["\n\nHuman:"],
    )


@pytest.fixture
def fake_client():
    return FakeBedrockClient(reply={"content": [{"type": "text", "text": "Hello!"}]})


@pytest.fixture
def bedrock_gateway(fake_client, sampling):
    return BedrockGateway(
        region="us-east-1",
        access_key_id="AKIDEXAMPLE",
        secret_access_key="secret",
        sampling=sampling,
        client=fake_client,
    )


@pytest.fixture
def sample_history():
    return [
        {"role": "user", "content": "What is CPT code 99213?"},
        {"role": "assistant", "content": "An established patient office visit."},
        {"role": "user", "content": "And 99214?"},
    ]
