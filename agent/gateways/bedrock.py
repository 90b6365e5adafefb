"""Amazon Bedrock gateway.

Calls ``bedrock-runtime`` ``InvokeModel`` with a hand-built JSON body so the
request matches the model family's expected shape exactly.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    PartialCredentialsError,
)

from agent.core.errors import (
    ChatError,
    ConfigurationError,
    MalformedResponseError,
    RateLimitedError,
    UpstreamError,
    error_for_status,
)
from agent.gateways.base import ModelGateway
from agent.payload import PROMPT_STYLES, build_payload
from config.settings import SamplingConfig


logger = logging.getLogger("cybermedassist.bedrock")

THROTTLING_CODES = {
    "ThrottlingException",
    "TooManyRequestsException",
    "ServiceQuotaExceededException",
}


def classify_client_error(exc: ClientError) -> ChatError:
    error = exc.response.get("Error", {})
    code = error.get("Code", "")
    message = error.get("Message", "")
    status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")

    if code in THROTTLING_CODES:
        return RateLimitedError()
    if code == "ValidationException":
        status = 400
    return error_for_status(status, message)


class BedrockGateway(ModelGateway):
    name = "bedrock"

    def __init__(
        self,
        region: str,
        access_key_id: Optional[str],
        secret_access_key: Optional[str],
        sampling: SamplingConfig,
        prompt_style: str = "messages",
        timeout: float = 60.0,
        client: Any = None,
    ):
        if prompt_style not in PROMPT_STYLES:
            raise ValueError(f"Unsupported prompt style: {prompt_style}")
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._sampling = sampling
        self._prompt_style = prompt_style
        if client is None:
            client = boto3.client(
                "bedrock-runtime",
                region_name=region,
                aws_access_key_id=access_key_id,
                aws_secret_access_key=secret_access_key,
                config=Config(
                    connect_timeout=timeout,
                    read_timeout=timeout,
                    retries={"total_max_attempts": 1, "mode": "standard"},
                ),
            )
        self._client = client

    def check_credentials(self) -> None:
        if not self._access_key_id or not self._secret_access_key:
            logger.error("AWS credentials not configured")
            raise ConfigurationError("AWS credentials not configured")

    def invoke(self, history: List[dict], system_prompt: str) -> Any:
        payload = build_payload(self._prompt_style, history, system_prompt, self._sampling)
        logger.info(
            "Invoking Bedrock: model=%s style=%s turns=%s",
            self._sampling.model_id,
            self._prompt_style,
            len(history),
        )

        try:
            response = self._client.invoke_model(
                modelId=self._sampling.model_id,
                contentType="application/json",
                accept="application/json",
                body=json.dumps(payload),
            )
        except ClientError as exc:
            logger.warning("Bedrock rejected the request: %s", exc)
            raise classify_client_error(exc) from exc
        except (NoCredentialsError, PartialCredentialsError) as exc:
            raise ConfigurationError("AWS credentials not configured") from exc
        except BotoCoreError as exc:
            logger.warning("Bedrock call failed: %s", exc)
            raise UpstreamError() from exc

        body = response.get("body")
        if body is None:
            raise UpstreamError("Empty response from AI model")

        raw = body.read()
        try:
            return json.loads(raw)
        except ValueError as exc:
            logger.error("Failed to parse Bedrock response: %r", raw[:500])
            raise MalformedResponseError("Failed to parse AI model response") from exc
