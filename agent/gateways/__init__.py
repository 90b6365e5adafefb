from __future__ import annotations

from typing import Optional

from agent.gateways.base import ModelGateway
from agent.gateways.bedrock import BedrockGateway
from agent.gateways.gemini import GeminiGateway
from config.settings import Settings, get_settings


def create_gateway(settings: Optional[Settings] = None) -> ModelGateway:
    """Build the gateway named by ``LLM_BACKEND``.

    Raises:
        ValueError: If the backend is not supported
    """
    settings = settings or get_settings()
    backend = settings.llm_backend

    if backend == "bedrock":
        return BedrockGateway(
            region=settings.aws_region,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
            sampling=settings.sampling(),
            prompt_style=settings.prompt_style,
            timeout=settings.upstream_timeout,
        )

    if backend == "gemini":
        return GeminiGateway(
            api_key=settings.google_api_key,
            sampling=settings.sampling(),
            timeout=settings.upstream_timeout,
        )

    raise ValueError(
        f"Unsupported backend: {settings.llm_backend}. Supported backends: 'bedrock', 'gemini'"
    )


__all__ = ["ModelGateway", "BedrockGateway", "GeminiGateway", "create_gateway"]
