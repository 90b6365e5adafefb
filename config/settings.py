from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class SamplingConfig(BaseModel):
    """Fixed model parameters sent with every outbound call."""

    model_config = ConfigDict(frozen=True)

    model_id: str = Field(default="anthropic.claude-v2")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_p: float = Field(default=0.9, ge=0.0, le=1.0)
    max_tokens: int = Field(default=512, ge=1)
    stop_sequences: List[str] = Field(default_factory=lambda: ["\n\nHuman:"])
    anthropic_version: str = Field(default="bedrock-2023-05-31")


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.llm_backend: str = os.getenv("LLM_BACKEND", "bedrock").lower()
        self.prompt_style: str = os.getenv("PROMPT_STYLE", "messages").lower()

        self.aws_region: str = os.getenv("AWS_REGION", "us-east-1")
        self.aws_access_key_id: Optional[str] = os.getenv("AWS_ACCESS_KEY_ID")
        self.aws_secret_access_key: Optional[str] = os.getenv("AWS_SECRET_ACCESS_KEY")
        self.bedrock_model_id: str = os.getenv("BEDROCK_MODEL_ID", "anthropic.claude-v2")

        self.google_api_key: Optional[str] = os.getenv("GOOGLE_API_KEY")
        self.gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

        self.temperature: float = float(os.getenv("MODEL_TEMPERATURE", "0.7"))
        self.top_p: float = float(os.getenv("MODEL_TOP_P", "0.9"))
        self.max_tokens: int = int(os.getenv("MODEL_MAX_TOKENS", "512"))
        self.stop_sequence: str = os.getenv("MODEL_STOP_SEQUENCE", "\n\nHuman:")
        self.upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT", "60"))

        self.require_non_empty: bool = _env_bool("REQUIRE_NON_EMPTY", True)

        self.chat_api_url: str = os.getenv("CHAT_API_URL", "http://127.0.0.1:8000")
        self.history_cap: int = int(os.getenv("HISTORY_CAP", "4"))

    @property
    def model_id(self) -> str:
        if self.llm_backend == "gemini":
            return self.gemini_model
        return self.bedrock_model_id

    def sampling(self) -> SamplingConfig:
        return SamplingConfig(
            model_id=self.model_id,
            temperature=self.temperature,
            top_p=self.top_p,
            max_tokens=self.max_tokens,
            stop_sequences=[self.stop_sequence] if self.stop_sequence else [],
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
