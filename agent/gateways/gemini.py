from __future__ import annotations

import logging
from typing import Any, List, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from agent.core.errors import ConfigurationError, UpstreamError, error_for_status
from agent.gateways.base import ModelGateway
from agent.payload import alternate_turns
from config.settings import SamplingConfig


logger = logging.getLogger("cybermedassist.gemini")


def to_lc_messages(history: List[dict], system_prompt: str) -> List[BaseMessage]:
    messages: List[BaseMessage] = [SystemMessage(content=system_prompt)]
    for item in alternate_turns(history):
        if item["role"] == "user":
            messages.append(HumanMessage(content=item["content"]))
        else:
            messages.append(AIMessage(content=item["content"]))
    return messages


def _status_of(exc: BaseException) -> Optional[int]:
    for candidate in (exc, exc.__cause__):
        if candidate is None:
            continue
        for attr in ("status_code", "code"):
            value = getattr(candidate, attr, None)
            if isinstance(value, int):
                return value
    return None


class GeminiGateway(ModelGateway):
    name = "gemini"

    def __init__(
        self,
        api_key: Optional[str],
        sampling: SamplingConfig,
        timeout: float = 60.0,
        llm: Any = None,
    ):
        self._api_key = api_key
        self._sampling = sampling
        if llm is None and api_key:
            llm = ChatGoogleGenerativeAI(
                model=sampling.model_id,
                google_api_key=api_key,
                temperature=sampling.temperature,
                top_p=sampling.top_p,
                max_output_tokens=sampling.max_tokens,
                stop=list(sampling.stop_sequences) or None,
                timeout=timeout,
                max_retries=0,
            )
        self._llm = llm

    def check_credentials(self) -> None:
        if not self._api_key or self._llm is None:
            logger.error("GOOGLE_API_KEY not configured")
            raise ConfigurationError("GOOGLE_API_KEY not configured")

    def invoke(self, history: List[dict], system_prompt: str) -> Any:
        self.check_credentials()
        messages = to_lc_messages(history, system_prompt)
        logger.info(
            "Invoking Gemini: model=%s turns=%s", self._sampling.model_id, len(messages) - 1
        )
        try:
            reply = self._llm.invoke(messages)
        except Exception as exc:
            logger.warning("Gemini call failed: %s", exc)
            status = _status_of(exc)
            if status is None:
                raise UpstreamError() from exc
            raise error_for_status(status, str(exc)) from exc

        content = getattr(reply, "content", None)
        if isinstance(content, list):
            # Plain string parts become text blocks
            content = [
                {"type": "text", "text": part} if isinstance(part, str) else part
                for part in content
            ]
        return {"content": content}
