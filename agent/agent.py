from __future__ import annotations

import logging
from typing import List, Optional

from agent.core.errors import InvalidRequestError, MalformedResponseError
from agent.core.prompt import SYSTEM_PROMPT
from agent.gateways import ModelGateway, create_gateway
from agent.shapes import extract_text
from config.settings import Settings, get_settings


logger = logging.getLogger("cybermedassist.adapter")


class PromptAdapter:
    """Turns a conversation into one model call and returns the reply text."""

    def __init__(
        self,
        gateway: ModelGateway,
        system_prompt: str = SYSTEM_PROMPT,
        require_non_empty: bool = True,
    ):
        self.gateway = gateway
        self.system_prompt = system_prompt
        self.require_non_empty = require_non_empty

    def complete(self, history: List[dict]) -> str:
        if not isinstance(history, list):
            raise InvalidRequestError()
        if self.require_non_empty and not history:
            raise InvalidRequestError("Messages must not be empty")

        # Fail before any network traffic when credentials are missing
        self.gateway.check_credentials()

        data = self.gateway.invoke(history, self.system_prompt)
        try:
            return extract_text(data)
        except MalformedResponseError:
            logger.error("Invalid response format from %s: %r", self.gateway.name, data)
            raise


def build_adapter(settings: Optional[Settings] = None) -> PromptAdapter:
    settings = settings or get_settings()
    return PromptAdapter(
        gateway=create_gateway(settings),
        require_non_empty=settings.require_non_empty,
    )
