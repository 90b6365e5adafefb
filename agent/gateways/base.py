from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List


class ModelGateway(ABC):
    """Outbound connection to a hosted model.

    Implementations hide the vendor client, the request shape it expects and
    the translation of vendor exceptions into ``ChatError`` subclasses. A
    gateway is built once at process start and only read afterwards.
    """

    name: str = "gateway"

    @abstractmethod
    def check_credentials(self) -> None:
        """Raise ``ConfigurationError`` when the gateway cannot authenticate."""

    @abstractmethod
    def invoke(self, history: List[dict], system_prompt: str) -> Any:
        """Send one request and return the decoded vendor reply.

        Exactly one outbound call is made; failures are not retried.
        """
