"""In-memory conversation state for the chat client.

Holds the ordered turns of one session and talks to ``POST /api/chat``.
The user's turn is appended before the request is sent and is never
rolled back; the outcome is appended as an ``assistant`` or ``error`` turn.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Literal, Optional

import httpx
from pydantic import BaseModel, ConfigDict


logger = logging.getLogger("cybermedassist.client")

Role = Literal["user", "assistant", "system", "error"]


class Turn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class ConversationBusyError(RuntimeError):
    """Raised when a message is submitted while a reply is still pending."""


class ChatRequestFailed(Exception):
    pass


Listener = Callable[["Conversation"], None]


class Conversation:
    def __init__(
        self,
        http: httpx.AsyncClient,
        endpoint: str = "/api/chat",
        history_cap: Optional[int] = 4,
        on_change: Optional[Listener] = None,
    ):
        self._http = http
        self._endpoint = endpoint
        self._history_cap = history_cap
        self._on_change = on_change
        self.turns: List[Turn] = []
        self.loading = False

    def outbound_turns(self) -> List[Turn]:
        """Turns sent to the server: no error turns, most recent ``history_cap`` only."""
        turns = [t for t in self.turns if t.role != "error"]
        if self._history_cap:
            turns = turns[-self._history_cap:]
        return turns

    async def submit(self, text: str) -> Optional[Turn]:
        """Send ``text`` and return the turn appended for the outcome.

        Blank input is ignored and returns ``None``.
        """
        if not text.strip():
            return None
        if self.loading:
            raise ConversationBusyError("A reply is still pending")

        self._append(Turn(role="user", content=text))
        self.loading = True
        self._notify()

        try:
            content = await self._send(self.outbound_turns())
            result = Turn(role="assistant", content=content)
        except ChatRequestFailed as exc:
            logger.warning("Chat request failed: %s", exc)
            result = Turn(role="error", content=str(exc) or "An error occurred")
        except httpx.HTTPError as exc:
            logger.warning("Chat request failed: %s", exc)
            result = Turn(role="error", content=f"Network error: {exc}" if str(exc) else "An error occurred")
        finally:
            self.loading = False
            self._notify()

        self._append(result)
        return result

    async def _send(self, turns: List[Turn]) -> str:
        response = await self._http.post(
            self._endpoint,
            json={"messages": [t.model_dump() for t in turns]},
        )
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not response.is_success:
            raise ChatRequestFailed(data.get("error") or "Failed to get response")

        # Older servers answer with "response" instead of "content"
        content = data.get("content") or data.get("response")
        if not isinstance(content, str):
            raise ChatRequestFailed("Failed to get response")
        return content

    def _append(self, turn: Turn) -> None:
        self.turns.append(turn)
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self)
