"""Terminal rendering for the chat client.

Hides the details of bubble layout, markdown rendering and the typing
indicator.
"""

from __future__ import annotations

from typing import Optional

from rich.align import Align
from rich.console import Console, RenderableType
from rich.markdown import Markdown
from rich.panel import Panel
from rich.status import Status

from client.conversation import Conversation, Turn


EMPTY_HINT = "Ask me anything about medical billing, coding, or insurance!"

BUBBLE_STYLES = {
    "user": ("blue", "You"),
    "assistant": ("grey50", "Assistant"),
    "system": ("grey50", "System"),
    "error": ("red", "Error"),
}


def render_turn(turn: Turn, width: Optional[int] = None) -> RenderableType:
    """User turns are right-aligned; everything else sits on the left."""
    border, title = BUBBLE_STYLES.get(turn.role, ("grey50", turn.role))
    bubble = Panel(
        Markdown(turn.content),
        title=title,
        title_align="left",
        border_style=border,
        expand=False,
        width=width,
    )
    if turn.role == "user":
        return Align.right(bubble)
    return Align.left(bubble)


class ChatView:
    """Prints new turns as they arrive and shows a typing indicator while loading.

    Pass ``update`` as a conversation's ``on_change`` listener.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self._printed = 0
        self._status: Optional[Status] = None

    def show_empty_hint(self) -> None:
        self.console.print(Align.center(f"[dim]{EMPTY_HINT}[/dim]"))

    def update(self, conversation: Conversation) -> None:
        new_turns = conversation.turns[self._printed:]
        if new_turns:
            self._stop_typing()
        for turn in new_turns:
            self.console.print(render_turn(turn))
        self._printed = len(conversation.turns)

        if conversation.loading:
            self._start_typing()
        else:
            self._stop_typing()

    def _start_typing(self) -> None:
        if self._status is None:
            self._status = self.console.status("[dim]Assistant is typing...[/dim]", spinner="dots")
            self._status.start()

    def _stop_typing(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None
