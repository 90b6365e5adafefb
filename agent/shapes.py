from __future__ import annotations

from typing import Any, Callable, List, Optional, Tuple

from agent.core.errors import MalformedResponseError


ShapeMatcher = Callable[[Any], Optional[str]]


def _text_or_none(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def match_completion(data: Any) -> Optional[str]:
    """Legacy text-completion reply: ``{"completion": "..."}``."""
    if isinstance(data, dict):
        return _text_or_none(data.get("completion"))
    return None


def match_content_blocks(data: Any) -> Optional[str]:
    """Messages reply: ``{"content": [{"type": "text", "text": "..."}, ...]}``."""
    if not isinstance(data, dict):
        return None
    blocks = data.get("content")
    if not isinstance(blocks, list):
        return None
    for block in blocks:
        if isinstance(block, dict) and block.get("type") == "text":
            return _text_or_none(block.get("text"))
    return None


def match_flat_content(data: Any) -> Optional[str]:
    if isinstance(data, dict):
        return _text_or_none(data.get("content"))
    return None


def match_message_content(data: Any) -> Optional[str]:
    if isinstance(data, dict) and isinstance(data.get("message"), dict):
        return _text_or_none(data["message"].get("content"))
    return None


SHAPE_MATCHERS: Tuple[ShapeMatcher, ...] = (
    match_completion,
    match_content_blocks,
    match_flat_content,
    match_message_content,
)


def extract_text(data: Any, matchers: Optional[List[ShapeMatcher]] = None) -> str:
    """Return the reply text from the first matcher that recognises ``data``."""
    for matcher in SHAPE_MATCHERS if matchers is None else matchers:
        text = matcher(data)
        if text is not None:
            return text
    raise MalformedResponseError()
