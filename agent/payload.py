from __future__ import annotations

from typing import Any, Dict, List

from config.settings import SamplingConfig


PROMPT_STYLES = ("messages", "transcript")


def normalize_turns(history: List[dict]) -> List[Dict[str, str]]:
    """Drop a leading system turn and coalesce every non-user role to assistant.

    The server supplies its own system instruction, so a caller-provided
    leading system turn would duplicate it.
    """
    turns = list(history or [])
    if turns and (turns[0].get("role") or "").lower() == "system":
        turns = turns[1:]

    normalized: List[Dict[str, str]] = []
    for item in turns:
        role = (item.get("role") or "").lower()
        normalized.append(
            {
                "role": "user" if role == "user" else "assistant",
                "content": item.get("content") or "",
            }
        )
    return normalized


def alternate_turns(history: List[dict]) -> List[Dict[str, str]]:
    """Normalize turns into a strictly alternating list that opens with a user turn.

    Empty turns and leading assistant turns are dropped; consecutive turns with
    the same role are joined with a blank line.
    """
    merged: List[Dict[str, str]] = []
    for turn in normalize_turns(history):
        if not turn["content"].strip():
            continue
        if not merged and turn["role"] != "user":
            continue
        if merged and merged[-1]["role"] == turn["role"]:
            merged[-1]["content"] += "\n\n" + turn["content"]
        else:
            merged.append(dict(turn))
    return merged


def build_messages_payload(
    history: List[dict], system_prompt: str, sampling: SamplingConfig
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "anthropic_version": sampling.anthropic_version,
        "max_tokens": sampling.max_tokens,
        "system": system_prompt,
        "messages": alternate_turns(history),
        "temperature": sampling.temperature,
        "top_p": sampling.top_p,
    }
    if sampling.stop_sequences:
        payload["stop_sequences"] = list(sampling.stop_sequences)
    return payload


def to_transcript(history: List[dict], system_prompt: str) -> str:
    """Flatten turns into a Human/Assistant transcript ending on an open Assistant line."""
    lines = [system_prompt]
    for turn in normalize_turns(history):
        speaker = "Human" if turn["role"] == "user" else "Assistant"
        lines.append(f"\n\n{speaker}: {turn['content']}")
    lines.append("\n\nAssistant:")
    return "".join(lines)


def build_transcript_payload(
    history: List[dict], system_prompt: str, sampling: SamplingConfig
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "prompt": to_transcript(history, system_prompt),
        "max_tokens_to_sample": sampling.max_tokens,
        "temperature": sampling.temperature,
        "top_p": sampling.top_p,
    }
    if sampling.stop_sequences:
        payload["stop_sequences"] = list(sampling.stop_sequences)
    return payload


def build_payload(
    style: str, history: List[dict], system_prompt: str, sampling: SamplingConfig
) -> Dict[str, Any]:
    if style == "messages":
        return build_messages_payload(history, system_prompt, sampling)
    if style == "transcript":
        return build_transcript_payload(history, system_prompt, sampling)
    raise ValueError(
        f"Unsupported prompt style: {style}. Supported styles: {', '.join(PROMPT_STYLES)}"
    )
