"""Unit tests for response unwrapping."""
import pytest

from agent.core.errors import MalformedResponseError
from agent.shapes import (
    SHAPE_MATCHERS,
    extract_text,
    match_completion,
    match_content_blocks,
)


class TestExtractText:
    """Tests for the ordered shape matchers."""

    def test_completion_field(self):
        assert extract_text({"completion": " Hello!", "stop_reason": "stop_sequence"}) == " Hello!"

    def test_content_blocks_first_text_element(self):
        data = {
            "content": [
                {"type": "thinking", "thinking": "hmm"},
                {"type": "text", "text": "Hello!"},
                {"type": "text", "text": "ignored"},
            ]
        }
        assert extract_text(data) == "Hello!"

    def test_flat_content_string(self):
        assert extract_text({"content": "Hello!"}) == "Hello!"

    def test_nested_message_content(self):
        assert extract_text({"message": {"role": "assistant", "content": "Hello!"}}) == "Hello!"

    def test_completion_wins_over_content(self):
        assert extract_text({"completion": "first", "content": "second"}) == "first"

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"completion": ""},
            {"content": []},
            {"content": [{"type": "image", "source": {}}]},
            {"message": {"content": None}},
            {"output": "Hello!"},
            ["Hello!"],
            None,
        ],
    )
    def test_unknown_shape_raises(self, data):
        with pytest.raises(MalformedResponseError) as exc_info:
            extract_text(data)
        assert exc_info.value.status_code == 500

    def test_custom_matchers(self):
        def match_output(data):
            return data.get("output")

        assert extract_text({"output": "Hi"}, matchers=[match_output]) == "Hi"

    def test_empty_matcher_list_matches_nothing(self):
        with pytest.raises(MalformedResponseError):
            extract_text({"completion": "Hello!"}, matchers=[])

    def test_matcher_order(self):
        assert SHAPE_MATCHERS[0] is match_completion
        assert SHAPE_MATCHERS[1] is match_content_blocks
