"""Wire responses and stream frames to unified shapes."""
from __future__ import annotations

import json

import pytest

from qwen_providers.base.models import FunctionCall, ToolCall, Usage
from qwen_providers.config.defaults import ProtocolMode
from qwen_providers.qwen import parse_chunk, parse_response


def test_native_response():
    raw = json.dumps(
        {
            "request_id": "req-9",
            "output": {"text": "Hello!", "finish_reason": "stop"},
            "usage": {"input_tokens": 5, "output_tokens": 2, "total_tokens": 7},
        }
    )
    result = parse_response(ProtocolMode.NATIVE, raw)
    assert result.request_id == "req-9" and result.text == "Hello!"  # nosec B101
    assert result.finish_reason == "stop"  # nosec B101
    assert result.usage == Usage(5, 2, 7)  # nosec B101


def test_native_tool_calls_keep_arguments_verbatim():
    raw = json.dumps(
        {
            "output": {
                "text": "",
                "finish_reason": "tool_calls",
                "tool_calls": [
                    {"id": "call_1", "type": "function", "function": {"name": "get_weather", "arguments": '{"city":"Hangzhou"}'}}
                ],
            }
        }
    )
    result = parse_response(ProtocolMode.NATIVE, raw)
    assert result.tool_calls == (  # nosec B101
        ToolCall(id="call_1", function=FunctionCall(name="get_weather", arguments='{"city":"Hangzhou"}')),
    )


def test_openai_response_uses_first_choice_only():
    raw = json.dumps(
        {
            "id": "chatcmpl-1",
            "choices": [
                {"index": 0, "message": {"role": "assistant", "content": "first"}, "finish_reason": "stop"},
                {"index": 1, "message": {"role": "assistant", "content": "second"}, "finish_reason": "stop"},
            ],
            "usage": {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4},
        }
    )
    result = parse_response(ProtocolMode.OPENAI_COMPATIBLE, raw)
    assert result.request_id == "chatcmpl-1" and result.text == "first"  # nosec B101
    assert result.usage == Usage(input_tokens=3, output_tokens=1, total_tokens=4)  # nosec B101


def test_openai_response_without_choices_is_empty():
    result = parse_response(ProtocolMode.OPENAI_COMPATIBLE, '{"id": "x", "choices": []}')
    assert result.text == "" and result.tool_calls == () and result.request_id == "x"  # nosec B101


@pytest.mark.parametrize("mode", list(ProtocolMode))
@pytest.mark.parametrize("raw", ["not json", "[1, 2]", '{"output": "text"}'])
def test_malformed_bodies_raise_value_error(mode, raw):
    if mode is ProtocolMode.OPENAI_COMPATIBLE and raw == '{"output": "text"}':
        raw = '{"choices": "nope"}'
    with pytest.raises(ValueError):
        parse_response(mode, raw)


def test_openai_chunk_delta():
    raw = json.dumps({"id": "c1", "choices": [{"index": 0, "delta": {"content": "Hel"}, "finish_reason": None}]})
    chunk = parse_chunk(ProtocolMode.OPENAI_COMPATIBLE, raw)
    assert chunk.text == "Hel" and chunk.request_id == "c1" and chunk.finish_reason is None  # nosec B101


def test_openai_usage_only_chunk():
    raw = json.dumps({"id": "c1", "choices": [], "usage": {"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3}})
    chunk = parse_chunk(ProtocolMode.OPENAI_COMPATIBLE, raw)
    assert chunk.text == "" and chunk.usage == Usage(1, 2, 3)  # nosec B101


def test_chunk_tool_call_fragment_with_nulls():
    raw = json.dumps(
        {"choices": [{"delta": {"tool_calls": [{"id": None, "function": {"name": None, "arguments": "\"Hz\"}"}}]}}]}
    )
    chunk = parse_chunk(ProtocolMode.OPENAI_COMPATIBLE, raw)
    assert chunk.tool_calls == (ToolCall(function=FunctionCall(arguments='"Hz"}')),)  # nosec B101


def test_native_chunk():
    chunk = parse_chunk(ProtocolMode.NATIVE, b'{"request_id":"r","output":{"text":"lo","finish_reason":"null"}}')
    assert chunk.text == "lo" and chunk.request_id == "r"  # nosec B101
