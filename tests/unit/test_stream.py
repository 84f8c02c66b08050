"""Tests for streamed response aggregation."""

from __future__ import annotations

from sbomfix.backends.stream import NO_SCRIPT_PLACEHOLDER, aggregate_stream


class TestAggregateStream:
    def test_skips_invalid_lines(self):
        lines = [
            '{"message": {"role": "assistant", "content": "foo"}}',
            "this is not json",
            '{"message": {"role": "assistant", "content": "bar"}, "done": true}',
        ]
        assert aggregate_stream(lines) == "foobar"

    def test_all_invalid_gives_placeholder(self):
        assert aggregate_stream(["nope", "{broken", "]"]) == NO_SCRIPT_PLACEHOLDER

    def test_empty_stream_gives_placeholder(self):
        assert aggregate_stream([]) == NO_SCRIPT_PLACEHOLDER

    def test_lines_without_content_skipped(self):
        lines = [
            '{"done": true}',
            '{"message": {"role": "assistant"}}',
            '{"message": "flat string"}',
            '["list"]',
            '{"message": {"content": 42}}',
            '{"message": {"content": "ok"}}',
        ]
        assert aggregate_stream(lines) == "ok"

    def test_blank_lines_ignored(self):
        assert aggregate_stream(["", "   ", '{"message": {"content": "x"}}']) == "x"

    def test_only_empty_content_gives_placeholder(self):
        lines = ['{"message": {"content": ""}}', '{"done": true}']
        assert aggregate_stream(lines) == NO_SCRIPT_PLACEHOLDER

    def test_accepts_generator(self):
        def gen():
            yield '{"message": {"content": "a"}}'
            yield '{"message": {"content": "b"}}'

        assert aggregate_stream(gen()) == "ab"
