"""Tests for the markdown code span index."""

from mentionbot.parser.code_spans import CodeSpan, CodeSpanIndex, CodeSpanKind

INLINE = CodeSpanKind.INLINE
FENCE = CodeSpanKind.FENCE


class TestInlineSpans:
    """Backtick code spans."""

    def test_single_backticks(self):
        index = CodeSpanIndex("`@bot modify labels: +bug.`")
        assert index.spans == (CodeSpan(0, 27, INLINE),)

    def test_closing_run_must_match_length(self):
        index = CodeSpanIndex("``a ` b`` c")
        assert index.spans == (CodeSpan(0, 9, INLINE),)

    def test_unmatched_opener_is_text(self):
        assert CodeSpanIndex("a ` b").spans == ()

    def test_multiple_spans(self):
        index = CodeSpanIndex("`a` and `b`")
        assert index.spans == (CodeSpan(0, 3, INLINE), CodeSpan(8, 11, INLINE))


class TestFencedBlocks:
    """Fenced code blocks."""

    def test_fence(self):
        index = CodeSpanIndex("text\n```\ncode\n```\nafter")
        assert index.spans == (CodeSpan(5, 18, FENCE),)

    def test_indented_closer(self):
        text = "```\n    @bot modify labels: +bug.\n    ```"
        assert CodeSpanIndex(text).spans == (CodeSpan(0, len(text), FENCE),)

    def test_tilde_fence_ignores_backtick_line(self):
        text = "~~~\n```\n@bot claim\n~~~\n"
        assert CodeSpanIndex(text).spans == (CodeSpan(0, 23, FENCE),)

    def test_shorter_run_does_not_close(self):
        text = "````\ncode\n```\nmore"
        assert CodeSpanIndex(text).spans == (CodeSpan(0, len(text), FENCE),)

    def test_longer_run_closes(self):
        index = CodeSpanIndex("```\ncode\n`````\nafter `x`")
        assert index.spans == (CodeSpan(0, 15, FENCE), CodeSpan(21, 24, INLINE))

    def test_unterminated_fence_runs_to_end(self):
        text = "intro\n```rust\nfn main() {}\n@bot claim"
        assert CodeSpanIndex(text).spans == (CodeSpan(6, len(text), FENCE),)

    def test_backticks_inside_fence_are_not_inline_spans(self):
        text = "```\n`a`\n```"
        assert CodeSpanIndex(text).spans == (CodeSpan(0, len(text), FENCE),)

    def test_line_with_info_string_does_not_close(self):
        text = "```\n```rust\n@bot claim\n```\n"
        print(f"\n INPUT: {text!r}")
        assert CodeSpanIndex(text).spans == (CodeSpan(0, len(text), FENCE),)

    def test_closer_may_have_trailing_whitespace(self):
        text = "```\ncode\n```  \r\nafter"
        assert CodeSpanIndex(text).spans == (CodeSpan(0, 16, FENCE),)


class TestOverlaps:
    """Range queries."""

    def test_overlaps_is_half_open(self):
        index = CodeSpanIndex("text\n```\ncode\n```\nafter")
        assert index.overlaps(17, 18) == CodeSpan(5, 18, FENCE)
        assert index.overlaps(18, 20) is None
        assert index.overlaps(0, 5) is None
        assert index.overlaps(0, 6) is not None

    def test_query_is_repeatable(self):
        index = CodeSpanIndex("a `@bot claim` b")
        first = index.overlaps(3, 7)
        assert first is not None
        assert index.overlaps(3, 7) == first
        assert index.overlaps(0, 1) is None

    def test_same_text_builds_equal_index(self):
        text = "x `y` z\n```\nw\n```\n"
        assert CodeSpanIndex(text) == CodeSpanIndex(text)
        assert CodeSpanIndex(text).spans == CodeSpanIndex(text).spans
