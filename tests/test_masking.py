from __future__ import annotations

from tagdown.masking import (
    find_inline_code_spans,
    is_escaped,
    mask_inline_code,
    original_offset,
    unmask_inline_code,
)


def test_is_escaped_counts_backslashes():
    assert is_escaped("\\`", 1) is True
    assert is_escaped("\\\\`", 2) is False
    assert is_escaped("`", 0) is False


def test_find_inline_code_spans_single_and_double():
    assert find_inline_code_spans("`code`") == [(0, 6)]
    assert find_inline_code_spans("``more`` text") == [(0, 8)]


def test_double_backtick_span_keeps_inner_single_backtick():
    assert find_inline_code_spans("a ``x ` y`` b") == [(2, 11)]


def test_unmatched_opening_run_is_literal():
    assert find_inline_code_spans("``a` `b`") == [(3, 6)]


def test_escaped_backticks_do_not_open_spans():
    assert find_inline_code_spans("\\`not code\\`") == []


def test_mask_replaces_spans_with_placeholders():
    masked, segments = mask_inline_code("use `<tag>` here")

    assert masked == "use \x00CODE_0\x00 here"
    assert segments == ["`<tag>`"]
    assert "<" not in masked


def test_mask_numbers_placeholders_sequentially():
    masked, segments = mask_inline_code("`a` and `b`")

    assert masked == "\x00CODE_0\x00 and \x00CODE_1\x00"
    assert segments == ["`a`", "`b`"]


def test_mask_without_code_returns_line_unchanged():
    assert mask_inline_code("<tag> plain") == ("<tag> plain", [])


def test_unmask_restores_original_line():
    line = "x ``a ` b`` y `<c>` z"

    assert unmask_inline_code(*mask_inline_code(line)) == line


def test_original_offset_maps_positions_after_placeholders():
    masked, segments = mask_inline_code("`ab` <t>")

    assert masked.index("<") == 9
    assert original_offset(masked, segments, 9) == 5
    assert original_offset(masked, segments, 0) == 0


def test_unmask_leaves_unknown_placeholders_alone():
    line = "stray \x00CODE_7\x00 then `<a>`"
    masked, segments = mask_inline_code(line)

    assert segments == ["`<a>`"]
    assert unmask_inline_code(masked, segments) == line
