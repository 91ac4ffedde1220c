from __future__ import annotations

import pytest

from tagdown.config import ConfigError, TagdownConfig
from tagdown.models import Tag, TagKind
from tagdown.transformer import (
    convert_to_markdown,
    escape_underscores,
    header_level,
    render_tag_header,
)


def test_converts_task_example():
    content = '<task priority="high">\nDo the thing.\n</task>'

    assert convert_to_markdown(content) == '## task (priority="high")\n\nDo the thing.\n'


def test_nested_tags_get_deeper_headers():
    content = '<root>\n<child name="x">\nbody\n</child>\n</root>'

    assert convert_to_markdown(content) == '## root\n\n### child (name="x")\n\nbody\n\n'


def test_underscores_are_escaped_in_names():
    content = '<my_tag my_attr="v_1"/>'

    assert convert_to_markdown(content) == '## my\\_tag (my\\_attr="v_1")\n'


def test_underscore_escaping_can_be_disabled():
    content = '<my_tag my_attr="v_1"/>'
    config = TagdownConfig(escape_underscores=False)

    assert convert_to_markdown(content, config) == '## my_tag (my_attr="v_1")\n'


def test_header_levels_are_clamped():
    content = "<a>\n<b>\n<c>\n<d>\n<e>\n<f>\n<g/>"

    headers = [line for line in convert_to_markdown(content).split("\n") if line.startswith("#")]

    assert headers == ["## a", "### b", "#### c", "##### d", "###### e", "###### f", "###### g"]


def test_trailing_content_follows_header():
    assert convert_to_markdown("<note>Remember this") == "## note\n\nRemember this"


def test_trailing_content_loses_nested_tags():
    assert convert_to_markdown("<note>Use <em>care") == "## note\n\nUse care"


def test_code_blocks_pass_through():
    content = "```\n<a>\n# x\n```\n<b>"

    assert convert_to_markdown(content) == "```\n<a>\n# x\n```\n## b\n"


def test_unterminated_code_block_passes_through():
    content = "<a>\n~~~\n<b>\n</a>"

    assert convert_to_markdown(content) == "## a\n\n~~~\n<b>\n</a>"


def test_inline_code_is_untouched():
    assert convert_to_markdown("Use `<a>` here") == "Use `<a>` here"


def test_blank_lines_are_preserved():
    assert convert_to_markdown("a\n\nb") == "a\n\nb"


def test_unmatched_closing_tag_becomes_blank_line():
    assert convert_to_markdown("text\n</foo>\nmore") == "text\n\nmore"


def test_horizontal_rules_pass_through_and_reset_depth():
    assert convert_to_markdown("<a>\n---\n<b>") == "## a\n\n---\n## b\n"


def test_unclosed_tag_keeps_body():
    assert convert_to_markdown("<a>\ntext") == "## a\n\ntext"


def test_closing_tag_wins_over_opening_tag_on_same_line():
    assert convert_to_markdown("<a>\n</a><b>\n</b>") == "## a\n\n\n"


def test_crlf_input_produces_lf_output():
    assert convert_to_markdown("<a>\r\nx\r\n</a>") == "## a\n\nx\n"


def test_document_headers_pass_through():
    assert convert_to_markdown("# Title\n<a>") == "# Title\n## a\n"


def test_empty_document():
    assert convert_to_markdown("") == ""


def test_base_header_level_is_configurable():
    assert convert_to_markdown("<a>", TagdownConfig(base_header_level=3)) == "### a\n"


def test_invalid_config_is_rejected():
    with pytest.raises(ConfigError):
        convert_to_markdown("<a>", TagdownConfig(base_header_level=0))


def test_header_level_mapping():
    assert header_level(0) == 2
    assert header_level(3) == 5
    assert header_level(7) == 6
    assert header_level(0, TagdownConfig(base_header_level=1, max_header_level=3)) == 1
    assert header_level(5, TagdownConfig(base_header_level=1, max_header_level=3)) == 3


def test_render_tag_header_keeps_attribute_order():
    tag = Tag("step", 0, 0, TagKind.OPENING, {"b": "2", "a": "1"})

    assert render_tag_header(tag, 1) == '### step (b="2", a="1")'


def test_escape_underscores():
    assert escape_underscores("a_b_c") == "a\\_b\\_c"
