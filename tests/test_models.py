from tagdown.models import (
    DocumentStructure,
    FoldKind,
    LineKind,
    ParserContext,
    ParserState,
    Tag,
    TagKind,
)
from tagdown.parser import parse_document
from tagdown.scanner import scan_line


def test_parser_state_members():
    assert list(ParserState) == [ParserState.NORMAL, ParserState.IN_FENCED_CODE]


def test_parser_context_defaults():
    ctx = ParserContext()

    assert ctx.state is ParserState.NORMAL
    assert ctx.fence_char is None
    assert ctx.fence_length == 0
    assert ctx.fence_line is None


def test_line_kinds_cover_classifier_outcomes():
    assert {kind.name for kind in LineKind} == {
        "FENCE_OPEN",
        "FENCE_CLOSE",
        "CODE",
        "HORIZONTAL_RULE",
        "HEADER",
        "CONTENT",
    }


def test_tag_kind_helpers():
    tag = Tag("a", 0, 0, TagKind.SELF_CLOSING)

    assert tag.is_self_closing
    assert not tag.is_opening
    assert not tag.is_closing
    assert tag.attributes == {}


def test_fold_kind_values():
    assert [kind.value for kind in FoldKind] == ["tag", "header", "code"]


def test_document_structure_defaults_are_empty():
    structure = DocumentStructure()

    assert structure.tags == ()
    assert structure.headers == ()
    assert structure.horizontal_rules == frozenset()
    assert structure.code_blocks == ()


def test_tags_with_attributes_are_hashable():
    first = Tag("task", 0, 0, TagKind.OPENING, {"priority": "high"})
    same = Tag("task", 0, 0, TagKind.OPENING, {"priority": "high"})
    other = Tag("task", 0, 0, TagKind.OPENING, {"priority": "low"})

    assert {first, same, other} == {first, other}
    assert first != other


def test_document_structure_is_hashable():
    structure = parse_document('<task priority="high">\nbody\n</task>\n---')

    assert hash(structure) == hash(parse_document('<task priority="high">\nbody\n</task>\n---'))
    assert {scan_line("<a x=1>")[0]}
