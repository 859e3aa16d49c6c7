import pytest

from bikeshed.atoms import AtomTable
from bikeshed.html import Display, HTMLTag
from bikeshed.layout import (
    Cursor,
    collapse_text,
    compute_box_html_tag,
    iter_boxes,
    iter_text_glyphs,
)

GLYPH = 10.0
FONT = 20.0


def measure(c, size, spacing):
    return GLYPH, size


@pytest.fixture
def atoms():
    return AtomTable()


def element(atoms, name, *children, display=Display.INLINE, font_size=FONT):
    tag = HTMLTag(name=atoms.intern(name), display=display, font_size=font_size)
    for child in children:
        child.parent = tag
        tag.children.append(child)
    return tag


def text(content):
    return HTMLTag(str_content=content)


def test_collapse_text_merges_whitespace():
    assert collapse_text("a  \n\t b") == "a b"


def test_collapse_text_replaces_unprintable():
    assert collapse_text("a\x01b\u00e9") == "a?b?"


def test_collapse_text_keeps_plain_text():
    assert collapse_text("hello") == "hello"


def test_single_line_text_box():
    tag = text("abc")
    cursor = Cursor()
    compute_box_html_tag(tag, measure, FONT, 0.0, 1000.0, cursor)
    assert tag.width == 3 * GLYPH
    assert tag.height == FONT
    assert (cursor.x, cursor.y) == (3 * GLYPH, 0)


def test_text_wraps_past_max_width():
    tag = text("abcd")
    cursor = Cursor()
    compute_box_html_tag(tag, measure, FONT, 0.0, 2.5 * GLYPH, cursor)
    assert tag.height == 2 * FONT
    assert tag.width == 2 * GLYPH
    assert cursor.y == FONT


def test_block_children_stack_vertically(atoms):
    first = element(atoms, "p", text("ab"), display=Display.BLOCK)
    second = element(atoms, "p", text("cd"), display=Display.BLOCK)
    body = element(atoms, "body", first, second, display=Display.BLOCK)
    cursor = Cursor()
    compute_box_html_tag(body, measure, FONT, 0.0, 1000.0, cursor)
    assert second.x == first.x == body.x
    assert second.y == first.y + first.height
    assert body.height == first.height + second.height
    assert cursor.y == body.y + body.height
    assert cursor.x == body.x


def test_inline_children_flow_horizontally(atoms):
    first = element(atoms, "span", text("ab"))
    second = element(atoms, "span", text("cd"))
    body = element(atoms, "body", first, second, display=Display.BLOCK)
    compute_box_html_tag(body, measure, FONT, 0.0, 1000.0, Cursor())
    assert second.y == first.y
    assert second.x == first.x + first.width


def test_inline_block_cursor_ends_at_right_edge(atoms):
    box = element(atoms, "div", text("abc"), display=Display.INLINE_BLOCK)
    cursor = Cursor(5, 7)
    compute_box_html_tag(box, measure, FONT, 0.0, 1000.0, cursor)
    assert cursor.x == box.x + box.width
    assert cursor.y == box.y


def test_script_leaves_cursor_alone(atoms):
    script = element(atoms, "script", text("var x"))
    cursor = Cursor(3, 4)
    compute_box_html_tag(script, measure, FONT, 0.0, 1000.0, cursor)
    assert (script.x, script.y) == (3, 4)
    assert (cursor.x, cursor.y) == (3, 4)
    assert script.width == 0


def test_iter_boxes_is_preorder(atoms):
    inner = text("x")
    span = element(atoms, "span", inner)
    other = element(atoms, "b")
    body = element(atoms, "body", span, other)
    assert list(iter_boxes(body)) == [body, span, inner, other]


def test_iter_text_glyphs_positions(atoms):
    body = element(atoms, "body", text("a b"), display=Display.BLOCK)
    compute_box_html_tag(body, measure, FONT, 0.0, 1000.0, Cursor())
    glyphs = list(iter_text_glyphs(body, measure, FONT, 0.0))
    assert [g[0] for g in glyphs] == ["a", " ", "b"]
    xs = [g[1] for g in glyphs]
    assert xs == sorted(xs)
    assert all(g[2] == 0.0 for g in glyphs)
    assert all(g[3] == body.font_size for g in glyphs)


def test_iter_text_glyphs_skips_hidden_elements(atoms):
    body = element(
        atoms,
        "body",
        element(atoms, "style", text("p{}")),
        element(atoms, "title", text("T")),
        element(atoms, "script", text("1")),
        text("ok"),
        display=Display.BLOCK,
    )
    compute_box_html_tag(body, measure, FONT, 0.0, 1000.0, Cursor())
    assert "".join(g[0] for g in iter_text_glyphs(body, measure, FONT, 0.0)) == "ok"


def test_iter_text_glyphs_wraps_like_layout():
    tag = text("abcd")
    compute_box_html_tag(tag, measure, FONT, 0.0, 2.5 * GLYPH, Cursor())
    glyphs = list(iter_text_glyphs(tag, measure, FONT, 0.0))
    rows = {g[2] for g in glyphs}
    assert rows == {0.0, FONT}
    assert all(g[1] + GLYPH <= tag.x + tag.width for g in glyphs)