import io

import pytest

from bikeshed.atoms import AtomTable
from bikeshed.html import (
    HTMLError,
    HTMLErrorKind,
    HTMLTag,
    dump_html_tag,
    html_parse_attribute,
    html_parse_next_tag,
    htmlerr_str,
)


def test_htmlerr_str_messages():
    assert htmlerr_str(0) == "OK"
    assert htmlerr_str(HTMLErrorKind.EOF) == "End of File"
    assert htmlerr_str(HTMLErrorKind.INVALID_TAG) == "Invalid tag format"
    assert htmlerr_str(99) == "Unknown error"


def test_parse_attribute_quoted():
    content = 'href="a b"'
    attribute, pos = html_parse_attribute(content, 0)
    assert attribute.key == "href"
    assert attribute.value == "a b"
    assert pos == len(content)


def test_parse_attribute_single_quoted_and_unquoted():
    attribute, _ = html_parse_attribute("x='v'", 0)
    assert attribute.value == "v"
    attribute, pos = html_parse_attribute("width=10 rest", 0)
    assert attribute.value == "10"
    assert pos == len("width=10")


def test_parse_attribute_without_value():
    content = "checked>"
    attribute, pos = html_parse_attribute(content, 0)
    assert attribute.key == "checked"
    assert attribute.value is None
    assert pos == content.index(">")


def test_parse_attribute_errors():
    with pytest.raises(HTMLError) as info:
        html_parse_attribute("x=", 0)
    assert info.value.kind is HTMLErrorKind.INVALID_ATTRIBUTE
    with pytest.raises(HTMLError) as info:
        html_parse_attribute("x='abc", 0)
    assert info.value.kind is HTMLErrorKind.EOF


def test_parse_open_tag():
    table = AtomTable()
    content = "<div class='a'>rest"
    tag, pos = html_parse_next_tag(table, content, 0)
    assert tag.name is table.get("div")
    assert [(a.key, a.value) for a in tag.attributes] == [("class", "a")]
    assert tag.self_closing is False
    assert content[pos:] == "rest"


def test_parse_self_closing_tag():
    table = AtomTable()
    tag, pos = html_parse_next_tag(table, "<br/>", 0)
    assert tag.self_closing is True
    assert pos == len("<br/>")


def test_parse_tag_errors():
    table = AtomTable()
    with pytest.raises(HTMLError) as info:
        html_parse_next_tag(table, "<br/x", 0)
    assert info.value.kind is HTMLErrorKind.INVALID_TAG
    with pytest.raises(HTMLError) as info:
        html_parse_next_tag(table, "", 0)
    assert info.value.kind is HTMLErrorKind.EOF
    with pytest.raises(HTMLError) as info:
        html_parse_next_tag(table, "<p", 0)
    assert info.value.kind is HTMLErrorKind.EOF


def test_parse_text_run():
    table = AtomTable()
    content = "hello <b>"
    tag, pos = html_parse_next_tag(table, content, 0)
    assert tag.name is None
    assert tag.str_content == "hello "
    assert content[pos] == "<"


def test_tag_names_are_interned():
    table = AtomTable()
    first, _ = html_parse_next_tag(table, "<span>", 0)
    second, _ = html_parse_next_tag(table, "<span>", 0)
    assert first.name is second.name
    assert len(table) == 1


def test_dump_tree():
    table = AtomTable()
    div = HTMLTag(name=table.intern("div"))
    div.children.append(HTMLTag(str_content="hi", parent=div))
    out = io.StringIO()
    dump_html_tag(div, 0, out)
    assert out.getvalue() == "<div>\n    hi\n</div>\n"


def test_dump_skips_style_and_escapes():
    table = AtomTable()
    style = HTMLTag(name=table.intern("style"))
    style.children.append(HTMLTag(str_content="p {}"))
    out = io.StringIO()
    dump_html_tag(style, 0, out)
    assert out.getvalue() == ""
    out = io.StringIO()
    dump_html_tag(HTMLTag(str_content="a\tb"), 2, out)
    assert out.getvalue() == "  a\\x09b\n"