"""Building a document tree from HTML and applying style rules to it."""

from __future__ import annotations

import dataclasses
import sys
from dataclasses import dataclass

from .atoms import AtomTable, AtomSet
from .css import (
    CSSError,
    CSSErrorKind,
    CSSTagKind,
    css_add_attribute,
    css_match_pattern,
    css_parse_attribute,
    css_parse_patterns,
    css_skip,
    csserr_str,
)
from .css_pattern_map import CSSPatternMap
from .html import Display, HTMLError, HTMLErrorKind, HTMLTag, html_parse_next_tag

_SPACE = " \t\n\v\f\r"

VOID_TAGS = (
    "area", "base", "br", "col", "embed", "hr", "img",
    "input", "link", "meta", "source", "track", "wbr",
)

ROOT_NAME = "\\root"


def _warn(message: str) -> None:
    print(message, file=sys.stderr)


def strip_doctype(content: str) -> tuple[str, bool]:
    """Remove a leading ``<!DOCTYPE html>``; return the rest and the quirks-mode flag."""
    if content[:9].lower() != "<!doctype":
        return content, True
    pos = 9
    while pos < len(content) and content[pos] in _SPACE:
        pos += 1
    if content[pos:pos + 4].lower() != "html":
        raise ValueError(f"Unsupported DOCTYPE: `{content[pos:pos + 4]}`")
    close = content.find(">", pos + 4)
    if close < 0:
        raise ValueError("Unterminated DOCTYPE html")
    return content[close + 1:], False


def parse_html(atom_table: AtomTable, content: str) -> HTMLTag:
    """Parse ``content`` into a tree under a synthetic block-level root tag."""
    void_elements = AtomSet()
    for name in VOID_TAGS:
        void_elements.add(atom_table.intern(name))
    root = HTMLTag(name=atom_table.intern(ROOT_NAME), display=Display.BLOCK)
    node = root
    pos = 0
    end = len(content)
    while True:
        while pos < end and content[pos] in _SPACE:
            pos += 1
        if pos >= end:
            break
        if content.startswith("</", pos):
            close = content.find(">", pos)
            pos = end if close < 0 else close + 1
            if node.parent is not None:
                node = node.parent
            continue
        if content.startswith("<!--", pos):
            close = content.find("-->", pos + 4)
            pos = end if close < 0 else close + 3
            continue
        try:
            tag, pos = html_parse_next_tag(atom_table, content, pos)
        except HTMLError as exc:
            if exc.kind is HTMLErrorKind.EOF:
                break
            raise
        tag.parent = node
        node.children.append(tag)
        if tag.name is not None and tag.name not in void_elements and not tag.self_closing:
            node = tag
    if node is not root:
        _warn("WARN: Some unclosed tags:")
        while node is not root and node is not None:
            _warn(f"- {node.name.data if node.name is not None else '<unnamed>'}")
            node = node.parent
    return root


def find_child_html_tag(tag: HTMLTag | None, name: str) -> HTMLTag | None:
    """Return the first direct child element of ``tag`` called ``name``."""
    if tag is None:
        return None
    for child in tag.children:
        if child.name is not None and child.name.data == name:
            return child
    return None


def fixup_tree(tag: HTMLTag) -> None:
    """Lift block children out of inline parents, splitting the inline parent."""
    i = 0
    while i < len(tag.children):
        child = tag.children[i]
        fixup_tree(child)
        clone = None
        if child.display is Display.INLINE:
            for j, grandchild in enumerate(child.children):
                if grandchild.display is not Display.BLOCK:
                    continue
                if j == 0:
                    tag.children.insert(i, grandchild)
                    del child.children[0]
                elif j < len(child.children) - 1:
                    clone = dataclasses.replace(child, children=child.children[j + 1:])
                    child.children = child.children[:j]
                    tag.children.insert(i + 1, grandchild)
                else:
                    tag.children.insert(i + 1, grandchild)
                    child.children.pop()
                break
            if clone is not None:
                tag.children.insert(i + 2, clone)
        i += 1


def match_css_patterns(tag: HTMLTag | None, pattern_map: CSSPatternMap) -> None:
    """Attach the declarations of every matching pattern to each tag of the tree."""
    if tag is None or len(pattern_map) == 0:
        return
    patterns = pattern_map.get(tag.name)
    if patterns:
        for pattern in patterns:
            if css_match_pattern(pattern.tags, tag):
                for attribute in pattern.attributes:
                    css_add_attribute(tag.css_attribs, attribute)
    for child in tag.children:
        match_css_patterns(child, pattern_map)


def _isdigit(c: str) -> bool:
    return c.isascii() and c.isdigit()


def css_parse_float(content: str, pos: int, end: int) -> tuple[float, int]:
    """Parse an optionally signed decimal number; return it and the new position."""
    sign = 1.0
    if pos < end and content[pos] == "-":
        sign = -1.0
        pos += 1
    value = 0.0
    while pos < end and _isdigit(content[pos]):
        value = value * 10.0 + int(content[pos])
        pos += 1
    if pos < end and content[pos] == ".":
        pos += 1
        decimal = 0.1
        while pos < end and _isdigit(content[pos]):
            value += int(content[pos]) * decimal
            decimal *= 0.1
            pos += 1
    return value * sign, pos


def css_compute_numeric(
    root_font_size: float, content: str, pos: int, end: int
) -> tuple[float, int]:
    """Evaluate a length; only ``rem`` is understood, anything else yields 0."""
    number, pos = css_parse_float(content, pos, end)
    start = pos
    while pos < end and content[pos].isascii() and content[pos].isalnum():
        pos += 1
    unit = content[start:pos]
    result = 0.0
    if unit == "rem":
        result = number * root_font_size
    elif unit:
        _warn(f"CSS:WARN Unsupported `{unit}`")
    return result, pos


def apply_css_styles(tag: HTMLTag | None, root_font_size: float) -> None:
    """Set display and font size from the tag's matched declarations, recursively."""
    if tag is None:
        return
    tag.font_size = root_font_size
    for attribute in tag.css_attribs:
        name = attribute.name.data
        if name == "display":
            if len(attribute.args) > 1:
                _warn("WARN ignoring extra args to display")
            elif not attribute.args:
                _warn("ERROR too few args to display!")
                continue
            value = attribute.args[0]
            if value == "block":
                tag.display = Display.BLOCK
            elif value == "inline":
                tag.display = Display.INLINE
            elif value == "inline-block":
                tag.display = Display.INLINE_BLOCK
        elif name == "font-size":
            if len(attribute.args) > 1:
                _warn("WARN ignoring extra args to font-size")
            elif not attribute.args:
                _warn("ERROR too few args in font-size!")
                continue
            value = attribute.args[0]
            tag.font_size, _ = css_compute_numeric(root_font_size, value, 0, len(value))
        else:
            _warn(f"WARN Unhandled attribute: `{name}`")
    for child in tag.children:
        apply_css_styles(child, root_font_size)


def css_parse(
    atom_table: AtomTable, pattern_map: CSSPatternMap, content: str, pos: int, end: int
) -> int:
    """Parse rules into ``pattern_map``, keyed by each selector's innermost tag."""
    while True:
        pos = css_skip(content, pos, end)
        if pos >= end:
            return pos
        patterns, pos = css_parse_patterns(atom_table, content, pos, end)
        if pos >= end or content[pos] != "{":
            raise CSSError(CSSErrorKind.INVALID_ATTRIBUTE_SYNTAX)
        pos += 1
        while True:
            pos = css_skip(content, pos, end)
            if pos >= end:
                return pos
            if content[pos] == "}":
                pos += 1
                break
            attribute, pos = css_parse_attribute(atom_table, content, pos, end)
            for pattern in patterns:
                pattern.attributes.append(attribute)
        for pattern in patterns:
            tag = pattern.tags[0]
            if tag.kind is not CSSTagKind.TAG:
                _warn(f"CSS:WARN ignoring selector ending in `{tag.name.data}`: only tag names are supported")
                continue
            pattern_map.setdefault(tag.name).append(pattern)


@dataclass
class Document:
    """A parsed page together with the style rules that apply to it."""

    atom_table: AtomTable
    root: HTMLTag
    pattern_map: CSSPatternMap
    quirks_mode: bool = True

    @property
    def html(self) -> HTMLTag | None:
        return find_child_html_tag(self.root, "html")

    @property
    def head(self) -> HTMLTag | None:
        return find_child_html_tag(self.html, "head")

    @property
    def body(self) -> HTMLTag | None:
        return find_child_html_tag(self.html, "body")

    @property
    def title(self) -> HTMLTag | None:
        return find_child_html_tag(self.head, "title")


def load_document(content: str, default_css: str) -> Document:
    """Parse a page, its default stylesheet and its ``<style>`` blocks, and match rules."""
    content, quirks_mode = strip_doctype(content)
    atom_table = AtomTable()
    root = parse_html(atom_table, content)
    pattern_map = CSSPatternMap()
    css_parse(atom_table, pattern_map, default_css, 0, len(default_css))
    document = Document(atom_table, root, pattern_map, quirks_mode)
    head = document.head
    style_atom = atom_table.get("style")
    if style_atom is not None and head is not None:
        for tag in head.children:
            if tag.name is style_atom and tag.children:
                css = tag.children[0].str_content
                try:
                    css_parse(atom_table, pattern_map, css, 0, len(css))
                except CSSError as exc:
                    _warn(f"CSS:ERROR parsing CSS: {csserr_str(exc.kind)}")
    match_css_patterns(document.body, pattern_map)
    return document