"""Parsing of CSS selectors and declarations, and selector matching."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Iterable

from .atoms import Atom, AtomTable

_SPACE = " \t\n\v\f\r"


class CSSErrorKind(IntEnum):
    EOF = 1
    INVALID_TAG_NAME = 2
    INVALID_ATTRIBUTE_SYNTAX = 3
    INVALID_ARG_SYNTAX = 4


_ERROR_MESSAGES = {
    CSSErrorKind.EOF: "End of File",
    CSSErrorKind.INVALID_TAG_NAME: "Invalid tag name",
    CSSErrorKind.INVALID_ATTRIBUTE_SYNTAX: "Invalid attribute syntax",
    CSSErrorKind.INVALID_ARG_SYNTAX: "Invalid argument syntax",
}


def csserr_str(kind: int | None) -> str:
    """Describe an error kind; None or 0 means no error."""
    if not kind:
        return "OK"
    try:
        return _ERROR_MESSAGES[CSSErrorKind(kind)]
    except ValueError:
        return "Unknown error"


class CSSError(Exception):
    def __init__(self, kind: CSSErrorKind) -> None:
        super().__init__(csserr_str(kind))
        self.kind = kind


class CSSTagKind(IntEnum):
    ID = 0
    CLASS = 1
    TAG = 2


@dataclass
class CSSTag:
    name: Atom
    kind: CSSTagKind


@dataclass
class CSSAttribute:
    name: Atom
    args: list[str] = field(default_factory=list)


@dataclass
class CSSPattern:
    """A selector, innermost tag first, with the declarations that apply to it."""

    tags: list[CSSTag] = field(default_factory=list)
    attributes: list[CSSAttribute] = field(default_factory=list)


def _isspace(c: str) -> bool:
    return c != "" and c in _SPACE


def _isalnum(c: str) -> bool:
    return c.isascii() and c.isalnum()


def _is_name_char(c: str) -> bool:
    return _isalnum(c) or c in ("-", "_") and c != ""


def _char(content: str, pos: int, end: int) -> str:
    return content[pos] if pos < end else ""


def css_skip(content: str, pos: int, end: int) -> int:
    """Skip whitespace and comments; return the new position."""
    while True:
        while pos < end and _isspace(content[pos]):
            pos += 1
        if pos + 2 < end and content.startswith("/*", pos):
            pos += 2
            while pos < end and not content.startswith("*/", pos, end):
                pos += 1
            if pos >= end:
                break
            pos += 2
            continue
        break
    return pos


def _parse_name(content: str, pos: int, end: int) -> int:
    while pos < end and _is_name_char(content[pos]):
        pos += 1
    return pos


def css_parse_tag(atom_table: AtomTable, content: str, pos: int, end: int) -> tuple[CSSTag, int]:
    first = _char(content, pos, end)
    if first == "":
        raise CSSError(CSSErrorKind.EOF)
    if first == "#":
        kind = CSSTagKind.ID
        pos += 1
    elif first == ".":
        kind = CSSTagKind.CLASS
        pos += 1
    else:
        kind = CSSTagKind.TAG
    start = pos
    pos = _parse_name(content, pos, end)
    if pos == start:
        raise CSSError(CSSErrorKind.INVALID_TAG_NAME)
    return CSSTag(atom_table.intern(content[start:pos]), kind), pos


def css_parse_attribute(
    atom_table: AtomTable, content: str, pos: int, end: int
) -> tuple[CSSAttribute, int]:
    """Parse ``name: arg, arg ...;``; the result ends after ``;`` or at ``}``."""
    start = pos
    pos = _parse_name(content, pos, end)
    if pos == start:
        raise CSSError(CSSErrorKind.INVALID_ATTRIBUTE_SYNTAX)
    attribute = CSSAttribute(atom_table.intern(content[start:pos]))
    pos = css_skip(content, pos, end)
    if _char(content, pos, end) != ":":
        raise CSSError(CSSErrorKind.INVALID_ATTRIBUTE_SYNTAX)
    pos += 1
    while True:
        pos = css_skip(content, pos, end)
        start = pos
        while (
            pos < end
            and not _isspace(content[pos])
            and not content.startswith("/*", pos, end)
            and content[pos] not in ",};"
        ):
            pos += 1
        if pos == start:
            raise CSSError(CSSErrorKind.INVALID_ARG_SYNTAX)
        attribute.args.append(content[start:pos])
        pos = css_skip(content, pos, end)
        c = _char(content, pos, end)
        if c == "":
            raise CSSError(CSSErrorKind.EOF)
        if c == ";":
            return attribute, pos + 1
        if c == "}":
            return attribute, pos
        if c == ",":
            pos += 1


def css_parse_pattern(
    atom_table: AtomTable, content: str, pos: int, end: int
) -> tuple[CSSPattern, int]:
    """Parse a space-separated selector; tags are stored innermost first."""
    pattern = CSSPattern()
    while True:
        tag, pos = css_parse_tag(atom_table, content, pos, end)
        pattern.tags.append(tag)
        pos = css_skip(content, pos, end)
        if not _isalnum(_char(content, pos, end)):
            break
    pattern.tags.reverse()
    return pattern, pos


def css_parse_patterns(
    atom_table: AtomTable, content: str, pos: int, end: int
) -> tuple[list[CSSPattern], int]:
    """Parse a comma-separated list of selectors."""
    patterns: list[CSSPattern] = []
    while True:
        pattern, pos = css_parse_pattern(atom_table, content, pos, end)
        patterns.append(pattern)
        pos = css_skip(content, pos, end)
        if pos >= end or content[pos] != ",":
            break
        pos = css_skip(content, pos + 1, end)
    return patterns, pos


def _attribute_values(html_tag: Any, key: str) -> Iterable[str]:
    for attribute in getattr(html_tag, "attributes", ()) or ():
        if attribute.key == key and attribute.value is not None:
            yield attribute.value


def css_match_tag(css_tag: CSSTag, html_tag: Any) -> bool:
    if css_tag.kind is CSSTagKind.TAG:
        return html_tag.name is css_tag.name
    if css_tag.kind is CSSTagKind.ID:
        return any(v == css_tag.name.data for v in _attribute_values(html_tag, "id"))
    return any(css_tag.name.data in v.split() for v in _attribute_values(html_tag, "class"))


def css_match_pattern(pattern_tags: list[CSSTag], html_tag: Any) -> bool:
    """Match tags innermost first against ``html_tag`` and its ancestors."""
    for css_tag in pattern_tags:
        if html_tag is None:
            break
        if not css_match_tag(css_tag, html_tag):
            return False
        html_tag = html_tag.parent
    return html_tag is not None


def css_add_attribute(attributes: list[CSSAttribute], attribute: CSSAttribute) -> None:
    """Add ``attribute``, replacing one with the same name."""
    for index, existing in enumerate(attributes):
        if existing.name is attribute.name:
            attributes[index] = attribute
            return
    attributes.append(attribute)