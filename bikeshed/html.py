"""HTML tokenising: tags, attributes and text runs, plus a tree dumper."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TextIO

from .atoms import Atom, AtomTable
from .css import CSSAttribute

_SPACE = " \t\n\v\f\r"


class HTMLErrorKind(IntEnum):
    TODO = 1
    EOF = 2
    INVALID_TAG = 3
    INVALID_ATTRIBUTE = 4


_ERROR_MESSAGES = {
    HTMLErrorKind.TODO: "Unimplemented",
    HTMLErrorKind.EOF: "End of File",
    HTMLErrorKind.INVALID_TAG: "Invalid tag format",
    HTMLErrorKind.INVALID_ATTRIBUTE: "Invalid attribute format",
}


def htmlerr_str(kind: int | None) -> str:
    """Describe an error kind; None or 0 means no error."""
    if not kind:
        return "OK"
    try:
        return _ERROR_MESSAGES[HTMLErrorKind(kind)]
    except ValueError:
        return "Unknown error"


class HTMLError(Exception):
    def __init__(self, kind: HTMLErrorKind) -> None:
        super().__init__(htmlerr_str(kind))
        self.kind = kind


class Display(IntEnum):
    INLINE = 0
    INLINE_BLOCK = 1
    BLOCK = 2


@dataclass
class HTMLAttribute:
    key: str
    value: str | None = None


@dataclass(eq=False)
class HTMLTag:
    """An element (``name`` set) or a text run (``name`` is None)."""

    name: Atom | None = None
    parent: HTMLTag | None = field(default=None, repr=False)
    children: list[HTMLTag] = field(default_factory=list)
    str_content: str = ""
    attributes: list[HTMLAttribute] = field(default_factory=list)
    css_attribs: list[CSSAttribute] = field(default_factory=list)
    display: Display = Display.INLINE
    font_size: float = 0.0
    self_closing: bool = False
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


def _char(content: str, pos: int) -> str:
    return content[pos] if pos < len(content) else ""


def _isspace(c: str) -> bool:
    return c != "" and c in _SPACE


def _isalnum(c: str) -> bool:
    return c.isascii() and c.isalnum()


def _is_key_char(c: str) -> bool:
    return _isalnum(c) or (c != "" and c in "_-")


def html_parse_attribute(content: str, pos: int) -> tuple[HTMLAttribute, int]:
    """Parse ``key``, ``key=value`` or ``key="value"`` starting at ``pos``."""
    start = pos
    while _is_key_char(_char(content, pos)):
        pos += 1
    key = content[start:pos]
    while _isspace(_char(content, pos)):
        pos += 1
    if _char(content, pos) != "=":
        return HTMLAttribute(key), pos
    pos += 1
    while _isspace(_char(content, pos)):
        pos += 1
    quote = _char(content, pos)
    if quote not in ('"', "'") or quote == "":
        start = pos
        while _isalnum(_char(content, pos)):
            pos += 1
        if pos == start:
            raise HTMLError(HTMLErrorKind.INVALID_ATTRIBUTE)
        return HTMLAttribute(key, content[start:pos]), pos
    pos += 1
    close = content.find(quote, pos)
    if close < 0:
        raise HTMLError(HTMLErrorKind.EOF)
    return HTMLAttribute(key, content[pos:close]), close + 1


def html_parse_next_tag(atom_table: AtomTable, content: str, pos: int) -> tuple[HTMLTag, int]:
    """Parse an opening tag or a run of text starting at ``pos``."""
    if _char(content, pos) == "<":
        pos += 1
        start = pos
        while _isalnum(_char(content, pos)):
            pos += 1
        tag = HTMLTag(name=atom_table.intern(content[start:pos]))
        while _char(content, pos) not in ("", ">", "/"):
            before = pos
            while _isspace(_char(content, pos)):
                pos += 1
            attribute, pos = html_parse_attribute(content, pos)
            if pos == before:
                raise HTMLError(HTMLErrorKind.INVALID_ATTRIBUTE)
            if attribute.key or attribute.value is not None:
                tag.attributes.append(attribute)
        c = _char(content, pos)
        if c == "/":
            if _char(content, pos + 1) != ">":
                raise HTMLError(HTMLErrorKind.INVALID_TAG)
            tag.self_closing = True
            return tag, pos + 2
        if c == "":
            raise HTMLError(HTMLErrorKind.EOF)
        return tag, pos + 1
    if _char(content, pos) == "":
        raise HTMLError(HTMLErrorKind.EOF)
    end = content.find("<", pos)
    if end < 0:
        end = len(content)
    return HTMLTag(str_content=content[pos:end]), end


def _printable(c: str) -> str:
    if c == " " or (c.isascii() and c.isprintable() and not c.isspace()):
        return c
    return "".join(f"\\x{b:02X}" for b in c.encode("utf-8"))


def dump_html_tag(tag: HTMLTag, indent: int = 0, out: TextIO | None = None) -> None:
    """Write an indented outline of ``tag`` and its children; style tags are skipped."""
    out = out or sys.stdout
    pad = " " * indent
    if tag.name is not None:
        if tag.name.data == "style":
            return
        out.write(f"{pad}<{tag.name.data}>\n")
        for child in tag.children:
            dump_html_tag(child, indent + 4, out)
        out.write(f"{pad}</{tag.name.data}>\n")
    else:
        out.write(pad + "".join(_printable(c) for c in tag.str_content) + "\n")