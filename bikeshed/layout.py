"""Box layout of a document tree and the glyph positions used to draw it."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, Iterator

from .html import Display, HTMLTag

Measure = Callable[[str, float, float], "tuple[float, float]"]
"""Returns the advance width and the height of one character at a font size and spacing."""

_WHITESPACE_RUN = re.compile(r"[ \t\n\v\f\r]+")
_HIDDEN_TAGS = ("style", "title", "script")


@dataclass
class Cursor:
    """The position where the next box is placed; updated in place by layout."""

    x: int = 0
    y: int = 0


def _isgraph(c: str) -> bool:
    return c.isascii() and c.isprintable() and not c.isspace()


def collapse_text(text: str) -> str:
    """Collapse whitespace runs to one space and replace unprintable characters with ``?``."""
    collapsed = _WHITESPACE_RUN.sub(" ", text)
    return "".join(c if c == " " or _isgraph(c) else "?" for c in collapsed)


def compute_box_html_tag(
    tag: HTMLTag,
    measure: Measure,
    text_font_size: float,
    spacing: float,
    max_width: float,
    cursor: Cursor,
) -> None:
    """Place ``tag`` and its subtree at ``cursor``, then move the cursor past it.

    Text runs wrap to the left edge when a glyph would pass ``max_width``.
    ``script`` elements are positioned but not sized, and leave the cursor alone.
    """
    tag.x, tag.y = cursor.x, cursor.y
    new_x, new_y = tag.x, tag.y
    max_x, max_y = tag.x, tag.y
    if tag.name is not None:
        if tag.name.data == "script":
            return
        for child in tag.children:
            if child.display == Display.BLOCK:
                new_x, new_y = tag.x, max_y
            child_cursor = Cursor(new_x, new_y)
            compute_box_html_tag(child, measure, tag.font_size, spacing, max_width, child_cursor)
            new_x, new_y = child_cursor.x, child_cursor.y
            max_x = max(max_x, child.x + child.width)
            max_y = max(max_y, child.y + child.height)
    else:
        x = float(new_x)
        y = float(new_y)
        for c in collapse_text(tag.str_content):
            width, height = measure(c, text_font_size, spacing)
            if x + width > max_width:
                x = 0.0
                y += text_font_size
            if x + width > max_x:
                max_x = math.ceil(x + width)
            if y + height > max_y:
                max_y = math.ceil(y + height)
            x += width
        new_x, new_y = int(x), int(y)
    tag.width = max_x - tag.x
    tag.height = max_y - tag.y
    if tag.display == Display.BLOCK:
        cursor.x, cursor.y = tag.x, max_y
    elif tag.display == Display.INLINE:
        cursor.x, cursor.y = new_x, new_y
    else:
        cursor.x, cursor.y = max_x, tag.y


def iter_text_glyphs(
    tag: HTMLTag, measure: Measure, text_font_size: float, spacing: float
) -> Iterator[tuple[str, float, float, float]]:
    """Yield ``(char, x, y, font_size)`` for every visible glyph of a laid-out tree.

    ``style``, ``title`` and ``script`` elements are skipped. Text wraps to the
    left edge when a glyph would pass the right side of its own box.
    """
    if tag.name is not None:
        if tag.name.data in _HIDDEN_TAGS:
            return
        for child in tag.children:
            yield from iter_text_glyphs(child, measure, tag.font_size, spacing)
        return
    x = float(tag.x)
    y = float(tag.y)
    right = tag.x + tag.width
    for c in collapse_text(tag.str_content):
        width, _ = measure(c, text_font_size, spacing)
        if x + width > right:
            x = 0.0
            y += text_font_size
        yield c, x, y, text_font_size
        x += width


def iter_boxes(tag: HTMLTag) -> Iterator[HTMLTag]:
    """Yield ``tag`` and all its descendants in document order."""
    yield tag
    for child in tag.children:
        yield from iter_boxes(child)