"""Read a simple stylesheet and print it back in a normalised form."""

from __future__ import annotations

import sys
from typing import TextIO

from .atoms import AtomTable
from .css import CSSError, css_parse_attribute, css_parse_tag, css_skip
from .fileutils import read_entire_file


def format_stylesheet(atom_table: AtomTable, content: str) -> str:
    """Parse rules with single-tag selectors and render them one declaration per line."""
    end = len(content)
    pos = 0
    lines: list[str] = []
    while True:
        pos = css_skip(content, pos, end)
        if pos >= end:
            break
        tag, pos = css_parse_tag(atom_table, content, pos, end)
        pos = css_skip(content, pos, end)
        c = content[pos] if pos < end else ""
        if c == ",":
            raise ValueError("comma separated selectors are not supported")
        if c.isascii() and c.isalnum():
            raise ValueError("space separated selectors are not supported")
        if c != "{":
            raise ValueError(f"unexpected character `{c}`")
        pos += 1
        lines.append(f"{tag.name.data} {{\n")
        while True:
            pos = css_skip(content, pos, end)
            if pos < end and content[pos] == "}":
                pos += 1
                break
            attribute, pos = css_parse_attribute(atom_table, content, pos, end)
            args = "".join(f" {arg}" for arg in attribute.args)
            lines.append(f"    {attribute.name.data}:{args};\n")
        lines.append("}\n")
    return "".join(lines)


def css_main(path: str = "examples/sample.css", out: TextIO | None = None) -> int:
    """Print the stylesheet at ``path``; return a process exit status."""
    out = out or sys.stdout
    try:
        content = read_entire_file(path)
    except OSError as exc:
        print(f"ERROR Could not open file {path}: {exc.strerror}", file=sys.stderr)
        return 1
    nul = content.find("\0")
    if nul >= 0:
        content = content[:nul]
    try:
        text = format_stylesheet(AtomTable(), content)
    except (CSSError, ValueError) as exc:
        print(f"ERROR {exc}", file=sys.stderr)
        return 1
    out.write(text)
    return 0