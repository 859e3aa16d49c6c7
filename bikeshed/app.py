"""Command-line entry point: load a page and show it in a window."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Sequence

from .css import CSSError, csserr_str
from .document import Document, apply_css_styles, fixup_tree, load_document
from .fileutils import read_entire_file
from .html import HTMLError, dump_html_tag, htmlerr_str
from .jsengine import JSTokenizeError, run_js
from .layout import Cursor, compute_box_html_tag, iter_boxes, iter_text_glyphs

PROG = "bikeshed"
DEFAULT_CSS_PATH = "default.css"
FONT_PATH = os.path.join("fonts", "iosevka", "iosevka-bold.ttf")
WIDTH = 16 * 100
HEIGHT = 9 * 100

_RAYWHITE = (245, 245, 245)
_BLACK = (0, 0, 0)
_BOX_COLORS = [
    (130, 130, 130, 255), (255, 203, 0, 255), (255, 109, 194, 255),
    (102, 191, 255, 255), (230, 41, 55, 255), (190, 33, 55, 255),
    (0, 228, 48, 255), (255, 161, 0, 255), (0, 158, 47, 255),
    (0, 117, 44, 255), (0, 121, 241, 255), (0, 82, 172, 255),
    (200, 122, 255, 255), (135, 60, 190, 255), (112, 31, 126, 255),
    (211, 176, 131, 255), (127, 106, 79, 255), (76, 63, 47, 255),
    (255, 255, 255, 255), (0, 0, 0, 0), (255, 0, 255, 255),
    (245, 245, 245, 255),
]


class UsageError(ValueError):
    """Raised for bad command-line arguments."""


@dataclass
class Options:
    input_path: str | None = None
    headless: bool = False
    rawjs: bool = False
    show_help: bool = False


def help_text(exe: str) -> str:
    return f"{exe} <input path>\n"


def parse_args(argv: Sequence[str]) -> Options:
    """Parse arguments (without the program name); ``--help`` stops parsing."""
    options = Options()
    for arg in argv:
        if arg == "--help":
            options.show_help = True
            return options
        if arg == "--headless":
            options.headless = True
        elif arg == "--rawjs":
            options.rawjs = True
        elif options.input_path is None:
            options.input_path = arg
        else:
            raise UsageError(f"Unexpected argument: `{arg}`")
    if options.input_path is None:
        raise UsageError("Missing input path!")
    return options


def window_title(document: Document) -> str:
    title = document.title
    if title is not None and title.children and title.children[0].name is None:
        return f"Bikeshed - {title.children[0].str_content}"
    return "Bikeshed"


class _Fonts:
    """Fonts by pixel size, loaded on first use."""

    def __init__(self, pygame, path: str | None) -> None:
        self._pygame = pygame
        self._path = path
        self._cache: dict = {}

    def get(self, size: float):
        key = max(1, round(size))
        font = self._cache.get(key)
        if font is None:
            font = self._pygame.font.Font(self._path, key)
            self._cache[key] = font
        return font

    def measure(self, c: str, size: float, spacing: float) -> tuple[float, float]:
        font = self.get(size)
        metrics = font.metrics(c)
        advance = metrics[0][4] if metrics and metrics[0] else 0
        if advance == 0:
            advance = font.size(c)[0]
        return float(advance) + spacing, size


def run_window(document: Document, title: str) -> None:
    """Show ``document`` until the window is closed; F4 toggles layout boxes."""
    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption(title)
        if os.path.exists(FONT_PATH):
            fonts = _Fonts(pygame, FONT_PATH)
            font_size = 32.0
        else:
            fonts = _Fonts(pygame, None)
            font_size = 24.0
        spacing = font_size * 0.1
        body = document.body
        if body is not None:
            apply_css_styles(body, font_size)
            fixup_tree(body)
        dump_html_tag(document.root, 0)
        clock = pygame.time.Clock()
        scroll_y = 0.0
        show_boxes = False
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.MOUSEWHEEL:
                    scroll_y += event.y * 16.0
                elif event.type == pygame.KEYUP and event.key == pygame.K_F4:
                    show_boxes = not show_boxes
            screen.fill(_RAYWHITE)
            if body is not None:
                compute_box_html_tag(
                    body, fonts.measure, font_size, spacing, screen.get_width(), Cursor()
                )
                if show_boxes:
                    for index, box in enumerate(iter_boxes(body)):
                        color = _BOX_COLORS[index % len(_BOX_COLORS)]
                        if color[3] == 0:
                            continue
                        rect = (box.x, int(box.y + scroll_y), box.width, box.height)
                        pygame.draw.rect(screen, color[:3], rect)
                for c, x, y, size in iter_text_glyphs(body, fonts.measure, font_size, spacing):
                    surface = fonts.get(size).render(c, True, _BLACK)
                    screen.blit(surface, (x, y + scroll_y))
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
    except UsageError as exc:
        print(f"ERROR {exc}", file=sys.stderr)
        sys.stderr.write(help_text(PROG))
        return 1
    if options.show_help:
        sys.stdout.write(help_text(PROG))
        return 0
    try:
        content = read_entire_file(options.input_path)
    except OSError as exc:
        print(f"ERROR Could not open file {options.input_path}: {exc.strerror}", file=sys.stderr)
        return 1
    if options.rawjs:
        try:
            run_js(content)
        except JSTokenizeError as exc:
            print(exc, file=sys.stderr)
            print("Failed to tokenise JS", file=sys.stderr)
            return 1
        return 0
    try:
        default_css = read_entire_file(DEFAULT_CSS_PATH)
    except OSError:
        print(f"ERROR: Failed to load `{DEFAULT_CSS_PATH}`", file=sys.stderr)
        return 1
    try:
        document = load_document(content, default_css)
    except ValueError as exc:
        print(f"ERROR {exc}", file=sys.stderr)
        return 1
    except HTMLError as exc:
        print(f"Failed to parse tag: {htmlerr_str(exc.kind)}", file=sys.stderr)
        return 1
    except CSSError as exc:
        print(f"ERROR: Failed to parse {DEFAULT_CSS_PATH}: {csserr_str(exc.kind)}", file=sys.stderr)
        return 1
    if options.headless:
        return 0
    run_window(document, window_title(document))
    return 0