# bikeshed

A small toy web browser. It reads an HTML file from disk, builds a tag tree,
applies a small subset of CSS, lays the text out in block, inline and
inline-block boxes, and shows the result in a window drawn with pygame.

## Installing

```console
$ pip install .
```

## Usage

```console
$ bikeshed page.html
```

Options:

- `--help` prints the usage line and exits.
- `--headless` parses the page and its styles, then exits without opening a window.
- `--rawjs` treats the input file as a script: it is tokenised and a token
  dump is printed. Only integers, `+`, `-`, `*`, `/`, spaces and newlines are
  accepted; any other character is reported as an invalid token and the
  command exits with status 1.

On startup a stylesheet named `default.css` is read from the current
directory; the command fails if it is missing. Rules from `<style>` elements
inside `<head>` are added after it. A leading `<!DOCTYPE html>` is accepted
and removed. The window title is `Bikeshed - <title text>` when the page has
a `<title>`, otherwise `Bikeshed`.

If `fonts/iosevka/iosevka-bold.ttf` exists under the current directory it is
used at 32 pixels; otherwise pygame's default font is used at 24 pixels.

While the window is open:

- the mouse wheel scrolls the page;
- `F4` shows or hides the layout boxes;
- `Escape` or closing the window quits.

## Supported CSS

- Selectors: tag names, descendant patterns (`div p`) and comma-separated
  lists. `#id` and `.class` selectors are parsed, but rules whose innermost
  selector is not a tag name are skipped with a warning.
- Properties: `display` (`block`, `inline`, `inline-block`) and `font-size`
  in `rem`. Other properties and units are reported as warnings and ignored.
- `/* ... */` comments.

## As a library

```python
from bikeshed.document import load_document

document = load_document(html_text, default_css_text)
body = document.body
```

- `bikeshed.html` – `html_parse_next_tag`, `html_parse_attribute`,
  `HTMLTag` and `dump_html_tag`.
- `bikeshed.css` – selector and declaration parsing (`css_parse_patterns`,
  `css_parse_attribute`) and matching (`css_match_pattern`).
- `bikeshed.document` – `parse_html`, `css_parse`, `match_css_patterns`,
  `apply_css_styles`, `fixup_tree` and `load_document`.
- `bikeshed.layout` – `compute_box_html_tag`, `iter_text_glyphs` and
  `iter_boxes`; they take a measuring function, so they work without a window.
- `bikeshed.jsengine` – `tokenise_js` and `run_js`.
- `bikeshed.cssdemo` – `format_stylesheet` prints a stylesheet of
  single-tag rules back one declaration per line.

Parsing errors are raised as `HTMLError` and `CSSError`, each carrying a
`kind`.

## What it does not do

- It does not fetch anything over the network; pages and stylesheets are
  read from local files only.
- It does not run scripts. The script support stops at tokenising, and
  `<script>` elements are neither laid out nor drawn.
- There are no links, forms, images or other interactive elements; the
  window only shows text and, on request, layout boxes.

## Running the tests

```console
$ pip install .[test]
$ pytest
```