"""A tiny web browser: HTML and CSS parsing, box layout and a pygame window."""

__version__ = "0.1.0"