from __future__ import annotations

import dataclasses
from functools import lru_cache
from typing import Protocol

import markdown
from pygments.formatters import HtmlFormatter

from .content import Page, parse_front_matter
from .extensions import HeadingShiftExtension, ImageSizeExtension

HIGHLIGHT_STYLE = "solarized-light"


class Converter(Protocol):
    def render(self, text: str) -> tuple[str, dict]:
        ...


class MarkdownConverter:
    """Front matter plus Python-Markdown with the extensions the site relies on."""

    def __init__(self, heading_offset: int = 1):
        self.md = markdown.Markdown(
            extensions=[
                "tables",
                "fenced_code",
                "codehilite",
                "footnotes",
                "attr_list",
                "pymdownx.tilde",
                "pymdownx.tasklist",
                ImageSizeExtension(),
                HeadingShiftExtension(offset=heading_offset),
            ],
            extension_configs={
                "codehilite": {"css_class": "codehilite"},
                "pymdownx.tilde": {"subscript": False},
            },
        )

    def render(self, text: str) -> tuple[str, dict]:
        meta, body = parse_front_matter(text)
        html_content = self.md.convert(body)
        self.md.reset()
        return html_content, meta


@lru_cache(maxsize=None)
def highlight_css(style: str = HIGHLIGHT_STYLE) -> str:
    return HtmlFormatter(style=style).get_style_defs(".codehilite")


def convert_page(page: Page, converter: Converter) -> Page:
    html_content, meta = converter.render(page.raw_markdown)
    return dataclasses.replace(page, html=html_content, metadata=meta)
