from __future__ import annotations

import datetime as dt
import html
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from .collect import ingest
from .config import Settings
from .content import Page, PageType
from .convert import Converter, MarkdownConverter, highlight_css
from .errors import UnknownPageTypeError
from .render import load_template, render_template, write_text
from .utils import format_date, parse_date

UNKNOWN_GROUP = "Unknown"
GROUP_FORMATS = {"month": "%B %Y", "year": "%Y"}


def render_dates(page: Page) -> str:
    lines = []
    if page.created:
        lines.append(f'<b style="font-variant: small-caps;">published</b> {html.escape(format_date(page.created))}<br />')
    if page.updated:
        lines.append(f'<b style="font-variant: small-caps;">updated</b> {html.escape(format_date(page.updated))}<br />')
    return "\n\t".join(lines)


def render_header(page: Page, settings: Settings) -> str:
    canonical = ""
    if page.canonical:
        canonical = f'<link rel="canonical" href="{html.escape(page.canonical)}">'
    livereload = ""
    if settings.dev:
        livereload = f'<script src="{html.escape(settings.livereload_url)}"></script>'
    return render_template(
        load_template("header.html"),
        title=html.escape(page.title),
        site_name=html.escape(settings.site_name),
        canonical=canonical,
        highlight_css=highlight_css(),
        livereload=livereload,
        blog_prefix=html.escape(settings.blog_prefix),
        dates=render_dates(page),
    )


def render_footer(page: Page, settings: Settings) -> str:
    contact = ""
    if settings.contact_email:
        subject = f"Comment on your '{page.location}' page"
        contact = (
            "<center>"
            f'<a href="mailto:{html.escape(settings.contact_email)}?subject={html.escape(subject)}">Contact</a>'
            "</center>"
        )
    comments = ""
    if page.comments and settings.comments_site:
        comments = render_template(load_template("comments.html"), comments_site=html.escape(settings.comments_site))
    elif page.comments:
        print(
            f"Warning: '{page.location}' enables comments but no comments_site is configured",
            file=sys.stderr,
        )
    return render_template(load_template("footer.html"), contact=contact, comments=comments)


def render_article(page: Page, pages: Sequence[Page], settings: Settings) -> str:
    return f"{render_header(page, settings)}{page.html}{render_footer(page, settings)}"


def toc_entries(pages: Sequence[Page], blog_prefix: str) -> list[tuple[Page, Optional[dt.datetime]]]:
    """Blog articles with their parsed creation date, newest first.

    Returns a new list; ``pages`` is left untouched. Undated articles go last.
    """
    entries = []
    for page in pages:
        if page.type_name != PageType.ARTICLE.value or not page.location.startswith(blog_prefix):
            continue
        created = parse_date(page.created)
        if created is None:
            print(
                f"Warning: '{page.location}' has no valid created date ({page.created!r}), "
                f"listing it under '{UNKNOWN_GROUP}'",
                file=sys.stderr,
            )
        entries.append((page, created))
    entries.sort(key=lambda item: (item[1] is not None, item[1] or dt.datetime.min), reverse=True)
    return entries


def group_label(created: Optional[dt.datetime], grouping: str) -> str:
    if created is None:
        return UNKNOWN_GROUP
    return created.strftime(GROUP_FORMATS[grouping])


def render_blog_toc(page: Page, pages: Sequence[Page], settings: Settings) -> str:
    toc_html = ""
    prev_group = None
    for item, created in toc_entries(pages, settings.blog_prefix):
        group = group_label(created, settings.toc_grouping)
        if group != prev_group:
            toc_html += f"<p>{html.escape(group)}</p>"
            prev_group = group
        toc_html += f'<li><a href="/{html.escape(item.location)}">{html.escape(item.title)}</a></li>'
    return f"{render_header(page, settings)}{page.html}<ul>{toc_html}</ul>{render_footer(page, settings)}"


RENDERERS: dict[PageType, Callable[[Page, Sequence[Page], Settings], str]] = {
    PageType.ARTICLE: render_article,
    PageType.BLOG_TOC: render_blog_toc,
}

_missing = set(PageType) - set(RENDERERS)
if _missing:
    raise RuntimeError(f"No renderer registered for: {', '.join(sorted(t.value for t in _missing))}")


def check_page_types(pages: Sequence[Page]) -> None:
    """Raise UnknownPageTypeError for the first page without a renderer."""
    for page in pages:
        if page.page_type not in RENDERERS:
            raise UnknownPageTypeError(page.location, page.type_name)


def render_page(page: Page, pages: Sequence[Page], settings: Settings) -> str:
    return RENDERERS[page.page_type](page, pages, settings)


def output_path(page: Page, output_dir: Path) -> Path:
    return output_dir / f"{page.location}.html"


def build_site(settings: Settings, converter: Optional[Converter] = None) -> tuple[Page, ...]:
    if converter is None:
        converter = MarkdownConverter()
    pages = ingest(settings.source_dir, converter, include_unpublished=settings.include_unpublished)
    check_page_types(pages)
    for page in pages:
        print(f"Rendering '{page.location}' of type '{page.type_name}'")
        write_text(output_path(page, settings.output_dir), render_page(page, pages, settings))
    print(f"Rendered {len(pages)} pages\n")
    return pages
