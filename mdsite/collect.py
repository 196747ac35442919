from __future__ import annotations

from pathlib import Path

from .content import Page
from .convert import Converter, convert_page
from .errors import BuildError

MARKDOWN_EXTENSIONS = (".md",)


def find_sources(source_dir: Path, extensions: tuple[str, ...] = MARKDOWN_EXTENSIONS) -> list[Path]:
    if not source_dir.is_dir():
        raise BuildError(f"Source directory not found: {source_dir}")
    files = [path for path in source_dir.rglob("*") if path.is_file() and path.suffix.lower() in extensions]
    return sorted(files, key=lambda p: p.as_posix())


def page_location(path: Path, source_dir: Path) -> str:
    rel = path.relative_to(source_dir).with_suffix("")
    location = rel.as_posix()
    if not location or location == ".":
        raise BuildError(f"Cannot derive an output location for {path}")
    return location


def collect_pages(source_dir: Path) -> list[Page]:
    pages = []
    for md_file in find_sources(source_dir):
        print(f"Ingesting '{md_file.as_posix()}'")
        try:
            raw_text = md_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise BuildError(f"Cannot read {md_file}: {exc}") from exc
        pages.append(Page(raw_markdown=raw_text, location=page_location(md_file, source_dir), source=md_file))
    return pages


def ingest(source_dir: Path, converter: Converter, include_unpublished: bool = False) -> tuple[Page, ...]:
    """Collect, convert and filter every markdown page under ``source_dir``."""
    pages = []
    for page in collect_pages(source_dir):
        page = convert_page(page, converter)
        if page.published:
            pages.append(page)
        elif include_unpublished:
            print(f"\t(included although not marked as published: '{page.location}')")
            pages.append(page)
        else:
            print(f"\t(skipped '{page.location}' because it's not marked as published)")
    print(f"Ingested {len(pages)} pages\n")
    return tuple(pages)
