from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

from .config import LIVERELOAD_URL, TOC_GROUPINGS, dev_mode_from_env, load_config, settings_from_args
from .errors import BuildError
from .pages import build_site
from .utils import parse_bool


def build_parser(argv: Optional[Sequence[str]] = None) -> argparse.ArgumentParser:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    config = load_config(Path(pre_args.config))

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: str) -> str:
        return str(cfg_value(key, default))

    def cfg_bool(key: str, default: Optional[bool]) -> Optional[bool]:
        value = config.get(key)
        return default if value is None else parse_bool(value)

    parser = argparse.ArgumentParser(description="Build HTML pages from a tree of Markdown files.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--source", default=cfg_str("source", "dist"), help="Directory containing Markdown pages.")
    parser.add_argument(
        "--output",
        default=cfg_str("output", ""),
        help="Output directory (defaults to the source directory).",
    )
    parser.add_argument("--site-name", default=cfg_str("site_name", "My Site"), help="Site title.")
    parser.add_argument(
        "--contact-email",
        default=cfg_str("contact_email", ""),
        help="Address used by the contact link in the page footer.",
    )
    parser.add_argument(
        "--comments-site",
        default=cfg_str("comments_site", ""),
        help="Disqus shortname for pages with comments enabled.",
    )
    parser.add_argument(
        "--blog-prefix",
        default=cfg_str("blog_prefix", "blog/"),
        help="Location prefix of pages listed by the blog table of contents.",
    )
    parser.add_argument(
        "--toc-grouping",
        default=cfg_str("toc_grouping", "month"),
        help=f"Table of contents grouping ({', '.join(TOC_GROUPINGS)}).",
    )
    parser.add_argument(
        "--dev",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("dev", dev_mode_from_env()),
        help="Development build: live reload and unpublished pages (default: MDSITE_ENV=development).",
    )
    parser.add_argument(
        "--include-unpublished",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("include_unpublished", None),
        help="Render pages not marked as published (default: follow --dev).",
    )
    parser.add_argument(
        "--livereload-url",
        default=cfg_str("livereload_url", LIVERELOAD_URL),
        help="Script injected into every page in development builds.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser(argv).parse_args(argv)
    settings = settings_from_args(args)
    if settings.dev:
        print("Development build: live reload enabled")
    if settings.include_unpublished:
        print("Unpublished pages will be included")
    start = time.perf_counter()
    try:
        build_site(settings)
    except BuildError as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    print(f"Site generated in: {settings.output_dir}")
