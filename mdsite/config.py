from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

try:
    import tomllib as toml
except ImportError:
    try:
        import tomli as toml
    except ImportError:  # pragma: no cover - optional dependency
        toml = None

try:
    import yaml
except ImportError:  # pragma: no cover - optional dependency
    yaml = None

ENV_VAR = "MDSITE_ENV"
DEV_ENV_VALUES = {"development", "dev"}
TOC_GROUPINGS = ("month", "year")
LIVERELOAD_URL = "http://localhost:35729/livereload.js"


@dataclass(frozen=True)
class Settings:
    source_dir: Path = field(default_factory=lambda: Path("dist"))
    output_dir: Path = field(default_factory=lambda: Path("dist"))
    site_name: str = "My Site"
    contact_email: str = ""
    comments_site: str = ""
    blog_prefix: str = "blog/"
    toc_grouping: str = "month"
    dev: bool = False
    include_unpublished: bool = False
    livereload_url: str = LIVERELOAD_URL


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        if toml is None:
            print("TOML config requires tomllib (Python 3.11+) or tomli.", file=sys.stderr)
            sys.exit(1)
        try:
            data = toml.loads(text)
        except toml.TOMLDecodeError as exc:
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        return data
    if suffix in {".yml", ".yaml"}:
        if yaml is None:
            print("YAML config requires PyYAML.", file=sys.stderr)
            sys.exit(1)
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"YAML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"JSON config must be an object: {path}", file=sys.stderr)
        sys.exit(1)
    return data


def dev_mode_from_env(environ: Optional[Mapping[str, str]] = None) -> bool:
    environ = os.environ if environ is None else environ
    return environ.get(ENV_VAR, "").strip().lower() in DEV_ENV_VALUES


def settings_from_args(args: object) -> Settings:
    """Turn parsed CLI arguments into build settings.

    Unpublished pages follow development mode unless ``include_unpublished``
    was set explicitly.
    """
    toc_grouping = str(getattr(args, "toc_grouping", "month")).strip().lower()
    if toc_grouping not in TOC_GROUPINGS:
        print(f"Invalid toc_grouping '{toc_grouping}', expected one of: {', '.join(TOC_GROUPINGS)}", file=sys.stderr)
        sys.exit(1)
    dev = bool(getattr(args, "dev", False))
    include_unpublished = getattr(args, "include_unpublished", None)
    if include_unpublished is None:
        include_unpublished = dev
    source_dir = Path(getattr(args, "source", "dist"))
    output_value = (getattr(args, "output", "") or "").strip()
    blog_prefix = str(getattr(args, "blog_prefix", "blog/")).strip().lstrip("/")
    if blog_prefix and not blog_prefix.endswith("/"):
        blog_prefix += "/"
    return Settings(
        source_dir=source_dir,
        output_dir=Path(output_value) if output_value else source_dir,
        site_name=str(getattr(args, "site_name", "My Site")),
        contact_email=(getattr(args, "contact_email", "") or "").strip(),
        comments_site=(getattr(args, "comments_site", "") or "").strip(),
        blog_prefix=blog_prefix,
        toc_grouping=toc_grouping,
        dev=dev,
        include_unpublished=bool(include_unpublished),
        livereload_url=(getattr(args, "livereload_url", "") or LIVERELOAD_URL).strip(),
    )
