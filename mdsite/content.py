from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .errors import UnknownPageTypeError

FRONT_MATTER_FENCES = {"---": "---", "«««": "»»»"}


class PageType(enum.Enum):
    ARTICLE = "article"
    BLOG_TOC = "blog toc"


@dataclass(frozen=True)
class Page:
    raw_markdown: str
    location: str
    source: Optional[Path] = None
    html: str = ""
    metadata: dict = field(default_factory=dict)

    @property
    def title(self) -> str:
        return self.metadata.get("title", "")

    @property
    def created(self) -> str:
        return self.metadata.get("created", "")

    @property
    def updated(self) -> str:
        return self.metadata.get("updated", "")

    @property
    def canonical(self) -> str:
        return self.metadata.get("canonical", "")

    @property
    def published(self) -> bool:
        return self.metadata.get("published") == "true"

    @property
    def comments(self) -> bool:
        return self.metadata.get("comments") == "true"

    @property
    def type_name(self) -> str:
        return self.metadata.get("type", "")

    @property
    def page_type(self) -> PageType:
        try:
            return PageType(self.type_name)
        except ValueError:
            raise UnknownPageTypeError(self.location, self.type_name) from None


def strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def parse_front_matter(text: str) -> tuple[dict, str]:
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines()
    if not lines or lines[0].strip() not in FRONT_MATTER_FENCES:
        return {}, clean_text

    closing = FRONT_MATTER_FENCES[lines[0].strip()]
    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == closing:
            end = i
            break
    if end is None:
        return {}, clean_text

    meta = {}
    for line in lines[1:end]:
        line = line.strip()
        if not line or line.startswith("#") or ":" not in line:
            continue
        key, value = line.split(":", 1)
        meta[key.strip().lower()] = strip_quotes(value.strip())
    body = "\n".join(lines[end + 1 :])
    return meta, body
