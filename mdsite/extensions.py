from __future__ import annotations

import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor
from markdown.treeprocessors import Treeprocessor

RE_SIZED_IMAGE = (
    r"!\[(?P<alt>[^\]]*)\]\((?P<src>[^\s)]+)"
    r"(?:\s+\"(?P<title>[^\"]*)\")?"
    r"\s+=(?P<width>\d+(?:px|%)?|\*)x(?P<height>\d+(?:px|%)?|\*)\s*\)"
)
HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


class SizedImageProcessor(InlineProcessor):
    """Handles ``![alt](src =WxH)``; either dimension may be ``*``."""

    def handleMatch(self, m, data):
        el = etree.Element("img")
        el.set("src", m.group("src"))
        el.set("alt", m.group("alt"))
        if m.group("title"):
            el.set("title", m.group("title"))
        for attr in ("width", "height"):
            value = m.group(attr)
            if value != "*":
                el.set(attr, value)
        return el, m.start(0), m.end(0)


class ImageSizeExtension(Extension):
    def extendMarkdown(self, md):
        # Ahead of "link" and "image_link" so the size suffix is not parsed as a URL.
        md.inlinePatterns.register(SizedImageProcessor(RE_SIZED_IMAGE, md), "sized_image", 175)


class HeadingShiftProcessor(Treeprocessor):
    def __init__(self, md, offset: int):
        super().__init__(md)
        self.offset = offset

    def run(self, root):
        for el in root.iter():
            if el.tag in HEADING_TAGS:
                level = min(int(el.tag[1]) + self.offset, 6)
                el.tag = f"h{level}"


class HeadingShiftExtension(Extension):
    def __init__(self, **kwargs):
        self.config = {"offset": [1, "Number of levels to push body headings down"]}
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        md.treeprocessors.register(HeadingShiftProcessor(md, int(self.getConfig("offset"))), "heading_shift", 5)
