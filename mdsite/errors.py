from __future__ import annotations


class BuildError(Exception):
    """Fatal condition that aborts the build."""


class UnknownPageTypeError(BuildError):
    def __init__(self, location: str, page_type: str):
        super().__init__(f"Page '{location}' declares unknown type '{page_type}'")
        self.location = location
        self.page_type = page_type
