"""
Exception types raised by the site keeper.

Per-item errors are raised inside a single step and caught by the batch
loop that owns it; they never abort a whole run.
"""

from typing import Optional


class SiteKeeperError(Exception):
    """Base class for all site keeper errors."""


class InvalidURL(SiteKeeperError):
    """A discovered URL could not be parsed as an absolute http(s) URI."""

    def __init__(self, url: str, reason: str = "not an absolute http(s) URL"):
        super().__init__(f"{reason}: {url}")
        self.url = url
        self.reason = reason


class FetchFailure(SiteKeeperError):
    """A network fetch for an asset failed."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


class WriteFailure(SiteKeeperError):
    """Writing an asset or a rewritten document to disk failed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
