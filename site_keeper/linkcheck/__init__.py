"""
Link check module for the site keeper.

Finds local references and fragments that do not resolve.
"""

from .checker import LinkChecker, LinkCheckResult, format_report
from .findings import BrokenLinkFinding, FragmentMissing, DirectoryWithoutIndex, FileMissing

__all__ = [
    "LinkChecker",
    "LinkCheckResult",
    "format_report",
    "BrokenLinkFinding",
    "FragmentMissing",
    "DirectoryWithoutIndex",
    "FileMissing",
]
