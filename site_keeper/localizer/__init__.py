"""
Localizer module for the site keeper.

Contains components for downloading remote images and rewriting documents.
"""

from .downloader import AssetLocalizer, LocalizeOutcome
from .rewrite import DocumentRewriter
from .pipeline import SiteLocalizer, LocalizationResult

__all__ = [
    "AssetLocalizer",
    "LocalizeOutcome",
    "DocumentRewriter",
    "SiteLocalizer",
    "LocalizationResult",
]
