"""
Scanner module for the site keeper.

Loads the document set and extracts the references it contains.
"""

from .documents import Document, load_documents, find_documents
from .extractor import (
    ExtractedReference,
    ReferenceKind,
    ReferenceExtractor,
    RegexExtractor,
    SoupExtractor,
    create_extractor,
    distinct_urls,
)

__all__ = [
    "Document",
    "load_documents",
    "find_documents",
    "ExtractedReference",
    "ReferenceKind",
    "ReferenceExtractor",
    "RegexExtractor",
    "SoupExtractor",
    "create_extractor",
    "distinct_urls",
]
