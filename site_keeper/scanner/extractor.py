"""
Reference extractor for scanning HTML documents.

The default extractor matches attribute values with regular expressions on
the raw text; SoupExtractor swaps in BeautifulSoup for the attribute and
anchor scans without changing what downstream consumers see.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Set

from bs4 import BeautifulSoup, FeatureNotFound

from ..utils.constants import DEFAULT_IMAGE_HOST_PREFIX, URL_CHAR_CLASS
from ..utils.log import get_logger

if TYPE_CHECKING:
    from .documents import Document


class ReferenceKind(Enum):
    """Where a reference was found."""

    REMOTE_IMAGE = "remote-image"
    HREF = "href"
    SRC = "src"


@dataclass(frozen=True)
class ExtractedReference:
    """A URL found in a document."""

    document: "Document"
    url: str
    kind: ReferenceKind


class ReferenceExtractor:
    """
    Base extractor.

    Remote image URLs are always matched textually since they may appear
    anywhere in a document (attributes, inline styles, scripts). Subclasses
    provide the attribute and anchor scans.
    """

    def __init__(self, image_host_prefix: str = DEFAULT_IMAGE_HOST_PREFIX):
        """
        Initialize the extractor.

        Args:
            image_host_prefix: URL prefix identifying remote images to localize
        """
        self.image_host_prefix = image_host_prefix
        self._remote_pattern = re.compile(re.escape(image_host_prefix) + URL_CHAR_CLASS + "+")
        self.logger = get_logger("extractor")

    def remote_images(self, document: "Document") -> Iterator[ExtractedReference]:
        """Yield remote image references in order of appearance."""
        for match in self._remote_pattern.finditer(document.text):
            yield ExtractedReference(document, match.group(0), ReferenceKind.REMOTE_IMAGE)

    def attributes(self, document: "Document") -> Iterator[ExtractedReference]:
        """Yield href and src attribute values in order of appearance."""
        raise NotImplementedError

    def anchors(self, text: str) -> Set[str]:
        """Collect the id and name attribute values declared in text."""
        raise NotImplementedError


class RegexExtractor(ReferenceExtractor):
    """
    Extracts references by pattern matching on the raw document text.

    Only well-formed quoted attributes are recognized; unquoted values and
    commented-out markup are not treated specially.
    """

    # href="..." or src='...'; compound names such as data-src are excluded
    ATTRIBUTE_PATTERN = re.compile(
        r"(?<![\w-])(href|src)\s*=\s*([\"'])(.*?)\2",
        re.IGNORECASE
    )

    ANCHOR_PATTERN = re.compile(
        r"(?<![\w-])(?:id|name)\s*=\s*([\"'])(.*?)\1",
        re.IGNORECASE
    )

    def attributes(self, document: "Document") -> Iterator[ExtractedReference]:
        for match in self.ATTRIBUTE_PATTERN.finditer(document.text):
            kind = ReferenceKind.HREF if match.group(1).lower() == "href" else ReferenceKind.SRC
            yield ExtractedReference(document, match.group(3), kind)

    def anchors(self, text: str) -> Set[str]:
        return {match.group(2) for match in self.ANCHOR_PATTERN.finditer(text)}


class SoupExtractor(ReferenceExtractor):
    """
    Extracts attributes and anchors with BeautifulSoup.

    Tolerates unquoted attributes and ignores markup inside comments.
    """

    def _parse(self, text: str) -> BeautifulSoup:
        try:
            return BeautifulSoup(text, "lxml")
        except FeatureNotFound:
            # Fallback to html.parser if lxml is not installed
            return BeautifulSoup(text, "html.parser")

    def attributes(self, document: "Document") -> Iterator[ExtractedReference]:
        soup = self._parse(document.text)
        for tag in soup.find_all(True):
            for attr, kind in (("href", ReferenceKind.HREF), ("src", ReferenceKind.SRC)):
                value = tag.get(attr)
                if isinstance(value, str):
                    yield ExtractedReference(document, value, kind)

    def anchors(self, text: str) -> Set[str]:
        soup = self._parse(text)
        found = set()
        for attr in ("id", "name"):
            for tag in soup.find_all(attrs={attr: True}):
                value = tag.get(attr)
                if isinstance(value, str):
                    found.add(value)
        return found


EXTRACTORS: Dict[str, type] = {
    "regex": RegexExtractor,
    "soup": SoupExtractor,
}


def create_extractor(parser: str = "regex", **kwargs) -> ReferenceExtractor:
    """
    Create an extractor by name.

    Args:
        parser: "regex" or "soup"
        **kwargs: Passed to the extractor constructor

    Returns:
        Extractor instance

    Raises:
        ValueError: If the parser name is unknown
    """
    try:
        extractor_class = EXTRACTORS[parser]
    except KeyError:
        raise ValueError(f"Unknown parser: {parser}") from None
    return extractor_class(**kwargs)


def distinct_urls(references: Iterable[ExtractedReference]) -> List[str]:
    """
    De-duplicate reference URLs, keeping first-occurrence order.

    Args:
        references: References from one or more documents

    Returns:
        Unique URLs
    """
    seen: Dict[str, None] = {}
    for reference in references:
        seen.setdefault(reference.url, None)
    return list(seen)
