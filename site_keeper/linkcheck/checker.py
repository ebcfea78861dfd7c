"""
Link integrity checker.

Verifies that every local href/src reference of the site resolves to a file
on disk and that every same-document fragment names a declared anchor.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional
from urllib.parse import unquote

from .findings import BrokenLinkFinding, DirectoryWithoutIndex, FileMissing, FragmentMissing
from ..scanner.documents import Document
from ..scanner.extractor import ReferenceExtractor, RegexExtractor
from ..utils.constants import INDEX_FILE
from ..utils.log import get_logger
from ..utils.paths import PathLike, is_external, resolve_reference, strip_query_and_fragment


@dataclass
class LinkCheckResult:
    """Results of a link check."""

    findings: List[BrokenLinkFinding] = field(default_factory=list)
    documents_checked: int = 0
    references_checked: int = 0

    @property
    def ok(self) -> bool:
        return not self.findings


class LinkChecker:
    """
    Checks the references of a document set.

    Each reference is classified once: same-document fragment, external,
    or local file. Documents and files are never modified.
    """

    def __init__(self, root: PathLike, extractor: Optional[ReferenceExtractor] = None):
        """
        Initialize the link checker.

        Args:
            root: Project root used for root-relative references
            extractor: Reference extractor (regex based by default)
        """
        self.root = Path(root)
        self.extractor = extractor or RegexExtractor()
        self.logger = get_logger("linkcheck")

    def check(self, documents: Iterable[Document]) -> LinkCheckResult:
        """
        Check all href and src references of the documents.

        Args:
            documents: Documents to check

        Returns:
            LinkCheckResult with findings in scan order
        """
        result = LinkCheckResult()

        for document in documents:
            result.documents_checked += 1
            for reference in self.extractor.attributes(document):
                result.references_checked += 1
                finding = self.check_reference(document, reference.url)
                if finding is not None:
                    self.logger.debug(f"{finding.kind}: {finding.describe()}")
                    result.findings.append(finding)

        return result

    def check_reference(self, document: Document, url: str) -> Optional[BrokenLinkFinding]:
        """
        Classify and check a single reference.

        Args:
            document: Document containing the reference
            url: Raw attribute value

        Returns:
            A finding if the reference is broken, None otherwise
        """
        value = url.strip()

        if value.startswith("#"):
            return self._check_fragment(document, url, value[1:])

        if is_external(value):
            return None

        clean_path = strip_query_and_fragment(value)
        if not clean_path:
            # "?page=2" and the like point at the document itself
            return None

        target = resolve_reference(self.root, document.path, clean_path)

        if target.is_dir():
            if (target / INDEX_FILE).is_file():
                return None
            return DirectoryWithoutIndex(document, url, target)

        if not target.exists():
            return FileMissing(document, url, target)

        return None

    def _check_fragment(
        self,
        document: Document,
        url: str,
        fragment: str
    ) -> Optional[FragmentMissing]:
        # A bare "#" is the top of the page
        if not fragment:
            return None
        if fragment in document.anchors or unquote(fragment) in document.anchors:
            return None
        return FragmentMissing(document, url, fragment)


def format_report(result: LinkCheckResult) -> str:
    """
    Render a human-readable report of a link check.

    Args:
        result: LinkCheckResult to render

    Returns:
        Report text
    """
    lines = []
    if result.findings:
        lines.append(f"Broken links found: {len(result.findings)}")
        for finding in result.findings:
            lines.append(f"  [{finding.kind}] {finding.describe()}")
    else:
        lines.append(
            f"OK: {result.references_checked} references verified across "
            f"{result.documents_checked} HTML files."
        )
    return "\n".join(lines)
