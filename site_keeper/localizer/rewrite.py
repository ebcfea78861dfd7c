"""
Document rewriter for pointing remote image URLs at local copies.

Only whole URLs are replaced: a match must end where the extractor ends a
URL, so markup outside the replaced URLs is left byte-for-byte intact.
"""

import re
from pathlib import Path
from typing import Dict

from ..scanner.documents import Document
from ..utils.constants import URL_CHAR_CLASS
from ..utils.errors import WriteFailure
from ..utils.log import get_logger
from ..utils.paths import PathLike, get_relative_path


class DocumentRewriter:
    """
    Rewrites remote URLs in documents to local relative paths.
    """

    def __init__(self, root: PathLike):
        """
        Initialize the document rewriter.

        Args:
            root: Project root directory that mapping paths are relative to
        """
        self.root = Path(root)
        self.logger = get_logger("rewriter")

    def local_reference(self, document: Document, root_relative: str) -> str:
        """Path to an asset as seen from the document's directory."""
        return get_relative_path(document.path, self.root / root_relative)

    def rewrite(self, document: Document, mapping: Dict[str, str]) -> bool:
        """
        Apply the URL mapping to a document in place.

        All entries are substituted in a single pass. A mapped URL is only
        replaced where it is not followed by further URL characters, so a
        longer URL that merely starts with it (and may have failed to
        download) stays untouched.

        Args:
            document: Document to update
            mapping: Remote URL to root-relative local path

        Returns:
            True if the document text now differs from what was loaded
        """
        present = [url for url in mapping if url in document.text]
        if not present:
            return document.changed

        replacements = {
            url: self.local_reference(document, mapping[url])
            for url in present
        }
        pattern = re.compile(
            "(?:" + "|".join(re.escape(url) for url in present) + ")"
            + "(?!" + URL_CHAR_CLASS + ")"
        )

        document.text = pattern.sub(lambda match: replacements[match.group(0)], document.text)
        return document.changed

    def save(self, document: Document) -> bool:
        """
        Persist a document if its content changed.

        A write failure is logged and reported as False; it never raises.

        Args:
            document: Document to save

        Returns:
            True if the file was written
        """
        try:
            written = document.save()
        except WriteFailure as e:
            self.logger.error(f"Could not save document: {e}")
            return False

        if written:
            self.logger.info(f"Updated {document.name}")
        return written
