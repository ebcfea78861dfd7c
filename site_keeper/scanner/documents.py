"""
Document set loader.

Enumerates the HTML documents directly under the project root and loads
their text. Subdirectories are never scanned.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Set

from .extractor import ReferenceExtractor, RegexExtractor
from ..utils.constants import DOCUMENT_GLOB
from ..utils.errors import SiteKeeperError, WriteFailure
from ..utils.log import get_logger
from ..utils.paths import PathLike, to_posix


logger = get_logger("documents")


@dataclass(eq=False)
class Document:
    """An HTML document of the site, loaded once per run."""

    path: Path
    name: str
    original_text: str
    text: Optional[str] = None
    anchors: Set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        if self.text is None:
            self.text = self.original_text

    @property
    def changed(self) -> bool:
        """True if the text differs from what was loaded."""
        return self.text != self.original_text

    def save(self) -> bool:
        """
        Write the document back to disk if its text changed.

        Returns:
            True if the file was written

        Raises:
            WriteFailure: If the file could not be written
        """
        if not self.changed:
            return False

        try:
            with open(self.path, "w", encoding="utf-8", newline="") as f:
                f.write(self.text)
        except OSError as e:
            raise WriteFailure(str(self.path), str(e)) from e

        self.original_text = self.text
        return True


def find_documents(root: PathLike) -> List[Path]:
    """List the HTML files directly under root, sorted by name."""
    return sorted(
        path for path in Path(root).glob(DOCUMENT_GLOB)
        if path.is_file()
    )


def load_documents(
    root: PathLike,
    names: Optional[Sequence[str]] = None,
    extractor: Optional[ReferenceExtractor] = None
) -> List[Document]:
    """
    Load the document set of a site.

    Args:
        root: Project root directory
        names: Explicit document names relative to root; when omitted every
               *.html file directly under root is loaded
        extractor: Extractor used to collect anchor identifiers

    Returns:
        Loaded documents in a stable order

    Raises:
        SiteKeeperError: If root is not a directory
    """
    root = Path(root)
    if not root.is_dir():
        raise SiteKeeperError(f"Project root is not a directory: {root}")

    extractor = extractor or RegexExtractor()

    if names:
        paths = [root / name for name in names]
    else:
        paths = find_documents(root)

    documents = []
    for path in paths:
        try:
            # newline="" keeps CRLF files byte-identical on rewrite
            with open(path, "r", encoding="utf-8", newline="") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot read {path}: {e}")
            continue

        documents.append(Document(
            path=path,
            name=to_posix(os.path.relpath(path, root)),
            original_text=text,
            anchors=extractor.anchors(text)
        ))

    logger.debug(f"Loaded {len(documents)} documents from {root}")
    return documents
