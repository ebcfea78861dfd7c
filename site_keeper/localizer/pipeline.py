"""
Localization pipeline.

Loads the document set, localizes every remote image it references and
rewrites the documents to use the local copies.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .downloader import AssetLocalizer
from .rewrite import DocumentRewriter
from ..scanner.documents import load_documents
from ..scanner.extractor import ReferenceExtractor, RegexExtractor, distinct_urls
from ..utils.constants import (
    DEFAULT_ASSETS_DIR,
    DEFAULT_IMAGE_HOST_PREFIX,
    DEFAULT_TIMEOUT,
)
from ..utils.log import get_logger
from ..utils.paths import PathLike


@dataclass
class LocalizationResult:
    """Results of a localization run."""

    documents_scanned: int = 0
    remote_urls: int = 0
    mapping: Dict[str, str] = field(default_factory=dict)
    downloaded: List[str] = field(default_factory=list)
    reused: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    documents_written: List[str] = field(default_factory=list)
    documents_failed: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0


class SiteLocalizer:
    """
    Runs the localization pipeline over a site.

    The mapping is completely built before any document is rewritten and
    is read-only from then on.
    """

    def __init__(
        self,
        root: PathLike,
        assets_dir: str = DEFAULT_ASSETS_DIR,
        image_host_prefix: str = DEFAULT_IMAGE_HOST_PREFIX,
        documents: Optional[Sequence[str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        extractor: Optional[ReferenceExtractor] = None,
        localizer: Optional[AssetLocalizer] = None
    ):
        """
        Initialize the pipeline.

        Args:
            root: Project root directory
            assets_dir: Assets directory relative to root
            image_host_prefix: URL prefix of images to localize
            documents: Explicit document names; all root *.html by default
            timeout: Request timeout in seconds
            extractor: Reference extractor (regex based by default)
            localizer: Asset localizer (built from the other options by default)
        """
        self.root = Path(root)
        self.document_names = documents
        self.extractor = extractor or RegexExtractor(image_host_prefix=image_host_prefix)
        self.localizer = localizer or AssetLocalizer(
            self.root,
            assets_dir=assets_dir,
            timeout=timeout
        )
        self.rewriter = DocumentRewriter(self.root)
        self.logger = get_logger("pipeline")

    async def run(self) -> LocalizationResult:
        """
        Localize the remote images of the site.

        Returns:
            LocalizationResult with statistics

        Raises:
            SiteKeeperError: If the project root does not exist
        """
        start_time = time.time()
        result = LocalizationResult()

        documents = load_documents(self.root, self.document_names, self.extractor)
        result.documents_scanned = len(documents)

        if not documents:
            self.logger.warning(f"No HTML documents found in {self.root}")
            return result

        references = [
            reference
            for document in documents
            for reference in self.extractor.remote_images(document)
        ]
        urls = distinct_urls(references)
        result.remote_urls = len(urls)

        if not urls:
            self.logger.info("No remote images referenced; nothing to do")
            result.duration_seconds = time.time() - start_time
            return result

        self.logger.info(f"Found {len(urls)} remote images in {len(documents)} documents")

        outcome = await self.localizer.localize_all(urls)
        result.mapping = outcome.mapping
        result.downloaded = outcome.downloaded
        result.reused = outcome.reused
        result.skipped = outcome.invalid + outcome.failed

        for document in documents:
            if not self.rewriter.rewrite(document, result.mapping):
                continue
            if self.rewriter.save(document):
                result.documents_written.append(document.name)
            else:
                result.documents_failed.append(document.name)

        result.duration_seconds = time.time() - start_time

        self.logger.info(
            f"Localization complete! {len(result.downloaded)} downloaded, "
            f"{len(result.reused)} already local, {len(result.skipped)} skipped, "
            f"{len(result.documents_written)} documents updated"
        )

        return result
