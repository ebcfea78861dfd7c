"""
Asset localizer for copying remote images into the repository.

Uses aiohttp for downloads, one request at a time.
"""

import asyncio
import contextlib
import html
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List

import aiohttp
from aiohttp import ClientError, ClientTimeout

from ..utils.constants import DEFAULT_ASSETS_DIR, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from ..utils.errors import FetchFailure, InvalidURL, WriteFailure
from ..utils.log import get_logger
from ..utils.paths import PathLike, asset_file_name, ensure_dir, to_posix


@dataclass
class LocalizeOutcome:
    """What happened to each URL handed to the localizer."""

    # URL -> path relative to the project root, forward slashes
    mapping: Dict[str, str] = field(default_factory=dict)
    downloaded: List[str] = field(default_factory=list)
    reused: List[str] = field(default_factory=list)
    invalid: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


class AssetLocalizer:
    """
    Downloads remote images into the assets directory.

    An asset already on disk is never fetched again or overwritten, which
    makes repeated runs idempotent.
    """

    def __init__(
        self,
        root: PathLike,
        assets_dir: str = DEFAULT_ASSETS_DIR,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT
    ):
        """
        Initialize the asset localizer.

        Args:
            root: Project root directory
            assets_dir: Assets directory relative to root
            timeout: Request timeout in seconds
            user_agent: User agent string for requests
        """
        self.root = Path(root)
        self.assets_dir = assets_dir.strip("/\\") or DEFAULT_ASSETS_DIR
        self.timeout = ClientTimeout(total=timeout)
        self.user_agent = user_agent
        self.logger = get_logger("downloader")

    def local_path(self, file_name: str) -> Path:
        """Filesystem path of an asset."""
        return self.root / self.assets_dir / file_name

    def relative_path(self, file_name: str) -> str:
        """Root-relative path of an asset as written into documents."""
        return to_posix(os.path.join(self.assets_dir, file_name))

    async def localize(self, urls: Iterable[str]) -> Dict[str, str]:
        """
        Localize remote URLs and return the URL to local path mapping.

        Args:
            urls: Distinct remote URLs in discovery order

        Returns:
            Mapping of URL to root-relative local path
        """
        outcome = await self.localize_all(urls)
        return outcome.mapping

    async def localize_all(self, urls: Iterable[str]) -> LocalizeOutcome:
        """
        Localize remote URLs, keeping track of every per-URL result.

        Args:
            urls: Distinct remote URLs in discovery order

        Returns:
            LocalizeOutcome with the mapping and per-category URL lists
        """
        outcome = LocalizeOutcome()
        urls = list(dict.fromkeys(urls))

        if not urls:
            return outcome

        self.logger.info(f"Localizing {len(urls)} remote images...")

        try:
            ensure_dir(self.root / self.assets_dir)
        except OSError as e:
            # Each write reports its own failure below
            self.logger.error(f"Cannot create assets directory: {e}")

        async with aiohttp.ClientSession(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent}
        ) as session:
            for url in urls:
                await self._localize_one(session, url, outcome)

        self.logger.info(
            f"Downloaded {len(outcome.downloaded)} images, "
            f"{len(outcome.reused)} already present, "
            f"{len(outcome.failed) + len(outcome.invalid)} skipped"
        )

        return outcome

    async def _localize_one(
        self,
        session: aiohttp.ClientSession,
        url: str,
        outcome: LocalizeOutcome
    ) -> None:
        """Localize a single URL; every failure is contained here."""
        try:
            file_name = asset_file_name(url)
        except InvalidURL as e:
            self.logger.warning(f"Skipping invalid URL: {e}")
            outcome.invalid.append(url)
            return

        local_path = self.local_path(file_name)
        relative_path = self.relative_path(file_name)

        if local_path.exists():
            self.logger.debug(f"Already present: {url} -> {relative_path}")
            outcome.mapping[url] = relative_path
            outcome.reused.append(url)
            return

        try:
            content = await self.fetch(session, url)
        except FetchFailure as e:
            self.logger.warning(f"Download failed: {e}")
            outcome.failed.append(url)
            return

        try:
            self.write_asset(local_path, content)
        except WriteFailure as e:
            self.logger.error(f"Could not save image: {e}")
            outcome.failed.append(url)
            return

        self.logger.info(f"Downloaded: {url} -> {relative_path}")
        outcome.mapping[url] = relative_path
        outcome.downloaded.append(url)

    async def fetch(self, session: aiohttp.ClientSession, url: str) -> bytes:
        """
        Fetch an asset with a single request.

        Args:
            session: aiohttp session
            url: URL as found in the document

        Returns:
            Response body

        Raises:
            FetchFailure: On any HTTP, connection or timeout error
        """
        # URLs come from HTML source, so "&amp;" is still encoded
        request_url = html.unescape(url)

        try:
            async with session.get(request_url, allow_redirects=True) as response:
                if response.status != 200:
                    raise FetchFailure(url, f"HTTP {response.status}", status=response.status)
                return await response.read()
        except ClientError as e:
            raise FetchFailure(url, f"client error: {e}") from e
        except asyncio.TimeoutError as e:
            raise FetchFailure(url, "timed out") from e
        except ValueError as e:
            # yarl rejects some URLs that urllib accepts
            raise FetchFailure(url, f"bad request URL: {e}") from e

    def write_asset(self, local_path: Path, content: bytes) -> None:
        """
        Write asset bytes through a temporary file.

        The final name only appears once the content is completely on disk,
        so an interrupted write is never mistaken for a localized asset.

        Args:
            local_path: Destination path
            content: Bytes to write

        Raises:
            WriteFailure: If the file cannot be written
        """
        part_path = local_path.with_name(local_path.name + ".part")
        try:
            ensure_dir(local_path.parent)
            with open(part_path, "wb") as f:
                f.write(content)
            os.replace(part_path, local_path)
        except OSError as e:
            with contextlib.suppress(OSError):
                part_path.unlink()
            raise WriteFailure(str(local_path), str(e)) from e
