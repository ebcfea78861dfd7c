"""
Path and URL utilities for the site keeper.

Provides URL parsing, asset file naming, reference resolution and
directory management.
"""

import hashlib
import os
import re
from pathlib import Path
from typing import Union
from urllib.parse import SplitResult, unquote, urlsplit

from .constants import EXTERNAL_PREFIXES
from .errors import InvalidURL


PathLike = Union[str, "os.PathLike[str]"]

# Characters that are not allowed in file names on common platforms
UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"|?*\\]')

# Any other scheme ("ftp:", "sms:") is passed through unchecked
URL_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*:")


def parse_remote_url(url: str) -> SplitResult:
    """
    Parse an absolute http(s) URL.

    Args:
        url: URL to parse

    Returns:
        The split URL

    Raises:
        InvalidURL: If the URL is malformed or not http(s)
    """
    try:
        parts = urlsplit(url)
        # Accessing the port validates it
        parts.port
    except ValueError as e:
        raise InvalidURL(url, str(e)) from e

    if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
        raise InvalidURL(url)

    return parts


def placeholder_name(url: str) -> str:
    """
    Generate a stable file name for a URL whose path has no usable segment.

    Args:
        url: Asset URL

    Returns:
        File name derived from a hash of the URL
    """
    url_hash = hashlib.sha256(url.encode("utf-8")).hexdigest()[:12]
    return f"image-{url_hash}"


def asset_file_name(url: str) -> str:
    """
    Derive the local file name for a remote asset.

    The name is the last segment of the URL path. Query strings and
    fragments never take part in the name.

    Args:
        url: Asset URL

    Returns:
        Safe file name

    Raises:
        InvalidURL: If the URL cannot be parsed
    """
    parts = parse_remote_url(url)
    filename = os.path.basename(unquote(parts.path))
    filename = UNSAFE_FILENAME_CHARS.sub("_", filename).strip()

    if filename in ("", ".", ".."):
        return placeholder_name(url)

    return filename


def to_posix(path: PathLike) -> str:
    """Render a relative path with forward slashes for use inside HTML."""
    return str(path).replace("\\", "/")


def get_relative_path(from_path: PathLike, to_path: PathLike) -> str:
    """
    Calculate the relative path from one file to another.

    Args:
        from_path: Source file path
        to_path: Target file path

    Returns:
        Relative path string
    """
    from_dir = os.path.dirname(os.fspath(from_path))
    rel_path = os.path.relpath(os.fspath(to_path), from_dir or os.curdir)
    # Use forward slashes for URLs
    return to_posix(rel_path)


def is_external(url: str) -> bool:
    """Check whether a reference points outside the local file tree."""
    value = url.strip().lower()
    return value.startswith(EXTERNAL_PREFIXES) or bool(URL_SCHEME.match(value))


def strip_query_and_fragment(url: str) -> str:
    """
    Remove a trailing query string and fragment from a reference.

    Args:
        url: Raw reference value

    Returns:
        The path part of the reference
    """
    return url.split("#", 1)[0].split("?", 1)[0]


def resolve_reference(root: PathLike, document_path: PathLike, clean_path: str) -> Path:
    """
    Resolve a local reference to a filesystem location.

    Root-relative references ("/about.html") resolve against the project
    root; everything else resolves against the directory of the referring
    document. Percent-encoded characters are decoded first.

    Args:
        root: Project root directory
        document_path: Path of the document holding the reference
        clean_path: Reference with query and fragment removed

    Returns:
        Filesystem path of the target
    """
    decoded = unquote(clean_path)
    if decoded.startswith("/"):
        return Path(root) / decoded.lstrip("/")
    return Path(document_path).parent / decoded


def ensure_dir(path: PathLike) -> None:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists
    """
    os.makedirs(path, exist_ok=True)

