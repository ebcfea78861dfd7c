"""
Shared constants for the site keeper.

Contains the default configuration used by the localizer, the link checker
and the command line interface.
"""

# Remote host whose images are copied into the repository
DEFAULT_IMAGE_HOST_PREFIX = "https://images.unsplash.com/"

# Assets directory, relative to the project root
DEFAULT_ASSETS_DIR = "assets/images"

# Default user agent string for asset downloads
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Default request timeout in seconds
DEFAULT_TIMEOUT = 30

# A URL embedded in markup runs until whitespace, a quote or an angle bracket
URL_CHAR_CLASS = r"[^\s\"'<>]"

# Glob for the documents that make up the site
DOCUMENT_GLOB = "*.html"

# File served for a directory reference
INDEX_FILE = "index.html"

# References starting with one of these are never resolved on disk
EXTERNAL_PREFIXES = (
    "http://",
    "https://",
    "//",
    "mailto:",
    "tel:",
    "javascript:",
    "data:",
)

# Process exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_FINDINGS = 2
