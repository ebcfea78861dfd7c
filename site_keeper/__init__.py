"""
Site Keeper - maintenance tools for a static HTML site.

This package localizes remotely hosted images referenced by the site's
documents and checks that local links and in-page anchors resolve.
"""

__version__ = "1.0.0"
__author__ = "Site Keeper Team"
