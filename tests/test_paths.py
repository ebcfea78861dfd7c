from __future__ import annotations

from pathlib import Path

import pytest

from site_keeper.utils.errors import InvalidURL
from site_keeper.utils.paths import (
    asset_file_name,
    get_relative_path,
    is_external,
    placeholder_name,
    resolve_reference,
    strip_query_and_fragment,
)


def test_asset_file_name_uses_last_path_segment() -> None:
    assert asset_file_name("https://images.unsplash.com/photo-123?w=800&h=600") == "photo-123"
    assert asset_file_name("https://cdn.example.com/a/b/logo.png#x") == "logo.png"
    assert asset_file_name("https://cdn.example.com/a%20b.png") == "a b.png"


def test_asset_file_name_placeholder_is_stable_and_unique() -> None:
    first = asset_file_name("https://images.unsplash.com/?id=1")
    again = asset_file_name("https://images.unsplash.com/?id=1")
    other = asset_file_name("https://images.unsplash.com/?id=2")
    assert first == again == placeholder_name("https://images.unsplash.com/?id=1")
    assert first.startswith("image-")
    assert first != other


@pytest.mark.parametrize("url", [
    "http://[::1/broken.png",
    "https://images.unsplash.com:99999/a.png",
    "ftp://images.example.com/a.png",
    "images.unsplash.com/a.png",
])
def test_asset_file_name_rejects_invalid_urls(url: str) -> None:
    with pytest.raises(InvalidURL):
        asset_file_name(url)


def test_is_external() -> None:
    for url in ("https://x.org", "HTTP://x.org", "//cdn.x.org/a.js", "mailto:a@b.c",
                "tel:+100", "javascript:void(0)", "data:image/png;base64,AA", "ftp://x.org/f"):
        assert is_external(url), url
    for url in ("about.html", "/docs/", "#top", "img/a.png?v=2"):
        assert not is_external(url), url


def test_strip_query_and_fragment() -> None:
    assert strip_query_and_fragment("a.html?x=1#top") == "a.html"
    assert strip_query_and_fragment("a.html#top?x") == "a.html"
    assert strip_query_and_fragment("?page=2") == ""


def test_resolve_reference(tmp_path: Path) -> None:
    doc = tmp_path / "blog" / "post.html"
    assert resolve_reference(tmp_path, doc, "/about.html") == tmp_path / "about.html"
    assert resolve_reference(tmp_path, doc, "img/a%20b.png") == tmp_path / "blog" / "img" / "a b.png"


def test_get_relative_path_uses_forward_slashes(tmp_path: Path) -> None:
    doc = tmp_path / "blog" / "post.html"
    asset = tmp_path / "assets" / "images" / "a.png"
    assert get_relative_path(doc, asset) == "../assets/images/a.png"
