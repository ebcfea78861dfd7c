from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List

import pytest

from site_keeper.localizer.downloader import AssetLocalizer, LocalizeOutcome
from site_keeper.utils.errors import WriteFailure

from .conftest import PNG_BYTES, with_image_server


def test_downloads_and_maps_with_forward_slashes(site: Path) -> None:
    hits: List[str] = []

    async def body(base: str) -> LocalizeOutcome:
        return await AssetLocalizer(site).localize_all([f"{base}img/logo.png"])

    outcome = with_image_server(hits, body)

    url = next(iter(outcome.mapping))
    assert outcome.mapping == {url: "assets/images/logo.png"}
    assert outcome.downloaded == [url]
    assert (site / "assets" / "images" / "logo.png").read_bytes() == PNG_BYTES
    assert hits == ["/img/logo.png"]
    assert not list((site / "assets" / "images").glob("*.part"))


def test_existing_asset_is_not_fetched_or_overwritten(site: Path) -> None:
    images = site / "assets" / "images"
    images.mkdir(parents=True)
    (images / "logo.png").write_bytes(b"local copy")
    hits: List[str] = []

    async def body(base: str) -> LocalizeOutcome:
        return await AssetLocalizer(site).localize_all([f"{base}img/logo.png"])

    outcome = with_image_server(hits, body)

    assert hits == []
    assert len(outcome.reused) == 1
    assert list(outcome.mapping.values()) == ["assets/images/logo.png"]
    assert (images / "logo.png").read_bytes() == b"local copy"


def test_fetch_failure_is_skipped_and_batch_continues(site: Path, caplog) -> None:
    hits: List[str] = []

    async def body(base: str) -> LocalizeOutcome:
        return await AssetLocalizer(site).localize_all([
            f"{base}gone/a.png",
            f"{base}img/b.png",
        ])

    with caplog.at_level(logging.WARNING, logger="site_keeper"):
        outcome = with_image_server(hits, body)

    assert [Path(u).name for u in outcome.failed] == ["a.png"]
    assert list(outcome.mapping.values()) == ["assets/images/b.png"]
    assert not (site / "assets" / "images" / "a.png").exists()
    assert "HTTP 404" in caplog.text


def test_connection_error_is_a_fetch_failure(site: Path) -> None:
    # Nothing listens on port 9 of localhost
    outcome = asyncio.run(
        AssetLocalizer(site, timeout=5).localize_all(["http://127.0.0.1:9/x.png"])
    )
    assert outcome.failed == ["http://127.0.0.1:9/x.png"]
    assert outcome.mapping == {}


def test_invalid_url_is_skipped(site: Path) -> None:
    outcome = asyncio.run(AssetLocalizer(site).localize_all(["http://[::1/broken.png"]))
    assert outcome.invalid == ["http://[::1/broken.png"]
    assert outcome.mapping == {}


def test_write_failure_is_skipped(site: Path) -> None:
    # A file where the assets directory should be makes every write fail
    (site / "assets").write_text("in the way", encoding="utf-8")
    hits: List[str] = []

    async def body(base: str) -> LocalizeOutcome:
        return await AssetLocalizer(site).localize_all([f"{base}img/a.png"])

    outcome = with_image_server(hits, body)

    assert len(outcome.failed) == 1
    assert outcome.mapping == {}


def test_mapping_does_not_depend_on_discovery_order(site: Path) -> None:
    images = site / "assets" / "images"
    images.mkdir(parents=True)
    for name in ("a.png", "b.jpg"):
        (images / name).write_bytes(b"x")
    urls = ["https://images.unsplash.com/a.png", "https://images.unsplash.com/x/b.jpg"]

    forward = asyncio.run(AssetLocalizer(site).localize(urls))
    backward = asyncio.run(AssetLocalizer(site).localize(list(reversed(urls))))

    assert forward == backward == {
        "https://images.unsplash.com/a.png": "assets/images/a.png",
        "https://images.unsplash.com/x/b.jpg": "assets/images/b.jpg",
    }


def test_html_entities_are_decoded_for_the_request(site: Path) -> None:
    hits: List[str] = []

    async def body(base: str) -> LocalizeOutcome:
        return await AssetLocalizer(site).localize_all([f"{base}img/p.png?w=1&amp;h=2"])

    outcome = with_image_server(hits, body)

    assert hits == ["/img/p.png?w=1&h=2"]
    assert list(outcome.mapping) == [outcome.downloaded[0]]
    assert outcome.downloaded[0].endswith("&amp;h=2")


def test_write_failure_survives_a_failing_cleanup(site: Path, monkeypatch) -> None:
    def refuse(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("site_keeper.localizer.downloader.os.replace", refuse)
    monkeypatch.setattr(Path, "unlink", refuse)

    localizer = AssetLocalizer(site)
    with pytest.raises(WriteFailure):
        localizer.write_asset(localizer.local_path("a.png"), PNG_BYTES)
