from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, TypeVar

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

T = TypeVar("T")

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture()
def site(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    root.mkdir()
    return root


def write_files(root: Path, files: Dict[str, str]) -> None:
    for name, text in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


def image_app(hits: List[str]) -> web.Application:
    """Serve PNG bytes under /img/ and 404 under /gone/, recording every request."""

    async def image(request: web.Request) -> web.Response:
        hits.append(request.path_qs)
        return web.Response(body=PNG_BYTES, content_type="image/png")

    async def gone(request: web.Request) -> web.Response:
        hits.append(request.path_qs)
        return web.Response(status=404)

    app = web.Application()
    app.router.add_get("/img/{name}", image)
    app.router.add_get("/gone/{name}", gone)
    return app


def with_image_server(hits: List[str], body: Callable[[str], Awaitable[T]]) -> T:
    """Run body(base_url) against a local image server."""

    async def run() -> T:
        async with TestServer(image_app(hits)) as server:
            return await body(str(server.make_url("/")))

    return asyncio.run(run())
