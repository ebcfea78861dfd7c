from __future__ import annotations

from pathlib import Path

import pytest

from site_keeper.scanner.documents import Document, find_documents, load_documents
from site_keeper.utils.errors import SiteKeeperError, WriteFailure

from .conftest import write_files


def test_load_documents_is_non_recursive_and_sorted(site: Path) -> None:
    write_files(site, {
        "b.html": "<p id='b'>b</p>",
        "a.html": "<p>a</p>",
        "notes.txt": "not html",
        "docs/index.html": "<p>nested</p>",
    })
    docs = load_documents(site)
    assert [d.name for d in docs] == ["a.html", "b.html"]
    assert docs[1].anchors == {"b"}
    assert [p.name for p in find_documents(site)] == ["a.html", "b.html"]


def test_load_documents_with_explicit_names(site: Path) -> None:
    write_files(site, {"a.html": "a", "b.html": "b"})
    docs = load_documents(site, names=["b.html"])
    assert [d.name for d in docs] == ["b.html"]


def test_missing_explicit_document_is_skipped(site: Path) -> None:
    write_files(site, {"a.html": "a"})
    docs = load_documents(site, names=["a.html", "ghost.html"])
    assert [d.name for d in docs] == ["a.html"]


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(SiteKeeperError):
        load_documents(tmp_path / "nope")


def test_save_only_when_changed(site: Path) -> None:
    write_files(site, {"a.html": "<p>a</p>"})
    doc = load_documents(site)[0]
    assert not doc.changed
    assert doc.save() is False

    doc.text = "<p>b</p>"
    assert doc.changed
    assert doc.save() is True
    assert (site / "a.html").read_text(encoding="utf-8") == "<p>b</p>"
    assert not doc.changed


def test_crlf_line_endings_survive_a_rewrite(site: Path) -> None:
    (site / "a.html").write_bytes(b"<p>one</p>\r\n<p>two</p>\r\n")
    doc = load_documents(site)[0]
    doc.text = doc.text.replace("one", "uno")
    doc.save()
    assert (site / "a.html").read_bytes() == b"<p>uno</p>\r\n<p>two</p>\r\n"


def test_save_failure_raises_write_failure(site: Path) -> None:
    write_files(site, {"a.html": "a"})
    doc = load_documents(site)[0]
    doc.path = site / "missing-dir" / "a.html"
    doc.text = "b"
    with pytest.raises(WriteFailure):
        doc.save()


def test_text_set_to_empty_is_kept(site: Path) -> None:
    doc = Document(path=site / "a.html", name="a.html", original_text="<p>a</p>", text="")
    assert doc.text == ""
    assert doc.changed

    fresh = Document(path=site / "b.html", name="b.html", original_text="<p>b</p>")
    assert fresh.text == "<p>b</p>"
