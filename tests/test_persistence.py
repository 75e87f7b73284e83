"""Tests for persistence layer — proves cursor state and document storage work correctly."""

import json
import pytest
from pathlib import Path

from docaudit.errors import (
    DocumentListingError,
    DocumentReadError,
    DocumentWriteError,
    NoDocumentsError,
)
from docaudit.models.document import RotationState
from docaudit.persistence.document_store import FileDocumentStore
from docaudit.persistence.state_store import CursorStateStore


# =====================================================================
# CursorStateStore Tests
# =====================================================================


class TestCursorStateStore:
    def test_default_when_missing(self, tmp_path: Path) -> None:
        store = CursorStateStore(tmp_path / "nonexistent.json")
        assert store.load().last_index == -1

    def test_save_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        CursorStateStore(path).save(RotationState(last_index=4))

        loaded = CursorStateStore(path).load()
        assert loaded.last_index == 4

    def test_record_format(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        CursorStateStore(path).save(RotationState(last_index=2))
        assert json.loads(path.read_text(encoding="utf-8")) == {"lastIndex": 2}

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / ".github" / "state" / "doc-review-state.json"
        CursorStateStore(path).save(RotationState(last_index=0))
        assert path.exists()

    def test_corrupt_file_is_fresh_start(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_text("{not json", encoding="utf-8")
        assert CursorStateStore(path).load().last_index == -1

    @pytest.mark.parametrize(
        "payload",
        ['[]', '{}', '{"lastIndex": "3"}', '{"lastIndex": true}', '{"lastIndex": 1.5}', 'null'],
    )
    def test_malformed_record_is_fresh_start(self, tmp_path: Path, payload: str) -> None:
        path = tmp_path / "state.json"
        path.write_text(payload, encoding="utf-8")
        assert CursorStateStore(path).load().last_index == -1

    def test_save_overwrites_whole_record(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_text('{"lastIndex": 1, "extra": "x"}', encoding="utf-8")
        store = CursorStateStore(path)
        state = store.load()
        state.last_index = 2
        store.save(state)
        assert json.loads(path.read_text(encoding="utf-8")) == {"lastIndex": 2}


# =====================================================================
# FileDocumentStore Tests
# =====================================================================


def _docs(tmp_path: Path, names: list[str]) -> Path:
    docs = tmp_path / "docs"
    docs.mkdir()
    for name in names:
        (docs / name).write_text(f"# {name}\n", encoding="utf-8")
    return docs


class TestFileDocumentStore:
    def test_lists_sorted_markdown_only(self, tmp_path: Path) -> None:
        docs = _docs(tmp_path, ["c.md", "a.md", "notes.txt", "B.md"])
        (docs / "sub").mkdir()
        (docs / "sub" / "nested.md").write_text("x", encoding="utf-8")

        store = FileDocumentStore(docs, tmp_path)
        assert store.list_documents() == ["B.md", "a.md", "c.md"]

    def test_empty_directory(self, tmp_path: Path) -> None:
        docs = _docs(tmp_path, ["readme.txt"])
        store = FileDocumentStore(docs, tmp_path)
        with pytest.raises(NoDocumentsError):
            store.list_documents()

    def test_missing_directory(self, tmp_path: Path) -> None:
        store = FileDocumentStore(tmp_path / "docs", tmp_path)
        with pytest.raises(DocumentListingError):
            store.list_documents()

    def test_read_and_write(self, tmp_path: Path) -> None:
        docs = _docs(tmp_path, ["a.md"])
        store = FileDocumentStore(docs, tmp_path)
        assert store.read("a.md") == "# a.md\n"
        store.write("a.md", "changed\n")
        assert (docs / "a.md").read_text(encoding="utf-8") == "changed\n"

    def test_read_missing_file(self, tmp_path: Path) -> None:
        docs = _docs(tmp_path, [])
        store = FileDocumentStore(docs, tmp_path)
        with pytest.raises(DocumentReadError):
            store.read("gone.md")

    def test_relative_path(self, tmp_path: Path) -> None:
        docs = _docs(tmp_path, ["a.md"])
        store = FileDocumentStore(docs, tmp_path)
        assert store.relative_path("a.md") == "docs/a.md"

    def test_custom_extension(self, tmp_path: Path) -> None:
        docs = _docs(tmp_path, ["a.md", "b.rst"])
        store = FileDocumentStore(docs, tmp_path, extension=".rst")
        assert store.list_documents() == ["b.rst"]

    def test_undecodable_document(self, tmp_path: Path) -> None:
        docs = _docs(tmp_path, [])
        (docs / "a.md").write_bytes(b"\xff\xfe bad")
        store = FileDocumentStore(docs, tmp_path)
        with pytest.raises(DocumentReadError):
            store.read("a.md")

    def test_write_failure(self, tmp_path: Path) -> None:
        docs = _docs(tmp_path, [])
        (docs / "a.md").mkdir()
        store = FileDocumentStore(docs, tmp_path)
        with pytest.raises(DocumentWriteError):
            store.write("a.md", "text\n")

    def test_line_endings_preserved(self, tmp_path: Path) -> None:
        docs = _docs(tmp_path, [])
        (docs / "a.md").write_bytes(b"# T\r\n\r\nBody\r\n")
        store = FileDocumentStore(docs, tmp_path)

        content = store.read("a.md")
        assert content == "# T\r\n\r\nBody\r\n"
        store.write("a.md", "x\r\n" + content)
        assert (docs / "a.md").read_bytes() == b"x\r\n# T\r\n\r\nBody\r\n"

    def test_relative_path_through_symlink(self, tmp_path: Path) -> None:
        outside = tmp_path / "shared"
        outside.mkdir()
        real_docs = _docs(outside, ["a.md"])
        repo = tmp_path / "repo"
        repo.mkdir()
        (repo / "docs").symlink_to(real_docs, target_is_directory=True)

        store = FileDocumentStore(repo / "docs", repo)
        assert store.relative_path("a.md") == "docs/a.md"

    def test_relative_path_outside_repo(self, tmp_path: Path) -> None:
        docs = _docs(tmp_path, ["a.md"])
        repo = tmp_path / "repo"
        repo.mkdir()
        store = FileDocumentStore(docs, repo)
        assert store.relative_path("a.md") == (docs / "a.md").as_posix()
