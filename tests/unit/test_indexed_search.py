"""
Unit tests for the indexed search engine.
"""

import logging
import os
import tempfile
import shutil
import threading
from pathlib import Path
import pytest

from filescout.errors import RootNotFoundError
from filescout.models.config import SearchConfig, LimitsConfig
from filescout.models.index_status import STATUS_NOT_BUILT, STATUS_READY
from filescout.tools.indexed_search import IndexedSearchEngine
from filescout.tools.indexer import Indexer


class GatedIndexer(Indexer):
    """Indexer that holds a finished snapshot until its gate opens."""

    def __init__(self, config):
        super().__init__(config)
        self.gate = threading.Event()
        self.gate.set()
        self.finished = threading.Event()

    def build(self, root):
        snapshot = super().build(root)
        self.finished.set()
        self.gate.wait(timeout=5)
        return snapshot


class TestIndexedSearchEngine:
    """Test cases for IndexedSearchEngine."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.root = Path(self.temp_dir).resolve()

        files = {
            "report.txt": "Quarterly numbers",
            "archive/Report.txt": "old report",
            "reports_2023.md": "Summary of the year",
            "notes.md": "see the REPORT for details",
            "misc/todo.txt": "nothing relevant",
            "huge.txt": "report " * 40,
        }
        for rel, content in files.items():
            path = self.root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)

        self.config = SearchConfig(limits=LimitsConfig(index_content_max_bytes=200))
        self.engine = IndexedSearchEngine(self.config)

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _names(self, records):
        return [r.file_name for r in records]

    def _paths(self, records):
        return [r.absolute_path for r in records]

    def test_queries_before_build(self, caplog):
        """Queries before a build return nothing and warn."""
        with caplog.at_level(logging.WARNING):
            assert self.engine.search_by_name("report.txt") == []
            assert self.engine.search_by_name_prefix("rep") == []
            assert self.engine.search_by_content("report") == []
            assert self.engine.search_by_name_and_content("report") == []

        assert "Index not built yet" in caplog.text
        assert self.engine.is_indexed() is False

    def test_search_by_name(self):
        """Exact lookups are case-insensitive and span directories."""
        self.engine.build_index(str(self.root))
        results = self.engine.search_by_name("REPORT.TXT")

        assert sorted(self._paths(results)) == sorted([
            str(self.root / "report.txt"), str(self.root / "archive" / "Report.txt")
        ])

    def test_search_by_name_prefix(self):
        self.engine.build_index(str(self.root))
        results = self.engine.search_by_name_prefix("rep")

        assert sorted(self._names(results)) == ["Report.txt", "report.txt", "reports_2023.md"]

    def test_search_by_content(self):
        """Content matching is a case-insensitive substring test."""
        self.engine.build_index(str(self.root))
        results = self.engine.search_by_content("report")

        assert sorted(self._names(results)) == ["Report.txt", "notes.md"]

    def test_large_file_excluded_from_content_only(self):
        """A file over the ceiling is found by name but never by content."""
        self.engine.build_index(str(self.root))

        assert "huge.txt" not in self._names(self.engine.search_by_content("report"))
        assert self._names(self.engine.search_by_name("huge.txt")) == ["huge.txt"]

    def test_name_and_content_union(self):
        """The union covers every partial result exactly once."""
        self.engine.build_index(str(self.root))
        term = "report"

        union = self._paths(self.engine.search_by_name_and_content(term))
        parts = (self._paths(self.engine.search_by_name(term))
                 + self._paths(self.engine.search_by_name_prefix(term))
                 + self._paths(self.engine.search_by_content(term)))

        assert set(parts) <= set(union)
        assert len(union) == len(set(union))

    def test_name_and_content_order(self):
        """Exact names first, then prefixes, then content-only hits."""
        self.engine.build_index(str(self.root))
        results = self.engine.search_by_name_and_content("report.txt")

        assert self._paths(results) == [
            str(self.root / "archive" / "Report.txt"),
            str(self.root / "report.txt"),
        ]

        results = self.engine.search_by_name_and_content("report")
        assert self._names(results) == ["Report.txt", "report.txt", "reports_2023.md", "notes.md"]

    def test_rebuild_reflects_current_tree(self):
        """Deleted files disappear after the next build."""
        self.engine.build_index(str(self.root))
        os.remove(self.root / "notes.md")
        self.engine.build_index(str(self.root))

        assert self.engine.search_by_name("notes.md") == []
        assert "notes.md" not in self._names(self.engine.search_by_content("report"))

    def test_failed_build_keeps_previous_index(self):
        """A missing root aborts the build and keeps the current snapshot."""
        self.engine.build_index(str(self.root))

        with pytest.raises(RootNotFoundError):
            self.engine.build_index(str(self.root / "missing"))

        assert self.engine.is_indexed()
        assert self.engine.root_directory == str(self.root)
        assert self._names(self.engine.search_by_name("notes.md")) == ["notes.md"]

    def test_readers_see_previous_index_during_rebuild(self):
        """A query issued while a rebuild is running answers from the old snapshot."""
        indexer = GatedIndexer(self.config)
        engine = IndexedSearchEngine(self.config, indexer=indexer)
        engine.build_index(str(self.root))

        os.remove(self.root / "notes.md")
        (self.root / "fresh.txt").write_text("new file")

        indexer.gate.clear()
        builder = threading.Thread(target=engine.build_index, args=(str(self.root),))
        builder.start()
        try:
            assert indexer.finished.wait(timeout=5)

            assert self._names(engine.search_by_name("notes.md")) == ["notes.md"]
            assert engine.search_by_name("fresh.txt") == []
            assert engine.get_statistics().total_files == 6
        finally:
            indexer.gate.set()
            builder.join(timeout=5)

        assert not builder.is_alive()
        assert engine.search_by_name("notes.md") == []
        assert self._names(engine.search_by_name("fresh.txt")) == ["fresh.txt"]

    def test_statistics(self):
        stats = self.engine.get_statistics()
        assert stats.status == STATUS_NOT_BUILT
        assert stats.total_files == 0

        self.engine.build_index(str(self.root))
        stats = self.engine.get_statistics()

        assert stats.status == STATUS_READY
        assert stats.is_ready()
        assert stats.total_files == 6
        assert stats.text_files == 5
        assert stats.root_directory == str(self.root)
        assert stats.total_size_bytes == sum(
            p.stat().st_size for p in self.root.rglob("*") if p.is_file())
