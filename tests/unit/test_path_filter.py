"""
Unit tests for the traversal filter.
"""

import pytest

from filescout.models.config import SearchConfig, FilterConfig, LimitsConfig, MEGABYTE
from filescout.tools.path_filter import PathFilter


class TestPathFilter:
    """Test cases for PathFilter."""

    def test_skip_set(self):
        """Configured names are not descended into."""
        path_filter = PathFilter(["node_modules", "build"], 100)
        assert path_filter.should_descend("src") is True
        assert path_filter.should_descend("node_modules") is False
        assert path_filter.should_descend("build") is False

    def test_hidden_directories(self):
        """Names starting with '.' are skipped unless disabled."""
        assert PathFilter([], 100).should_descend(".cache") is False
        assert PathFilter([], 100, skip_hidden=False).should_descend(".cache") is True

    def test_case_sensitivity(self):
        """Case-insensitive filters fold both sides."""
        sensitive = PathFilter(["Library"], 100, case_sensitive=True)
        insensitive = PathFilter(["Library"], 100, case_sensitive=False)

        assert sensitive.should_descend("library") is True
        assert sensitive.should_descend("Library") is False
        assert insensitive.should_descend("LIBRARY") is False
        assert insensitive.should_descend("library") is False

    def test_content_ceiling(self):
        """Sizes up to and including the ceiling are eligible."""
        path_filter = PathFilter([], 1000)
        assert path_filter.is_content_eligible(0) is True
        assert path_filter.is_content_eligible(1000) is True
        assert path_filter.is_content_eligible(1001) is False

    def test_rejects_non_positive_ceiling(self):
        with pytest.raises(ValueError):
            PathFilter([], 0)

    def test_profiles_from_config(self):
        """Indexed and live profiles take independent settings."""
        config = SearchConfig()
        indexed = PathFilter.from_config(config, live=False)
        live = PathFilter.from_config(config, live=True)

        assert indexed.content_max_bytes == 50 * MEGABYTE
        assert live.content_max_bytes == 10 * MEGABYTE

        # logs is only pruned while indexing, tmp only by live searches
        assert indexed.should_descend("logs") is False
        assert live.should_descend("logs") is True
        assert indexed.should_descend("tmp") is True
        assert live.should_descend("tmp") is False

        # index profile folds case, live profile does not
        assert indexed.should_descend("Cache") is False
        assert live.should_descend("library") is True
        assert live.should_descend("Library") is False

    def test_custom_config(self):
        """Custom skip lists and ceilings flow through."""
        config = SearchConfig(
            filters=FilterConfig(index_skip_directories=["vendor"], skip_hidden=False),
            limits=LimitsConfig(index_content_max_bytes=10)
        )
        path_filter = PathFilter.from_config(config)

        assert path_filter.should_descend("vendor") is False
        assert path_filter.should_descend(".git") is True
        assert path_filter.is_content_eligible(11) is False
