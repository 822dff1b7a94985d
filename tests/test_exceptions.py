"""Tests for the exception hierarchy."""

from pathlib import Path

from riskmap.exceptions import (
    AnalysisError,
    ConfigurationError,
    FileAccessError,
    GitHistoryError,
    InvalidConfigError,
    ParsingError,
    RiskmapError,
)


class TestExceptions:
    def test_hierarchy(self):
        assert issubclass(FileAccessError, AnalysisError)
        assert issubclass(ParsingError, AnalysisError)
        assert issubclass(GitHistoryError, AnalysisError)
        assert issubclass(AnalysisError, RiskmapError)
        assert issubclass(InvalidConfigError, ConfigurationError)
        assert issubclass(ConfigurationError, RiskmapError)

    def test_details_in_message(self):
        err = ParsingError(Path("src/a.clj"), "clojure", "line 3: unclosed '('")
        assert err.details["language"] == "clojure"
        assert "src/a.clj" in str(err)
        assert "unclosed" in str(err)

    def test_git_history_error_records_command(self):
        err = GitHistoryError(Path("/repo"), "not a git repository", ["git", "log"])
        assert err.details["command"] == "git log"
        assert err.reason == "not a git repository"

    def test_plain_message(self):
        assert str(RiskmapError("boom")) == "boom"

    def test_details_are_copied(self):
        source = {"repo": "/r"}
        err = RiskmapError("boom", details=source)
        source["repo"] = "/other"
        assert err.details == {"repo": "/r"}
        assert str(err) == "boom (repo=/r)"
