"""Tests for history/git_extractor.py."""

import pytest

from riskmap.exceptions import GitHistoryError
from riskmap.history.git_extractor import (
    COMMIT_MARKER,
    GitExtractor,
    parse_commit_header,
    parse_log,
    parse_numstat_line,
)

LOG = "\n".join(
    [
        f"{COMMIT_MARKER}|aaa111|Alice|alice@example.com|2024-01-02T23:30:00-05:00",
        "3\t1\tsrc/app/core.clj",
        "-\t-\tresources/logo.png",
        "0\t4\tsrc\\app\\util.clj",
        "",
        f"{COMMIT_MARKER}|bbb222||bob@example.com|2024-01-01T08:00:00Z",
        "10\t0\tREADME.md",
        "",
        f"{COMMIT_MARKER}|ccc333|Carol|carol@example.com|2024-01-01T08:00:00+00:00",
    ]
)


class TestParseNumstat:
    def test_text_change(self):
        change = parse_numstat_line("12\t3\tsrc/a.clj")
        assert (change.path, change.added, change.deleted, change.churn) == ("src/a.clj", 12, 3, 15)

    def test_binary_change_skipped(self):
        assert parse_numstat_line("-\t-\timg.png") is None

    def test_non_numstat_line(self):
        assert parse_numstat_line("not a numstat line") is None

    def test_path_with_spaces(self):
        assert parse_numstat_line("1\t1\tdocs/my notes.md").path == "docs/my notes.md"


class TestParseHeader:
    def test_header(self):
        header = parse_commit_header(f"{COMMIT_MARKER}|abc|Jane Doe|jane@x.org|2024-05-06T01:02:03+02:00")
        assert header["sha"] == "abc"
        assert header["author"] == "Jane Doe"
        assert header["email"] == "jane@x.org"
        assert header["date_day"] == "2024-05-06"

    def test_day_uses_commit_offset(self):
        """23:30 at -05:00 is still the 2nd locally, though the 3rd in UTC."""
        header = parse_commit_header(f"{COMMIT_MARKER}|abc|a|e|2024-01-02T23:30:00-05:00")
        assert header["date_day"] == "2024-01-02"

    def test_unparseable_date(self):
        assert parse_commit_header(f"{COMMIT_MARKER}|abc|a|e|yesterday") is None

    def test_not_a_header(self):
        assert parse_commit_header("3\t1\tx.clj") is None


class TestParseLog:
    def test_commits_in_log_order(self):
        commits = parse_log(LOG)
        assert [c.sha for c in commits] == ["aaa111", "bbb222", "ccc333"]

    def test_files_and_path_normalization(self):
        first = parse_log(LOG)[0]
        assert [f.path for f in first.files] == ["src/app/core.clj", "src/app/util.clj"]

    def test_blank_author_and_zulu_date(self):
        second = parse_log(LOG)[1]
        assert second.author is None
        assert second.author_or_unknown == "UNKNOWN"
        assert second.date_day == "2024-01-01"

    def test_commit_without_files(self):
        assert parse_log(LOG)[2].files == ()

    def test_empty_output(self):
        assert parse_log("") == []


class TestBuildCommand:
    def test_defaults(self):
        cmd = GitExtractor(".").build_command()
        assert cmd[:3] == ["git", "log", "--date=iso-strict"]
        assert "--numstat" in cmd
        assert "--all" in cmd
        assert "--no-merges" in cmd
        assert "--" not in cmd

    def test_branch_and_range(self):
        cmd = GitExtractor(
            ".", all_refs=False, branch="main", no_merges=False, since="2024-01-01", until="2024-06-01"
        ).build_command()
        assert "main" in cmd
        assert "--all" not in cmd
        assert "--no-merges" not in cmd
        assert "--since=2024-01-01" in cmd
        assert "--until=2024-06-01" in cmd

    def test_pathspecs(self):
        cmd = GitExtractor(".", path="src", exclude_pathspecs=[".clj-kondo/**"]).build_command()
        assert cmd[cmd.index("--") + 1 :] == ["src", ":(exclude,glob).clj-kondo/**"]

    def test_excludes_without_path_include_everything(self):
        cmd = GitExtractor(".", exclude_pathspecs=["vendor/**", " "]).build_command()
        assert cmd[cmd.index("--") + 1 :] == [".", ":(exclude,glob)vendor/**"]


class TestGitRepository:
    def test_extract(self, git_repo):
        commits = GitExtractor(str(git_repo)).extract()
        assert len(commits) == 3
        assert {c.author for c in commits} == {"Alice"}
        touched = [f.path for c in commits for f in c.files]
        assert touched.count("src/app/core.clj") == 3
        assert touched.count("src/app/util.clj") == 2

    def test_head_sha(self, git_repo):
        sha = GitExtractor(str(git_repo)).head_sha()
        assert sha is not None and len(sha) == 40

    def test_not_a_repository(self, tmp_path):
        extractor = GitExtractor(str(tmp_path))
        assert extractor.head_sha() is None
        with pytest.raises(GitHistoryError):
            extractor.extract()
