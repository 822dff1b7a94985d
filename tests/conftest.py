"""Shared test fixtures for riskmap tests."""

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from riskmap.history.models import Commit, FileChange


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def _commit(sha, day, author="alice", files=(), email=None):
    """Build a Commit; ``files`` holds (path, added, deleted) triples."""
    return Commit(
        sha=sha,
        author=author,
        email=email,
        date=f"{day}T12:00:00+00:00",
        date_day=day,
        files=tuple(FileChange(p, a, d) for p, a, d in files),
    )


@pytest.fixture
def make_commit():
    """Factory fixture: make_commit(sha, day, author, files, email)."""
    return _commit


@pytest.fixture
def abc_commits():
    """Four commits over three files.

    c1 A,B  c2 A,B  c3 A,B,C  c4 A,C
    Touches: A=4, B=3, C=2.
    """
    return [
        _commit("c1", "2024-01-01", "alice", [("A", 10, 0), ("B", 5, 0)]),
        _commit("c2", "2024-01-02", "alice", [("A", 2, 1), ("B", 1, 1)]),
        _commit("c3", "2024-01-03", "bob", [("A", 3, 3), ("B", 2, 0), ("C", 7, 0)]),
        _commit("c4", "2024-01-04", "bob", [("A", 1, 0), ("C", 1, 1)]),
    ]


def _git(repo: Path, *args: str, date: str = "2024-01-01T12:00:00+00:00") -> None:
    env = {
        "GIT_AUTHOR_DATE": date,
        "GIT_COMMITTER_DATE": date,
        "GIT_CONFIG_NOSYSTEM": "1",
        "HOME": str(repo),
        "PATH": os.environ.get("PATH", ""),
    }
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True, env=env)


@pytest.fixture
def git_repo(tmp_path):
    """Small Clojure repository with three commits.

    src/app/core.clj is touched by every commit; src/app/util.clj by two.
    Skipped when git is not installed.
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "repo"
    (repo / "src" / "app").mkdir(parents=True)
    _git(repo, "init", "-q")
    _git(repo, "config", "user.name", "Alice")
    _git(repo, "config", "user.email", "alice@example.com")
    _git(repo, "config", "commit.gpgsign", "false")

    core = repo / "src" / "app" / "core.clj"
    util = repo / "src" / "app" / "util.clj"

    core.write_text("(ns app.core)\n\n(defn start [x]\n  x)\n")
    util.write_text("(ns app.util)\n\n(defn helper [] 1)\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-q", "-m", "initial", date="2024-01-01T10:00:00+00:00")

    core.write_text(
        "(ns app.core)\n\n"
        "(defn start [x]\n"
        "  (if (pos? x)\n"
        "    (when (even? x) :even)\n"
        "    :neg))\n"
    )
    util.write_text("(ns app.util)\n\n(defn helper [] 2)\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-q", "-m", "branching", date="2024-01-05T10:00:00+00:00")

    core.write_text(core.read_text() + "\n(defn stop [] nil)\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-q", "-m", "stop", date="2024-01-10T10:00:00+00:00")

    return repo
