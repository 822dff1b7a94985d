"""Extract the commit stream from git log --numstat."""

import re
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from ..exceptions import GitHistoryError
from ..logging_config import get_logger
from .models import Commit, FileChange, day_of

logger = get_logger(__name__)

COMMIT_MARKER = "__RISKMAP_COMMIT__"

# added \t deleted \t path ; binary files report "-" for both counts
_NUMSTAT_RE = re.compile(r"^([0-9-]+)\t([0-9-]+)\t(.*)$")


class GitExtractor:
    """Read commits with per-file line counts from a repository.

    Args:
        repo_path: Repository root
        all_refs: Walk every ref (``--all``) instead of a single branch
        branch: Branch or revision to walk when ``all_refs`` is False
        no_merges: Skip merge commits
        since: Lower date bound (YYYY-MM-DD), passed to git
        until: Upper date bound (YYYY-MM-DD), passed to git
        path: Sub-directory pathspec to restrict the history to
        exclude_pathspecs: Glob pathspecs excluded at ``git log`` time
    """

    def __init__(
        self,
        repo_path: str = ".",
        all_refs: bool = True,
        branch: Optional[str] = None,
        no_merges: bool = True,
        since: Optional[str] = None,
        until: Optional[str] = None,
        path: Optional[str] = None,
        exclude_pathspecs: Sequence[str] = (),
    ):
        self.repo_path = Path(repo_path)
        self.all_refs = all_refs
        self.branch = branch
        self.no_merges = no_merges
        self.since = since
        self.until = until
        self.path = path
        self.exclude_pathspecs = [str(p) for p in exclude_pathspecs if str(p).strip()]

    def build_command(self) -> list[str]:
        cmd = [
            "git",
            "log",
            "--date=iso-strict",
            f"--pretty=format:{COMMIT_MARKER}|%H|%an|%ae|%ad",
            "--numstat",
        ]
        if self.all_refs:
            cmd.append("--all")
        elif self.branch:
            cmd.append(self.branch)
        if self.no_merges:
            cmd.append("--no-merges")
        if self.since:
            cmd.append(f"--since={self.since}")
        if self.until:
            cmd.append(f"--until={self.until}")

        include: list[str] = []
        if self.path and self.path.strip():
            include = [self.path]
        elif self.exclude_pathspecs:
            include = ["."]
        exclude = [f":(exclude,glob){p}" for p in self.exclude_pathspecs]
        if include or exclude:
            cmd.append("--")
            cmd.extend(include + exclude)
        return cmd

    def extract(self) -> list[Commit]:
        """Run git log and parse it. Raises GitHistoryError on failure."""
        cmd = self.build_command()
        logger.debug("Running %s in %s", " ".join(cmd), self.repo_path)
        try:
            result = subprocess.run(
                cmd,
                cwd=str(self.repo_path),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except (FileNotFoundError, NotADirectoryError, OSError) as e:
            raise GitHistoryError(self.repo_path, str(e), cmd)

        if result.returncode != 0:
            raise GitHistoryError(
                self.repo_path,
                result.stderr.strip() or f"git exited with {result.returncode}",
                cmd,
            )

        commits = parse_log(result.stdout)
        logger.info("Read %d commits from %s", len(commits), self.repo_path)
        return commits

    def head_sha(self) -> Optional[str]:
        """HEAD commit of the repository, or None when it cannot be resolved."""
        try:
            result = subprocess.run(
                ["git", "rev-parse", "HEAD"],
                cwd=str(self.repo_path),
                capture_output=True,
                text=True,
                timeout=10,
                check=False,
            )
        except (FileNotFoundError, NotADirectoryError, subprocess.TimeoutExpired, OSError):
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None


def normalize_path(path: str) -> str:
    return path.replace("\\", "/")


def parse_numstat_line(line: str) -> Optional[FileChange]:
    """Parse one numstat row; binary changes and non-numstat lines yield None."""
    match = _NUMSTAT_RE.match(line)
    if not match:
        return None
    added, deleted, path = match.groups()
    if added == "-" or deleted == "-":
        return None
    try:
        return FileChange(path=normalize_path(path), added=int(added), deleted=int(deleted))
    except ValueError:
        return None


def parse_commit_header(line: str) -> Optional[dict]:
    # marker|sha|author|email|date ; author names may not contain "|" but
    # the date is always last, so split from the right.
    if not line.startswith(COMMIT_MARKER + "|"):
        return None
    head, _, date = line.rpartition("|")
    parts = head.split("|", 3)
    if len(parts) != 4:
        return None
    _, sha, author, email = parts
    try:
        date_day = day_of(date)
    except ValueError:
        logger.debug("Skipping commit %s with unparseable date %r", sha, date)
        return None
    return {
        "sha": sha,
        "author": author or None,
        "email": email or None,
        "date": date,
        "date_day": date_day,
    }


def parse_log(raw: str) -> list[Commit]:
    """Parse marker-delimited git log --numstat output into commits.

    Commits are kept in log order. Headers that fail to parse drop the
    numstat lines that follow them.
    """
    commits: list[Commit] = []
    header: Optional[dict] = None
    files: list[FileChange] = []
    in_commit = False

    def flush() -> None:
        if header is not None:
            commits.append(Commit(files=tuple(files), **header))

    for line in raw.splitlines():
        if line.startswith(COMMIT_MARKER + "|"):
            flush()
            header = parse_commit_header(line)
            files = []
            in_commit = True
            continue
        if not in_commit or not line.strip():
            continue
        change = parse_numstat_line(line)
        if change is not None:
            files.append(change)

    flush()
    return commits
