"""Per-function cyclomatic complexity for Clojure sources.

complexity = 1 + number of decision forms anywhere inside a top-level
definition (nested definitions and function literals included). Each
decision form counts once, however many branches it has.

Analysis is best-effort per file: a missing, unreadable or unparseable file
produces a failed FileAnalysis and never stops the remaining files.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ...exceptions import FileAccessError, ParsingError
from ...logging_config import get_logger
from ..models import ComplexityRecord
from .reader import ReaderError, read_forms
from .syntax import Node, NodeKind

logger = get_logger(__name__)

LANGUAGE = "clojure"
CLOJURE_EXTENSIONS = frozenset({".clj", ".cljs", ".cljc"})

DEFINITION_FORMS = frozenset({"defn", "defn-", "defstate"})

# if/when, cond, case, and the binding conditionals
DECISION_FORMS = frozenset({"if", "when", "cond", "case", "if-let", "when-let", "when-some"})

# Below this many files the thread pool costs more than it saves
_PARALLEL_MIN_FILES = 10


@dataclass(frozen=True)
class FileAnalysis:
    """Outcome of analyzing one file: records on success, a reason on failure."""

    path: str
    records: list[ComplexityRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def is_clojure_file(path: str) -> bool:
    return Path(path).suffix.lower() in CLOJURE_EXTENSIONS


def is_definition(node: Node) -> bool:
    return node.kind is NodeKind.LIST and node.head in DEFINITION_FORMS


def is_decision(node: Node) -> bool:
    return node.head in DECISION_FORMS


def definition_name(node: Node) -> Optional[str]:
    """Name symbol of (defn name ...), looking through ^metadata.

    Returns None when the second element is missing or not a symbol.
    """
    if len(node.children) < 2:
        return None
    target = node.children[1].unwrap_metadata()
    if target.kind is not NodeKind.SYMBOL or not target.value:
        return None
    return target.value


def decision_count(node: Node) -> int:
    """Decision forms in the subtree rooted at ``node``, itself included."""
    own = 1 if is_decision(node) else 0
    return own + sum(decision_count(child) for child in node.children)


def function_complexities(forms: Iterable[Node], path: str) -> list[ComplexityRecord]:
    """One record per named top-level definition, in source order."""
    records = []
    for form in forms:
        if not is_definition(form):
            continue
        name = definition_name(form)
        if name is None:
            logger.debug("Skipping unnamed %s form in %s", form.head, path)
            continue
        records.append(
            ComplexityRecord(
                path=path,
                function_name=name,
                complexity=1 + decision_count(form),
                language=LANGUAGE,
            )
        )
    return records


def _read_source(filepath: Path) -> str:
    try:
        with open(filepath, encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise FileAccessError(filepath, f"Cannot read file: {e}")


def analyze_file(repo: str | Path, path: str) -> FileAnalysis:
    """Analyze one repo-relative path.

    Paths outside the Clojure family yield an empty, successful analysis.
    """
    if not is_clojure_file(path):
        return FileAnalysis(path)

    filepath = Path(repo) / path
    try:
        if not filepath.is_file():
            raise FileAccessError(filepath, "file not found")
        source = _read_source(filepath)
        try:
            forms = read_forms(source)
        except (ReaderError, RecursionError) as e:
            raise ParsingError(filepath, LANGUAGE, str(e) or type(e).__name__)
        return FileAnalysis(path, function_complexities(forms, path))
    except (FileAccessError, ParsingError) as e:
        return FileAnalysis(path, error=str(e))
    except RecursionError:
        return FileAnalysis(path, error=f"Nesting too deep to analyze: {filepath}")


def analyze_files(
    repo: str | Path,
    paths: Sequence[str],
    workers: Optional[int] = None,
) -> list[FileAnalysis]:
    """Analyze distinct paths, in their first-seen order.

    Files are independent, so larger batches run on a thread pool; the
    results are put back into input order afterwards.
    """
    unique = list(dict.fromkeys(paths))
    candidates = [p for p in unique if is_clojure_file(p)]

    if workers == 1 or len(candidates) < _PARALLEL_MIN_FILES:
        done = {p: analyze_file(repo, p) for p in candidates}
    else:
        max_workers = workers or min(32, (os.cpu_count() or 1) + 4)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            analyses = executor.map(lambda p: analyze_file(repo, p), candidates)
            done = dict(zip(candidates, analyses))

    results = [done.get(p, FileAnalysis(p)) for p in unique]
    failed = [r for r in results if not r.ok]
    for r in failed:
        logger.debug("Complexity skipped %s: %s", r.path, r.error)
    if failed:
        logger.info("Complexity analysis skipped %d of %d files", len(failed), len(candidates))
    return results


def complexity_functions(
    repo: str | Path,
    paths: Sequence[str],
    workers: Optional[int] = None,
) -> list[ComplexityRecord]:
    """Complexity records for every analyzable function among ``paths``.

    Ordered by first appearance of the path, then source order.
    """
    return [r for analysis in analyze_files(repo, paths, workers) for r in analysis.records]
