"""Structural complexity of Clojure functions."""

from .analyzer import (
    DECISION_FORMS,
    DEFINITION_FORMS,
    FileAnalysis,
    analyze_file,
    analyze_files,
    complexity_functions,
    decision_count,
    function_complexities,
    is_clojure_file,
)
from .reader import ReaderError, read_forms
from .syntax import Node, NodeKind

__all__ = [
    "DECISION_FORMS",
    "DEFINITION_FORMS",
    "FileAnalysis",
    "Node",
    "NodeKind",
    "ReaderError",
    "analyze_file",
    "analyze_files",
    "complexity_functions",
    "decision_count",
    "function_complexities",
    "is_clojure_file",
    "read_forms",
]
