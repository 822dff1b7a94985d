"""Tests for metrics/complexity/analyzer.py - per-function complexity."""

import pytest

from riskmap.metrics.complexity import (
    analyze_file,
    analyze_files,
    complexity_functions,
    function_complexities,
    read_forms,
)
from riskmap.metrics.models import ComplexityRecord


def measure(text: str, path: str = "src/x.clj") -> list:
    return [(r.function_name, r.complexity) for r in function_complexities(read_forms(text), path)]


class TestFunctionComplexities:
    def test_straight_line_function(self):
        assert measure("(defn add [a b] (+ a b))") == [("add", 1)]

    def test_decisions_counted_once_each(self):
        src = """
        (defn classify [x]
          (if (neg? x)
            :neg
            (cond
              (zero? x) :zero
              (even? x) :even
              :else :odd)))
        """
        # if + cond, however many cond branches
        assert measure(src) == [("classify", 3)]

    def test_all_decision_forms(self):
        src = """
        (defn f [m]
          (when-let [a (:a m)]
            (if-let [b (:b m)]
              (when-some [c (:c m)]
                (case c 1 :one :other))
              (when b :b))))
        """
        assert measure(src) == [("f", 6)]

    def test_nested_function_literals_counted(self):
        src = "(defn f [xs] (map #(if (odd? %) % 0) xs))"
        assert measure(src) == [("f", 2)]

    def test_function_literal_headed_by_decision(self):
        src = "(defn f [xs] (filter #(when (pos? %) %) xs))"
        assert measure(src) == [("f", 2)]

    def test_top_level_function_literal_is_not_a_definition(self):
        assert measure("#(defn g [] 1)\n(defn h [] 1)") == [("h", 1)]

    def test_private_and_defstate(self):
        src = "(defn- helper [] (when x 1))\n(defstate conn :start (if a b c))"
        assert measure(src) == [("helper", 2), ("conn", 2)]

    def test_other_forms_ignored(self):
        src = "(ns app.core)\n(def x (if a 1 2))\n(defmacro m [] `(if 1 2))\n(defn g [] 1)"
        assert measure(src) == [("g", 1)]

    def test_decision_symbols_outside_head_position_ignored(self):
        src = "(defn f [] [if when] '(x if) {:cond 1})"
        assert measure(src) == [("f", 1)]

    def test_quoted_list_headed_by_decision_still_counts(self):
        src = "(defn f [] '(if a b))"
        assert measure(src) == [("f", 2)]

    def test_discarded_forms_not_counted(self):
        assert measure("(defn f [] #_(if a b) 1)") == [("f", 1)]

    def test_metadata_name(self):
        assert measure("(defn ^:private ^long f [] 1)") == [("f", 1)]

    def test_unnamed_definition_skipped(self):
        assert measure("(defn) (defn [x] x) (defn \"doc\" [] 1) (defn ok [] 1)") == [("ok", 1)]

    def test_source_order(self):
        assert [n for n, _ in measure("(defn b [] 1) (defn a [] 1)")] == ["b", "a"]


class TestAnalyzeFile:
    def test_success(self, tmp_path):
        (tmp_path / "core.clj").write_text("(defn f [x] (if x 1 2))")
        analysis = analyze_file(tmp_path, "core.clj")
        assert analysis.ok
        assert analysis.records == [ComplexityRecord("core.clj", "f", 2, "clojure")]

    @pytest.mark.parametrize("name", ["a.cljs", "b.cljc", "C.CLJ"])
    def test_clojure_family_extensions(self, tmp_path, name):
        (tmp_path / name).write_text("(defn f [] 1)")
        assert len(analyze_file(tmp_path, name).records) == 1

    def test_non_clojure_is_empty_success(self, tmp_path):
        analysis = analyze_file(tmp_path, "README.md")
        assert analysis.ok
        assert analysis.records == []

    def test_missing_file_fails(self, tmp_path):
        analysis = analyze_file(tmp_path, "gone.clj")
        assert not analysis.ok
        assert "gone.clj" in analysis.error

    def test_parse_error_fails(self, tmp_path):
        (tmp_path / "bad.clj").write_text("(defn f [x]")
        analysis = analyze_file(tmp_path, "bad.clj")
        assert not analysis.ok
        assert "clojure" in analysis.error


class TestComplexityFunctions:
    def test_failures_do_not_abort(self, tmp_path):
        (tmp_path / "good.clj").write_text("(defn good [] (when x 1))")
        (tmp_path / "bad.clj").write_text("(defn bad [")
        records = complexity_functions(tmp_path, ["bad.clj", "missing.clj", "good.clj"])
        assert [(r.path, r.function_name, r.complexity) for r in records] == [
            ("good.clj", "good", 2)
        ]

    def test_distinct_paths_in_input_order(self, tmp_path):
        (tmp_path / "a.clj").write_text("(defn a [] 1)")
        (tmp_path / "b.clj").write_text("(defn b [] 1)")
        records = complexity_functions(tmp_path, ["b.clj", "a.clj", "b.clj"])
        assert [r.function_name for r in records] == ["b", "a"]

    def test_parallel_matches_sequential(self, tmp_path):
        paths = []
        for i in range(15):
            name = f"f{i:02d}.clj"
            body = " ".join(["(if a b c)"] * i)
            (tmp_path / name).write_text(f"(defn fn{i} [] {body})\n(defn g{i} [] 1)")
            paths.append(name)
        sequential = complexity_functions(tmp_path, paths, workers=1)
        parallel = complexity_functions(tmp_path, paths, workers=4)
        assert parallel == sequential
        assert [r.complexity for r in sequential[:4]] == [1, 1, 2, 1]

    def test_analyze_files_keeps_non_clojure_entries(self, tmp_path):
        results = analyze_files(tmp_path, ["x.md", "y.clj"])
        assert [r.path for r in results] == ["x.md", "y.clj"]
        assert results[0].ok
        assert not results[1].ok
