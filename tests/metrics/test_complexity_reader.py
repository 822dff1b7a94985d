"""Tests for metrics/complexity/reader.py - the Clojure reader."""

import pytest

from riskmap.metrics.complexity.reader import ReaderError, read_forms
from riskmap.metrics.complexity.syntax import Node, NodeKind


def only(text: str) -> Node:
    forms = read_forms(text)
    assert len(forms) == 1
    return forms[0]


class TestAtomsAndCollections:
    def test_list_of_atoms(self):
        node = only('(f :k "s" 12 \\a sym)')
        assert node.kind is NodeKind.LIST
        assert [c.kind for c in node.children] == [
            NodeKind.SYMBOL,
            NodeKind.KEYWORD,
            NodeKind.STRING,
            NodeKind.NUMBER,
            NodeKind.CHARACTER,
            NodeKind.SYMBOL,
        ]
        assert node.head == "f"

    def test_collections(self):
        kinds = [n.kind for n in read_forms("[1 2] {:a 1} #{1} #(inc %)")]
        assert kinds == [NodeKind.VECTOR, NodeKind.MAP, NodeKind.SET, NodeKind.FN_LITERAL]

    def test_negative_number_and_minus_symbol(self):
        node = only("(- -1 x)")
        assert node.children[0].kind is NodeKind.SYMBOL
        assert node.children[1].kind is NodeKind.NUMBER

    def test_string_with_escapes_and_delimiters(self):
        node = only(r'(str "a \" ( [ b")')
        assert node.children[1].value == r'a \" ( [ b'

    def test_character_literals(self):
        node = only(r"[\( \) \newline \space \u00e9]")
        assert [c.value for c in node.children] == ["(", ")", "newline", "space", "u00e9"]

    def test_function_literal_head(self):
        assert only("#(when (pos? %) %)").head == "when"

    def test_head_is_none_for_non_symbol_first(self):
        assert only("((comp f g) x)").head is None
        assert only("[if x]").head is None


class TestIgnoredInput:
    def test_comments_and_commas(self):
        forms = read_forms(";; header\n(a, b) ; trailing\n#!shebang\n(c)")
        assert [f.head for f in forms] == ["a", "c"]
        assert len(forms[0].children) == 2

    def test_discard_drops_next_form(self):
        node = only("(a #_(if x y z) b)")
        assert [c.value for c in node.children] == ["a", "b"]

    def test_stacked_discards(self):
        node = only("[#_ #_ 1 2 3]")
        assert [c.value for c in node.children] == ["3"]

    def test_top_level_discard(self):
        assert read_forms("#_(defn gone [] 1)") == []


class TestReaderMacros:
    def test_quote_and_deref(self):
        node = only("(f 'x @state `(g ~y ~@zs))")
        kinds = [c.kind for c in node.children[1:]]
        assert kinds == [NodeKind.QUOTE, NodeKind.DEREF, NodeKind.SYNTAX_QUOTE]
        sq = node.children[3].children[0]
        assert [c.kind for c in sq.children[1:]] == [NodeKind.UNQUOTE, NodeKind.UNQUOTE_SPLICING]

    def test_metadata_wraps_target(self):
        node = only("(defn ^:private ^String f [] 1)")
        name = node.children[1]
        assert name.kind is NodeKind.METADATA
        assert name.unwrap_metadata().value == "f"

    def test_regex_and_var_quote(self):
        node = only('(re-find #"\\d+" #\'my/var)')
        assert node.children[1].kind is NodeKind.REGEX
        assert node.children[2].kind is NodeKind.VAR_QUOTE

    def test_reader_conditionals(self):
        node = only("[#?(:clj 1 :cljs 2) #?@(:clj [3])]")
        assert [c.kind for c in node.children] == [NodeKind.READER_CONDITIONAL] * 2
        assert [c.value for c in node.children] == ["#?", "#?@"]

    def test_namespaced_map_and_tagged_literal(self):
        node = only('[#:user{:id 1} #inst "2024-01-01" ##Inf]')
        kinds = [c.kind for c in node.children]
        assert kinds == [NodeKind.MAP, NodeKind.TAGGED, NodeKind.NUMBER]
        assert node.children[1].value == "inst"


class TestMalformedInput:
    @pytest.mark.parametrize(
        "text",
        [
            "(defn f [x]",
            "(a))",
            "(a]",
            '(str "open',
            "(f ')",
            "#",
            "#?[:clj 1]",
        ],
    )
    def test_raises_reader_error(self, text):
        with pytest.raises(ReaderError):
            read_forms(text)

    def test_error_reports_line(self):
        with pytest.raises(ReaderError) as exc_info:
            read_forms("(ok)\n\n(bad]")
        assert exc_info.value.line == 3
