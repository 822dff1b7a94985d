"""Clojure reader producing the tagged syntax tree.

Covers the syntax found in ordinary .clj/.cljs/.cljc files: collections,
strings, characters, comments, ``#_`` discards, quoting, metadata,
function literals, regexes, reader conditionals, namespaced maps and
tagged literals. Comments, commas and discarded forms do not appear in the
tree.
"""

from __future__ import annotations

from typing import Optional

from .syntax import Node, NodeKind

_WHITESPACE = frozenset(" \t\n\r\f\v,")
_CLOSERS = {"(": ")", "[": "]", "{": "}"}
_COLLECTIONS = {"(": NodeKind.LIST, "[": NodeKind.VECTOR, "{": NodeKind.MAP}
_TERMINATORS = _WHITESPACE | frozenset('()[]{}";')
_WRAPPERS = {
    "'": NodeKind.QUOTE,
    "`": NodeKind.SYNTAX_QUOTE,
    "@": NodeKind.DEREF,
}


class ReaderError(ValueError):
    """Malformed source. ``line`` is 1-indexed."""

    def __init__(self, message: str, line: int):
        super().__init__(f"line {line}: {message}")
        self.line = line


class Reader:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    # ── helpers ───────────────────────────────────────────────

    def _line(self, pos: Optional[int] = None) -> int:
        return self.text.count("\n", 0, self.pos if pos is None else pos) + 1

    def _error(self, message: str, pos: Optional[int] = None) -> ReaderError:
        return ReaderError(message, self._line(pos))

    def _peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        return self.text[i] if i < len(self.text) else ""

    def _skip_ignored(self) -> None:
        """Skip whitespace, commas and line comments."""
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch in _WHITESPACE:
                self.pos += 1
            elif ch == ";" or (ch == "#" and self._peek(1) == "!"):
                end = text.find("\n", self.pos)
                self.pos = len(text) if end == -1 else end + 1
            else:
                return

    def _read_token(self) -> str:
        start = self.pos
        text = self.text
        while self.pos < len(text) and text[self.pos] not in _TERMINATORS:
            self.pos += 1
        return text[start : self.pos]

    def _read_string_body(self) -> str:
        """Read from an opening quote to its closing quote."""
        start = self.pos
        self.pos += 1  # opening quote
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch == "\\":
                self.pos += 2
                continue
            self.pos += 1
            if ch == '"':
                return text[start + 1 : self.pos - 1]
        raise self._error("unterminated string", start)

    # ── forms ─────────────────────────────────────────────────

    def read_all(self) -> list[Node]:
        forms = []
        while True:
            self._skip_ignored()
            if self.pos >= len(self.text):
                return forms
            node = self._read_form()
            if node is not None:
                forms.append(node)

    def _read_required(self, what: str) -> Node:
        """Read the next form, skipping discards; EOF is an error."""
        while True:
            self._skip_ignored()
            if self.pos >= len(self.text):
                raise self._error(f"unexpected end of input after {what}")
            ch = self.text[self.pos]
            if ch in ")]}":
                raise self._error(f"unexpected '{ch}' after {what}")
            node = self._read_form()
            if node is not None:
                return node

    def _read_collection(self, kind: NodeKind, opener: str, value: Optional[str] = None) -> Node:
        start = self.pos
        self.pos += 1
        closer = _CLOSERS[opener]
        children = []
        while True:
            self._skip_ignored()
            if self.pos >= len(self.text):
                raise self._error(f"unclosed '{opener}'", start)
            ch = self.text[self.pos]
            if ch == closer:
                self.pos += 1
                return Node(kind, value, tuple(children))
            if ch in ")]}":
                raise self._error(f"mismatched '{ch}', expected '{closer}'")
            node = self._read_form()
            if node is not None:
                children.append(node)

    def _read_form(self) -> Optional[Node]:
        """Read one form at the current position.

        Returns None for a ``#_`` discard, which consumes the following form.
        """
        ch = self.text[self.pos]

        if ch in _COLLECTIONS:
            return self._read_collection(_COLLECTIONS[ch], ch)
        if ch in ")]}":
            raise self._error(f"unexpected '{ch}'")
        if ch == '"':
            return Node(NodeKind.STRING, self._read_string_body())
        if ch == "\\":
            return self._read_character()
        if ch in _WRAPPERS:
            self.pos += 1
            return Node(_WRAPPERS[ch], children=(self._read_required(ch),))
        if ch == "~":
            if self._peek(1) == "@":
                self.pos += 2
                return Node(NodeKind.UNQUOTE_SPLICING, children=(self._read_required("~@"),))
            self.pos += 1
            return Node(NodeKind.UNQUOTE, children=(self._read_required("~"),))
        if ch == "^":
            self.pos += 1
            return self._read_metadata()
        if ch == "#":
            return self._read_dispatch()
        return self._atom(self._read_token())

    def _read_character(self) -> Node:
        start = self.pos
        self.pos += 1  # backslash
        if self.pos >= len(self.text):
            raise self._error("unexpected end of input in character literal", start)
        first = self.text[self.pos]
        self.pos += 1
        rest = self._read_token() if first.isalnum() else ""
        return Node(NodeKind.CHARACTER, first + rest)

    def _read_metadata(self) -> Node:
        meta = self._read_required("^")
        target = self._read_required("metadata")
        return Node(NodeKind.METADATA, children=(meta, target))

    def _read_dispatch(self) -> Optional[Node]:
        start = self.pos
        nxt = self._peek(1)
        if nxt == "{":
            self.pos += 1
            return self._read_collection(NodeKind.SET, "{")
        if nxt == "(":
            self.pos += 1
            return self._read_collection(NodeKind.FN_LITERAL, "(")
        if nxt == '"':
            self.pos += 1
            return Node(NodeKind.REGEX, self._read_string_body())
        if nxt == "'":
            self.pos += 2
            return Node(NodeKind.VAR_QUOTE, children=(self._read_required("#'"),))
        if nxt == "_":
            self.pos += 2
            self._read_required("#_")
            return None
        if nxt == "^":
            self.pos += 2
            return self._read_metadata()
        if nxt == "?":
            self.pos += 2
            splicing = self._peek() == "@"
            if splicing:
                self.pos += 1
            if self._peek() != "(":
                raise self._error("reader conditional must be followed by a list", start)
            node = self._read_collection(NodeKind.READER_CONDITIONAL, "(")
            return Node(node.kind, "#?@" if splicing else "#?", node.children)
        if nxt == ":":
            # namespaced map: #:ns{...} or #::{...}
            self.pos += 1
            prefix = self._read_token()
            self._skip_ignored()
            if self._peek() != "{":
                raise self._error("namespaced map must be followed by a map", start)
            return self._read_collection(NodeKind.MAP, "{", value=prefix)
        if nxt == "#":
            # symbolic values: ##Inf ##-Inf ##NaN
            self.pos += 2
            return Node(NodeKind.NUMBER, "##" + self._read_token())
        if nxt == "" or nxt in _TERMINATORS:
            raise self._error("invalid dispatch macro '#'", start)
        # tagged literal: #inst "...", #uuid "...", #my/tag {...}
        self.pos += 1
        tag = self._read_token()
        return Node(NodeKind.TAGGED, tag, (self._read_required("#" + tag),))

    @staticmethod
    def _atom(token: str) -> Node:
        if token.startswith(":"):
            return Node(NodeKind.KEYWORD, token)
        if token[0].isdigit() or (token[0] in "+-" and len(token) > 1 and token[1].isdigit()):
            return Node(NodeKind.NUMBER, token)
        return Node(NodeKind.SYMBOL, token)


def read_forms(text: str) -> list[Node]:
    """Parse source text into its top-level forms.

    Raises:
        ReaderError: On unbalanced delimiters, unterminated strings or
            incomplete reader macros
    """
    return Reader(text).read_all()
