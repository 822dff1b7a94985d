"""Syntax tree for Clojure source forms.

Each node carries one of a fixed set of kinds. Collections and reader
macros hold child nodes; atoms hold their token text in ``value``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NodeKind(Enum):
    # collections
    LIST = "list"
    VECTOR = "vector"
    MAP = "map"
    SET = "set"
    FN_LITERAL = "fn_literal"  # #( ... )
    READER_CONDITIONAL = "reader_conditional"  # #?( ... ) and #?@( ... )
    # atoms
    SYMBOL = "symbol"
    KEYWORD = "keyword"
    STRING = "string"
    NUMBER = "number"
    CHARACTER = "character"
    REGEX = "regex"
    # reader macros wrapping other forms
    QUOTE = "quote"
    SYNTAX_QUOTE = "syntax_quote"
    UNQUOTE = "unquote"
    UNQUOTE_SPLICING = "unquote_splicing"
    DEREF = "deref"
    VAR_QUOTE = "var_quote"
    METADATA = "metadata"  # children: (meta, target)
    TAGGED = "tagged"  # #inst "..." ; value is the tag


# Forms whose first child is the operator
_CALL_KINDS = frozenset({NodeKind.LIST, NodeKind.FN_LITERAL})


@dataclass(frozen=True)
class Node:
    kind: NodeKind
    value: Optional[str] = None
    children: tuple[Node, ...] = ()

    @property
    def head(self) -> Optional[str]:
        """Leading symbol of a call form, e.g. "defn" for (defn f [] ...).

        Function literals are calls too: #(if ...) is headed by "if".
        """
        if self.kind in _CALL_KINDS and self.children:
            first = self.children[0]
            if first.kind is NodeKind.SYMBOL:
                return first.value
        return None

    def unwrap_metadata(self) -> Node:
        """The node a ^metadata form is attached to."""
        node = self
        while node.kind is NodeKind.METADATA and node.children:
            node = node.children[-1]
        return node
