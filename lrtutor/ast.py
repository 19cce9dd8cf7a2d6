# ============================================================================
# Copyright (c) 2007 Jason Evans <jasone@canonware.com>
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
# ============================================================================
"""
The classes `Token` and `Node` are the values that enter and leave the
parse driver.  Tokens are produced by an external lexer; the driver only
looks at their kind (the terminal symbol) and text.  Nodes form the parse
forest that the driver snapshots at every step.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from mypy_extensions import mypyc_attr


@mypyc_attr(serializable=True, allow_interpreted_subclasses=True)
class Token:
    """
    A lexer token.  kind is matched against the terminals of the grammar,
    text is the source fragment and position is an opaque location value
    (typically a character offset) that is carried along for display.

    tokens = [Token("NUM", "1", 0), Token("COMMA", ",", 1)]
    """

    def __init__(
        self, kind: str, text: str = "", position: Any = None
    ) -> None:
        self.kind = kind
        self.text = text
        self.position = position

    def __repr__(self) -> str:
        if self.text and self.text != self.kind:
            return "%s(%r)" % (self.kind, self.text)
        return self.kind

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.text, self.position) == (
            other.kind,
            other.text,
            other.position,
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.text))


@mypyc_attr(serializable=True, allow_interpreted_subclasses=True)
class Node:
    """
    Parse tree node.  Leaves are terminals (no children) created by shift
    actions; internal nodes are nonterminals created by reductions.
    """

    def __init__(
        self,
        symbol: str,
        children: Optional[Iterable[Node]] = None,
        text: Optional[str] = None,
    ) -> None:
        self.symbol = symbol
        self.children: list[Node] = list(children or ())
        self.text = text

    def __repr__(self) -> str:
        if not self.children:
            return self.symbol
        return "(%s %s)" % (
            self.symbol,
            " ".join(repr(child) for child in self.children),
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return (
            self.symbol == other.symbol
            and self.text == other.text
            and self.children == other.children
        )

    __hash__ = None  # type: ignore

    @property
    def isLeaf(self) -> bool:
        return not self.children

    def leaves(self) -> list[Node]:
        """Return the leaves of this subtree, left to right."""
        result = []
        stack = [self]
        while stack:
            node = stack.pop()
            if node.children:
                stack.extend(reversed(node.children))
            else:
                result.append(node)
        return result

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "symbol": self.symbol,
            "children": [child.to_dict() for child in self.children],
        }
        if self.text is not None:
            data["text"] = self.text
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Node:
        return cls(
            data["symbol"],
            [cls.from_dict(child) for child in data.get("children", ())],
            data.get("text"),
        )
