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
The table-driven shift-reduce parser.  The parser never raises on input
that is not in the language: it halts and appends a diagnostic string to
its trace instead.  Every shift and reduce adds a ParseStep holding a
snapshot of the parse forest, the state reached by the step and the token
that triggered it.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Union

from lrtutor.ast import Node, Token
from lrtutor.errors import ParsingError
from lrtutor.grammar import (
    AUGMENTED_START,
    EOI,
    AcceptAction,
    ConflictAction,
    Production,
    ReduceAction,
    ShiftAction,
)
from lrtutor.interfaces import Parser
from lrtutor.table import Table

# Label of the synthetic node that wraps the forest in trace snapshots.
ROOT = "ROOT"


class ParseStep:
    """
    One trace entry.  tree is a ROOT node whose children are the partial
    trees on the symbol stack, state is the automaton state reached and
    token is the kind of the input token being looked at.
    """

    def __init__(self, tree: Node, state: int, token: str) -> None:
        self.tree = tree
        self.state = state
        self.token = token

    def __repr__(self) -> str:
        return "ParseStep(%r, state=%d, token=%s)" % (
            self.tree,
            self.state,
            self.token,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tree": self.tree.to_dict(),
            "state": self.state,
            "token": self.token,
        }


TraceEntry = Union[ParseStep, str]


class ParseResult:
    """
    The outcome of a parse: the trace, whether the input was accepted, and
    the forest left on the symbol stack.
    """

    def __init__(
        self, trace: List[TraceEntry], accepted: bool, forest: List[Node]
    ) -> None:
        self.trace = trace
        self.accepted = accepted
        self.forest = forest

    def __repr__(self) -> str:
        return "ParseResult(accepted=%r, steps=%d, tree=%r)" % (
            self.accepted,
            len(self.trace),
            self.tree,
        )

    @property
    def tree(self) -> Node:
        """
        The parse tree.  After a successful parse this is the single root;
        otherwise a synthetic ROOT node wraps whatever the stack holds.
        """
        if self.accepted and len(self.forest) == 1:
            return self.forest[0]
        return Node(ROOT, self.forest)

    @property
    def error(self) -> Optional[str]:
        if self.trace and isinstance(self.trace[-1], str):
            return self.trace[-1]
        return None

    def last_tree(self) -> Node:
        """The tree of the last structured trace entry."""
        for entry in reversed(self.trace):
            if isinstance(entry, ParseStep):
                return entry.tree
        return Node("Error")

    def to_list(self) -> List[Union[Dict[str, Any], str]]:
        return [
            entry if isinstance(entry, str) else entry.to_dict()
            for entry in self.trace
        ]


class Lr(Parser):
    """
    LR parser.  The Lr class uses a Table in order to parse input that is
    fed to it via the token() method, and terminated via the eoi() method.
    It works the same for LR(0) and LR(1) tables.
    """

    _table: Table
    _stack: List[int]
    _symbols: List[Node]
    _trace: List[TraceEntry]

    def __init__(self, table: Table, verbose: bool = False) -> None:
        self._table = table
        self.verbose = verbose
        self.reset()

    @property
    def table(self) -> Table:
        return self._table

    @property
    def trace(self) -> List[TraceEntry]:
        return self._trace

    @property
    def accepted(self) -> bool:
        return self._accepted

    @property
    def halted(self) -> bool:
        """True once the parser accepted or gave up."""
        return self._halted

    @property
    def start(self) -> List[Node] | None:
        """The parse root in a list, once the input was accepted."""
        if not self._accepted:
            return None
        return list(self._symbols)

    @property
    def result(self) -> ParseResult:
        return ParseResult(
            list(self._trace), self._accepted, list(self._symbols)
        )

    def reset(self) -> None:
        self._stack = [0]
        self._symbols = []
        self._trace = []
        self._accepted = False
        self._halted = False

    def token(self, token: Token) -> None:
        """Feed a token to the parser."""
        self._check()
        self._act(token.kind, token)

    def eoi(self) -> None:
        """Signal end-of-input to the parser."""
        self._check()
        self._act(EOI, Token(EOI, EOI))
        if not self._halted:
            self._fail("The input ended before the parser could accept it")

    def _check(self) -> None:
        if self._halted:
            raise ParsingError(
                "The parser has already %s; call reset() first"
                % ("halted", "accepted")[self._accepted]
            )

    def _act(self, kind: str, token: Token) -> None:
        if self.verbose:
            self._printStack()
            print("INPUT: %r" % token)

        while True:
            state = self._stack[-1]
            row = self._table.row(state)
            if row is None:
                self._fail(
                    "State %d has no row in the transition table" % state
                )
                return
            action = row.actions.get(kind)
            if action is None:
                self._fail(
                    "Unexpected token %s in state %d" % (kind, state)
                )
                return

            if self.verbose:
                print("   --> %r" % action)
            if type(action) is ShiftAction:
                self._stack.append(action.nextState)
                self._symbols.append(Node(kind, text=token.text))
                self._record(action.nextState, kind)
                return
            elif type(action) is ReduceAction:
                if not self._reduce(action.production, kind):
                    return
            elif type(action) is AcceptAction:
                self._accept(action.production, state, kind)
                return
            else:
                assert type(action) is ConflictAction
                self._fail(
                    "State %d has conflicting actions on %s: %s"
                    % (
                        state,
                        kind,
                        ", ".join(repr(act) for act in action.actions),
                    )
                )
                return

            if self.verbose:
                self._printStack()

    def _record(self, state: int, kind: str) -> None:
        self._trace.append(
            ParseStep(Node(ROOT, list(self._symbols)), state, kind)
        )

    def _fail(self, message: str) -> None:
        if self.verbose:
            print("   --> error: %s" % message)
        self._trace.append(message)
        self._halted = True

    def _reduce(self, production: Production, kind: str) -> bool:
        nRhs = len(production.rhs)
        if nRhs > len(self._symbols):
            self._fail(
                "Cannot reduce by %r: only %d symbol%s on the stack"
                % (
                    production,
                    len(self._symbols),
                    ("s", "")[len(self._symbols) == 1],
                )
            )
            return False

        children: List[Node] = []
        for i in range(nRhs):
            self._stack.pop()
            children.append(self._symbols.pop())
        children.reverse()
        self._symbols.append(Node(production.left, children))

        top = self._stack[-1]
        row = self._table.row(top)
        nextState = None if row is None else row.gotos.get(production.left)
        if nextState is None:
            self._fail(
                "State %d has no goto for %s" % (top, production.left)
            )
            return False
        self._stack.append(nextState)
        self._record(nextState, kind)
        return True

    def _accept(
        self, production: Production | None, state: int, kind: str
    ) -> None:
        # Complete the augmented start production so that the forest
        # collapses into a single S' root.
        # Rows read back without the production accept on S' -> S.
        if production is None:
            left, nRhs = AUGMENTED_START, 1
        else:
            left, nRhs = production.left, len(production.rhs)
        if 0 < nRhs <= len(self._symbols):
            children = self._symbols[-nRhs:]
            del self._symbols[-nRhs:]
            self._symbols.append(Node(left, children))
        self._accepted = True
        self._halted = True
        self._record(state, kind)
        if self.verbose:
            self._printStack()
            print("   --> accept")

    def _printStack(self) -> None:
        print("STACK:", end=" ")
        print("%s" % " ".join("%r" % node.symbol for node in self._symbols))
        print("      ", end=" ")
        print("%s" % " ".join("%d" % state for state in self._stack))


def parse(
    tokens: Iterable[Token], table: Table, verbose: bool = False
) -> ParseResult:
    """
    Run the parser over tokens followed by end-of-input and return the
    result.  Never raises on input outside the language.
    """
    parser = Lr(table, verbose=verbose)
    for token in tokens:
        parser.token(token)
        if parser.halted:
            break
    if not parser.halted:
        parser.eoi()
    return parser.result
