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
Action/goto tables derived from an item set automaton.

A table is a list of rows, one per automaton state.  Each row maps
terminals to actions and nonterminals to destination states.  When two
actions compete for the same cell the cell becomes a ConflictAction that
lists them in first-seen order; table construction itself never fails on
an ambiguous grammar.
"""

from __future__ import annotations
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
)

import sys

from mypy_extensions import mypyc_attr

from lrtutor.automaton import Automaton, ItemSet
from lrtutor.errors import AutomatonError
from lrtutor.grammar import (
    AUGMENTED_START,
    EOI,
    AcceptAction,
    Action,
    ConflictAction,
    Element,
    Item,
    ReduceAction,
    ShiftAction,
)


@mypyc_attr(serializable=True)
class Row:
    """
    The actions and gotos of one automaton state.
    """

    def __init__(
        self,
        state: int,
        actions: Optional[Dict[str, Action]] = None,
        gotos: Optional[Dict[str, int]] = None,
    ) -> None:
        self.state = state
        self.actions: Dict[str, Action] = dict(actions or {})
        self.gotos: Dict[str, int] = dict(gotos or {})

    def __repr__(self) -> str:
        return "Row(%d, actions=%r, gotos=%r)" % (
            self.state,
            self.actions,
            self.gotos,
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return (
            self.state == other.state
            and self.actions == other.actions
            and self.gotos == other.gotos
        )

    __hash__ = None  # type: ignore

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state,
            "actions": {
                sym: action.to_dict() for sym, action in self.actions.items()
            },
            "gotos": dict(self.gotos),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Row:
        return cls(
            data["state"],
            {
                sym: Action.from_dict(action)
                for sym, action in data.get("actions", {}).items()
            },
            data.get("gotos", {}),
        )


@mypyc_attr(serializable=True)
class Table:
    """
    A transition table: rows indexed by state number.  Tables are plain
    data; to_rows() gives a JSON-compatible list and from_rows() reads one
    back.
    """

    def __init__(self, rows: Iterable[Row] = ()) -> None:
        self.rows: List[Row] = list(rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, state: int) -> Row:
        return self.rows[state]

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return self.rows == other.rows

    __hash__ = None  # type: ignore

    def row(self, state: int) -> Optional[Row]:
        """The row for state, or None if there is no such row."""
        if 0 <= state < len(self.rows):
            return self.rows[state]
        return None

    def conflicts(self) -> List[Tuple[int, str, ConflictAction]]:
        """Every conflict cell as (state, terminal, conflict)."""
        result = []
        for row in self.rows:
            for sym, action in row.actions.items():
                if isinstance(action, ConflictAction):
                    result.append((row.state, sym, action))
        return result

    @property
    def nConflicts(self) -> int:
        return len(self.conflicts())

    @property
    def pureLR(self) -> bool:
        return self.nConflicts == 0

    def to_rows(self) -> List[Dict[str, Any]]:
        return [row.to_dict() for row in self.rows]

    @classmethod
    def from_rows(cls, rows: Iterable[Dict[str, Any]]) -> Table:
        return cls(Row.from_dict(row) for row in rows)

    def __repr__(self) -> str:
        lines = ["Parsing tables:"]
        for row in self.rows:
            lines.append("  %s" % ("=" * 78))
            lines.append("  State %d:" % row.state)
            lines.append("    Goto:")
            for sym, state in row.gotos.items():
                lines.append("    %15s : %d" % (sym, state))
            lines.append("    Action:")
            for sym, action in row.actions.items():
                conflict = ("   ", "XXX")[isinstance(action, ConflictAction)]
                lines.append("%s %15s : %r" % (conflict, sym, action))
        nConflicts = self.nConflicts
        lines.append(
            "lrtutor.Table: %d state%s, %d conflict%s"
            % (
                len(self.rows),
                ("s", "")[len(self.rows) == 1],
                nConflicts,
                ("s", "")[nConflicts == 1],
            )
        )
        return "\n".join(lines)


class _Builder:
    """
    Shared machinery of the LR(0) and LR(1) table builders.
    """

    algorithm = ""

    def __init__(
        self, automaton: Automaton, loose: bool = False, verbose: bool = False
    ) -> None:
        self._automaton = automaton
        self._loose = loose
        self._verbose = verbose

    def build(self) -> Table:
        states = self._automaton.states
        if self._verbose:
            print(
                "lrtutor.Table: Generating %s parsing tables (%d state%s)..."
                % (self.algorithm, len(states), ("s", "")[len(states) == 1])
            )
            sys.stdout.flush()
        table = Table()
        for stateInd, itemSet in enumerate(states):
            row = Row(stateInd)
            self._row(row, itemSet)
            table.rows.append(row)
        if self._verbose:
            print(
                "lrtutor.Table: %d conflict%s"
                % (table.nConflicts, ("s", "")[table.nConflicts == 1])
            )
        return table

    def _row(self, row: Row, itemSet: ItemSet) -> None:
        raise NotImplementedError

    # Find the state that the transition on sym leads to, and make sure it
    # holds every one of the advanced items.
    def _nextState(
        self, stateInd: int, itemSet: ItemSet, sym: Element, items: List[Item]
    ) -> int:
        nextState = itemSet.transitions.get(sym)
        if nextState is not None:
            dest = self._automaton.states[nextState]
            if all(dest.has_item(item.advance()) for item in items):
                return nextState
        raise AutomatonError(
            "State %d has no destination state for %r containing %s"
            % (
                stateInd,
                sym,
                ", ".join(repr(item.advance()) for item in items),
            )
        )

    def _shift(self, row: Row, sym: str, nextState: int) -> None:
        self._actionAppend(row, sym, ShiftAction(nextState))

    def _goto(self, row: Row, sym: str, nextState: int) -> None:
        current = row.gotos.get(sym)
        if current is not None and current != nextState:
            raise AutomatonError(
                "State %d has two goto destinations for %s: %d and %d"
                % (row.state, sym, current, nextState)
            )
        row.gotos[sym] = nextState

    def _accept(self, row: Row, item: Item) -> None:
        row.actions[EOI] = AcceptAction(item.production)

    # Add an action to a cell.  A cell that already holds a different
    # action becomes (or grows) a conflict.  Accept always wins.
    def _actionAppend(self, row: Row, sym: str, action: Action) -> None:
        current = row.actions.get(sym)
        if current is None:
            row.actions[sym] = action
            return
        if isinstance(current, AcceptAction) or current == action:
            return
        if (
            self._loose
            and isinstance(current, ShiftAction)
            and isinstance(action, ReduceAction)
        ):
            return
        if isinstance(current, ConflictAction):
            if not current.append(action):
                return
        else:
            row.actions[sym] = ConflictAction((current, action))
        if self._verbose:
            print(
                "lrtutor.Table: Conflict in state %d on %s: %r"
                % (row.state, sym, row.actions[sym])
            )


class Lr0Builder(_Builder):
    algorithm = "LR(0)"

    def _row(self, row: Row, itemSet: ItemSet) -> None:
        terminals = self._automaton.grammar.terminals() + [EOI]
        for item in itemSet:
            sym = item.symbol
            if sym is not None:
                nextState = self._nextState(row.state, itemSet, sym, [item])
                if sym.isTerminal:
                    self._shift(row, sym.value, nextState)
                else:
                    self._goto(row, sym.value, nextState)
            elif item.production.left == AUGMENTED_START:
                self._accept(row, item)
            else:
                # No lookahead: reduce on every terminal.
                for t in terminals:
                    self._actionAppend(
                        row, t, ReduceAction(item.production)
                    )


class Lr1Builder(_Builder):
    algorithm = "LR(1)"

    def _row(self, row: Row, itemSet: ItemSet) -> None:
        # Shifts and gotos, resolved once per symbol.
        groups: Dict[Element, List[Item]] = {}
        for item in itemSet:
            sym = item.symbol
            if sym is not None:
                groups.setdefault(sym, []).append(item)
        for sym, items in groups.items():
            nextState = self._nextState(row.state, itemSet, sym, items)
            if sym.isTerminal:
                self._shift(row, sym.value, nextState)
            else:
                self._goto(row, sym.value, nextState)

        # Reductions, on the item's own lookahead only.
        for item in itemSet:
            if not item.isFinal:
                continue
            if item.production.left == AUGMENTED_START:
                if item.lookahead == EOI:
                    self._accept(row, item)
            else:
                assert item.lookahead is not None
                self._actionAppend(
                    row, item.lookahead, ReduceAction(item.production)
                )


def build_lr0_table(automaton: Automaton, verbose: bool = False) -> Table:
    """
    LR(0) table: a completed item reduces on every terminal of the grammar,
    including the end-of-input marker.
    """
    return Lr0Builder(automaton, verbose=verbose).build()


def build_lr1_table(
    automaton: Automaton, loose: bool = False, verbose: bool = False
) -> Table:
    """
    LR(1) table: a completed item reduces only on its lookahead.  With loose
    true, a reduction that meets an existing shift is dropped in favour of
    the shift instead of producing a conflict (dangling else).
    """
    return Lr1Builder(automaton, loose=loose, verbose=verbose).build()
