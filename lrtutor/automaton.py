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
Construction of the canonical collection of LR(0) and LR(1) item sets.

States are discovered breadth first from the augmented start item using an
explicit work queue, and a candidate state is merged into an existing one
whenever the digests of their sorted kernel item keys match.  For a given
grammar the resulting numbering of states is the same on every run.
"""

from __future__ import annotations
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
)

import collections
import sys

from mypy_extensions import mypyc_attr

from lrtutor.first import FirstSets, compute_first, first_of_sequence
from lrtutor.grammar import (
    EOI,
    Element,
    Grammar,
    Item,
    Production,
    digest,
)


@mypyc_attr(serializable=True)
class ItemSet:
    """
    One automaton state.  The kernel items identify the state; the closure
    items are derived from them.  transitions maps the symbol after the dot
    to the index of the destination state, for terminals (shift) and
    nonterminals (goto) alike.
    """

    def __init__(self, kernel: Iterable[Item]) -> None:
        self._items: Dict[str, Item] = {}
        for item in kernel:
            self._items.setdefault(item.key, item)
        self._nKernel = len(self._items)
        self.transitions: Dict[Element, int] = {}
        self.hash = digest(",".join(sorted(self._items)))

    def __repr__(self) -> str:
        kernel = ", ".join(repr(i) for i in self.kernel)
        added = ", ".join(repr(i) for i in self.added)
        return "ItemSet(kernel: %s, added: %s)" % (kernel, added)

    def __len__(self) -> int:
        return self._nKernel

    def __hash__(self) -> int:
        return hash(self.hash)

    def __eq__(self, other: Any) -> bool:
        if type(other) == ItemSet:  # noqa: E721
            return self.hash == other.hash
        else:
            return NotImplemented

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items.values())

    @property
    def kernel(self) -> List[Item]:
        return list(self._items.values())[: self._nKernel]

    @property
    def added(self) -> List[Item]:
        return list(self._items.values())[self._nKernel :]

    def has_item(self, item: Item) -> bool:
        return item.key in self._items

    # Merge an added item.
    def addedAppend(self, item: Item) -> bool:
        assert item.dotPos == 0
        if item.key in self._items:
            return False
        self._items[item.key] = item
        return True

    def closure(
        self, grammar: Grammar, first: Optional[FirstSets] = None
    ) -> None:
        """
        Add the closure items of the kernel.  With first given, items carry
        lookaheads: [A -> a * B b, x] adds [B -> * g, y] for every y in
        FIRST(b x).  Without it, plain LR(0) items are added.
        """
        # Iterate over the items until no more can be added to the closure.
        worklist = list(self._items.values())
        i = 0
        while i < len(worklist):
            item = worklist[i]
            i += 1
            sym = item.symbol
            if sym is None or not sym.isNonterminal:
                continue
            prods = grammar.productions_for(sym.value)
            if first is None:
                for prod in prods:
                    tItem = prod.item(0)
                    if self.addedAppend(tItem):
                        worklist.append(tItem)
            else:
                lookaheads = sorted(
                    first_of_sequence(item.rest, item.lookahead, first)
                )
                for prod in prods:
                    for lookahead in lookaheads:
                        tItem = prod.item(0, lookahead)
                        if self.addedAppend(tItem):
                            worklist.append(tItem)

    def goto_candidates(self) -> Dict[Element, List[Item]]:
        """
        Group the advanced items of this state by the symbol that was
        after the dot.  Each group is the kernel of a successor state.
        Groups come in order of first appearance.
        """
        groups: Dict[Element, List[Item]] = {}
        for item in self._items.values():
            sym = item.symbol
            if sym is None:
                continue
            groups.setdefault(sym, []).append(item.advance())
        return groups


@mypyc_attr(serializable=True)
class Automaton:
    """
    Base class of the item set automata.  The grammar is augmented with
    S' -> S (unless it already defines S') before construction; the
    augmented grammar is available as the grammar attribute.
    """

    algorithm = ""

    def __init__(self, grammar: Grammar, verbose: bool = False) -> None:
        self._verbose = verbose
        self.grammar = grammar.augmented()
        self.start_production: Production = self.grammar.start_production()
        self.first: Optional[FirstSets] = self._firstSets()
        self.states: List[ItemSet] = []
        self._statesHash: Dict[str, int] = {}
        self._items()

    def _firstSets(self) -> Optional[FirstSets]:
        return None

    def _start_item(self) -> Item:
        raise NotImplementedError

    def __len__(self) -> int:
        return len(self.states)

    def __iter__(self) -> Iterator[ItemSet]:
        return iter(self.states)

    def __getitem__(self, i: int) -> ItemSet:
        return self.states[i]

    def __repr__(self) -> str:
        lines = []
        for i, itemSet in enumerate(self.states):
            lines.append("State %d:" % i)
            for item in itemSet:
                lines.append("    %r" % item)
            for sym, j in itemSet.transitions.items():
                lines.append("    %15r : %d" % (sym, j))
        lines.append(
            "lrtutor.Automaton: %s, %d state%s"
            % (
                self.algorithm,
                len(self.states),
                ("s", "")[len(self.states) == 1],
            )
        )
        return "\n".join(lines)

    def state_of(self, kernel: Iterable[Item]) -> Optional[int]:
        """The index of the state with the given kernel, if any."""
        return self._statesHash.get(ItemSet(kernel).hash)

    # Compute the collection of item sets.
    def _items(self) -> None:
        if self._verbose:
            print(
                "lrtutor.Automaton: Generating %s item set collection..."
                % self.algorithm,
                end=" ",
            )
            sys.stdout.flush()

        tItemSet = ItemSet((self._start_item(),))
        tItemSet.closure(self.grammar, self.first)
        self.states.append(tItemSet)
        self._statesHash[tItemSet.hash] = 0

        # Queue of state numbers that need to be processed.
        worklist = collections.deque([0])
        while worklist:
            i = worklist.popleft()
            itemSet = self.states[i]
            for sym, kernel in itemSet.goto_candidates().items():
                gotoSet = ItemSet(kernel)
                j = self._statesHash.get(gotoSet.hash)
                if j is None:
                    gotoSet.closure(self.grammar, self.first)
                    j = len(self.states)
                    self.states.append(gotoSet)
                    self._statesHash[gotoSet.hash] = j
                    worklist.append(j)
                    if self._verbose:
                        sys.stdout.write("+")
                        sys.stdout.flush()
                else:
                    assert self.states[j] == gotoSet
                itemSet.transitions[sym] = j

        if self._verbose:
            sys.stdout.write("\n")
            print(
                "lrtutor.Automaton: %d state%s"
                % (len(self.states), ("s", "")[len(self.states) == 1])
            )
            sys.stdout.flush()


class Lr0Automaton(Automaton):
    """
    Canonical LR(0) collection.  Items carry no lookahead, so reduce items
    apply on every terminal.
    """

    algorithm = "LR(0)"

    def _start_item(self) -> Item:
        return self.start_production.item(0)


class Lr1Automaton(Automaton):
    """
    Canonical LR(1) collection.  Every item carries one lookahead terminal,
    and states are identified by their kernel (core, lookahead) pairs.
    """

    algorithm = "LR(1)"

    def _firstSets(self) -> Optional[FirstSets]:
        return compute_first(self.grammar)

    def _start_item(self) -> Item:
        return self.start_production.item(0, EOI)
