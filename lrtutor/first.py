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
FIRST sets.  FIRST(X) is the set of terminals that can begin a string
derived from X, plus EPSILON when X can derive the empty string.
"""

from __future__ import annotations
from typing import Dict, Iterable, Optional, Set

from lrtutor.grammar import EPSILON, Element, Grammar

FirstSets = Dict[str, Set[str]]


def compute_first(grammar: Grammar) -> FirstSets:
    """
    Compute the FIRST set of every symbol in grammar, by fixed-point
    iteration over its productions.  A terminal maps to itself under its
    quoted form, so terminal 'E' and nonterminal E keep separate entries.
    """
    first: FirstSets = {}
    nullables: Set[str] = set()

    for name in grammar.nonterminals():
        first[name] = set()
    for prod in grammar.productions:
        for elm in prod.rhs:
            if elm.isTerminal:
                first.setdefault(repr(elm), {elm.value})
            else:
                first.setdefault(elm.value, set())

    # Repeat the following loop until no more symbols can be added to any
    # first set.
    done = False
    while not done:
        done = True
        for prod in grammar.productions:
            firstSet = first[prod.left]
            oldLen = len(firstSet)
            # Merge the first sets of the RHS into this symbol's, until a
            # symbol that is not nullable.
            for elm in prod.rhs:
                if elm.isTerminal:
                    firstSet.add(elm.value)
                    break
                firstSet.update(first[elm.value] - {EPSILON})
                if elm.value not in nullables:
                    break
            else:
                if prod.left not in nullables:
                    nullables.add(prod.left)
                    done = False
            if len(firstSet) != oldLen:
                done = False

    for name in nullables:
        first[name].add(EPSILON)
    return first


def nullable(grammar: Grammar, first: Optional[FirstSets] = None) -> Set[str]:
    """The nonterminals of grammar that derive the empty string."""
    if first is None:
        first = compute_first(grammar)
    return {
        name for name in grammar.nonterminals() if EPSILON in first[name]
    }


def first_of_sequence(
    symbols: Iterable[Element], lookahead: Optional[str], first: FirstSets
) -> Set[str]:
    """
    FIRST(βa): the terminals that can begin symbols followed by lookahead.
    lookahead is included only if every symbol is nullable (or symbols is
    empty).  EPSILON is never part of the result when a lookahead is given.
    """
    result: Set[str] = set()
    for elm in symbols:
        if elm.isTerminal:
            result.add(elm.value)
            return result
        firstSet = first.get(elm.value)
        if not firstSet:
            # Undefined symbol; nothing can follow.
            return result
        result.update(firstSet - {EPSILON})
        if EPSILON not in firstSet:
            return result
    if lookahead is None:
        result.add(EPSILON)
    else:
        result.add(lookahead)
    return result
