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
#
# Release history:
#
# 0.1 : Initial release.  BNF parsing and validation, FIRST sets, LR(0) and
#       canonical LR(1) item set automata, action/goto tables with explicit
#       conflict cells, and a tracing shift-reduce parser.
#
# ============================================================================
"""
The lrtutor package is a teaching tool for bottom-up (LR) parsing.  A
grammar is written in a small BNF notation, from which the package builds
the canonical LR(0) or LR(1) collection of item sets, derives the
action/goto table, and then drives a shift-reduce parser over a stream of
tokens, recording a snapshot of the parse forest at every step.

    S -> LIST
    LIST -> 'LPAR' SEQ 'RPAR' | 'NUM'
    SEQ -> LIST | SEQ 'COMMA' LIST

The pipeline is available piecewise:

  parse_grammar / lint : BNF text -> Grammar / list of Diagnostic
  compute_first        : Grammar -> FIRST sets
  Lr0Automaton,
  Lr1Automaton         : Grammar -> item sets and transitions
  build_lr0_table,
  build_lr1_table      : automaton -> Table
  parse / Lr           : tokens + Table -> ParseResult (trace)

or all at once through the Spec class:

    spec = lrtutor.Spec(text, algorithm="lr1")
    result = spec.parse(tokens)

Design rules that the rest of the package depends on:

  * Productions, items and actions compare structurally, so tables that
    were serialized with Table.to_rows() and read back with
    Table.from_rows() behave exactly like the originals.

  * Conflicts are data.  A table cell with more than one applicable action
    holds a ConflictAction; building a table never fails because the
    grammar is ambiguous.

  * Input outside the language is data too.  The parser halts and ends its
    trace with a diagnostic string instead of raising.

  * State numbering is deterministic: item sets are discovered breadth
    first with an explicit queue, so the same grammar always produces the
    same automaton.

Tokens come from an external lexer; only their kind (matched against the
grammar's terminals) and text are used.
"""

from __future__ import annotations


__all__ = (
    "ALGORITHMS",
    "AUGMENTED_START",
    "AcceptAction",
    "AnyException",
    "Automaton",
    "AutomatonError",
    "ConflictAction",
    "Diagnostic",
    "EOI",
    "EPSILON",
    "Element",
    "Grammar",
    "GrammarSyntaxError",
    "Item",
    "ItemSet",
    "Lr",
    "Lr0Automaton",
    "Lr1Automaton",
    "Node",
    "ParseResult",
    "ParseStep",
    "Parser",
    "ParsingError",
    "Production",
    "ROOT",
    "ReduceAction",
    "Row",
    "Rule",
    "START",
    "ShiftAction",
    "Spec",
    "SpecError",
    "Table",
    "Token",
    "__version__",
    "build_lr0_table",
    "build_lr1_table",
    "compute_first",
    "first_of_sequence",
    "lint",
    "parse",
    "parse_grammar",
    "validate",
)

from lrtutor._version import __version__
from lrtutor.ast import Node, Token
from lrtutor.automaton import Automaton, ItemSet, Lr0Automaton, Lr1Automaton
from lrtutor.bnf import Diagnostic, lint, parse_grammar, validate
from lrtutor.errors import (
    AnyException,
    AutomatonError,
    GrammarSyntaxError,
    ParsingError,
    SpecError,
)
from lrtutor.first import compute_first, first_of_sequence
from lrtutor.grammar import (
    AUGMENTED_START,
    EOI,
    EPSILON,
    START,
    AcceptAction,
    ConflictAction,
    Element,
    Grammar,
    Item,
    Production,
    ReduceAction,
    Rule,
    ShiftAction,
)
from lrtutor.interfaces import Parser
from lrtutor.lrparser import ROOT, Lr, ParseResult, ParseStep, parse
from lrtutor.spec import ALGORITHMS, Spec
from lrtutor.table import Row, Table, build_lr0_table, build_lr1_table
