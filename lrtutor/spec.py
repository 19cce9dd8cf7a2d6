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
The Spec class runs the whole pipeline for one piece of BNF text:
diagnostics, grammar, item set automaton and transition table.  A Spec is
built once per grammar edit and can then parse any number of token
streams.
"""

from __future__ import annotations
from typing import Collection, Iterable, List, Optional

import sys
import time

from lrtutor.ast import Token
from lrtutor.automaton import Automaton, Lr0Automaton, Lr1Automaton
from lrtutor.bnf import Diagnostic, has_errors, lint, parse_grammar
from lrtutor.grammar import Grammar
from lrtutor.lrparser import ParseResult, parse
from lrtutor.table import Table, build_lr0_table, build_lr1_table

ALGORITHMS = ("lr0", "lr1", "lr1-loose")


class Spec:
    """
    source : BNF text.

    algorithm : "lr0"       : LR(0) automaton and table.
                "lr1"       : canonical LR(1) automaton and table.
                "lr1-loose" : LR(1), resolving shift/reduce conflicts in
                              favour of the shift.

    terminals : The token kinds the lexer can produce.  If given, terminals
                of the grammar outside this collection are reported as
                warnings.

    logFile : The path of a file to store a human-readable copy of the
              automaton and the parsing tables in.

    verbose : If true, print progress information while building.

    If the text has any error diagnostic, nothing is built: grammar is
    empty, automaton is None and the table has no rows, so every parse
    halts at once with a diagnostic."""

    def __init__(
        self,
        source: str,
        algorithm: str = "lr0",
        terminals: Optional[Collection[str]] = None,
        logFile: Optional[str] = None,
        verbose: bool = False,
    ) -> None:
        if algorithm not in ALGORITHMS:
            raise ValueError(
                "algorithm must be one of %s, not %r"
                % (", ".join(ALGORITHMS), algorithm)
            )
        self.source = source
        self.algorithm = algorithm
        self._verbose = verbose

        self.diagnostics: List[Diagnostic] = lint(source, terminals)
        self.grammar = Grammar()
        self.automaton: Optional[Automaton] = None
        self.table = Table()

        if self._verbose:
            for diag in self.diagnostics:
                print("lrtutor.Spec: %r" % diag)
        if has_errors(self.diagnostics):
            if self._verbose:
                print("lrtutor.Spec: Errors in grammar; nothing built")
        else:
            self._prepare()

        if logFile is not None:
            with open(logFile, "w+") as f:
                if self._verbose:
                    print("lrtutor.Spec: Writing log to '%s'..." % logFile)
                f.write("%r\n" % self)

    def _prepare(self) -> None:
        if self._verbose:
            start = time.monotonic()
        self.grammar = parse_grammar(self.source)
        if self.algorithm == "lr0":
            self.automaton = Lr0Automaton(self.grammar, verbose=self._verbose)
            self.table = build_lr0_table(
                self.automaton, verbose=self._verbose
            )
        else:
            self.automaton = Lr1Automaton(self.grammar, verbose=self._verbose)
            self.table = build_lr1_table(
                self.automaton,
                loose=self.algorithm == "lr1-loose",
                verbose=self._verbose,
            )
        if self._verbose:
            print(
                "lrtutor.Spec: %s table generation took "
                "%.1f milliseconds"
                % (self.algorithm, (time.monotonic() - start) * 1000)
            )
            sys.stdout.flush()

    @property
    def ok(self) -> bool:
        """True if the grammar built and its table has no conflicts."""
        return self.automaton is not None and self.table.pureLR

    def parse(self, tokens: Iterable[Token]) -> ParseResult:
        return parse(tokens, self.table, verbose=self._verbose)

    def __repr__(self) -> str:
        lines = []
        if self.diagnostics:
            lines.append("Diagnostics:")
            for diag in self.diagnostics:
                lines.append("  %r" % diag)
        if self.automaton is None:
            lines.append("lrtutor.Spec: no automaton (grammar has errors)")
            return "\n".join(lines)

        lines.append("Grammar:")
        for rule in self.automaton.grammar:
            lines.append("  %r" % rule)
        if self.automaton.first is not None:
            lines.append("First sets:")
            for sym, firstSet in self.automaton.first.items():
                lines.append("  %s: {%s}" % (sym, ", ".join(sorted(firstSet))))
        lines.append("Item sets:")
        lines.append("%r" % self.automaton)
        lines.append("%r" % self.table)
        if self.table.pureLR:
            lines.append("Algorithm compatibility: %s" % self.algorithm)
        else:
            lines.append(
                "Algorithm compatibility: None, due to %d conflict%s"
                % (
                    self.table.nConflicts,
                    ("s", "")[self.table.nConflicts == 1],
                )
            )
        return "\n".join(lines)
