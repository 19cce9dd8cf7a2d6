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
This module turns line-oriented BNF text into a Grammar and checks the
result for referential integrity.

    S -> LIST 'EoF'
    LIST -> 'LPAR' SEQ 'RPAR' | 'NUM'
    SEQ -> LIST | SEQ 'COMMA' LIST
    OPT -> ε

Each non-blank line is LEFT -> ALT1 | ALT2 | ...; alternatives are
whitespace separated symbols.  'x' is the terminal x, ε is the empty
string, and any other symbol names a nonterminal.  A trailing ?, * or + on
a nonterminal is accepted and stripped; it does not change the grammar.

Problems are reported as Diagnostic values carrying a 0-based line number.
Errors (isError true) block automaton construction, warnings do not.
"""

from __future__ import annotations
from typing import (
    Any,
    Collection,
    Dict,
    Iterable,
    List,
    Optional,
    Set,
    Tuple,
)

import re

from lrtutor.errors import GrammarSyntaxError
from lrtutor.grammar import (
    AUGMENTED_START,
    EPSILON,
    START,
    Element,
    Grammar,
    Production,
    Rule,
    epsilon,
    nonterminal,
    terminal,
)

symbol_re = re.compile(r"'[^']*'[^\s|]*|\||[^\s|]+")
nonterm_name_re = re.compile(r"[A-Z_]+'?$")
wildcards = "?*+"


class Diagnostic:
    """
    A message about BNF text, meant for the grammar's author.  line is
    0-based.
    """

    def __init__(self, error: str, line: int, isError: bool = False) -> None:
        self.error = error
        self.line = line
        self.isError = isError

    @property
    def severity(self) -> str:
        return ("warning", "error")[self.isError]

    def __repr__(self) -> str:
        return "%s: line %d: %s" % (self.severity, self.line, self.error)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Diagnostic):
            return NotImplemented
        return (self.error, self.line, self.isError) == (
            other.error,
            other.line,
            other.isError,
        )

    def __hash__(self) -> int:
        return hash((self.error, self.line, self.isError))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error,
            "line": self.line,
            "isError": self.isError,
        }


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(diag.isError for diag in diagnostics)


def parse_symbol(sym: str, line: int = 0) -> Element:
    """Classify one right-hand-side symbol."""
    if sym.startswith("'"):
        end = sym.find("'", 1)
        if end < 0:
            raise GrammarSyntaxError(
                "The terminal %s is missing its closing quote" % sym, line
            )
        rest = sym[end + 1 :]
        if len(rest) == 1 and rest in wildcards:
            raise GrammarSyntaxError(
                "The suffix %s can only follow a nonterminal, not the "
                "terminal %s" % (rest, sym[: end + 1]),
                line,
            )
        if rest:
            raise GrammarSyntaxError(
                "Unexpected %s after the terminal %s; separate symbols "
                "with spaces" % (rest, sym[: end + 1]),
                line,
            )
        if end == 1:
            raise GrammarSyntaxError(
                "Empty terminal ''; write %s for the empty string" % EPSILON,
                line,
            )
        return terminal(sym[1:end])
    if sym == EPSILON:
        return epsilon
    if len(sym) > 1 and sym[-1] in wildcards:
        return nonterminal(sym[:-1], sym[-1])
    return nonterminal(sym)


def parse_rule(text: str, line: int = 0) -> Rule:
    """
    Parse one line of BNF text.  Raise GrammarSyntaxError if the line is
    malformed.
    """
    if "->" not in text:
        raise GrammarSyntaxError(
            "Each rule needs '->' between its left and right sides: %s"
            % text.strip(),
            line,
        )
    left, _, right = text.partition("->")
    left = left.strip()
    if not left:
        raise GrammarSyntaxError(
            "The rule has no left-hand side: %s" % text.strip(), line
        )
    if left == EPSILON:
        raise GrammarSyntaxError(
            "%s cannot be the left-hand side of a rule" % EPSILON, line
        )
    if len(left.split()) != 1:
        raise GrammarSyntaxError(
            "The left-hand side must be a single nonterminal, got '%s'"
            % left,
            line,
        )
    if left.startswith("'"):
        raise GrammarSyntaxError(
            "The left-hand side must be a nonterminal, not the terminal %s"
            % left,
            line,
        )

    alternatives: List[List[str]] = [[]]
    for sym in symbol_re.findall(right):
        if sym == "|":
            alternatives.append([])
        else:
            alternatives[-1].append(sym)
    if alternatives == [[]]:
        raise GrammarSyntaxError(
            "The rule for %s has no right-hand side; write %s for the empty "
            "string" % (left, EPSILON),
            line,
        )

    productions = []
    for symbols in alternatives:
        if not symbols:
            raise GrammarSyntaxError(
                "The rule for %s has an empty alternative; write %s for the "
                "empty string" % (left, EPSILON),
                line,
            )
        if EPSILON in symbols and len(symbols) > 1:
            raise GrammarSyntaxError(
                "%s must stand alone in an alternative: %s"
                % (EPSILON, " ".join(symbols)),
                line,
            )
        elements = [parse_symbol(sym, line) for sym in symbols]
        productions.append(Production(left, elements, line))
    return Rule(left, productions, line)


def parse_grammar(text: str) -> Grammar:
    """
    Parse BNF text into a Grammar.  Blank lines are skipped.  The first
    malformed line raises GrammarSyntaxError; use lint() to collect every
    problem instead.
    """
    grammar = Grammar()
    for line, s in enumerate(text.splitlines()):
        if s.strip() == "":
            continue
        grammar.add_rule(parse_rule(s, line))
    return grammar


def validate(
    grammar: Grammar, terminals: Optional[Collection[str]] = None
) -> List[Diagnostic]:
    """
    Check a parsed grammar:

      * the first rule defines S (or the augmented S'),
      * every nonterminal used on a right-hand side is defined,
      * nonterminal names are upper case and underscores (warning),
      * every defined nonterminal other than the start symbol is used by
        some other rule (warning),
      * every terminal is one of terminals, when given (warning).
    """
    diagnostics: List[Diagnostic] = []
    rules = grammar.rules
    if not rules:
        diagnostics.append(
            Diagnostic(
                "The grammar is empty; start with a rule for %s" % START,
                0,
                True,
            )
        )
        return diagnostics

    if rules[0].left not in (START, AUGMENTED_START):
        diagnostics.append(
            Diagnostic(
                "The first rule must define the start symbol %s, not %s"
                % (START, rules[0].left),
                rules[0].line,
                True,
            )
        )

    named: Set[str] = set()

    def check_name(name: str, line: int) -> None:
        if name in named or nonterm_name_re.match(name):
            return
        named.add(name)
        diagnostics.append(
            Diagnostic(
                "Nonterminal names are written in upper case; did you mean "
                "the terminal '%s'?" % name,
                line,
            )
        )

    used: Set[str] = set()
    undefined: Set[Tuple[str, int]] = set()
    for rule in rules:
        check_name(rule.left, rule.line)
        for prod in rule.productions:
            for elm in prod.rhs:
                if elm.isTerminal:
                    if terminals is not None and elm.value not in terminals:
                        diagnostics.append(
                            Diagnostic(
                                "The terminal '%s' is not a token kind the "
                                "lexer produces" % elm.value,
                                prod.line,
                            )
                        )
                    continue
                name = elm.value
                if name != rule.left:
                    used.add(name)
                if not grammar.is_nonterminal(name):
                    if (name, prod.line) not in undefined:
                        undefined.add((name, prod.line))
                        diagnostics.append(
                            Diagnostic(
                                "The nonterminal %s is used but never "
                                "defined" % name,
                                prod.line,
                                True,
                            )
                        )
                check_name(name, prod.line)

    for rule in rules:
        if rule.left in (START, AUGMENTED_START) or rule.left in used:
            continue
        diagnostics.append(
            Diagnostic(
                "The nonterminal %s is defined but never used" % rule.left,
                rule.line,
            )
        )

    diagnostics.sort(key=lambda diag: diag.line)
    return diagnostics


def lint(
    text: str, terminals: Optional[Collection[str]] = None
) -> List[Diagnostic]:
    """
    Check BNF text.  Every malformed line is reported; if there are none,
    the parsed grammar is checked by validate().
    """
    diagnostics: List[Diagnostic] = []
    grammar = Grammar()
    for line, s in enumerate(text.splitlines()):
        if s.strip() == "":
            continue
        try:
            grammar.add_rule(parse_rule(s, line))
        except GrammarSyntaxError as e:
            diagnostics.append(Diagnostic(e.message, e.line, True))
    if diagnostics:
        return diagnostics
    return validate(grammar, terminals)
