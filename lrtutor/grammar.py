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
This module contains the classes that make up a grammar (elements,
productions, rules), the LR items built over productions, and the parsing
actions stored in transition tables.

Every value in this module compares structurally.  Productions in
particular are frequently rebuilt (for example when a transition table is
read back from its serialized rows), so equality and hashing are derived
from a content digest rather than from object identity.
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

import hashlib

from mypy_extensions import mypyc_attr


# Dedicated epsilon symbol in BNF text.
EPSILON = "ε"
# End-of-input terminal.
EOI = "$"
# Conventional start symbol, and the synthetic symbol of the augmented
# start production S' -> S.
START = "S"
AUGMENTED_START = "S'"

TERMINAL = "terminal"
NONTERMINAL = "nonterminal"


def digest(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()


@mypyc_attr(serializable=True)
class Element:
    """
    A grammar symbol as it appears on the right-hand side of a production.
    Terminals carry their literal text (without quotes) as value;
    nonterminals carry the symbol name.  The epsilon element is the
    terminal with an empty value.

    wildcard records a stripped ?, * or + suffix.  It is informational
    only: it takes no part in equality and nothing expands it.
    """

    def __init__(self, type: str, value: str, wildcard: str = "") -> None:
        if type not in (TERMINAL, NONTERMINAL):
            raise ValueError("Unknown element type: %r" % (type,))
        self.type = type
        self.value = value
        self.wildcard = wildcard
        self.digest = digest("%s|%s" % (type, value))

    @property
    def isTerminal(self) -> bool:
        return self.type == TERMINAL

    @property
    def isNonterminal(self) -> bool:
        return self.type == NONTERMINAL

    @property
    def isEpsilon(self) -> bool:
        return self.type == TERMINAL and self.value == ""

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Element):
            return self.digest == other.digest
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash(self.digest)

    def __repr__(self) -> str:
        if self.isEpsilon:
            return EPSILON
        elif self.isTerminal:
            return "'%s'" % self.value
        else:
            return self.value

    def to_dict(self) -> Dict[str, str]:
        data = {"type": self.type, "value": self.value}
        if self.wildcard:
            data["wildcard"] = self.wildcard
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> Element:
        return cls(data["type"], data["value"], data.get("wildcard", ""))


def terminal(value: str) -> Element:
    return Element(TERMINAL, value)


def nonterminal(value: str, wildcard: str = "") -> Element:
    return Element(NONTERMINAL, value, wildcard)


epsilon = terminal("")


@mypyc_attr(serializable=True)
class Production:
    """
    One right-hand-side alternative of a nonterminal (left).  An epsilon
    production has an empty rhs.  line is the 0-based source line of the
    alternative, kept for diagnostics only.
    """

    def __init__(
        self, left: str, elements: Iterable[Element], line: int = 0
    ) -> None:
        self.left = left
        self.rhs: Tuple[Element, ...] = tuple(
            elm for elm in elements if not elm.isEpsilon
        )
        self.line = line
        self.digest = digest(
            "%s|%s" % (left, ",".join(elm.digest for elm in self.rhs))
        )

    def __len__(self) -> int:
        return len(self.rhs)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Production):
            return self.digest == other.digest
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash(self.digest)

    def __repr__(self) -> str:
        if self.rhs:
            right = " ".join(["%r" % elm for elm in self.rhs])
        else:
            right = EPSILON
        return "%s -> %s" % (self.left, right)

    def item(self, dotPos: int, lookahead: Optional[str] = None) -> Item:
        return Item(self, dotPos, lookahead)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "left": self.left,
            "right": [elm.to_dict() for elm in self.rhs],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Production:
        return cls(
            data["left"],
            [Element.from_dict(elm) for elm in data["right"]],
            data.get("line", 0),
        )


@mypyc_attr(serializable=True)
class Item:
    """
    An LR item: a production with a dot position, plus a lookahead terminal
    for LR(1) items.  Items are immutable; advance() returns a new item.

    core identifies the (production, dot) pair.  key additionally folds in
    the lookahead, so LR(1) items that differ only in lookahead are
    distinct.
    """

    def __init__(
        self,
        production: Production,
        dotPos: int,
        lookahead: Optional[str] = None,
    ) -> None:
        assert 0 <= dotPos <= len(production)
        self.production = production
        self.dotPos = dotPos
        self.lookahead = lookahead
        self.core = "%s|%d" % (production.digest, dotPos)
        if lookahead is None:
            self.key = self.core
        else:
            self.key = "%s|LA:%s" % (self.core, lookahead)

    @property
    def symbol(self) -> Optional[Element]:
        """The element just after the dot, or None for a final item."""
        if self.dotPos < len(self.production.rhs):
            return self.production.rhs[self.dotPos]
        return None

    @property
    def isFinal(self) -> bool:
        return self.dotPos == len(self.production.rhs)

    @property
    def rest(self) -> Tuple[Element, ...]:
        """The elements after the symbol following the dot."""
        return self.production.rhs[self.dotPos + 1 :]

    def advance(self) -> Item:
        return Item(self.production, self.dotPos + 1, self.lookahead)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Item):
            return self.key == other.key
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash(self.key)

    def lr0__repr__(self) -> str:
        strs = ["[%s ->" % self.production.left]
        for i, elm in enumerate(self.production.rhs):
            if i == self.dotPos:
                strs.append(" *")
            strs.append(" %r" % elm)
        if self.isFinal:
            strs.append(" *")
        strs.append("]")
        return "".join(strs)

    def __repr__(self) -> str:
        if self.lookahead is None:
            return self.lr0__repr__()
        return "%s, %s]" % (self.lr0__repr__()[:-1], self.lookahead)


@mypyc_attr(serializable=True)
class Rule:
    """
    All productions that share one left-hand nonterminal, together with the
    0-based source line on which the nonterminal was first defined.
    """

    def __init__(
        self,
        left: str,
        productions: Iterable[Production] = (),
        line: int = 0,
    ) -> None:
        self.left = left
        self.productions: List[Production] = list(productions)
        self.line = line

    def __repr__(self) -> str:
        right = " | ".join(
            repr(prod).split(" -> ", 1)[1] for prod in self.productions
        )
        return "%s -> %s" % (self.left, right)


@mypyc_attr(serializable=True)
class Grammar:
    """
    A collection of rules keyed by their left-hand nonterminal.  Rules are
    kept in declaration order; adding a rule for a nonterminal that already
    has one merges the productions into the existing rule.
    """

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: Dict[str, Rule] = {}
        for rule in rules:
            self.add_rule(rule)

    def add_rule(self, rule: Rule) -> None:
        existing = self._rules.get(rule.left)
        if existing is None:
            self._rules[rule.left] = Rule(
                rule.left, rule.productions, rule.line
            )
        else:
            for prod in rule.productions:
                if prod not in existing.productions:
                    existing.productions.append(prod)

    @property
    def rules(self) -> List[Rule]:
        return list(self._rules.values())

    @property
    def productions(self) -> List[Production]:
        return [
            prod for rule in self._rules.values() for prod in rule.productions
        ]

    def rule(self, name: str) -> Optional[Rule]:
        return self._rules.get(name)

    def productions_for(self, name: str) -> List[Production]:
        rule = self._rules.get(name)
        if rule is None:
            return []
        return rule.productions

    def is_nonterminal(self, name: str) -> bool:
        return name in self._rules

    def nonterminals(self) -> List[str]:
        return list(self._rules)

    def terminals(self) -> List[str]:
        """
        Every terminal appearing in some production, in order of first
        appearance.  Neither epsilon nor the end-of-input marker is
        included.
        """
        result: Dict[str, None] = {}
        for prod in self.productions:
            for elm in prod.rhs:
                if elm.isTerminal:
                    result.setdefault(elm.value, None)
        return list(result)

    def start_production(self) -> Production:
        """
        The augmented start production: the first production of S' if the
        grammar declares one, otherwise a synthetic S' -> S.
        """
        prods = self.productions_for(AUGMENTED_START)
        if prods:
            return prods[0]
        return Production(AUGMENTED_START, (nonterminal(START),))

    def augmented(self) -> Grammar:
        """
        Return a grammar whose first rule is the augmented start rule.  The
        receiver is left untouched.
        """
        if self.is_nonterminal(AUGMENTED_START):
            start = self._rules[AUGMENTED_START]
            rules = [start] + [
                rule for rule in self._rules.values() if rule is not start
            ]
            return Grammar(rules)
        start = Rule(AUGMENTED_START, (self.start_production(),), 0)
        return Grammar([start] + self.rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __repr__(self) -> str:
        return "\n".join(repr(rule) for rule in self._rules.values())


@mypyc_attr(serializable=True)
class Action:
    """
    Abstract base class, subclassed by {Shift,Reduce,Accept,Conflict}Action.
    """

    def __init__(self) -> None:
        pass

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Action:
        kind = data["type"]
        if kind == "shift":
            return ShiftAction(data["toState"])
        elif kind == "reduce":
            return ReduceAction(Production.from_dict(data["by"]))
        elif kind == "accept":
            by = data.get("by")
            return AcceptAction(
                None if by is None else Production.from_dict(by)
            )
        elif kind == "conflict":
            actions: List[Action] = []
            for elm in data["list"]:
                if isinstance(elm, int):
                    actions.append(ShiftAction(elm))
                else:
                    actions.append(ReduceAction(Production.from_dict(elm)))
            return ConflictAction(actions)
        else:
            raise ValueError("Unknown action type: %r" % (kind,))


class ShiftAction(Action):
    """
    Shift action, with associated nextState."""

    def __init__(self, nextState: int) -> None:
        super().__init__()
        self.nextState = nextState

    def __repr__(self) -> str:
        return "[shift %r]" % self.nextState

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ShiftAction):
            return False
        if self.nextState != other.nextState:
            return False
        return True

    def __hash__(self) -> int:
        return hash(("shift", self.nextState))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "shift", "toState": self.nextState}


class ReduceAction(Action):
    """
    Reduce action, with associated production."""

    def __init__(self, production: Production) -> None:
        super().__init__()
        self.production = production

    def __repr__(self) -> str:
        return "[reduce %r]" % self.production

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ReduceAction):
            return False
        if self.production != other.production:
            return False
        return True

    def __hash__(self) -> int:
        return hash(("reduce", self.production))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "reduce", "by": self.production.to_dict()}


class AcceptAction(Action):
    """
    Accept action.  production is the augmented start production whose
    completion the action stands for; it may be None for tables read back
    from rows that did not record it."""

    def __init__(self, production: Optional[Production] = None) -> None:
        super().__init__()
        self.production = production

    def __repr__(self) -> str:
        return "[accept]"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, AcceptAction)

    def __hash__(self) -> int:
        return hash("accept")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": "accept"}
        if self.production is not None:
            data["by"] = self.production.to_dict()
        return data


class ConflictAction(Action):
    """
    Several actions competing for one table cell, in first-seen order and
    without duplicates.  Conflicts are ordinary table content, not errors.
    """

    def __init__(self, actions: Iterable[Action] = ()) -> None:
        super().__init__()
        self.actions: List[Action] = []
        for action in actions:
            self.append(action)

    def append(self, action: Action) -> bool:
        """Add action unless an equal one is already present."""
        if isinstance(action, ConflictAction):
            changed = False
            for elm in action.actions:
                changed = self.append(elm) or changed
            return changed
        assert isinstance(action, (ShiftAction, ReduceAction))
        if action in self.actions:
            return False
        self.actions.append(action)
        return True

    def __len__(self) -> int:
        return len(self.actions)

    def __iter__(self) -> Iterator[Action]:
        return iter(self.actions)

    @property
    def kind(self) -> str:
        """shift/reduce or reduce/reduce."""
        if any(isinstance(act, ShiftAction) for act in self.actions):
            return "shift/reduce"
        return "reduce/reduce"

    def __repr__(self) -> str:
        return "[conflict %s]" % " ".join(
            repr(action) for action in self.actions
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ConflictAction):
            return False
        return self.actions == other.actions

    def __hash__(self) -> int:
        return hash(tuple(self.actions))

    def to_dict(self) -> Dict[str, Any]:
        encoded: List[Any] = []
        for action in self.actions:
            if isinstance(action, ShiftAction):
                encoded.append(action.nextState)
            else:
                assert isinstance(action, ReduceAction)
                encoded.append(action.production.to_dict())
        return {"type": "conflict", "list": encoded}
