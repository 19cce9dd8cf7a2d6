import unittest

from lrtutor.automaton import ItemSet, Lr0Automaton, Lr1Automaton
from lrtutor.bnf import parse_grammar
from lrtutor.grammar import AUGMENTED_START, EOI

AB = "S -> 'a' S 'b' | 'a' 'b'"


def transitions(itemSet):
    return {repr(sym): j for sym, j in itemSet.transitions.items()}


def goto(automaton, state, sym):
    return transitions(automaton[state])[sym]


class TestAutomaton(unittest.TestCase):
    def test_lr0_collection(self):
        automaton = Lr0Automaton(parse_grammar(AB))
        self.assertEqual(len(automaton), 6)
        self.assertEqual(transitions(automaton[0]), {"S": 1, "'a'": 2})
        self.assertEqual(transitions(automaton[1]), {})
        self.assertEqual(
            transitions(automaton[2]), {"S": 3, "'b'": 4, "'a'": 2}
        )
        self.assertEqual(transitions(automaton[3]), {"'b'": 5})
        self.assertEqual(
            [repr(item) for item in automaton[2].kernel],
            ["[S -> 'a' * S 'b']", "[S -> 'a' * 'b']"],
        )
        self.assertEqual(
            [repr(item) for item in automaton[2].added],
            ["[S -> * 'a' S 'b']", "[S -> * 'a' 'b']"],
        )

    def test_augmentation(self):
        grammar = parse_grammar(AB)
        automaton = Lr0Automaton(grammar)
        self.assertEqual(automaton.grammar.rules[0].left, AUGMENTED_START)
        self.assertEqual(repr(automaton.start_production), "S' -> S")
        self.assertNotIn(AUGMENTED_START, grammar)
        self.assertEqual(
            [repr(item) for item in automaton[0].kernel], ["[S' -> * S]"]
        )

    def test_declared_start(self):
        grammar = parse_grammar("S' -> S\nS -> 'a'")
        automaton = Lr0Automaton(grammar)
        self.assertEqual(len(automaton.grammar.productions_for("S'")), 1)
        self.assertIs(
            automaton.start_production, grammar.productions_for("S'")[0]
        )

    def test_deterministic(self):
        from lrtutor.tests.specs import expr

        for cls in (Lr0Automaton, Lr1Automaton):
            a1 = cls(parse_grammar(expr.GRAMMAR))
            a2 = cls(parse_grammar(expr.GRAMMAR))
            self.assertEqual(len(a1), len(a2))
            self.assertEqual(
                [s.hash for s in a1.states], [s.hash for s in a2.states]
            )
            self.assertEqual(
                [transitions(s) for s in a1.states],
                [transitions(s) for s in a2.states],
            )
            self.assertEqual(repr(a1), repr(a2))

    def test_distinct_cores(self):
        grammar = parse_grammar(
            "S -> 'a' X 'c' | 'a' Y 'd'\nX -> 'x'\nY -> 'x'"
        )
        automaton = Lr0Automaton(grammar)
        afterA = goto(automaton, 0, "'a'")
        self.assertNotEqual(
            goto(automaton, afterA, "X"), goto(automaton, afterA, "Y")
        )
        # One state holds both completed items.
        reduceState = goto(automaton, afterA, "'x'")
        self.assertEqual(
            [repr(item) for item in automaton[reduceState].kernel],
            ["[X -> 'x' *]", "[Y -> 'x' *]"],
        )

    def test_merging(self):
        text = "S -> 'a' Z 'c' | 'b' Z 'd'\nZ -> 'z'"

        automaton = Lr0Automaton(parse_grammar(text))
        viaA = goto(automaton, goto(automaton, 0, "'a'"), "'z'")
        viaB = goto(automaton, goto(automaton, 0, "'b'"), "'z'")
        self.assertEqual(viaA, viaB)

        # The lookaheads c and d keep the LR(1) states apart.
        automaton = Lr1Automaton(parse_grammar(text))
        viaA = goto(automaton, goto(automaton, 0, "'a'"), "'z'")
        viaB = goto(automaton, goto(automaton, 0, "'b'"), "'z'")
        self.assertNotEqual(viaA, viaB)
        self.assertEqual(automaton[viaA].kernel[0].lookahead, "c")
        self.assertEqual(automaton[viaB].kernel[0].lookahead, "d")

    def test_lr1_closure(self):
        from lrtutor.tests.specs import nullable

        automaton = Lr1Automaton(parse_grammar(nullable.GRAMMAR))
        self.assertEqual(automaton[0].kernel[0].lookahead, EOI)
        self.assertEqual(
            [repr(item) for item in automaton[0]],
            [
                "[S' -> * S, $]",
                "[S -> * A 'b', $]",
                "[A -> * 'a' A, b]",
                "[A -> *, b]",
            ],
        )
        self.assertEqual(automaton.first["A"], {"a", "ε"})

    def test_item_set(self):
        automaton = Lr0Automaton(parse_grammar(AB))
        kernel = automaton[2].kernel
        self.assertEqual(automaton.state_of(kernel), 2)
        self.assertEqual(automaton.state_of(reversed(kernel)), 2)
        self.assertEqual(ItemSet(kernel), automaton[2])
        self.assertEqual(len(ItemSet(kernel)), 2)
        self.assertTrue(automaton[2].has_item(kernel[0]))
        self.assertIsNone(automaton.state_of([kernel[0]]))

        candidates = automaton[2].goto_candidates()
        self.assertEqual(automaton.state_of(candidates[kernel[0].symbol]), 3)
        self.assertEqual(automaton[1].goto_candidates(), {})


if __name__ == "__main__":
    unittest.main()
