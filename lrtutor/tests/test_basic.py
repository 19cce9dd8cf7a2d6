import pickle
import unittest

import lrtutor
from lrtutor.tests.specs import tokens


class TestParsing(unittest.TestCase):
    def check_language(self, spec, accept, reject):
        for text in accept:
            result = spec.parse(tokens(text))
            self.assertTrue(result.accepted, "%r: %r" % (text, result))
            self.assertEqual(result.tree.symbol, lrtutor.AUGMENTED_START)
            # Epsilon reductions leave childless nonterminals without text.
            shifted = [
                leaf.symbol
                for leaf in result.tree.leaves()
                if leaf.text is not None
            ]
            self.assertEqual(shifted, text.split())
        for text in reject:
            result = spec.parse(tokens(text))
            self.assertFalse(result.accepted, text)
            self.assertIsInstance(result.trace[-1], str)

    def test_basic_lists(self):
        from lrtutor.tests.specs import lists

        for algorithm in lrtutor.ALGORITHMS:
            spec = lrtutor.Spec(lists.GRAMMAR, algorithm)
            self.assertEqual(spec.diagnostics, [])
            self.assertTrue(spec.ok, algorithm)
            self.check_language(spec, lists.ACCEPT, lists.REJECT)

        spec = lrtutor.Spec(lists.GRAMMAR)
        parser = lrtutor.Lr(spec.table)
        for token in tokens("LPAR NUM COMMA NUM RPAR"):
            parser.token(token)
        parser.eoi()
        self.assertEqual(len(parser.start), 1)
        self.assertEqual(
            repr(parser.start[0]),
            "(S' (S (LIST LPAR (SEQ (SEQ (LIST NUM)) COMMA (LIST NUM)) "
            "RPAR)))",
        )

    def test_basic_expr(self):
        from lrtutor.tests.specs import expr

        spec = lrtutor.Spec(expr.GRAMMAR, "lr0")
        self.assertFalse(spec.ok)
        self.assertGreater(spec.table.nConflicts, 0)

        spec = lrtutor.Spec(expr.GRAMMAR, "lr1")
        self.assertTrue(spec.ok)
        self.check_language(spec, expr.ACCEPT, expr.REJECT)

        result = spec.parse(tokens("id + id * id"))
        self.assertEqual(
            repr(result.tree),
            "(S' (S (E (E (T (F id))) + (T (T (F id)) * (F id)))))",
        )

    def test_basic_lookahead(self):
        from lrtutor.tests.specs import lookahead

        spec = lrtutor.Spec(lookahead.GRAMMAR, "lr0")
        self.assertFalse(spec.ok)
        kinds = {conflict.kind for _, _, conflict in spec.table.conflicts()}
        self.assertEqual(kinds, {"reduce/reduce"})

        spec = lrtutor.Spec(lookahead.GRAMMAR, "lr1")
        self.assertTrue(spec.ok)
        self.check_language(spec, lookahead.ACCEPT, lookahead.REJECT)

    def test_basic_nullable(self):
        from lrtutor.tests.specs import nullable

        spec = lrtutor.Spec(nullable.GRAMMAR, "lr1")
        self.assertTrue(spec.ok)
        self.check_language(spec, nullable.ACCEPT, nullable.REJECT)

        result = spec.parse(tokens("b"))
        self.assertEqual(repr(result.tree), "(S' (S A b))")
        # The epsilon reduction yields a childless A node.
        self.assertEqual(result.tree.children[0].children[0].children, [])

    def test_basic_dangling(self):
        from lrtutor.tests.specs import dangling

        for algorithm in ("lr0", "lr1"):
            spec = lrtutor.Spec(dangling.GRAMMAR, algorithm)
            self.assertFalse(spec.ok, algorithm)
            result = spec.parse(tokens(dangling.NESTED))
            self.assertFalse(result.accepted)
            self.assertIn("conflicting actions on else", result.error)

        spec = lrtutor.Spec(dangling.GRAMMAR, "lr1-loose")
        self.assertTrue(spec.ok)
        result = spec.parse(tokens(dangling.NESTED))
        self.assertTrue(result.accepted)
        # The else binds to the nearest if.
        self.assertEqual(
            repr(result.tree),
            "(S' (S (STMT if (STMT if (STMT x) else (STMT x)))))",
        )

    def test_basic_broken(self):
        from lrtutor.tests.specs import broken

        spec = lrtutor.Spec(broken.GRAMMAR, "lr1")
        self.assertEqual([diag.line for diag in spec.diagnostics], [2, 3, 4])
        self.assertTrue(all(diag.isError for diag in spec.diagnostics))
        self.assertIsNone(spec.automaton)
        self.assertEqual(len(spec.table), 0)
        self.assertFalse(spec.ok)

        result = spec.parse(tokens("NUM"))
        self.assertFalse(result.accepted)
        self.assertEqual(
            result.trace, ["State 0 has no row in the transition table"]
        )

    def test_basic_pickle(self):
        from lrtutor.tests.specs import expr

        spec = lrtutor.Spec(expr.GRAMMAR, "lr1")
        spec2 = pickle.loads(pickle.dumps(spec))
        self.assertEqual(spec2.table, spec.table)
        self.assertEqual(len(spec2.automaton), len(spec.automaton))

        result = spec2.parse(tokens("( id + id ) * id"))
        self.assertTrue(result.accepted)
        self.assertEqual(
            repr(result.tree),
            repr(spec.parse(tokens("( id + id ) * id")).tree),
        )


if __name__ == "__main__":
    unittest.main()
