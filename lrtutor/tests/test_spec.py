import contextlib
import io
import os
import tempfile
import unittest

import lrtutor
from lrtutor.tests.specs import tokens


class TestSpec(unittest.TestCase):
    def test_algorithm(self):
        from lrtutor.tests.specs import expr

        with self.assertRaises(ValueError):
            lrtutor.Spec(expr.GRAMMAR, "lalr")

        spec = lrtutor.Spec(expr.GRAMMAR, "lr1")
        self.assertIsInstance(spec.automaton, lrtutor.Lr1Automaton)
        self.assertEqual(spec.algorithm, "lr1")
        spec = lrtutor.Spec(expr.GRAMMAR)
        self.assertIsInstance(spec.automaton, lrtutor.Lr0Automaton)
        self.assertEqual(len(spec.table), len(spec.automaton))

    def test_warnings_do_not_block(self):
        spec = lrtutor.Spec("S -> A\nA -> 'a'\nB -> 'b'")
        self.assertEqual(len(spec.diagnostics), 1)
        self.assertFalse(spec.diagnostics[0].isError)
        self.assertIsNotNone(spec.automaton)
        self.assertTrue(spec.ok)
        self.assertTrue(spec.parse(tokens("a")).accepted)

    def test_lexer_terminals(self):
        spec = lrtutor.Spec("S -> 'a' 'b'", terminals=["a"])
        self.assertEqual([diag.line for diag in spec.diagnostics], [0])
        self.assertTrue(spec.ok)

    def test_errors(self):
        spec = lrtutor.Spec("S -> A", "lr1")
        self.assertTrue(spec.diagnostics[0].isError)
        self.assertEqual(len(spec.grammar), 0)
        self.assertIsNone(spec.automaton)
        self.assertFalse(spec.ok)
        self.assertIn("no automaton", repr(spec))

        result = spec.parse(tokens("a"))
        self.assertFalse(result.accepted)
        self.assertEqual(len(result.trace), 1)

    def test_repr(self):
        from lrtutor.tests.specs import dangling, expr

        text = repr(lrtutor.Spec(expr.GRAMMAR, "lr1"))
        self.assertIn("S' -> S", text)
        self.assertIn("First sets:", text)
        self.assertIn("Algorithm compatibility: lr1", text)

        text = repr(lrtutor.Spec(dangling.GRAMMAR))
        self.assertNotIn("First sets:", text)
        self.assertIn("Algorithm compatibility: None, due to 1 conflict", text)

    def test_log_file(self):
        from lrtutor.tests.specs import lists

        fd, path = tempfile.mkstemp(suffix=".log")
        os.close(fd)
        try:
            spec = lrtutor.Spec(lists.GRAMMAR, logFile=path)
            with open(path) as f:
                log = f.read()
        finally:
            os.remove(path)
        self.assertEqual(log, "%r\n" % spec)
        self.assertIn("Parsing tables:", log)

    def test_verbose(self):
        from lrtutor.tests.specs import dangling

        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            lrtutor.Spec(dangling.GRAMMAR, "lr1", verbose=True)
        self.assertIn("lrtutor.Automaton:", out.getvalue())
        self.assertIn("lrtutor.Table: 1 conflict", out.getvalue())


if __name__ == "__main__":
    unittest.main()
