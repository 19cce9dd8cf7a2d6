import os.path
import unittest


def suite() -> unittest.TestSuite:
    """Every test case of the package, importable as lrtutor.tests.*."""
    start = os.path.dirname(os.path.abspath(__file__))
    top = os.path.dirname(os.path.dirname(start))
    return unittest.defaultTestLoader.discover(start, top_level_dir=top)
