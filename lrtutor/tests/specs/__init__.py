from lrtutor.ast import Token


def tokens(kinds):
    """Build a token list from a whitespace separated list of kinds."""
    return [Token(kind, kind, i) for i, kind in enumerate(kinds.split())]
