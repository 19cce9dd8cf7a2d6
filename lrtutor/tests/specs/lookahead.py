# Needs one token of lookahead to decide between A -> X and B -> X.
GRAMMAR = """
S -> 'a' A 'c' | 'a' B 'd'
A -> X
B -> X
X -> 'e'
"""

ACCEPT = ["a e c", "a e d"]

REJECT = ["a e", "a e e", "a c"]
