# Several independent mistakes, one per line.
GRAMMAR = """
S -> LIST 'EoF'
LIST 'NUM'
ε -> 'x'
SEQ -> 'a' ε
"""
