# Parenthesized, comma separated lists of numbers.  LR(0).
GRAMMAR = """
S -> LIST
LIST -> 'LPAR' SEQ 'RPAR' | 'NUM'
SEQ -> LIST | SEQ 'COMMA' LIST
"""

ACCEPT = [
    "NUM",
    "LPAR NUM RPAR",
    "LPAR NUM COMMA NUM RPAR",
    "LPAR LPAR NUM RPAR COMMA NUM RPAR",
]

REJECT = [
    "",
    "LPAR NUM",
    "NUM RPAR",
    "LPAR RPAR",
    "LPAR NUM COMMA RPAR",
]
