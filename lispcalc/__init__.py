"""Prefix-notation arithmetic calculator.

For reference:
- "pure": the parser/evaluator core, which never does any I/O
- "lang": everything around it- sessions, the shell, and error display

Basic program flow:
    1. Lexer: turns the input string into tokens (brackets and literals), see pure/lexical.py
    2. Tree builder: recursively groups tokens by their brackets, see pure/tree.py
    3. Evaluator: walks the tree, applying '+' and '*' to their two arguments, see pure/numerical.py

"""

from lispcalc.pure.numerical import evaluate
from lispcalc.pure.tree import parse, render
