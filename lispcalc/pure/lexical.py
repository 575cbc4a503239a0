"""Lexical analysis for lispcalc expressions: turns a raw string into a flat list of tokens.

The `pure` directory contains the parser/evaluator core- it never prints, logs, or reads files.

Lexing cannot fail: any string is a valid sequence of tokens. Whether those tokens form a valid tree is decided later
by the tree builder (see tree.py). Loosely, the token grammar is

```
<token>   ::= "("                   ; LeftBracket
            | ")"                   ; RightBracket
            | <char>+               ; Literal
                                    ; - maximal run of characters that are not whitespace or brackets
<ignored> ::= " " | "\n"            ; separators, never part of a token (*)
```

------------------------------------------------------------------------------------------------------------------------

(*) Newlines can optionally be lexed the way the first version of lispcalc lexed them: dropped without ending the
current literal, so that "1\n2" is read as the literal "12". This is off by default; pass merge_newlines=True to lex
to get it back.
"""

SPACE = " "
NEWLINE = "\n"


class Token:
    """Superclass for lexical tokens. start/end are offsets into the lexed string and are only used for error
    messages, so they are ignored by __eq__.
    """

    def __init__(self, start, end):
        self.start = start
        self.end = end
        self._cls = type(self).__name__

    def __repr__(self):
        return f"{self._cls}()"

    def __str__(self):
        return self.__repr__()

    def __eq__(self, other):
        return type(other) is type(self)

    def __hash__(self):
        return hash(self._cls)


class LeftBracket(Token):
    """Opens a group: '('"""
    CHAR = "("

    def __init__(self, start):
        super().__init__(start, start + 1)

    def __str__(self):
        return LeftBracket.CHAR


class RightBracket(Token):
    """Closes a group: ')'"""
    CHAR = ")"

    def __init__(self, start):
        super().__init__(start, start + 1)

    def __str__(self):
        return RightBracket.CHAR


class Literal(Token):
    """Run of non-separator characters: either an operator name or a numeral, the lexer doesn't care which."""

    def __init__(self, text, start=0, end=None):
        super().__init__(start, end if end is not None else start + len(text))
        self.text = text

    def __repr__(self):
        return f"{self._cls}('{self.text}')"

    def __str__(self):
        return self.text

    def __eq__(self, other):
        return isinstance(other, Literal) and other.text == self.text

    def __hash__(self):
        return hash(self.text)


def lex(expr, merge_newlines=False):
    """Returns the list of Tokens in expr. Spaces and brackets end the literal being read; newlines do too, unless
    merge_newlines is set, in which case they are dropped and the literal carries on.
    """
    tokens = []
    current = []   # characters of the literal being read
    start = 0      # offset of current[0]

    def flush(end):
        if current:
            tokens.append(Literal("".join(current), start, end))
            current.clear()

    for idx, char in enumerate(expr):
        if char == NEWLINE and merge_newlines:
            continue

        if char in (SPACE, NEWLINE):
            flush(idx)
        elif char == LeftBracket.CHAR:
            flush(idx)
            tokens.append(LeftBracket(idx))
        elif char == RightBracket.CHAR:
            flush(idx)
            tokens.append(RightBracket(idx))
        else:
            if not current:
                start = idx
            current.append(char)

    flush(len(expr))
    return tokens
