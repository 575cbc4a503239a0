"""Expression tree construction from lexical tokens.

A lispcalc expression is either a bare literal or a group of expressions:

```
<expr>  ::= <literal>                   ; "Literal"
          | "(" <expr>* ")"             ; "Group"
<top>   ::= <literal>                   ; a single token is returned as-is
          | <expr>*                     ; otherwise, top-level exprs are implicitly grouped (*)
```

The first node of a group names its operation; evaluating it is left to numerical.py.

------------------------------------------------------------------------------------------------------------------------

(*) The implicit group is only kept if it has something to group: if the whole expression is a single bracketed group,
like "(+ 1 2)", that group is the root of the tree instead of being wrapped in a second, implicit one.
"""

from abc import ABC, abstractmethod

from lispcalc.lang.error import (GenericException, NoTokens, SingleBracket, UnexpectedEndOfStream,
                                 UnexpectedRightBracket)
from lispcalc.pure import lexical


class Node(ABC):
    """Superclass for expression tree nodes. Like tokens, start/end are source offsets kept for error messages."""

    def __init__(self, start=0, end=0):
        self.start = start
        self.end = end
        self._cls = type(self).__name__

    @property
    @abstractmethod
    def expr(self):
        """One-line form of this node, used in error messages."""

    @abstractmethod
    def display(self, indents=0, highlight=None):
        """Recursively displays the tree in a readable format, one literal or bracket per line. highlight is called on
        bracket characters, if given.

        Format:
        (
            +
            (
                ...
            )
        )
        """

    def __str__(self):
        return self.display()


class Literal(Node):
    """Leaf of the tree: an operation name or a numeral."""

    def __init__(self, text, start=0, end=None):
        super().__init__(start, end if end is not None else start + len(text))
        self.text = text

    @property
    def expr(self):
        return self.text

    def display(self, indents=0, highlight=None):
        return f"{'    ' * indents}{self.text}\n"

    def __repr__(self):
        return f"{self._cls}('{self.text}')"

    def __eq__(self, other):
        return isinstance(other, Literal) and other.text == self.text


class Group(Node):
    """Ordered list of nodes. Bracketed groups are built at depth >= 1, the implicit top-level group at depth 0."""

    def __init__(self, nodes=None, start=0, end=0, depth=1):
        super().__init__(start, end)
        self.nodes = list(nodes) if nodes is not None else []
        self.depth = depth

    @property
    def expr(self):
        """One-line bracketed form, e.g. '(+ 1 (* 2 3))'."""
        return f"({' '.join(node.expr for node in self.nodes)})"

    def display(self, indents=0, highlight=None):
        if highlight is None:
            highlight = str

        result = f"{'    ' * indents}{highlight(lexical.LeftBracket.CHAR)}\n"
        for node in self.nodes:
            result += node.display(indents + 1, highlight)
        return result + f"{'    ' * indents}{highlight(lexical.RightBracket.CHAR)}\n"

    def __repr__(self):
        return f"{self._cls}({self.nodes!r})"

    def __eq__(self, other):
        return isinstance(other, Group) and other.nodes == self.nodes


class Cursor:
    """Position in a token list. A single Cursor is shared by every recursive build call of one parse, so that a
    nested call consumes tokens for its caller.
    """

    def __init__(self, index=0):
        self.index = index

    def next(self, tokens):
        """Returns the token under the cursor and moves past it."""
        token = tokens[self.index]
        self.index += 1
        return token

    def exhausted(self, tokens):
        return self.index >= len(tokens)

    def __repr__(self):
        return f"Cursor({self.index})"


def build(tokens, cursor, depth=0):
    """Builds a Node from tokens, starting at cursor. depth is the number of brackets opened but not yet closed: a call
    at depth > 0 builds the group whose LeftBracket was just consumed, and returns once its RightBracket is.
    """
    if not tokens:
        raise NoTokens()

    if len(tokens) == 1:
        token, = tokens
        if isinstance(token, lexical.Literal):
            return Literal(token.text, token.start, token.end)
        raise SingleBracket(str(token), token.start)

    opening = tokens[cursor.index - 1] if depth > 0 else None
    group = []

    while not cursor.exhausted(tokens):
        token = cursor.next(tokens)

        if isinstance(token, lexical.Literal):
            group.append(Literal(token.text, token.start, token.end))

        elif isinstance(token, lexical.LeftBracket):
            group.append(build(tokens, cursor, depth + 1))

        elif isinstance(token, lexical.RightBracket):
            if depth == 0:
                raise UnexpectedRightBracket(str(token), token.start)
            return Group(group, opening.start, token.end, depth)

        else:
            raise GenericException("unrecognized token '{}'", repr(token), internal=True)

    if depth > 0:
        raise UnexpectedEndOfStream(str(opening), opening.start)

    return Group(group, tokens[0].start, tokens[-1].end, depth)


def parse(expr, merge_newlines=False):
    """Returns the expression tree of expr. See module docstring for when the root is a Literal or a Group."""
    tree = build(lexical.lex(expr, merge_newlines), Cursor())

    if isinstance(tree, Group) and tree.depth == 0 and len(tree.nodes) == 1 and isinstance(tree.nodes[0], Group):
        return tree.nodes[0]
    return tree


def max_depth(node):
    """Returns how deeply brackets are nested in node. The implicit top-level group does not count as a bracket."""
    if isinstance(node, Literal):
        return 0
    elif isinstance(node, Group):
        return max([node.depth] + [max_depth(sub_node) for sub_node in node.nodes])
    raise GenericException("unrecognized node '{}'", repr(node), internal=True)


def render(tree, indent=0, highlight=None):
    """Returns the nested, bracketed text form of tree. Used for display only."""
    return tree.display(indent, highlight)
