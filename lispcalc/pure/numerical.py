"""Evaluation of expression trees. Numbers are Python floats; the only operations are binary '+' and '*'.

Groups are applications: the first node names the operation, the rest are its arguments, each evaluated before the
operation is applied.
"""

import operator
import re

from lispcalc.lang.error import (EmptyGroup, GenericException, IncorrectArgumentCount, NumeralParseError,
                                 OperationNotALiteral, UnknownOperation)
from lispcalc.pure.tree import Group, Literal

OPERATIONS = {"+": operator.add, "*": operator.mul}
ARITY = 2
MAX_INTEGRAL = 1e16  # larger integral values are displayed in exponent form

# ASCII decimal numerals with optional sign and exponent, plus inf/nan
NUMERAL = re.compile(r"[+-]?(([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?|inf|infinity|nan)", re.IGNORECASE)


def evaluate(node):
    """Returns the value of node as a float. Raises the first EvalError encountered, if any."""
    if isinstance(node, Literal):
        if not NUMERAL.fullmatch(node.text):
            raise NumeralParseError(node.text, node.start, node.end)
        return float(node.text)

    elif isinstance(node, Group):
        if not node.nodes:
            raise EmptyGroup(node.expr, node.start, node.end)

        operation, *args = node.nodes
        if not isinstance(operation, Literal):
            raise OperationNotALiteral(operation.expr, operation.start, operation.end)

        if operation.text not in OPERATIONS:
            raise UnknownOperation(operation.text, operation.start, operation.end)
        elif len(args) != ARITY:
            raise IncorrectArgumentCount((node.expr, operation.text, str(len(args))), node.start, node.end)

        first, second = (evaluate(arg) for arg in args)
        return OPERATIONS[operation.text](first, second)

    raise GenericException("unrecognized node '{}'", repr(node), internal=True)


def number(value):
    """Returns str(value), without the trailing '.0' if value is integral and not too large to print in full."""
    if value.is_integer() and abs(value) < MAX_INTEGRAL:
        return str(int(value))
    return str(value)
