import math
import unittest

from lispcalc.lang.error import (EmptyGroup, EvalError, IncorrectArgumentCount, NumeralParseError,
                                 OperationNotALiteral, UnknownOperation)
from lispcalc.pure.numerical import evaluate, number
from lispcalc.pure.tree import Group, Literal, parse


class EvaluateTestCase(unittest.TestCase):

    def test_evaluate(self):
        cases = {
            "(+ 1 2)": 3,
            "(* 2 (+ 3 4))": 14,
            "*   ( + 12 3)  \n 81": 1215,
            "42": 42,
            "+ 1 2": 3,
            "(+ 0.5 0.25)": 0.75,
            "(* -2 3)": -6,
            "(+ 1e3 1)": 1001,
            "(+ .5 1.)": 1.5,
            "(+ +1 -1E2)": -99,
            "(+ (* 2 3) (* 4 5))": 26,
            "(* (+ 1 (+ 1 (+ 1 1))) (+ 2 3))": 20,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, evaluate(parse(case)), case)

    def test_returns_float(self):
        self.assertIsInstance(evaluate(parse("(+ 1 2)")), float)
        self.assertIsInstance(evaluate(parse("7")), float)

    def test_errors(self):
        should_raise = {
            "()": EmptyGroup,
            "(+ 1 ())": EmptyGroup,
            "(foo 1 2)": UnknownOperation,
            "(- 1 2)": UnknownOperation,
            "(foo 1 2 3)": UnknownOperation,
            "(42)": UnknownOperation,
            "(+ 1 2 3)": IncorrectArgumentCount,
            "(* 1)": IncorrectArgumentCount,
            "(+)": IncorrectArgumentCount,
            "((+ 1 2))": OperationNotALiteral,
            "((+) 1 2)": OperationNotALiteral,
            "(+ one 2)": NumeralParseError,
            "(+ 1 (* 2 x))": NumeralParseError,
            "+": NumeralParseError,
            "(+ + 1)": NumeralParseError,
            "(+ 1\t 2)": NumeralParseError,
            "(+ \t1 2)": NumeralParseError,
            "(+ 1\r 2)": NumeralParseError,
            "(+ \u0661 2)": NumeralParseError,
            "(+ 1_0 2)": NumeralParseError,
            "(+ . 2)": NumeralParseError,
            "(+ 1e 2)": NumeralParseError,
        }
        for case, error in should_raise.items():
            self.assertRaises(error, evaluate, parse(case))
            self.assertRaises(EvalError, evaluate, parse(case))

    def test_fails_fast(self):
        # the first argument's error is raised, even though the second is also invalid
        self.assertRaises(NumeralParseError, evaluate, parse("(+ x ())"))
        self.assertRaises(EmptyGroup, evaluate, parse("(+ () x)"))

    def test_error_spans(self):
        with self.assertRaises(UnknownOperation) as context:
            evaluate(parse("(+ 1 (foo 2 3))"))
        self.assertEqual((6, 9), (context.exception.start, context.exception.end))
        self.assertEqual("foo", context.exception.expr)

        with self.assertRaises(IncorrectArgumentCount) as context:
            evaluate(parse("(+ 1 2 3)"))
        self.assertEqual((0, 9), (context.exception.start, context.exception.end))
        self.assertEqual("'+' expects 2 arguments, got 3", str(context.exception))

    def test_nodes(self):
        self.assertEqual(5, evaluate(Group([Literal("+"), Literal("2"), Literal("3")])))
        self.assertEqual(2.5, evaluate(Literal("2.5")))
        self.assertRaises(EmptyGroup, evaluate, Group())


class NumberTestCase(unittest.TestCase):

    def test_number(self):
        cases = {1215.0: "1215", 3.0: "3", -6.0: "-6", 0.0: "0", 0.75: "0.75", 2.5: "2.5"}
        for case, expected in cases.items():
            self.assertEqual(expected, number(case), case)

    def test_non_finite(self):
        self.assertEqual("inf", number(math.inf))
        self.assertEqual("nan", number(math.nan))

    def test_large(self):
        self.assertEqual("1e+300", number(1e300))
        self.assertEqual("-1e+20", number(-1e20))
        self.assertEqual("9999999999999998", number(9999999999999998.0))


if __name__ == '__main__':
    unittest.main()
