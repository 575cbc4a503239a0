import unittest

from lispcalc.pure.lexical import LeftBracket, Literal, RightBracket, lex


def brackets():
    return LeftBracket(0), RightBracket(0)


class LexTestCase(unittest.TestCase):

    def test_lex(self):
        left, right = brackets()
        cases = {
            "": [],
            "   ": [],
            "42": [Literal("42")],
            "(+ 1 2)": [left, Literal("+"), Literal("1"), Literal("2"), right],
            "(+1 2)": [left, Literal("+1"), Literal("2"), right],
            "((x))": [left, left, Literal("x"), right, right],
            ")(": [right, left],
            "a(b)c": [Literal("a"), left, Literal("b"), right, Literal("c")],
            "  1.5   -2e3 ": [Literal("1.5"), Literal("-2e3")],
            "*   ( + 12 3)  \n 81": [Literal("*"), left, Literal("+"), Literal("12"), Literal("3"), right,
                                    Literal("81")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, lex(case), case)

    def test_never_fails(self):
        for case in ["(((", ")))", "\n\n", "λx.x", "\t", "1;;2", "\x00"]:
            self.assertIsInstance(lex(case), list, case)

    def test_newlines(self):
        cases = {
            "1\n2": ([Literal("1"), Literal("2")], [Literal("12")]),
            "+\n1 2": ([Literal("+"), Literal("1"), Literal("2")], [Literal("+1"), Literal("2")]),
            "1 \n 2": ([Literal("1"), Literal("2")], [Literal("1"), Literal("2")]),
            "(\n)": (list(brackets()), list(brackets())),
        }
        for case, (flushed, merged) in cases.items():
            self.assertEqual(flushed, lex(case), case)
            self.assertEqual(flushed, lex(case, merge_newlines=False), case)
            self.assertEqual(merged, lex(case, merge_newlines=True), case)

    def test_spans(self):
        tokens = lex("(+ 12 3)")
        self.assertEqual([(0, 1), (1, 2), (3, 5), (6, 7), (7, 8)], [(token.start, token.end) for token in tokens])

        merged, = lex("1\n2", merge_newlines=True)
        self.assertEqual((0, 3), (merged.start, merged.end))

    def test_tokens(self):
        left, right = brackets()
        self.assertNotEqual(left, right)
        self.assertNotEqual(Literal("("), left)
        self.assertNotEqual(Literal("1"), Literal("2"))
        self.assertEqual(LeftBracket(5), left)

        self.assertEqual("(", str(left))
        self.assertEqual(")", str(right))
        self.assertEqual("Literal('12')", repr(Literal("12")))


if __name__ == '__main__':
    unittest.main()
