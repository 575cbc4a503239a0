"""Error handling for lispcalc. Only GenericExceptions should be encountered during running: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

The pure core raises the errors below and never catches them. Spans (start/end) are offsets into the source string
that was parsed; the core never sees that string again after lexing, so it is the ErrorHandler's registered traceback
line that is used to display the diagnosis.

Python version must be >=3.6, because error handling requires that dicts are insertion-ordered.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a lispcalc error. exprs are the snippets the message
    is formatted with; exprs[0] should be the offending snippet that caused the error.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.raw_msg = msg.format(*exprs)  # uncolored, used for str(error)
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.start = start
        self.end = end if end != -1 else start + len(self.expr)  # needed for error display

        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.raw_msg)


class ParseError(GenericException):
    """Superclass of errors raised while building a tree from tokens."""
    MSG = "parse error"

    def __init__(self, exprs=None, start=0, end=-1, diagnosis=True):
        super().__init__(self.MSG, exprs, start, end, diagnosis)


class NoTokens(ParseError):
    MSG = "expression is empty"

    def __init__(self):
        super().__init__(diagnosis=False)


class SingleBracket(ParseError):
    MSG = "'{}' cannot stand on its own"


class UnexpectedRightBracket(ParseError):
    MSG = "unexpected '{}' with no open group to close"


class UnexpectedEndOfStream(ParseError):
    MSG = "unexpected end of expression, '{}' is never closed"


class EvalError(GenericException):
    """Superclass of errors raised while evaluating a tree."""
    MSG = "evaluation error"

    def __init__(self, exprs=None, start=0, end=-1, diagnosis=True):
        super().__init__(self.MSG, exprs, start, end, diagnosis)


class EmptyGroup(EvalError):
    MSG = "'{}' is an empty group"


class OperationNotALiteral(EvalError):
    MSG = "operation '{}' is a group, expected '+' or '*'"


class IncorrectArgumentCount(EvalError):
    MSG = "'{1}' expects 2 arguments, got {2}"


class UnknownOperation(EvalError):
    MSG = "unknown operation '{}', expected '+' or '*'"


class NumeralParseError(EvalError):
    MSG = "'{}' is not a number"


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom lispcalc errors."""
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run. line is the full source
        the error spans point into, and may contain newlines.
        """
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def locate(source, start):
        """Returns (line offset, line, column) of the line in source that contains offset start."""
        line_start = source.rfind("\n", 0, start) + 1
        line_end = source.find("\n", line_start)
        if line_end == -1:
            line_end = len(source)
        return source.count("\n", 0, line_start), source[line_start:line_end], start - line_start

    @staticmethod
    def diagnose(error, source):
        """Returns offending part of source (the line containing error.start) highlighted and bolded."""
        __, line, start = ErrorHandler.locate(source, error.start)
        end = max(min(start + error.end - error.start, len(line)), start + 1)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        source = None
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line:
                offset, shown, __ = ErrorHandler.locate(line, error.start)
                error_msg += f"  File '{file}', line {line_num + offset}:\n"
                error_msg += f"    {shown}\n"
                source = line
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and source and error.diagnosis:
            print(ErrorHandler.diagnose(error, source))

        if self.fatal:
            sys.exit(1)
        self.traceback = {file: (None, None) for file in self.traceback}  # reset traceback (no need if fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return False
        elif issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException("expression nested too deeply", diagnosis=False))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
