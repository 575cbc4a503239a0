"""Uses the lispcalc parser/evaluator to evaluate an expression file or run in command-line mode. Also uses error handling
context manager. Called from the lispcalc console script, or with `python -m lispcalc`.

Python version must be >=3.6, because error handling requires that dicts are insertion-ordered.
"""

import argparse
import sys

from lispcalc.lang.error import ErrorHandler
from lispcalc.lang.session import Session
from lispcalc.lang.shell import Shell


def main(argv=None):
    """Runs lispcalc interpreter. Called from lispcalc console script."""
    assert sys.version_info >= (3, 6), "lispcalc cannot be run with python < 3.6"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="lispcalc")
        parser.add_argument("file", help="file to evaluate (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--merge-newlines", action="store_true",
                            help="don't end literals at newlines: '1\\n2' is read as '12'")
        parser.add_argument("-q", "--quiet", action="store_true", help="only print answers, not parsed trees")
        args = parser.parse_args(argv)

        options = {"merge_newlines": args.merge_newlines, "show_tree": not args.quiet}

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, **options)
            sess.run()

            for result in sess.results:
                print(Session.answer(result.value))

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, **options)).cmdloop()
