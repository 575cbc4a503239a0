"""Session control for lispcalc. Reads expressions from a file or from the command line, parses them, displays their
trees, and evaluates them.
"""

from dataclasses import dataclass

from termcolor import colored

from lispcalc.lang.error import GenericException
from lispcalc.pure.numerical import evaluate, number
from lispcalc.pure.tree import Node, parse, render


@dataclass
class Result:
    """An evaluated expression."""
    expr: str
    tree: Node
    value: float


class Session:
    """Governs a lispcalc session. A file holds a single expression; the command line holds one per (continued) line."""
    SH_FILE = "<in>"    # command-line interpreter filename
    COMMENT = ";;"      # comments run until the end of the line
    BRACKET = "yellow"  # color of brackets in displayed trees
    ARROW = "blue"      # color of the arrow before an answer

    def __init__(self, error_handler, path, cmd_line, merge_newlines=False, show_tree=True):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path                      # used for error messages
        self.cmd_line = cmd_line              # whether or not in command-line mode
        self.merge_newlines = merge_newlines  # see pure/lexical.py
        self.show_tree = show_tree            # whether or not to display trees before evaluating them

        self.to_exec = {}   # dict of line num: (expr, tree) to evaluate
        self.results = []   # list of Results, in order of evaluation

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    expr = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(Session.preprocess(expr), 1)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename", diagnosis=False)

    @staticmethod
    def preprocess(expr):
        """Removes comments from every line of expr. Newlines are kept, so line numbers stay the same."""
        lines = []
        for line in expr.split("\n"):
            if Session.COMMENT in line:
                line = line[:line.index(Session.COMMENT)]
            lines.append(line.rstrip())
        return "\n".join(lines)

    @staticmethod
    def preprocess_line(line, prev=""):
        """Preprocesses a line from the command-line. prev is the unfinished expression from previous lines, if any.
        Returns the updated line and whether or not it needs to be continued on the next line.
        """
        line = Session.preprocess(line)
        if prev:
            line = prev + "\n" + line
        return line, line.count("(") > line.count(")")

    @staticmethod
    def answer(value):
        """Returns the displayed form of an evaluated value."""
        return colored("=>", Session.ARROW) + " " + number(value)

    def add(self, expr, line_num):
        """Parses expr and adds it to the current session. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        self.to_exec[line_num] = (expr, parse(expr, self.merge_newlines))

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Runs this session's expressions by displaying and then evaluating them. Will raise any errors that are
        encountered.
        """
        for line_num, (expr, tree) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, expr, line_num)

            try:
                if self.show_tree:
                    print(render(tree, highlight=lambda bracket: colored(bracket, Session.BRACKET)))
                self.results.append(Result(expr, tree, evaluate(tree)))
            finally:
                del self.to_exec[line_num]

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the earliest Result."""
        return self.results.pop(0)
