"""Handles interactive/command-line mode for lispcalc. Uses cmd as backend."""

import cmd

from lispcalc.lang.session import Session


class Shell(cmd.Cmd):
    """lispcalc interpreter shell."""
    intro = "lispcalc :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self._start_line = 0  # line num of the first line of a continued expression
        self.line_num = 0

    def default(self, line):
        """Evaluates arbitrary lispcalc expression."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self._tmp_line:
                self._start_line = self.line_num

            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                if not line.strip():
                    return  # comment-only line

                self.sess.add(line, self._start_line)
                self.sess.run()

                while self.sess.results:
                    print(Session.answer(self.sess.pop().value))

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to lispcalc!\n\n"
              "Expressions are written in prefix notation: the first item in a group of \n"
              "parentheses is the operation, the rest are its arguments. Only '+' and '*' are \n"
              "supported, and both take exactly two arguments. Groups can be nested.\n\n"
              "Try it out by typing '(* 2 (+ 3 4))'. The parsed tree will be displayed, and \n"
              "then its value: 14. Outer parentheses are optional: '+ 1 2' gives 3. Lines \n"
              "with unclosed parentheses are continued on the next line.")

    def emptyline(self):
        """Do not repeat previous command on empty line, but do continue an unfinished expression."""
        if self._tmp_line:
            self.default("")
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
