"""Interactive mode for raga interpreter, built on cmd. Every complete statement is evaluated against the session's
root scope and its value printed.
"""

import cmd


class Shell(cmd.Cmd):
    """raga interpreter shell."""
    intro = "raga interpreter\nType 'help' for a short introduction, 'exit' or Ctrl-D to leave."
    PROMPT = "> "
    CONTINUATION_PROMPT = ". "  # while a block is still open
    prompt = PROMPT

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.pending = ""  # lines of a statement whose block isn't closed yet
        self.line_num = 0

    def default(self, line):
        """Collects line into the pending statement and evaluates it once its braces balance."""
        with self.sess.error_handler:  # cmd.Cmd would otherwise stop the loop on any exception
            self.line_num += 1
            line, is_open = self.sess.preprocess_line(line, self.pending)

            self.pending = line if is_open else ""
            self.prompt = Shell.CONTINUATION_PROMPT if is_open else Shell.PROMPT
            if is_open or not line:
                return

            self.sess.add(line, self.line_num)
            self.sess.run()

            if self.sess.results:
                print(self.sess.pop())

    def emptyline(self):
        """Blank lines only matter inside an open block; never repeat the previous command."""
        if self.pending:
            self.default("")
        return False

    def do_help(self, arg):
        print("raga is a tiny expression language: integers, one arithmetic operator per \n"
              "expression, 'let' bindings, 'fn' definitions, and '{ }' blocks that open a \n"
              "new scope.\n\n"
              "Try 'let a = 10 / 2', which binds 5 to 'a'. Then type '{ let b = a * 2' and \n"
              "'b }' on the following line: the block gives 10, and 'b' is gone afterwards.")

    def do_EOF(self, arg):
        print()
        return True

    def do_exit(self, arg):
        return True
