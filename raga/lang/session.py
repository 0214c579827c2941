"""Session control for raga language. Runs the interpreter either in command line mode or file interpretation mode,
with every statement evaluated against the same root scope.
"""

from raga.interpreter import parse
from raga.lang.env import Env
from raga.lang.error import GenericException


class Session:
    """Governs a raga session, with control over the root scope."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = Env()     # root scope: top-level bindings and functions live here
        self.to_exec = {}    # dict of line num: (source, Parse) to evaluate
        self.results = []    # values of evaluated statements, in order

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    exprs = Session.split_statements(file)
            except OSError:
                raise GenericException("'{}' could not be opened", path)

            for expr, line_num in exprs:
                self.add(expr, line_num)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, prev=""):
        """Preprocesses a line from a file or command-line. prev is the text of previous lines that this line
        continues, if any. Returns the (joined) line and whether or not it leaves a block open, in which case the next
        line should be added to it.
        """
        if prev:
            line = prev + "\n" + line.rstrip()
        else:
            line = line.strip()

        return line, line.count("{") > line.count("}")

    @staticmethod
    def split_statements(lines):
        """Returns list of (statement, line num) from lines. Statements end with their line, unless a block is left
        open, in which case they continue until it is closed.
        """
        exprs = []
        prev, start = "", None

        for line_num, line in enumerate(lines, 1):
            line, add_to_prev = Session.preprocess_line(line, prev)

            if add_to_prev:
                prev = line
                start = start or line_num
            else:
                if line:
                    exprs.append((line, start or line_num))
                prev, start = "", None

        if prev:
            exprs.append((prev, start))  # unclosed block: let the parser report it
        return exprs

    def add(self, expr, line_num):
        """Parses expr and adds it to the current session. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        self.to_exec[line_num] = (expr, parse(expr))

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates this session's pending statements in order against the root scope. In file mode each result is
        printed as soon as it is produced, so output of earlier statements survives a later error. Will raise any
        errors that are encountered; statements are removed whether or not they succeed.
        """
        for line_num, (expr, parsed) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, expr, line_num)

            try:
                val = parsed.evaluate(self.env)
            finally:
                del self.to_exec[line_num]

            self.results.append(val)
            if not self.cmd_line:
                print(val)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Pops the most recent result."""
        return self.results.pop()
