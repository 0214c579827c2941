"""Error handling for raga language. Grammar and evaluation failures are GenericExceptions carrying plain text
messages; ErrorHandler is the one place that prints them (coloured) and decides whether to exit.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a raga error. str() of the exception is the plain
    message; colored() bolds the offending snippets for display.
    """

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.template = msg
        self.exprs = [str(expr) for expr in exprs]
        self.internal = internal

        super().__init__(msg.format(*self.exprs))

    def colored(self):
        """Returns message with expr snippets bolded."""
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))


class ParseError(GenericException):
    """Raised by any grammar rule that does not match. Alternatives catch it and retry from the same input."""


class EvalError(GenericException):
    """Raised when a parsed statement cannot be evaluated. Aborts the whole evaluation."""


class ErrorHandler:
    """Context manager that reports raga errors instead of letting them propagate. Anything that is not a
    GenericException is reported as an internal error and re-raised.
    """
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal    # exit with status 1 after reporting (file mode)
        self.traceback = {}   # path: (line, line num) being processed, or (None, None)

    def register_file(self, path):
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Marks line as the one being parsed or evaluated, so an error raised meanwhile can point at it."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Clears the current line of path once it was processed without error."""
        self.traceback[path] = (None, None)

    def location(self):
        """Returns the registered lines as '  File ..., line N:' entries."""
        return "".join(f"  File '{path}', line {line_num}:\n    {line}\n"
                       for path, (line, line_num) in self.traceback.items() if line)

    def report(self, error):
        """Prints error (a GenericException) after the registered location. Exits if fatal, otherwise clears the
        registered lines so the next statement starts clean.
        """
        prefix = colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"]) if error.internal else ""
        print(self.location() + prefix + colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.colored())

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False

        if issubclass(exc_type, GenericException):
            self.report(exc_val)
        elif exc_type is KeyboardInterrupt:
            self.report(GenericException("keyboard interrupt"))
        elif exc_type is RecursionError:
            self.report(GenericException("maximum recursion depth exceeded while evaluating"))
        else:
            self.report(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            return False
        return True
