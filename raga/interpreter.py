"""raga interpreter.

Basic program flow:
    1. Scanner: primitives in raga/pure/lexical.py slice the remaining input (digits, identifiers, whitespace, tags)
    2. Parser: raga/lang/lexical.py builds a single statement's AST by recursive descent with full backtracking
        - every alternative is retried from the same, unconsumed input
    3. Evaluation: the AST is walked against an Env (raga/lang/env.py), which blocks chain into child scopes
"""

from raga.lang.error import ParseError
from raga.lang.lexical import Stmt


class Parse:
    """A fully parsed statement, ready to be evaluated."""

    def __init__(self, stmt):
        self.stmt = stmt

    def evaluate(self, env):
        """Evaluates the statement in env, which may be mutated by new top-level bindings/functions."""
        return self.stmt.evaluate(env)

    def __eq__(self, other):
        return isinstance(other, Parse) and self.stmt == other.stmt

    def __repr__(self):
        return f"Parse({self.stmt!r})"

    def __str__(self):
        return str(self.stmt)


def parse(s):
    """Parses exactly one statement, which must take up all of s. Blocks nested deeper than python's recursion limit
    allows are reported as a ParseError.
    """
    try:
        s, stmt = Stmt.parse(s)
    except RecursionError:
        raise ParseError("input is nested too deeply to parse")

    if s:
        raise ParseError("input was not consumed fully by parser")
    return Parse(stmt)
