"""Grammar for raga language: parsing, evaluation, and canonical rendering of expressions and statements.

All grammar can be loosely defined as follows:

```
<stmt>        ::= <binding_def> | <func_def> | <expr>       ; tried in that order
<binding_def> ::= "let" " "+ <ident> ws* "=" ws* <expr>
<func_def>    ::= "fn" " "+ <ident> ws* (<ident> ws*)* "=>" ws* <stmt>

<expr>        ::= <operation> | <non_op>
<operation>   ::= <non_op> ws* <op> ws* <non_op>            ; no chaining: "1 + 2 + 3" is not an operation
<non_op>      ::= <number> | <ident> | <block>
<block>       ::= "{" ws* (<stmt> ws*)* "}"
<op>          ::= "+" | "-" | "*" | "/"
<number>      ::= <digit>+                                 ; must fit in 32 bits, no sign
```

Functions can be defined and looked up by name, but there is no syntax for calling them.
"""

import textwrap
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from raga.lang import numerical
from raga.lang.error import EvalError, ParseError
from raga.pure.lexical import (alternatives, extract_digits, extract_ident, extract_whitespace, sequence,
                               skip_whitespace, tag)


class Grammar(ABC):
    """Superclass representing any grammar object in raga language."""

    @classmethod
    @abstractmethod
    def parse(cls, s):
        """This method should parse a grammar object from the start of s and return (remainder, object), or raise a
        ParseError without having consumed anything.
        """

    @abstractmethod
    def evaluate(self, env):
        """This method should evaluate self within env and return a numerical.Val, or raise an EvalError."""

    @abstractmethod
    def __str__(self):
        """Canonical source text. Parsing it again gives back an equal object."""


class Op(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @classmethod
    def parse(cls, s):
        return alternatives([lambda s, op=op: (tag(op.value, s), op) for op in cls], s)

    def apply(self, lhs, rhs):
        """Applies self to two python ints, returning a numerical.Number."""
        func = {
            Op.ADD: numerical.add,
            Op.SUB: numerical.sub,
            Op.MUL: numerical.mul,
            Op.DIV: numerical.div,
        }[self]
        return func(lhs, rhs)

    def __str__(self):
        return self.value


class Expr(Grammar):
    """Superclass for expressions: Number, Operation, BindingUsage, and Block."""

    @classmethod
    def parse(cls, s):
        try:
            return Operation.parse(s)
        except ParseError:
            return Expr.parse_non_operation(s)

    @staticmethod
    def parse_non_operation(s):
        return alternatives([Number.parse, BindingUsage.parse, Block.parse], s)


@dataclass
class Number(Expr):
    value: int

    @classmethod
    def parse(cls, s):
        s, digits = extract_digits(s)

        value = int(digits)
        if not numerical.fits(value):
            raise ParseError("number literal '{}' does not fit in 32 bits", digits)
        return s, cls(value)

    def evaluate(self, env):
        return numerical.Number(self.value)

    def __str__(self):
        return str(self.value)


@dataclass
class Operation(Expr):
    """Single binary operation between two non-operation expressions."""
    lhs: Expr
    rhs: Expr
    op: Op

    @classmethod
    def parse(cls, s):
        s, lhs = Expr.parse_non_operation(s)
        s, __ = skip_whitespace(s)

        s, op = Op.parse(s)
        s, __ = skip_whitespace(s)

        s, rhs = Expr.parse_non_operation(s)
        return s, cls(lhs, rhs, op)

    def evaluate(self, env):
        lhs = self.lhs.evaluate(env)
        rhs = self.rhs.evaluate(env)

        if not (isinstance(lhs, numerical.Number) and isinstance(rhs, numerical.Number)):
            raise EvalError("cannot evaluate operation whose left-hand side and right-hand side are not both numbers")

        return self.op.apply(lhs.value, rhs.value)

    def __str__(self):
        return f"{self.lhs} {self.op} {self.rhs}"


@dataclass
class BindingUsage(Expr):
    name: str

    @classmethod
    def parse(cls, s):
        s, name = extract_ident(s)
        return s, cls(name)

    def evaluate(self, env):
        return env.get_binding(self.name)

    def __str__(self):
        return self.name


@dataclass
class Block(Expr):
    """Statements evaluated in a new child scope. A block's value is the value of its last statement."""
    stmts: list = field(default_factory=list)

    @classmethod
    def parse(cls, s):
        s = tag("{", s)
        s, __ = skip_whitespace(s)

        s, stmts = sequence(Stmt.parse, s)

        s, __ = skip_whitespace(s)
        s = tag("}", s)
        return s, cls(stmts)

    def evaluate(self, env):
        if not self.stmts:
            return numerical.UNIT

        child_env = env.create_child()
        *stmts_except_last, last = self.stmts
        for stmt in stmts_except_last:
            stmt.evaluate(child_env)

        return last.evaluate(child_env)

    def __str__(self):
        if not self.stmts:
            return "{}"
        body = "\n".join(str(stmt) for stmt in self.stmts)
        return "{\n" + textwrap.indent(body, "    ") + "\n}"


class Stmt(Grammar):
    """Superclass for statements. Subclasses are tried in the order they are defined: BindingDef, FuncDef, then
    ExprStmt. Only the last alternative's error is raised if none of them parse.
    """

    @classmethod
    def parse(cls, s):
        return alternatives([subclass.parse for subclass in Stmt.__subclasses__()], s)


@dataclass
class BindingDef(Stmt):
    """let <name> = <val>: stores val in the current scope."""
    name: str
    val: Expr

    @classmethod
    def parse(cls, s):
        s = tag("let", s)
        s, __ = extract_whitespace(s)

        s, name = extract_ident(s)
        s, __ = skip_whitespace(s)

        s = tag("=", s)
        s, __ = skip_whitespace(s)

        s, val = Expr.parse(s)
        return s, cls(name, val)

    def evaluate(self, env):
        env.store_binding(self.name, self.val.evaluate(env))
        return numerical.UNIT

    def __str__(self):
        return f"let {self.name} = {self.val}"


@dataclass
class FuncDef(Stmt):
    """fn <name> <params>* => <body>: stores params and body in the current scope under name."""
    name: str
    params: list
    body: Stmt

    @classmethod
    def parse(cls, s):
        s = tag("fn", s)
        s, __ = extract_whitespace(s)

        s, name = extract_ident(s)
        s, __ = skip_whitespace(s)

        s, params = sequence(extract_ident, s)

        s = tag("=>", s)
        s, __ = skip_whitespace(s)

        s, body = Stmt.parse(s)
        return s, cls(name, params, body)

    def evaluate(self, env):
        env.store_func(self.name, self.params, self.body)
        return numerical.UNIT

    def __str__(self):
        return " ".join(["fn", self.name, *self.params, "=>", str(self.body)])


@dataclass
class ExprStmt(Stmt):
    """Expression in statement position."""
    expr: Expr

    @classmethod
    def parse(cls, s):
        s, expr = Expr.parse(s)
        return s, cls(expr)

    def evaluate(self, env):
        return self.expr.evaluate(env)

    def __str__(self):
        return str(self.expr)
