"""Scopes for raga. An Env maps names to NamedInfo (either a bound value or a function definition) and optionally
points to the Env it was created from. Storing only ever touches the local mapping, while lookups walk up the parent
chain, which is what gives blocks lexical scoping and shadowing.
"""

from dataclasses import dataclass

from raga.lang.error import EvalError


class NamedInfo:
    """Superclass for anything that can be stored under a name."""


@dataclass
class Binding(NamedInfo):
    val: object


@dataclass
class Func(NamedInfo):
    params: list
    body: object


class Env:
    """Governs a single scope. Children are created per block evaluation and dropped once the block returns."""

    def __init__(self, parent=None):
        self.named = {}
        self.parent = parent  # only set by create_child, never reassigned

    def create_child(self):
        return Env(parent=self)

    def store_binding(self, name, val):
        self.named[name] = Binding(val)

    def store_func(self, name, params, body):
        self.named[name] = Func(list(params), body)

    def get_named_info(self, name):
        """Returns NamedInfo for name from this scope or the closest parent that has it, else None."""
        env = self
        while env is not None:
            if name in env.named:
                return env.named[name]
            env = env.parent
        return None

    def get_binding(self, name):
        info = self.get_named_info(name)
        if not isinstance(info, Binding):
            raise EvalError("binding with name '{}' does not exist", name)
        return info.val

    def get_func(self, name):
        """Returns (params, body) of the function stored under name."""
        info = self.get_named_info(name)
        if not isinstance(info, Func):
            raise EvalError("function with name '{}' does not exist", name)
        return info.params, info.body

    def __contains__(self, name):
        return self.get_named_info(name) is not None

    def __repr__(self):
        return f"Env(named={self.named!r}, parent={'Env(...)' if self.parent else None})"
