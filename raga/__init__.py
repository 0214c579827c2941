from raga.interpreter import Parse, parse
from raga.lang.env import Env
from raga.lang.error import EvalError, GenericException, ParseError
from raga.lang.numerical import UNIT, Number, Unit, Val

__all__ = ["Parse", "parse", "Env", "EvalError", "GenericException", "ParseError", "UNIT", "Number", "Unit", "Val"]
