## monkeyfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .tokens import Token
from .lexer import tokenize
from .parser import parse
from .interpreter import evaluate
from .environment import Environment
from .types import Integer, Boolean, Function, ReturnValue, Error, TRUE, FALSE, NULL
from .errors import *
from .runtime import Runtime

_RUNTIME = Runtime()

def __getattr__(name):
    return getattr(_RUNTIME, name)
