## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import sys
from typing import Iterable

from .tokens import Token
from .types import Object, Integer, Boolean, Error, Function, NULL


DIAGNOSTICS_BANNER = "Ooops ... we encountered some errors:"


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_value(value: Object | None, color: bool = False) -> str:
    """Inspection form of a value, optionally highlighted by type for the terminal."""
    if value is None: return ''
    text = value.inspect()
    if not color: return text
    if isinstance(value, Error): return f"\033[31m{text}\033[0m"
    if isinstance(value, Integer): return f"\033[97m{text}\033[0m"
    if isinstance(value, Boolean) or value is NULL: return f"\033[36m{text}\033[0m"
    if isinstance(value, Function): return f"\033[90m{text}\033[0m"
    return text

def format_diagnostics(diagnostics: Iterable[str]) -> str:
    return '\n'.join([DIAGNOSTICS_BANNER, *(f"\t {message}" for message in diagnostics)])


def show_tokens(tokens: Iterable[Token], file=None):
    file = file or sys.stdout
    for tok in tokens:
        literal = tok.value if tok.value else '∅'
        print(f"\033[90m{tok.line:>3}:{tok.column:<3}\033[0m {tok.type:<9} \033[97m{literal}\033[0m", file=file)

def show_program(program, file=None):
    text = str(program) or '∅'
    print(f"\033[90m  ~ :\033[0m  {text}", file=file or sys.stdout)
