## monkeyfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
from typing import Iterator

from .tokens import Token
from .nodes import Node, Program
from .lexer import Lexer, tokenize
from .parser import Parser, parse
from .environment import Environment
from .interpreter import evaluate
from .types import Object
from .errors import MonkeyParseError, MonkeyIncompleteParse
from .formatting import format_diagnostics, show_tokens, show_program


class Runtime:
    """Minimal runtime facade focused on embedding.  Bindings made by one `run()` stay
    visible to the next, as they do between lines of the REPL."""

    def __init__(self, env: Environment | None = None):
        self.env = env or Environment()

    # Front-end ───────────────────────────────────────────────────────────────────────────────
    def tokenize(self, source: str) -> Iterator[Token]:
        return tokenize(source)

    def parse(self, source: str) -> tuple[Program, list[str]]:
        return parse(source)

    def parse_checked(self, source: str, filename: str | None = None, verbosity: int = 0) -> Program:
        """Parse `source`, raising `MonkeyParseError` with every diagnostic if there are any."""
        if verbosity >= 2:
            show_tokens(tokenize(source))

        parser = Parser(Lexer(source))
        program, diagnostics = parser.parse_program()
        if diagnostics:
            first = parser.error_tokens[0]
            error_class = MonkeyIncompleteParse if parser.incomplete else MonkeyParseError
            raise error_class(format_diagnostics(diagnostics), diagnostics=diagnostics, filename=filename,
                              line=first.line, column=first.column, token=first.value)

        if verbosity >= 1 or os.environ.get('MONKEY_DEBUG'):
            show_program(program)
        return program

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def evaluate(self, node: Node, env: Environment | None = None, stats: dict | None = None) -> Object | None:
        return evaluate(node, self.env if env is None else env, stats)

    def run(self, source: str, filename: str | None = None, verbosity: int = 0,
            stats: dict | None = None) -> Object | None:
        program = self.parse_checked(source, filename=filename, verbosity=verbosity)
        return evaluate(program, self.env, stats)

    # Session ─────────────────────────────────────────────────────────────────────────────────
    def get(self, name: str) -> Object | None:
        return self.env.get(name)

    def set(self, name: str, value: Object) -> None:
        self.env.set(name, value)

    def reset(self) -> None:
        self.env = Environment()
