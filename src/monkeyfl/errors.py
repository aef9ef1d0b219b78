## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark


class MonkeyError(Exception):
    """Base class for all errors raised on the Python side of the interpreter.  Runtime
    errors of Monkey programs are values (see `types.Error`) and never raised."""


class MonkeyParseError(MonkeyError):
    def __init__(self, message, *, diagnostics=(), filename=None, line=None, column=None, token=None):
        super().__init__(message)
        self.diagnostics: list[str] = list(diagnostics)
        self.filename = filename
        self.line = line
        self.column = column
        self.token = token

class MonkeyIncompleteParse(MonkeyParseError, lark.exceptions.ParseError):
    def __init__(self, message, *, diagnostics=(), filename=None, line=None, column=None, token=None):
        super().__init__(message, diagnostics=diagnostics, filename=filename, line=line, column=column, token=token)
