## monkeyfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Iterator

from .tokens import (Token, make_token, lookup_identifier,
                     ONE_CHAR_TOKENS, TWO_CHAR_TOKENS, EOF, INT, ILLEGAL)


WHITESPACE = (' ', '\t', '\n', '\r')

def _is_letter(ch: str) -> bool:
    return 'a' <= ch <= 'z' or 'A' <= ch <= 'Z' or ch == '_'

def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


class Lexer:
    """Pull-based scanner; call `next_token()` until it returns an EOF token, and keep
    calling it afterwards if you like, it will keep returning EOF.
    """

    def __init__(self, source: str):
        self.source = source
        self.position = 0           # index of `self.char` in source
        self.read_position = 0      # index of the character after it
        self.char = '\0'
        self.line, self.column = 1, 0
        self._read_char()

    def _read_char(self) -> None:
        if self.char == '\n':
            self.line, self.column = self.line + 1, 0
        self.char = self.source[self.read_position] if self.read_position < len(self.source) else '\0'
        self.position = self.read_position
        self.read_position += 1
        self.column += 1

    def _peek_char(self) -> str:
        return self.source[self.read_position] if self.read_position < len(self.source) else '\0'

    def _read_while(self, predicate) -> str:
        start = self.position
        while predicate(self.char):
            self._read_char()
        return self.source[start:self.position]

    def _skip_whitespace(self) -> None:
        while self.char in WHITESPACE:
            self._read_char()

    def next_token(self) -> Token:
        self._skip_whitespace()
        here = (self.position, self.line, self.column)

        pair = self.char + self._peek_char()
        if (kind := TWO_CHAR_TOKENS.get(pair)) is not None:
            self._read_char(); self._read_char()
            return make_token(kind, pair, *here)

        if (kind := ONE_CHAR_TOKENS.get(self.char)) is not None:
            literal = '' if kind == EOF else self.char
            self._read_char()
            return make_token(kind, literal, *here)

        if _is_letter(self.char):
            word = self._read_while(_is_letter)
            return make_token(lookup_identifier(word), word, *here)

        if _is_digit(self.char):
            return make_token(INT, self._read_while(_is_digit), *here)

        # Unknown character, the parser is responsible for rejecting it.
        self._read_char()
        return make_token(ILLEGAL, '', *here)


def tokenize(source: str) -> Iterator[Token]:
    """Yield every token of `source`, the final EOF token included."""
    lexer = Lexer(source)
    while True:
        token = lexer.next_token()
        yield token
        if token.type == EOF:
            return
