## monkeyfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark


# Token kinds are plain strings, stored in `lark.Token.type`.
ILLEGAL = 'ILLEGAL'
EOF = 'EOF'

IDENT = 'IDENT'
INT = 'INT'

ASSIGN = '='
PLUS = '+'
MINUS = '-'
BANG = '!'
ASTERISK = '*'
SLASH = '/'
LT = '<'
GT = '>'
EQ = '=='
NOT_EQ = '!='

COMMA = ','
SEMICOLON = ';'
LPAREN = '('
RPAREN = ')'
LBRACE = '{'
RBRACE = '}'

FUNCTION = 'FUNCTION'
LET = 'LET'
TRUE = 'TRUE'
FALSE = 'FALSE'
IF = 'IF'
ELSE = 'ELSE'
RETURN = 'RETURN'


ONE_CHAR_TOKENS: dict[str, str] = {
    '\0': EOF,
    '=': ASSIGN, '+': PLUS, '-': MINUS, '!': BANG, '*': ASTERISK, '/': SLASH,
    '<': LT, '>': GT,
    ',': COMMA, ';': SEMICOLON,
    '(': LPAREN, ')': RPAREN, '{': LBRACE, '}': RBRACE,
}

TWO_CHAR_TOKENS: dict[str, str] = {
    '==': EQ,
    '!=': NOT_EQ,
}

KEYWORDS: dict[str, str] = {
    'fn': FUNCTION,
    'let': LET,
    'true': TRUE,
    'false': FALSE,
    'if': IF,
    'else': ELSE,
    'return': RETURN,
}


Token = lark.Token


def make_token(kind: str, literal: str, start_pos: int | None = None,
               line: int | None = None, column: int | None = None) -> Token:
    return Token(kind, literal, start_pos, line, column)

def lookup_identifier(word: str) -> str:
    return KEYWORDS.get(word, IDENT)
