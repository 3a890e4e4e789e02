"""Token definitions for the sugiru language. A token is the smallest lexical unit: a TokenType paired with the raw
text it was scanned from.
"""

from enum import Enum
from typing import NamedTuple


class TokenType(str, Enum):
    """Closed set of token kinds. Values are the names used in parser diagnostics."""
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # identifiers and literals
    IDENT = "IDENT"
    INT = "INT"

    # operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self):
        return self.value


class Token(NamedTuple):
    type: TokenType
    literal: str

    def __str__(self):
        return f"{self.type}({self.literal})"


KEYWORDS = {
    "fn": TokenType.FUNCTION,
    "let": TokenType.LET,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}

# single characters that map directly onto a token type
SINGLES = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "!": TokenType.BANG,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

# two-character operators, keyed by their first character
DOUBLES = {
    "=": ("==", TokenType.EQ),
    "!": ("!=", TokenType.NOT_EQ),
}


def lookup_ident(ident):
    """Returns the keyword TokenType for ident, or IDENT if ident is not a keyword."""
    return KEYWORDS.get(ident, TokenType.IDENT)
