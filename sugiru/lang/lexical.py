"""Lexical analysis for the sugiru language. Turns a source string into a lazy stream of Tokens.

Lexical grammar can be loosely defined as follows:

```
<ident>    ::= (<letter> | "_")+          ; resolved against the keyword table (fn, let, true, ...)
<int>      ::= <digit>+                   ; no fractions: "1.5" is INT(1) ILLEGAL(.) INT(5)
<operator> ::= "=" | "+" | "-" | "!" | "*" | "/" | "<" | ">" | "==" | "!="
<delim>    ::= "," | ";" | "(" | ")" | "{" | "}"
```

Whitespace (space, tab, CR, LF) separates tokens and is otherwise ignored. The lexer never fails: any character that
fits none of the above becomes an ILLEGAL token and is left for the parser to complain about.
"""

from sugiru.lang.tokens import DOUBLES, SINGLES, Token, TokenType, lookup_ident


WHITESPACE = " \t\r\n"


def is_letter(char):
    return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


def is_digit(char):
    return "0" <= char <= "9"


class Lexer:
    """Pull-based tokenizer over a complete source string."""

    def __init__(self, source):
        self.source = source
        self.position = 0  # index of the next unread character

    def reset(self):
        """Rewinds to the beginning of the source. Tokens cannot be replayed from the middle of the stream."""
        self.position = 0

    @property
    def char(self):
        """Character under the cursor, or "" at end of input."""
        if self.position >= len(self.source):
            return ""
        return self.source[self.position]

    def peek_char(self):
        if self.position + 1 >= len(self.source):
            return ""
        return self.source[self.position + 1]

    def next_token(self):
        """Scans and returns the next Token. Returns EOF tokens forever once the input is exhausted."""
        self._skip_whitespace()
        char = self.char

        if not char:
            return Token(TokenType.EOF, "")

        if is_letter(char):
            literal = self._read_while(is_letter)
            return Token(lookup_ident(literal), literal)

        if is_digit(char):
            return Token(TokenType.INT, self._read_while(is_digit))

        if char in DOUBLES and self.peek_char() == DOUBLES[char][0][1]:
            literal, token_type = DOUBLES[char]
            self.position += len(literal)
            return Token(token_type, literal)

        self.position += 1
        return Token(SINGLES.get(char, TokenType.ILLEGAL), char)

    def _skip_whitespace(self):
        while self.char and self.char in WHITESPACE:
            self.position += 1

    def _read_while(self, predicate):
        """Consumes the maximal run of characters satisfying predicate and returns it."""
        start = self.position
        while self.char and predicate(self.char):
            self.position += 1
        return self.source[start:self.position]

    def __iter__(self):
        """Lazily yields tokens from the cursor up to and including the EOF token."""
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    def __repr__(self):
        return f"Lexer(position={self.position}, source='{self.source}')"
