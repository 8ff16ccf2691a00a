"""
Tokenizer for the SavedVariables literal-table grammar.

Only what the addon writes is recognized: braces, brackets, commas, `=`,
double-quoted strings, integers, `true`/`false`/`nil` and bare identifiers.
Anything else is skipped; errors only surface in the parser.

Known limitations, kept for compatibility with existing files:
  - string escapes are not translated. A backslash makes the lexer step over
    the next character, so `\"` does not end the string, but the token value
    keeps the backslash pair as written.
  - numbers are integers only. `1.5` lexes as `1` and the rest is skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List
import logging

log = logging.getLogger(__name__)

WHITESPACE = " \t\r\n"


class TokenType(str, Enum):
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    COMMA = "COMMA"
    EQUALS = "EQUALS"
    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOL = "BOOL"
    NIL = "NIL"
    IDENT = "IDENT"
    EOF = "EOF"


SINGLE_CHAR_TOKENS = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    "=": TokenType.EQUALS,
}

KEYWORDS = {
    "true": TokenType.BOOL,
    "false": TokenType.BOOL,
    "nil": TokenType.NIL,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str

    def __str__(self) -> str:
        if self.type == TokenType.EOF:
            return "end of input"
        return f"{self.type.value} {self.value!r}"


def _is_alpha(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.tokens: List[Token] = []

    def _peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        if i < len(self.text):
            return self.text[i]
        return ""

    def lex(self) -> List[Token]:
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]

            if ch in WHITESPACE:
                self.pos += 1
                continue

            if ch == "-" and self._peek(1) == "-":
                self._skip_comment()
                continue

            kind = SINGLE_CHAR_TOKENS.get(ch)
            if kind is not None:
                self.tokens.append(Token(kind, ch))
                self.pos += 1
            elif ch == '"':
                self._lex_string()
            elif _is_digit(ch) or (ch == "-" and _is_digit(self._peek(1))):
                self._lex_number()
            elif _is_alpha(ch):
                self._lex_ident()
            else:
                self.pos += 1

        self.tokens.append(Token(TokenType.EOF, ""))
        return self.tokens

    def _skip_comment(self) -> None:
        end = self.text.find("\n", self.pos)
        self.pos = len(self.text) if end < 0 else end

    def _lex_string(self) -> None:
        self.pos += 1  # opening quote
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] != '"':
            if self.text[self.pos] == "\\":
                self.pos += 1
            self.pos += 1
        value = self.text[start:self.pos]
        self.pos += 1  # closing quote (past the end if unterminated)
        self.tokens.append(Token(TokenType.STRING, value))

    def _lex_number(self) -> None:
        start = self.pos
        if self.text[self.pos] == "-":
            self.pos += 1
        while self.pos < len(self.text) and _is_digit(self.text[self.pos]):
            self.pos += 1
        self.tokens.append(Token(TokenType.NUMBER, self.text[start:self.pos]))

    def _lex_ident(self) -> None:
        start = self.pos
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if not (_is_alpha(ch) or _is_digit(ch) or ch == "_"):
                break
            self.pos += 1
        word = self.text[start:self.pos]
        kind = KEYWORDS.get(word, TokenType.IDENT)
        self.tokens.append(Token(kind, word))


def tokenize(text: str) -> List[Token]:
    """Full token stream for `text`, always terminated by an EOF token."""
    tokens = Lexer(text).lex()
    log.debug("lexed %d tokens from %d characters", len(tokens), len(text))
    return tokens
