"""
Recursive-descent parser for SavedVariables tables.

Grammar (the subset the addon writes):
    table := "{" { entry | "," } "}"
    entry := "[" STRING "]" "=" value
    value := table | STRING | NUMBER | BOOL | NIL

Each parse owns its own cursor (TableParser instance); nothing is shared
between parses.
"""

from __future__ import annotations

from typing import List
import logging

from addonprofiles.core.errors import MalformedTable
from addonprofiles.core.types import LuaTable, LuaValue
from addonprofiles.lua.lexer import Token, TokenType, tokenize

log = logging.getLogger(__name__)

DATABASE_VAR_NAME = "AddonProfilesDB"

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_EOF = Token(TokenType.EOF, "")


def _to_int(raw: str) -> int:
    # Lexer guarantees an optional "-" followed by at least one digit.
    value = int(raw)
    return max(INT64_MIN, min(INT64_MAX, value))


class TableParser:
    def __init__(self, tokens: List[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return _EOF

    def next(self) -> Token:
        tok = self.peek()
        self.pos += 1
        return tok

    def expect(self, type: TokenType) -> Token:
        index = self.pos
        tok = self.next()
        if tok.type != type:
            raise MalformedTable(f"expected {type.value}, got {tok} at token {index}", token=tok, index=index)
        return tok

    def seek_assignment(self, name: str) -> bool:
        """
        Move the cursor just past `<name> =`. If the assignment is not found,
        the cursor is left on the first `{` in the stream (or at EOF) and
        False is returned.
        """
        for i in range(len(self.tokens) - 1):
            tok = self.tokens[i]
            if tok.type == TokenType.IDENT and tok.value == name and self.tokens[i + 1].type == TokenType.EQUALS:
                self.pos = i + 2
                return True

        self.pos = next(
            (i for i, tok in enumerate(self.tokens) if tok.type == TokenType.LBRACE),
            len(self.tokens),
        )
        return False

    def parse_table(self) -> LuaTable:
        result: LuaTable = {}
        self.expect(TokenType.LBRACE)

        while self.peek().type not in (TokenType.RBRACE, TokenType.EOF):
            tok = self.peek()
            if tok.type == TokenType.LBRACKET:
                self.next()
                key = self.expect(TokenType.STRING).value
                self.expect(TokenType.RBRACKET)
                self.expect(TokenType.EQUALS)
                result[key] = self.parse_value()
            elif tok.type == TokenType.COMMA:
                self.next()
            else:
                raise MalformedTable(f"unexpected {tok} at token {self.pos}", token=tok, index=self.pos)

        self.expect(TokenType.RBRACE)
        return result

    def parse_value(self) -> LuaValue:
        tok = self.peek()
        if tok.type == TokenType.LBRACE:
            return self.parse_table()

        self.next()
        if tok.type == TokenType.STRING:
            return tok.value
        if tok.type == TokenType.NUMBER:
            return _to_int(tok.value)
        if tok.type == TokenType.BOOL:
            return tok.value == "true"
        if tok.type == TokenType.NIL:
            return None
        raise MalformedTable(f"unexpected {tok} at token {self.pos - 1}", token=tok, index=self.pos - 1)


def parse_table(tokens: List[Token]) -> LuaTable:
    """Parse one table starting at the first token."""
    return TableParser(tokens).parse_table()


def parse_saved_variables(text: str, var_name: str = DATABASE_VAR_NAME) -> LuaTable:
    """
    Parse the table assigned to `var_name` in a SavedVariables file.
    Raises MalformedTable if no table can be read, including tables nested
    deeper than the interpreter's recursion limit.
    """
    parser = TableParser(tokenize(text))
    if parser.seek_assignment(var_name):
        log.debug("found %s assignment at token %d", var_name, parser.pos)
    else:
        log.debug("assignment to %s not found, parsing first table in input", var_name)
    try:
        return parser.parse_table()
    except RecursionError as e:
        raise MalformedTable("table nested too deeply", index=parser.pos) from e
