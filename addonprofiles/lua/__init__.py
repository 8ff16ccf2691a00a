"""
SavedVariables reading.

Two ways to turn file text into a Database:
  - structured: tokenize -> parse_table -> map_database
  - fallback: pattern extraction, used only when the structured parse
    raises MalformedTable
"""

from __future__ import annotations

from pathlib import Path
import logging

from addonprofiles.core.errors import MalformedTable
from addonprofiles.core.types import Database

from .fallback import extract_database
from .lexer import Token, TokenType, tokenize
from .mapper import build_profile, map_database
from .parser import DATABASE_VAR_NAME, TableParser, parse_saved_variables, parse_table
from .serializer import dump_assignment, dumps

log = logging.getLogger(__name__)


def parse_structured(text: str, var_name: str = DATABASE_VAR_NAME) -> Database:
    return map_database(parse_saved_variables(text, var_name))


def parse(text: str, var_name: str = DATABASE_VAR_NAME) -> Database:
    try:
        return parse_structured(text, var_name)
    except MalformedTable as e:
        log.warning("structured parse of %s failed (%s); using fallback extraction", var_name, e)
        return extract_database(text, var_name)


def parse_file(path: Path, var_name: str = DATABASE_VAR_NAME) -> Database:
    return parse(path.read_text(encoding="utf-8", errors="replace"), var_name)


__all__ = [
    "DATABASE_VAR_NAME",
    "TableParser",
    "Token",
    "TokenType",
    "build_profile",
    "dump_assignment",
    "dumps",
    "extract_database",
    "map_database",
    "parse",
    "parse_file",
    "parse_saved_variables",
    "parse_structured",
    "parse_table",
    "tokenize",
]
