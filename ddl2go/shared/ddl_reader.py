"""Extraction of CREATE TABLE statements from MySQL DDL text."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Sequence

import sqlparse
from sqlparse import lexer
from sqlparse import tokens as T

from .errors import GeneratorError
from .naming import unquote_identifier, unquote_string

Token = tuple[Any, str]

# Leading keywords of table-level entries that do not declare a column
_CONSTRAINT_KEYWORDS: frozenset[str] = frozenset({
    "PRIMARY",
    "KEY",
    "INDEX",
    "UNIQUE",
    "CONSTRAINT",
    "FOREIGN",
    "FULLTEXT",
    "SPATIAL",
    "CHECK",
})

# Keywords that introduce a table body other than a column list
_NON_COLUMN_LIST_KEYWORDS: frozenset[str] = frozenset({"LIKE", "AS", "SELECT"})

# Column attributes; seen in the type position only when the type is missing
_COLUMN_ATTRIBUTE_KEYWORDS: frozenset[str] = frozenset({
    "NOT",
    "NULL",
    "DEFAULT",
    "PRIMARY",
    "KEY",
    "UNIQUE",
    "AUTO_INCREMENT",
    "COMMENT",
    "COLLATE",
    "CHARACTER",
    "REFERENCES",
    "CHECK",
    "GENERATED",
    "AS",
    "ON",
})


@dataclass(frozen=True, slots=True)
class ColumnDef:
    """A column definition as written in the DDL."""

    name: str
    type_name: str
    comment: str | None = None


@dataclass(frozen=True, slots=True)
class TableDef:
    """A parsed CREATE TABLE statement."""

    name: str
    columns: tuple[ColumnDef, ...]


def read_ddl(sql_path: Path) -> str:
    """Read a DDL file.

    Raises:
        GeneratorError: If the file cannot be read.
    """
    try:
        return sql_path.read_text(encoding="utf-8")
    except OSError as e:
        raise GeneratorError(f"Failed to read DDL file: {e}", str(sql_path)) from e


def split_statements(text: str) -> list[str]:
    """Split raw SQL text into individual statements."""
    return [piece for piece in sqlparse.split(text) if piece.strip()]


def _first_word(value: str) -> str:
    words = value.split()
    return words[0].upper() if words else ""


def _is_bare_word(token: Token) -> bool:
    ttype, value = token
    return ttype not in T.String and value[:1] not in ("`", "\"")


def _is_punct(token: Token, value: str | None = None) -> bool:
    ttype, text = token
    return ttype in T.Punctuation and (value is None or text == value)


def _significant_tokens(statement: str) -> list[Token]:
    return [
        (ttype, value)
        for ttype, value in lexer.tokenize(statement)
        if ttype not in T.Whitespace and ttype not in T.Comment
    ]


def _matching_paren(tokens: Sequence[Token], start: int) -> int | None:
    depth = 0
    for index in range(start, len(tokens)):
        if _is_punct(tokens[index], "("):
            depth += 1
        elif _is_punct(tokens[index], ")"):
            depth -= 1
            if depth == 0:
                return index
    return None


def _split_items(tokens: Sequence[Token]) -> Iterator[list[Token]]:
    """Split a table body on top-level commas."""
    depth = 0
    item: list[Token] = []
    for token in tokens:
        if _is_punct(token, "("):
            depth += 1
        elif _is_punct(token, ")"):
            depth -= 1
        elif depth == 0 and _is_punct(token, ","):
            yield item
            item = []
            continue
        item.append(token)
    yield item


def _parse_table_name(tokens: Sequence[Token]) -> str | None:
    """Resolve ``name`` or ``schema.name`` to the bare table name."""
    if not tokens or len(tokens) % 2 == 0:
        return None
    parts: list[str] = []
    for index, token in enumerate(tokens):
        if index % 2:
            if not _is_punct(token, "."):
                return None
            continue
        ttype, value = token
        if ttype in T.Punctuation or ttype in T.Error:
            return None
        if _is_bare_word(token) and _first_word(value) in _NON_COLUMN_LIST_KEYWORDS:
            return None
        parts.append(unquote_identifier(value))
    return parts[-1]


def _parse_comment(item: Sequence[Token]) -> str | None:
    depth = 0
    for index in range(2, len(item)):
        value = item[index][1]
        if _is_punct(item[index], "("):
            depth += 1
        elif _is_punct(item[index], ")"):
            depth -= 1
        elif depth == 0 and value.upper() == "COMMENT" and index + 1 < len(item):
            _, literal = item[index + 1]
            if literal[:1] in ("'", '"'):
                return unquote_string(literal)
    return None


def _parse_column(item: Sequence[Token]) -> ColumnDef | None:
    if len(item) < 2:
        return None
    (name_type, name), (kind_type, kind) = item[0], item[1]
    if name_type in T.Punctuation or name_type in T.String.Single:
        return None
    if kind_type in T.Punctuation or kind_type in T.String or kind_type in T.Error:
        return None
    if _first_word(kind) in _COLUMN_ATTRIBUTE_KEYWORDS:
        return None
    return ColumnDef(
        name=unquote_identifier(name),
        type_name=kind.split()[0].lower(),
        comment=_parse_comment(item),
    )


def parse_create_table(statement: str) -> TableDef | None:
    """Parse a single statement into a TableDef.

    Returns None for anything that is not a ``CREATE TABLE`` with a column
    list, including malformed statements.
    """
    tokens = _significant_tokens(statement)
    if not tokens or _first_word(tokens[0][1]) != "CREATE":
        return None

    index = 1
    while index < len(tokens) and tokens[index][1].upper() == "TEMPORARY":
        index += 1
    if index >= len(tokens) or tokens[index][1].upper() != "TABLE":
        return None
    index += 1
    while (
        index < len(tokens)
        and tokens[index][0] in T.Keyword
        and set(tokens[index][1].upper().split()) <= {"IF", "NOT", "EXISTS"}
    ):
        index += 1

    open_paren = next(
        (i for i in range(index, len(tokens)) if _is_punct(tokens[i], "(")),
        None,
    )
    if open_paren is None:
        return None
    table_name = _parse_table_name(tokens[index:open_paren])
    if table_name is None:
        return None
    close_paren = _matching_paren(tokens, open_paren)
    if close_paren is None:
        return None

    columns: list[ColumnDef] = []
    for item in _split_items(tokens[open_paren + 1:close_paren]):
        if not item:
            return None
        if _is_bare_word(item[0]) and _first_word(item[0][1]) in _CONSTRAINT_KEYWORDS:
            continue
        column = _parse_column(item)
        if column is None:
            return None
        columns.append(column)

    if not columns:
        return None
    return TableDef(name=table_name, columns=tuple(columns))


def extract_tables(text: str) -> list[TableDef]:
    """Return the CREATE TABLE statements in ``text``, in source order.

    Statements that are not table definitions, or that fail to parse, are
    skipped without being reported.
    """
    tables: list[TableDef] = []
    for statement in split_statements(text):
        table = parse_create_table(statement)
        if table is not None:
            tables.append(table)
    return tables
