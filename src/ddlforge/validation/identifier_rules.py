"""
Identifier Rules
================

Non-fatal naming checks. ``lint_schema`` returns warnings about
identifiers that are likely to cause trouble in the target database;
they never block generation.
"""

import re
from typing import Optional, Union

from ..schema_model import Dialect, SchemaDef
from ..script_generation import UnsupportedDialectError, normalize_dialect


# =============================================================================
# CONSTANTS
# =============================================================================

MAX_IDENTIFIER_LENGTH = 30

IDENTIFIER_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_]*$")

_COMMON_RESERVED_WORDS = frozenset({
    "SELECT", "INSERT", "UPDATE", "DELETE", "CREATE", "DROP", "ALTER",
    "TABLE", "INDEX", "VIEW", "SEQUENCE", "TRIGGER", "PROCEDURE", "FUNCTION",
    "FROM", "WHERE", "ORDER", "GROUP", "HAVING", "UNION", "JOIN", "INNER",
    "LEFT", "RIGHT", "FULL", "OUTER", "ON", "AS", "IS", "NOT", "NULL", "AND",
    "OR", "IN", "EXISTS", "BETWEEN", "LIKE", "DISTINCT", "ALL", "ANY", "SOME",
    "CASE", "WHEN", "THEN", "ELSE", "END", "IF", "LOOP", "WHILE", "FOR",
    "CURSOR", "FETCH", "OPEN", "CLOSE", "COMMIT", "ROLLBACK", "SAVEPOINT",
    "GRANT", "REVOKE", "PUBLIC", "ROLE", "USER", "SYSTEM", "ADMIN",
})

RESERVED_WORDS: dict[Dialect, frozenset[str]] = {
    Dialect.ORACLE: _COMMON_RESERVED_WORDS | {"PACKAGE"},
    Dialect.POSTGRESQL: _COMMON_RESERVED_WORDS,
}


def _as_dialect(dialect: Union[Dialect, str]) -> Optional[Dialect]:
    """The Dialect for a name, or None when the name is unknown."""
    try:
        return normalize_dialect(dialect)
    except UnsupportedDialectError:
        return None


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def sanitize_identifier(name: str) -> str:
    """
    Make a name usable as an identifier.

    Characters outside ``[A-Za-z0-9_]`` become underscores, a leading digit
    gets an underscore prefix, and the result is lower-cased.
    """
    cleaned = re.sub(r"[^a-zA-Z0-9_]", "_", name)
    if cleaned[:1].isdigit():
        cleaned = "_" + cleaned
    return cleaned.lower()


def is_reserved_word(name: str, dialect: Union[Dialect, str]) -> bool:
    words = RESERVED_WORDS.get(_as_dialect(dialect), frozenset())
    return name.upper() in words


def escape_reserved_word(name: str, dialect: Union[Dialect, str]) -> str:
    """Quote a reserved identifier the way the dialect expects."""
    resolved = _as_dialect(dialect)
    if not is_reserved_word(name, dialect):
        return name
    if resolved is Dialect.ORACLE:
        return f'"{name.upper()}"'
    if resolved is Dialect.POSTGRESQL:
        return f'"{name.lower()}"'
    return f'"{name}"'


def check_identifier(name: str, kind: str = "Field") -> list[str]:
    """Length and character-set warnings for one identifier."""
    if not name or not name.strip():
        return [f"{kind} name cannot be empty"]

    warnings = []
    if len(name) > MAX_IDENTIFIER_LENGTH:
        warnings.append(
            f'{kind} name "{name}" is too long (max {MAX_IDENTIFIER_LENGTH} characters)'
        )
    if not IDENTIFIER_PATTERN.match(name):
        warnings.append(
            f"{kind} name \"{name}\" contains invalid characters or doesn't start with a letter"
        )
    return warnings


def lint_schema(schema: SchemaDef, dialect: Union[Dialect, str, None] = None) -> list[str]:
    """
    Collect naming warnings for every table and field of a schema.

    Args:
        schema: Schema to inspect.
        dialect: Dialect for the reserved-word check; defaults to the
            schema's own dialect tag.

    Returns:
        Warning messages, in table and field order.
    """
    dialect = dialect if dialect is not None else schema.dialect
    warnings: list[str] = []

    for table in schema.tables:
        warnings.extend(check_identifier(table.name, "Table"))
        if table.name and is_reserved_word(table.name, dialect):
            warnings.append(f'Table name "{table.name}" is a reserved word')

        for field in table.fields:
            warnings.extend(check_identifier(field.name, "Field"))
            if field.name and is_reserved_word(field.name, dialect):
                warnings.append(
                    f'Field name "{field.name}" in table "{table.name}" is a reserved word'
                )

    return warnings
