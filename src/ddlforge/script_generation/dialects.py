"""
Dialect Capabilities
====================

A dialect is described by a ``DialectCapabilities`` record: plain data
plus the emitter functions the assembler calls. Adding a dialect means
registering one more record; there is no class hierarchy.

Emitters receive ``(table, fields, options)`` where ``fields`` is the
table's field tuple after audit-column injection.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

from ..schema_model import (
    DIALECT_ALIASES,
    Dialect,
    FieldDef,
    GenerationError,
    NamingConvention,
    ResolvedGenerationOptions,
    TableDef,
)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class UnsupportedDialectError(GenerationError):
    """Raised when a dialect is unknown or has no generator yet."""

    def __init__(self, dialect: str, reason: str = "is not supported"):
        self.dialect = dialect
        super().__init__(f"Database dialect '{dialect}' {reason}")


# =============================================================================
# CAPABILITY RECORD
# =============================================================================

Fields = tuple[FieldDef, ...]
StatementEmitter = Callable[[TableDef, Fields, ResolvedGenerationOptions], str]
StatementListEmitter = Callable[[TableDef, Fields, ResolvedGenerationOptions], list[str]]
ExtraValidation = Callable[[TableDef, Fields], list[str]]


@dataclass(frozen=True)
class DialectCapabilities:
    """Everything the assembler and validator need from one dialect."""
    dialect: Dialect
    display_name: str
    drop_statement: StatementEmitter
    table_creation: StatementEmitter
    constraints: StatementListEmitter
    indexes: StatementListEmitter
    triggers: StatementListEmitter
    comments: StatementListEmitter
    timestamp_type: str
    current_timestamp: str
    default_naming: NamingConvention
    # Appended by the assembler after each trigger block
    block_terminator: str = "/"
    extra_validation: Optional[ExtraValidation] = None


# =============================================================================
# REGISTRY
# =============================================================================

# Dialect -> capabilities; None marks a known dialect without a generator.
_REGISTRY: dict[Dialect, Optional[DialectCapabilities]] = {
    Dialect.POSTGRESQL: None,
    Dialect.MYSQL: None,
    Dialect.SQLSERVER: None,
}


def register_dialect(capabilities: DialectCapabilities) -> None:
    """Make a dialect available to the assembler."""
    _REGISTRY[capabilities.dialect] = capabilities


def normalize_dialect(name: Union[Dialect, str]) -> Dialect:
    """
    Map a dialect name or alias to a Dialect.

    Raises:
        UnsupportedDialectError: If the name is not a known dialect.
    """
    if isinstance(name, Dialect):
        return name

    key = (name or "").strip().lower()
    if key in DIALECT_ALIASES:
        return DIALECT_ALIASES[key]
    try:
        return Dialect(key)
    except ValueError:
        raise UnsupportedDialectError(str(name)) from None


def get_dialect(name: Union[Dialect, str]) -> DialectCapabilities:
    """
    Select the capability record for a dialect.

    Never falls back to another dialect.

    Raises:
        UnsupportedDialectError: If the dialect is unknown or not implemented.
    """
    dialect = normalize_dialect(name)
    capabilities = _REGISTRY.get(dialect)
    if capabilities is None:
        raise UnsupportedDialectError(dialect.value, "is not implemented yet")
    return capabilities


def supported_dialects() -> list[str]:
    """Names of the dialects that have a generator."""
    return [d.value for d, caps in _REGISTRY.items() if caps is not None]


def is_dialect_supported(name: Union[Dialect, str]) -> bool:
    try:
        get_dialect(name)
    except UnsupportedDialectError:
        return False
    return True
