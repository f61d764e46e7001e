"""
Validation Module
=================

Schema validation (blocking) and identifier linting (advisory).

Public Interface:
-----------------
- validate_table, validate_schema, check_schema, validate_and_raise
- ValidationResult, SchemaValidationError
- lint_schema, sanitize_identifier, is_reserved_word, escape_reserved_word
"""

from .schema_validator import (
    validate_table,
    validate_schema,
    check_schema,
    validate_and_raise,
    ValidationResult,
    SchemaValidationError,
)

from .identifier_rules import (
    lint_schema,
    check_identifier,
    sanitize_identifier,
    is_reserved_word,
    escape_reserved_word,
    RESERVED_WORDS,
)

__all__ = [
    # Schema validation
    "validate_table",
    "validate_schema",
    "check_schema",
    "validate_and_raise",
    "ValidationResult",

    # Identifier rules
    "lint_schema",
    "check_identifier",
    "sanitize_identifier",
    "is_reserved_word",
    "escape_reserved_word",
    "RESERVED_WORDS",

    # Exceptions
    "SchemaValidationError",
]
