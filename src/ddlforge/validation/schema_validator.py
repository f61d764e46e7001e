"""
Schema Validator
================

Structural and dialect checks run before any script or package is
generated. It is purely deterministic.

Validation never raises for malformed content: every problem found is
collected into a list of messages, in a stable order:

    1. table name present
    2. at least one field
    3. no duplicate field names (case-insensitive)
    4. dialect-specific checks, on the audit-injected fields
    5. schema level: at least one table, no duplicate table names,
       every foreign key resolves to an existing table and column

``validate_and_raise`` is the convenience wrapper used by the
orchestration layer.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..schema_model import (
    GenerationError,
    GenerationOptions,
    ResolvedGenerationOptions,
    SchemaDef,
    TableDef,
    resolve_generation_options,
)
from ..script_generation import DialectCapabilities, effective_fields, get_dialect


OptionsInput = Union[GenerationOptions, ResolvedGenerationOptions, dict[str, Any], None]
DialectInput = Union[DialectCapabilities, str, None]


# =============================================================================
# EXCEPTIONS
# =============================================================================

class SchemaValidationError(GenerationError):
    """Raised when a schema fails validation. Carries every message."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("Schema validation failed:\n" + "\n".join(self.errors))


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass
class ValidationResult:
    """Result of validating a schema."""
    is_valid: bool
    errors: list[str]

    @property
    def error_summary(self) -> str:
        """Get a formatted summary of all errors."""
        if self.is_valid:
            return "Schema is valid."
        return "\n".join(self.errors)


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _resolve_options(
    options: OptionsInput,
    dialect: Optional[DialectCapabilities],
) -> Optional[ResolvedGenerationOptions]:
    if isinstance(options, ResolvedGenerationOptions):
        return options
    if dialect is None:
        return None
    return resolve_generation_options(options, dialect.default_naming)


def _resolve_dialect(dialect: DialectInput) -> Optional[DialectCapabilities]:
    if dialect is None or isinstance(dialect, DialectCapabilities):
        return dialect
    return get_dialect(dialect)


def _duplicates(names: list[str]) -> list[str]:
    """Names seen more than once (case-insensitive), each reported once."""
    seen: set[str] = set()
    reported: set[str] = set()
    duplicates = []
    for name in names:
        key = name.lower()
        if key in seen and key not in reported:
            duplicates.append(name)
            reported.add(key)
        seen.add(key)
    return duplicates


def _validate_foreign_keys(schema: SchemaDef) -> list[str]:
    errors = []
    tables_by_key = {t.name.lower(): t for t in schema.tables}

    for table in schema.tables:
        for field in table.foreign_key_fields:
            ref = field.foreign_key
            target = tables_by_key.get(ref.referenced_table.lower())
            if target is None:
                errors.append(
                    f'Foreign key "{field.name}" in table "{table.name}" '
                    f'references non-existent table "{ref.referenced_table}"'
                )
                continue

            columns = {f.name.lower() for f in target.fields}
            if ref.referenced_column.lower() not in columns:
                errors.append(
                    f'Foreign key "{field.name}" in table "{table.name}" '
                    f'references non-existent column "{ref.referenced_column}" '
                    f'in table "{ref.referenced_table}"'
                )

    return errors


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def validate_table(
    table: TableDef,
    dialect: DialectInput = None,
    options: OptionsInput = None,
) -> list[str]:
    """
    Validate one table.

    Args:
        table: Table to check.
        dialect: Capability record or dialect name. Without one only the
            dialect-independent checks run.
        options: Generation options; decide whether audit columns are
            injected before the dialect checks.

    Returns:
        Error messages, empty when the table is valid.
    """
    errors: list[str] = []
    caps = _resolve_dialect(dialect)

    if not table.name or not table.name.strip():
        errors.append("Table name cannot be empty")

    if not table.fields:
        errors.append(f'Table "{table.name}" must have at least one field')

    duplicates = _duplicates([f.name for f in table.fields])
    if duplicates:
        errors.append(
            f'Duplicate field names in table "{table.name}": {", ".join(duplicates)}'
        )

    if caps is not None and caps.extra_validation is not None:
        resolved = _resolve_options(options, caps)
        errors.extend(caps.extra_validation(table, effective_fields(table, caps, resolved)))

    return errors


def validate_schema(
    schema: SchemaDef,
    dialect: DialectInput = None,
    options: OptionsInput = None,
) -> list[str]:
    """
    Validate a whole schema: every table, then the cross-table rules.

    When ``dialect`` is omitted the schema's own dialect tag is used.

    Raises:
        UnsupportedDialectError: If the dialect has no generator.
    """
    caps = _resolve_dialect(dialect if dialect is not None else schema.dialect)
    resolved = _resolve_options(options, caps)
    errors: list[str] = []

    for table in schema.tables:
        errors.extend(validate_table(table, caps, resolved))

    if not schema.tables:
        errors.append("Schema must contain at least one table")

    duplicates = _duplicates([t.name for t in schema.tables])
    if duplicates:
        errors.append(f"Duplicate table names found: {', '.join(duplicates)}")

    errors.extend(_validate_foreign_keys(schema))

    return errors


def check_schema(
    schema: SchemaDef,
    dialect: DialectInput = None,
    options: OptionsInput = None,
) -> ValidationResult:
    """Validate a schema and return a structured result."""
    errors = validate_schema(schema, dialect, options)
    return ValidationResult(is_valid=len(errors) == 0, errors=errors)


def validate_and_raise(
    schema: SchemaDef,
    dialect: DialectInput = None,
    options: OptionsInput = None,
) -> None:
    """
    Validate a schema and raise if invalid.

    Raises:
        SchemaValidationError: If any rule fails.
    """
    result = check_schema(schema, dialect, options)
    if not result.is_valid:
        raise SchemaValidationError(result.errors)
