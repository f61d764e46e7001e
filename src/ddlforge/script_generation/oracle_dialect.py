"""
Oracle Dialect
==============

Oracle emitters for drop, create, constraint, index, trigger and comment
statements, plus the Oracle-specific table checks.

Every constraint is a separate ALTER TABLE statement; CREATE TABLE only
lists column names, types and defaults.
"""

from ..schema_model import (
    ConstraintKind,
    Dialect,
    NamingConvention,
    ResolvedGenerationOptions,
    TableDef,
)
from .constraint_namer import constraint_name
from .dialects import DialectCapabilities, Fields, register_dialect


# =============================================================================
# CONSTANTS
# =============================================================================

ORACLE_TIMESTAMP_TYPE = "TIMESTAMP"
ORACLE_CURRENT_TIMESTAMP = "CURRENT_TIMESTAMP"
ORACLE_BLOCK_TERMINATOR = "/"

# Width of the column-name column in CREATE TABLE
COLUMN_NAME_WIDTH = 15
INDENT = "   "

ORACLE_NAMING_CONVENTION = NamingConvention(
    primary_key="{table}_pk",
    foreign_key="{table}_{column}_fk",
    unique="{table}_{column}_uk",
    check="{table}_{column}_chk",
    not_null="{table}_{column}_nn",
    index="{table}_{column}_idx",
)

# A declared type is valid when it starts with one of these.
ORACLE_TYPE_PREFIXES = (
    "NUMBER",
    "INTEGER",
    "FLOAT",
    "BINARY_FLOAT",
    "BINARY_DOUBLE",
    "VARCHAR2",
    "NVARCHAR2",
    "CHAR",
    "NCHAR",
    "CLOB",
    "NCLOB",
    "DATE",
    "TIMESTAMP",
    "INTERVAL YEAR TO MONTH",
    "INTERVAL DAY TO SECOND",
    "RAW",
    "LONG RAW",
    "BLOB",
    "BFILE",
    "ROWID",
    "UROWID",
)


def quote_literal(text: str) -> str:
    """Render text as an Oracle string literal, doubling single quotes."""
    return "'" + text.replace("'", "''") + "'"


def is_valid_oracle_type(data_type: str) -> bool:
    return data_type.strip().upper().startswith(ORACLE_TYPE_PREFIXES)


# =============================================================================
# EMITTERS
# =============================================================================

def _drop_statement(table: TableDef, fields: Fields, options: ResolvedGenerationOptions) -> str:
    return f"DROP TABLE {table.name} CASCADE CONSTRAINTS PURGE;"


def _table_creation(table: TableDef, fields: Fields, options: ResolvedGenerationOptions) -> str:
    columns = []
    for field in fields:
        definition = f"{field.name.ljust(COLUMN_NAME_WIDTH)} {field.type}"
        # Primary keys never carry a default
        if field.default and not field.is_primary_key:
            definition += f" DEFAULT {field.default}"
        columns.append(INDENT + definition)

    return "\n".join([
        f"CREATE TABLE {table.name} (",
        ",\n".join(columns),
        ");",
    ])


def _constraints(table: TableDef, fields: Fields, options: ResolvedGenerationOptions) -> list[str]:
    naming = options.naming_convention
    statements: list[str] = []

    pk_columns = [f.name for f in fields if f.is_primary_key]
    if pk_columns:
        name = constraint_name(naming, ConstraintKind.PRIMARY_KEY, table.name)
        statements.append(
            f"ALTER TABLE {table.name}\n"
            f"{INDENT}ADD CONSTRAINT {name} PRIMARY KEY ({', '.join(pk_columns)})\n"
            f"{INDENT}   USING INDEX ENABLE;"
        )

    for field in fields:
        if not field.nullable and not field.is_primary_key:
            name = constraint_name(naming, ConstraintKind.NOT_NULL, table.name, field.name)
            statements.append(
                f"ALTER TABLE {table.name} MODIFY (\n"
                f"{INDENT}{field.name}\n"
                f"{INDENT}   CONSTRAINT {name} NOT NULL\n"
                f");"
            )

    for field in fields:
        if field.is_unique and not field.is_primary_key:
            name = constraint_name(naming, ConstraintKind.UNIQUE, table.name, field.name)
            statements.append(
                f"ALTER TABLE {table.name}\n"
                f"{INDENT}ADD CONSTRAINT {name} UNIQUE ({field.name});"
            )

    for field in fields:
        if field.check_constraint:
            name = constraint_name(naming, ConstraintKind.CHECK, table.name, field.name)
            statements.append(
                f"ALTER TABLE {table.name}\n"
                f"{INDENT}ADD CONSTRAINT {name} CHECK ({field.check_constraint});"
            )

    for field in fields:
        ref = field.foreign_key
        if ref is None:
            continue
        name = constraint_name(naming, ConstraintKind.FOREIGN_KEY, table.name, field.name)
        statements.append(
            f"ALTER TABLE {table.name}\n"
            f"{INDENT}ADD CONSTRAINT {name} FOREIGN KEY ({field.name})\n"
            f"{INDENT}   REFERENCES {ref.referenced_table} ({ref.referenced_column});"
        )

    return statements


def _indexes(table: TableDef, fields: Fields, options: ResolvedGenerationOptions) -> list[str]:
    statements = []
    for field in fields:
        # Primary key and unique columns already have a backing index
        if not field.index or field.is_primary_key or field.is_unique:
            continue
        name = constraint_name(
            options.naming_convention, ConstraintKind.INDEX, table.name, field.name
        )
        statements.append(
            f"CREATE INDEX {name} ON {table.name} (\n"
            f"{INDENT}{field.name}\n"
            f");"
        )
    return statements


def _triggers(table: TableDef, fields: Fields, options: ResolvedGenerationOptions) -> list[str]:
    if not options.include_audit_columns:
        return []

    updated_at = options.audit_column_names.updated_at
    trigger_name = f"trg_{table.name}_{updated_at}"
    return [
        f'-- Trigger to automatically update "{updated_at}" on row update\n'
        f"CREATE OR REPLACE TRIGGER {trigger_name}\n"
        f"{INDENT}BEFORE UPDATE ON {table.name}\n"
        f"{INDENT}FOR EACH ROW\n"
        f"BEGIN\n"
        f"{INDENT}:NEW.{updated_at} := {ORACLE_CURRENT_TIMESTAMP};\n"
        "END;"
    ]


def _comments(table: TableDef, fields: Fields, options: ResolvedGenerationOptions) -> list[str]:
    statements = []
    if table.comment:
        statements.append(
            f"COMMENT ON TABLE {table.name} IS {quote_literal(table.comment)};"
        )
    for field in fields:
        if field.comment:
            statements.append(
                f"COMMENT ON COLUMN {table.name}.{field.name} IS {quote_literal(field.comment)};"
            )
    return statements


# =============================================================================
# VALIDATION
# =============================================================================

def validate_oracle_table(table: TableDef, fields: Fields) -> list[str]:
    """
    Oracle checks on the audit-injected field list.

    - at least one primary key column
    - every declared type starts with a recognised Oracle type
    - more than one self-referencing foreign key is flagged
    """
    errors = []

    if not any(f.is_primary_key for f in fields):
        errors.append(
            f'Table "{table.name}" must have at least one primary key column'
        )

    for field in fields:
        if not is_valid_oracle_type(field.type):
            errors.append(
                f'Invalid Oracle data type "{field.type}" for column '
                f'"{field.name}" in table "{table.name}"'
            )

    self_references = [
        f for f in fields
        if f.foreign_key is not None
        and f.foreign_key.referenced_table.lower() == table.name.lower()
    ]
    if len(self_references) > 1:
        errors.append(
            f'Table "{table.name}" has multiple self-referencing foreign keys '
            f'which may cause issues'
        )

    return errors


# =============================================================================
# REGISTRATION
# =============================================================================

ORACLE = DialectCapabilities(
    dialect=Dialect.ORACLE,
    display_name="Oracle",
    drop_statement=_drop_statement,
    table_creation=_table_creation,
    constraints=_constraints,
    indexes=_indexes,
    triggers=_triggers,
    comments=_comments,
    timestamp_type=ORACLE_TIMESTAMP_TYPE,
    current_timestamp=ORACLE_CURRENT_TIMESTAMP,
    default_naming=ORACLE_NAMING_CONVENTION,
    block_terminator=ORACLE_BLOCK_TERMINATOR,
    extra_validation=validate_oracle_table,
)

register_dialect(ORACLE)
