"""
Script Service
==============

The single entry point surrounding code calls. Each operation selects
the dialect first, validates, then delegates to the generators.

Public Interface:
-----------------
    def generate_database_scripts(schema, options=None, generated_on=None) -> str
    def generate_table_script(table, dialect="oracle", options=None, generated_on=None) -> str
    def validate_schema(schema, options=None) -> list[str]
    def generate_crud_package(table, dialect="oracle", options=None) -> str
    def generate_crud_packages(schema, options=None) -> dict[str, str]
    def preview_list_query(table, ...) -> ListQueryPreview

Failure Policy:
---------------
- UnsupportedDialectError is raised before any other work.
- A non-empty validation result raises SchemaValidationError carrying
  every message; nothing is generated.
- DependencyCycleError aborts generation; no partial text is returned.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Union

from ..package_generation import (
    PaginationWindow,
    SortSpec,
    build_where_clause,
    generate_package,
    package_name,
    searchable_columns,
    sortable_columns,
    validate_pagination,
    validate_sorting,
)
from ..package_generation.oracle_package_generator import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from ..package_generation.utility_contract import SEARCH_PARTIAL
from ..schema_model import (
    Dialect,
    GenerationOptions,
    PackageOptions,
    SchemaDef,
    TableDef,
    resolve_generation_options,
    resolve_package_options,
)
from ..script_generation import (
    UnsupportedDialectError,
    get_dialect,
    order_tables,
)
from ..script_generation import assemble_script, generate_script_components
# Part of the facade surface
from ..script_generation import is_dialect_supported, supported_dialects
from ..validation import (
    SchemaValidationError,
    lint_schema,
    validate_and_raise,
    validate_table,
)
from ..validation import validate_schema as run_schema_validation


logger = logging.getLogger(__name__)

GenerationOptionsInput = Union[GenerationOptions, dict[str, Any], None]
PackageOptionsInput = Union[PackageOptions, dict[str, Any], None]

# Dialects with a CRUD package generator
PACKAGE_DIALECTS = frozenset({Dialect.ORACLE})


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass
class ListQueryPreview:
    """What a generated get_records call would run for a set of parameters."""
    table_name: str
    window: PaginationWindow
    sort: SortSpec
    where_clause: str
    count_sql: str
    page_sql: str


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _package_dialect(dialect: str):
    caps = get_dialect(dialect)
    if caps.dialect not in PACKAGE_DIALECTS:
        raise UnsupportedDialectError(caps.dialect.value, "has no CRUD package generator")
    return caps


def _package_validation_options(options: PackageOptions) -> GenerationOptions:
    """Script options that inject the same audit columns as the package."""
    return GenerationOptions(
        include_audit_columns=options.include_audit_columns,
        audit_column_names=options.audit_column_names,
    )


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def generate_database_scripts(
    schema: SchemaDef,
    options: GenerationOptionsInput = None,
    generated_on: Optional[date] = None,
) -> str:
    """
    Validate a schema and generate its complete DDL script.

    Args:
        schema: Dialect tag plus ordered tables.
        options: Partial generation options; unset values take defaults.
        generated_on: Date written to the header; today when omitted.

    Raises:
        UnsupportedDialectError: If the dialect has no generator.
        SchemaValidationError: If the schema is invalid.
        DependencyCycleError: If foreign keys form a cycle.
    """
    caps = get_dialect(schema.dialect)
    resolved = resolve_generation_options(options, caps.default_naming)
    logger.info(
        "Generating %s script for %d table(s)", caps.display_name, len(schema.tables)
    )

    validate_and_raise(schema, caps, resolved)
    components = generate_script_components(list(schema.tables), caps, resolved)

    logger.info(
        "Generated %s script with %d statement(s)", caps.display_name, components.statement_count
    )
    return assemble_script(components, caps, generated_on)


def generate_table_script(
    table: TableDef,
    dialect: str = Dialect.ORACLE.value,
    options: GenerationOptionsInput = None,
    generated_on: Optional[date] = None,
) -> str:
    """
    Generate the script for a single table.

    Only table-level rules are checked; foreign keys may point at tables
    that are not part of the call.
    """
    caps = get_dialect(dialect)
    resolved = resolve_generation_options(options, caps.default_naming)
    logger.info("Generating %s script for table %s", caps.display_name, table.name)

    errors = validate_table(table, caps, resolved)
    if errors:
        raise SchemaValidationError(errors)
    components = generate_script_components([table], caps, resolved)
    return assemble_script(components, caps, generated_on)


def validate_schema(schema: SchemaDef, options: GenerationOptionsInput = None) -> list[str]:
    """
    Validate a schema against its own dialect.

    Returns:
        Error messages, empty when the schema is valid.

    Raises:
        UnsupportedDialectError: If the dialect has no generator.
    """
    caps = get_dialect(schema.dialect)
    errors = run_schema_validation(schema, caps, options)
    logger.info(
        "Validated %d table(s): %d error(s)", len(schema.tables), len(errors)
    )
    return errors


def generate_crud_package(
    table: TableDef,
    dialect: str = Dialect.ORACLE.value,
    options: PackageOptionsInput = None,
) -> str:
    """
    Validate one table and generate its CRUD package.

    Raises:
        UnsupportedDialectError: If the dialect has no package generator.
        SchemaValidationError: If the table is invalid.
    """
    caps = _package_dialect(dialect)
    resolved = resolve_package_options(options)
    logger.info("Generating CRUD package for table %s", table.name)

    errors = validate_table(table, caps, _package_validation_options(resolved))
    if errors:
        raise SchemaValidationError(errors)
    return generate_package(table, resolved)


def generate_crud_packages(
    schema: SchemaDef,
    options: PackageOptionsInput = None,
) -> dict[str, str]:
    """
    Validate a schema and generate one CRUD package per table.

    Returns:
        dict mapping package name to package source, in dependency order.
    """
    caps = _package_dialect(schema.dialect)
    resolved = resolve_package_options(options)
    logger.info("Generating CRUD packages for %d table(s)", len(schema.tables))

    validate_and_raise(schema, caps, _package_validation_options(resolved))

    packages = {}
    for table in order_tables(list(schema.tables)):
        packages[package_name(table.name, resolved)] = generate_package(table, resolved)

    logger.info("Generated %d CRUD package(s)", len(packages))
    return packages


def preview_list_query(
    table: TableDef,
    page: int = DEFAULT_PAGE,
    page_size: int = DEFAULT_PAGE_SIZE,
    sort_by: Optional[str] = None,
    sort_order: str = "ASC",
    query: Optional[str] = None,
    search_type: str = SEARCH_PARTIAL,
    options: PackageOptionsInput = None,
) -> ListQueryPreview:
    """
    Show the SQL a generated get_records call would execute.

    Raises:
        UtilityContractError: If a parameter would be rejected by the
            utility package.
        PackageGenerationError: If the table has no primary key.
    """
    resolved = resolve_package_options(options)
    sortable = sortable_columns(table, resolved)
    searchable = searchable_columns(table, resolved)
    key_fields = table.primary_key_fields
    key_column = key_fields[0].name
    key_list = ", ".join(f.name for f in key_fields)

    window = validate_pagination(page, page_size)
    sort = validate_sorting(sort_by or key_column.lower(), sort_order, sortable)
    where_clause = build_where_clause(query, search_type, searchable)

    return ListQueryPreview(
        table_name=table.name,
        window=window,
        sort=sort,
        where_clause=where_clause,
        count_sql=f"SELECT COUNT(*) FROM {table.name} WHERE {where_clause}",
        page_sql=(
            f"SELECT {key_list} FROM {table.name} WHERE {where_clause} "
            f"ORDER BY {sort.clause} "
            f"OFFSET {window.offset} ROWS FETCH NEXT {window.limit} ROWS ONLY"
        ),
    )

