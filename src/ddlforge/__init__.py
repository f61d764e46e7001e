"""
ddlforge
========

Turns a dialect-agnostic relational schema into ordered DDL scripts and
per-table CRUD packages.

    from ddlforge import SchemaDef, generate_database_scripts

    schema = SchemaDef.model_validate(project["database"])
    script = generate_database_scripts(schema)
"""

from .schema_model import (
    FieldDef,
    ForeignKeyRef,
    TableDef,
    SchemaDef,
    Dialect,
    NamingConvention,
    AuditColumnNames,
    GenerationOptions,
    PackageOptions,
    GenerationError,
)

from .orchestration import (
    ListQueryPreview,
    generate_database_scripts,
    generate_table_script,
    validate_schema,
    generate_crud_package,
    generate_crud_packages,
    preview_list_query,
    supported_dialects,
    is_dialect_supported,
    lint_schema,
)

from .script_generation import DependencyCycleError, UnsupportedDialectError
from .validation import SchemaValidationError
from .package_generation import PackageGenerationError, UtilityContractError

__all__ = [
    # Models
    "FieldDef",
    "ForeignKeyRef",
    "TableDef",
    "SchemaDef",
    "Dialect",
    "NamingConvention",
    "AuditColumnNames",
    "GenerationOptions",
    "PackageOptions",

    # Facade
    "ListQueryPreview",
    "generate_database_scripts",
    "generate_table_script",
    "validate_schema",
    "generate_crud_package",
    "generate_crud_packages",
    "preview_list_query",
    "supported_dialects",
    "is_dialect_supported",
    "lint_schema",

    # Exceptions
    "GenerationError",
    "SchemaValidationError",
    "DependencyCycleError",
    "UnsupportedDialectError",
    "PackageGenerationError",
    "UtilityContractError",
]
