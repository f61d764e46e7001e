"""
Orchestration Module
====================

The facade surrounding code calls: dialect selection, validation and
delegation to the script and package generators.

Public Interface:
-----------------
- generate_database_scripts, generate_table_script, validate_schema
- generate_crud_package, generate_crud_packages, preview_list_query
- supported_dialects, is_dialect_supported, lint_schema
"""

from .script_service import (
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

__all__ = [
    # Scripts
    "generate_database_scripts",
    "generate_table_script",
    "validate_schema",

    # Packages
    "generate_crud_package",
    "generate_crud_packages",
    "preview_list_query",
    "ListQueryPreview",

    # Dialects & linting
    "supported_dialects",
    "is_dialect_supported",
    "lint_schema",
]
