"""
Script Generation Module
========================

Dependency ordering, constraint naming, audit-column injection and the
dialect emitters that make up a DDL script.

Importing this package registers the Oracle dialect.

Public Interface:
-----------------
- order_tables, drop_order, build_dependency_graph
- constraint_name
- inject_audit_columns
- get_dialect, supported_dialects, is_dialect_supported
- generate_script_components, assemble_script
"""

from .dependency_resolver import (
    build_dependency_graph,
    order_tables,
    drop_order,
    DependencyCycleError,
)

from .constraint_namer import constraint_name

from .audit_columns import inject_audit_columns, is_audit_column

from .dialects import (
    DialectCapabilities,
    get_dialect,
    normalize_dialect,
    register_dialect,
    supported_dialects,
    is_dialect_supported,
    UnsupportedDialectError,
)

from .oracle_dialect import ORACLE, ORACLE_NAMING_CONVENTION

from .assembler import (
    ScriptComponents,
    effective_fields,
    generate_script_components,
    assemble_script,
)

__all__ = [
    # Dependency ordering
    "build_dependency_graph",
    "order_tables",
    "drop_order",

    # Naming & audit columns
    "constraint_name",
    "inject_audit_columns",
    "is_audit_column",

    # Dialects
    "DialectCapabilities",
    "get_dialect",
    "normalize_dialect",
    "register_dialect",
    "supported_dialects",
    "is_dialect_supported",
    "ORACLE",
    "ORACLE_NAMING_CONVENTION",

    # Assembly
    "ScriptComponents",
    "effective_fields",
    "generate_script_components",
    "assemble_script",

    # Exceptions
    "DependencyCycleError",
    "UnsupportedDialectError",
]
