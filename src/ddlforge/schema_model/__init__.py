"""
Schema Model Module
===================

Passive data structures describing tables, fields, constraints and the
options that drive script and package generation.

Public Interface:
-----------------
- FieldDef, ForeignKeyRef, TableDef, SchemaDef, Dialect
- NamingConvention, ConstraintKind, AuditColumnNames
- GenerationOptions, ResolvedGenerationOptions, resolve_generation_options
- PackageOptions, resolve_package_options
"""

from .models import (
    # Models
    FieldDef,
    ForeignKeyRef,
    TableDef,
    SchemaDef,
    Dialect,
    DIALECT_ALIASES,

    # Exceptions
    GenerationError,
)

from .options import (
    ConstraintKind,
    NamingConvention,
    AuditColumnNames,
    GenerationOptions,
    ResolvedGenerationOptions,
    resolve_generation_options,
    PackageOptions,
    resolve_package_options,
)

__all__ = [
    # Models
    "FieldDef",
    "ForeignKeyRef",
    "TableDef",
    "SchemaDef",
    "Dialect",
    "DIALECT_ALIASES",

    # Options
    "ConstraintKind",
    "NamingConvention",
    "AuditColumnNames",
    "GenerationOptions",
    "ResolvedGenerationOptions",
    "resolve_generation_options",
    "PackageOptions",
    "resolve_package_options",

    # Exceptions
    "GenerationError",
]
