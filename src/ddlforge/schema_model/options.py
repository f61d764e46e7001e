"""
Generation Options
==================

Option models for DDL script generation and CRUD package generation.

Callers pass a partial ``GenerationOptions`` (or a plain dict, or nothing);
``resolve_generation_options`` turns it into a fully populated, frozen
``ResolvedGenerationOptions`` using the active dialect's naming convention.
Caller-supplied values are never mutated.
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OptionsModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# NAMING CONVENTION
# =============================================================================

class ConstraintKind(str, Enum):
    """Kinds of named objects covered by a naming convention."""
    PRIMARY_KEY = "primary_key"
    FOREIGN_KEY = "foreign_key"
    UNIQUE = "unique"
    CHECK = "check"
    NOT_NULL = "not_null"
    INDEX = "index"


class NamingConvention(OptionsModel):
    """One template per constraint kind, using {table} and {column} tokens."""
    primary_key: str
    foreign_key: str
    unique: str
    check: str
    not_null: str
    index: str

    def template_for(self, kind: Union[ConstraintKind, str]) -> str:
        try:
            kind = ConstraintKind(kind)
        except ValueError:
            raise KeyError(f"Unknown constraint kind: {kind}") from None
        return getattr(self, kind.value)


# =============================================================================
# AUDIT COLUMNS
# =============================================================================

class AuditColumnNames(OptionsModel):
    """Names of the audit columns. Only the timestamps are injected."""
    created_at: str = "created_at"
    updated_at: str = "updated_at"
    created_by: str = "created_by"
    updated_by: str = "updated_by"


# =============================================================================
# SCRIPT GENERATION OPTIONS
# =============================================================================

class GenerationOptions(OptionsModel):
    """Caller-facing script options; unset values take the stated defaults."""
    include_drop_statements: bool = True
    include_comments: bool = True
    include_audit_columns: bool = True
    audit_column_names: AuditColumnNames = AuditColumnNames()
    # Host project files spell this key constraintNamingConvention
    naming_convention: Optional[NamingConvention] = Field(
        default=None,
        validation_alias=AliasChoices(
            "naming_convention", "namingConvention", "constraintNamingConvention"
        ),
    )


class ResolvedGenerationOptions(OptionsModel):
    """Fully populated script options handed to the dialect emitters."""
    include_drop_statements: bool
    include_comments: bool
    include_audit_columns: bool
    audit_column_names: AuditColumnNames
    naming_convention: NamingConvention


def resolve_generation_options(
    options: Union[GenerationOptions, dict[str, Any], None],
    default_naming: NamingConvention,
) -> ResolvedGenerationOptions:
    """
    Fill in every unset option.

    Args:
        options: Partial options as a model, a dict (snake_case or
            camelCase keys) or None.
        default_naming: Naming convention of the active dialect, used when
            the caller does not supply one.

    Returns:
        A new, frozen ResolvedGenerationOptions.
    """
    if options is None:
        options = GenerationOptions()
    elif isinstance(options, dict):
        options = GenerationOptions.model_validate(options)

    return ResolvedGenerationOptions(
        include_drop_statements=options.include_drop_statements,
        include_comments=options.include_comments,
        include_audit_columns=options.include_audit_columns,
        audit_column_names=options.audit_column_names,
        naming_convention=options.naming_convention or default_naming,
    )


# =============================================================================
# PACKAGE GENERATION OPTIONS
# =============================================================================

class PackageOptions(OptionsModel):
    """Toggles and names for generated CRUD packages."""
    include_validation: bool = True
    include_exception_handling: bool = True
    include_json_support: bool = True
    include_pagination: bool = True
    include_search: bool = True
    include_audit_columns: bool = True
    audit_column_names: AuditColumnNames = AuditColumnNames()
    package_prefix: str = "pkg_"
    utility_package: str = "p_utilities"


def resolve_package_options(
    options: Union[PackageOptions, dict[str, Any], None],
) -> PackageOptions:
    """Accept None, a dict or a PackageOptions and return a PackageOptions."""
    if options is None:
        return PackageOptions()
    if isinstance(options, dict):
        return PackageOptions.model_validate(options)
    return options
