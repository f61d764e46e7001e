"""
Package Generation Module
=========================

CRUD package generation and the contract of the external utility
package the generated code calls.

Public Interface:
-----------------
- generate_package, generate_package_specification, generate_package_body
- generate_package_components, package_name, PackageComponents
- UtilityOperation, validate_pagination, validate_sorting, build_where_clause
"""

from .oracle_package_generator import (
    generate_package,
    generate_package_specification,
    generate_package_body,
    generate_package_components,
    package_name,
    sortable_columns,
    searchable_columns,
    PackageComponents,
    ERROR_MAPPINGS,
    PackageGenerationError,
)

from .utility_contract import (
    UtilityOperation,
    PaginationWindow,
    SortSpec,
    validate_pagination,
    validate_sorting,
    build_where_clause,
    escape_literal,
    SEARCH_TYPES,
    UtilityContractError,
)

__all__ = [
    # Package generation
    "generate_package",
    "generate_package_specification",
    "generate_package_body",
    "generate_package_components",
    "package_name",
    "sortable_columns",
    "searchable_columns",
    "PackageComponents",
    "ERROR_MAPPINGS",

    # Utility contract
    "UtilityOperation",
    "PaginationWindow",
    "SortSpec",
    "validate_pagination",
    "validate_sorting",
    "build_where_clause",
    "escape_literal",
    "SEARCH_TYPES",

    # Exceptions
    "PackageGenerationError",
    "UtilityContractError",
]
