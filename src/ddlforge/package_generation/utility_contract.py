"""
Utility Package Contract
========================

Generated package bodies call five operations of an external utility
package by name. This module names those operations and holds a Python
reference model of what each list-related operation does, so list
behaviour can be previewed and tested without a database.

Contract:
---------
validate_pagination_parameters
    page >= 1, 1 <= page_size <= 100; offset = (page - 1) * page_size.
validate_sorting_parameters
    sort_by (trimmed, lower-cased) must be in the comma-separated allow
    list; sort_order (upper-cased) must be ASC or DESC.
build_where_clause
    '1=1' for an empty query. Otherwise one condition per searchable
    field, OR-joined and parenthesised when there is more than one.
    The query text is embedded after doubling single quotes.
build_response / build_paginated_response
    JSON envelopes; not modelled here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union

from ..schema_model import GenerationError


# =============================================================================
# EXCEPTIONS
# =============================================================================

class UtilityContractError(GenerationError):
    """Raised when list parameters violate the utility contract."""
    pass


# =============================================================================
# CONSTANTS
# =============================================================================

class UtilityOperation(str, Enum):
    """Utility package operations called by generated code."""
    VALIDATE_PAGINATION = "validate_pagination_parameters"
    VALIDATE_SORTING = "validate_sorting_parameters"
    BUILD_WHERE_CLAUSE = "build_where_clause"
    BUILD_RESPONSE = "build_response"
    BUILD_PAGINATED_RESPONSE = "build_paginated_response"


MIN_PAGE = 1
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100

SORT_ORDERS = ("ASC", "DESC")

SEARCH_EXACT = "exact"
SEARCH_STARTS_WITH = "starts_with"
SEARCH_PARTIAL = "partial"
SEARCH_TYPES = (SEARCH_EXACT, SEARCH_STARTS_WITH, SEARCH_PARTIAL)

MATCH_ALL = "1=1"


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class PaginationWindow:
    page: int
    page_size: int
    offset: int
    limit: int


@dataclass(frozen=True)
class SortSpec:
    sort_by: str
    sort_order: str

    @property
    def clause(self) -> str:
        return f"{self.sort_by} {self.sort_order}"


Columns = Union[str, Iterable[str]]


def _column_list(columns: Columns) -> list[str]:
    if isinstance(columns, str):
        columns = columns.split(",")
    return [c.strip().lower() for c in columns if c and c.strip()]


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def escape_literal(text: str) -> str:
    """Double single quotes so text can sit inside a SQL string literal."""
    return text.replace("'", "''")


def validate_pagination(page: int, page_size: int) -> PaginationWindow:
    """
    Check page and page size and compute the row window.

    Raises:
        UtilityContractError: If page < 1 or page_size is outside 1..100.
    """
    if page is None or page < MIN_PAGE:
        raise UtilityContractError("Page number must be a positive integer (minimum: 1)")
    if page_size is None or not MIN_PAGE_SIZE <= page_size <= MAX_PAGE_SIZE:
        raise UtilityContractError(
            f"Page size must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}"
        )
    return PaginationWindow(
        page=page,
        page_size=page_size,
        offset=(page - 1) * page_size,
        limit=page_size,
    )


def validate_sorting(sort_by: str, sort_order: str, valid_columns: Columns) -> SortSpec:
    """
    Check the sort column against the allow list and normalise the order.

    Args:
        sort_by: Requested column, any case.
        sort_order: 'ASC' or 'DESC', any case.
        valid_columns: Allowed columns, comma-separated or as an iterable.

    Raises:
        UtilityContractError: If the column or the order is not allowed.
    """
    allowed = _column_list(valid_columns)
    column = (sort_by or "").strip().lower()
    if column not in allowed:
        raise UtilityContractError(
            f"Invalid sort_by parameter. Valid values are: {', '.join(allowed)}"
        )

    order = (sort_order or "").strip().upper()
    if order not in SORT_ORDERS:
        raise UtilityContractError(
            f"Invalid sort_order parameter. Valid values are: {', '.join(SORT_ORDERS)}"
        )

    return SortSpec(sort_by=column, sort_order=order)


def _condition(field: str, literal: str, search_type: str) -> str:
    if search_type == SEARCH_EXACT:
        return f"lower({field}) = lower('{literal}')"
    if search_type == SEARCH_STARTS_WITH:
        return f"lower({field}) like lower('{literal}') || '%'"
    return f"lower({field}) like '%' || lower('{literal}') || '%'"


def build_where_clause(
    query: Optional[str],
    search_type: Optional[str],
    search_fields: Columns,
) -> str:
    """
    Build the search condition for a list query.

    Returns:
        '1=1' when the query is empty or there is nothing to search,
        otherwise the OR-joined per-field conditions.

    Raises:
        UtilityContractError: If the search type is not recognised.
    """
    if not query:
        return MATCH_ALL

    mode = (search_type or SEARCH_PARTIAL).strip().lower()
    if mode not in SEARCH_TYPES:
        raise UtilityContractError(
            f"Invalid search type. Valid values are: {', '.join(SEARCH_TYPES)}"
        )

    fields = _column_list(search_fields)
    if not fields:
        return MATCH_ALL

    literal = escape_literal(query)
    conditions = [_condition(f, literal, mode) for f in fields]
    if len(conditions) == 1:
        return conditions[0]
    return "(" + " OR ".join(conditions) + ")"
