"""
Test script for the utility package reference model.
"""
import sys
sys.path.insert(0, 'src')

import pytest

from ddlforge.package_generation import (
    validate_pagination,
    validate_sorting,
    build_where_clause,
    escape_literal,
    UtilityContractError,
)


def test_pagination_window():
    """Offset is (page - 1) * page_size."""
    print('=== TEST 1: Pagination ===')
    window = validate_pagination(3, 25)
    assert (window.page, window.page_size, window.offset, window.limit) == (3, 25, 50, 25)
    assert validate_pagination(1, 100).offset == 0
    print('✓ Window computed')


def test_pagination_bounds():
    """Page must be >= 1 and page size within 1..100."""
    with pytest.raises(UtilityContractError) as exc_info:
        validate_pagination(1, 0)
    assert str(exc_info.value) == "Page size must be between 1 and 100"

    with pytest.raises(UtilityContractError):
        validate_pagination(1, 101)

    with pytest.raises(UtilityContractError) as exc_info:
        validate_pagination(0, 10)
    assert "Page number must be a positive integer" in str(exc_info.value)


def test_sorting_normalised():
    """Column is trimmed and lower-cased, order upper-cased."""
    spec = validate_sorting(" Name ", "desc", "pk,name")
    assert spec.sort_by == "name"
    assert spec.sort_order == "DESC"
    assert spec.clause == "name DESC"
    assert validate_sorting("PK", "asc", ["pk", "name"]).clause == "pk ASC"


def test_sorting_rejections():
    """Unknown column and unknown order are rejected."""
    with pytest.raises(UtilityContractError) as exc_info:
        validate_sorting("salary", "ASC", "pk,name")
    assert str(exc_info.value) == "Invalid sort_by parameter. Valid values are: pk, name"

    with pytest.raises(UtilityContractError) as exc_info:
        validate_sorting("pk", "sideways", "pk,name")
    assert "Invalid sort_order parameter" in str(exc_info.value)


def test_where_clause_match_all():
    """Empty query or no fields matches everything."""
    assert build_where_clause(None, "partial", "name") == "1=1"
    assert build_where_clause("", "exact", "name") == "1=1"
    assert build_where_clause("bob", "partial", "") == "1=1"


def test_where_clause_variants():
    """One condition per field; more than one is parenthesised."""
    print('\n=== TEST 2: Where clause ===')
    assert build_where_clause("Bob", "exact", "name") == "lower(name) = lower('Bob')"
    assert build_where_clause("Bo", "starts_with", "name") == "lower(name) like lower('Bo') || '%'"
    assert build_where_clause("ob", None, ["name"]) == "lower(name) like '%' || lower('ob') || '%'"

    clause = build_where_clause("ob", "PARTIAL", "first_name,last_name")
    print('Clause:', clause)
    assert clause == (
        "(lower(first_name) like '%' || lower('ob') || '%'"
        " OR lower(last_name) like '%' || lower('ob') || '%')"
    )
    print('✓ Clauses built')


def test_where_clause_escapes_quotes():
    """Single quotes in the query are doubled."""
    assert escape_literal("O'Brien") == "O''Brien"
    assert build_where_clause("O'Brien", "exact", "name") == "lower(name) = lower('O''Brien')"


def test_invalid_search_type():
    with pytest.raises(UtilityContractError):
        build_where_clause("bob", "fuzzy", "name")


if __name__ == '__main__':
    test_pagination_window()
    test_pagination_bounds()
    test_sorting_normalised()
    test_sorting_rejections()
    test_where_clause_match_all()
    test_where_clause_variants()
    test_where_clause_escapes_quotes()
    test_invalid_search_type()
    print('\n=== ALL TESTS PASSED ===')
