"""
Test script for the Script Service facade.
"""
import sys
sys.path.insert(0, 'src')

import logging
from datetime import date

import pytest

from ddlforge import (
    SchemaDef,
    TableDef,
    generate_database_scripts,
    generate_table_script,
    validate_schema,
    generate_crud_package,
    generate_crud_packages,
    preview_list_query,
    supported_dialects,
    is_dialect_supported,
    SchemaValidationError,
    UnsupportedDialectError,
    UtilityContractError,
)


HR_PROJECT = {
    "dialect": "oracle",
    "tables": [
        {
            "name": "employees",
            "fields": [
                {"name": "pk", "type": "NUMBER", "isPrimaryKey": True},
                {"name": "first_name", "type": "VARCHAR2(50)"},
                {"name": "hired_on", "type": "DATE"},
                {
                    "name": "department_fk",
                    "type": "NUMBER",
                    "isForeignKey": True,
                    "foreignKey": {"referencedTable": "departments", "referencedColumn": "pk"},
                },
            ],
        },
        {
            "name": "departments",
            "fields": [
                {"name": "pk", "type": "NUMBER", "isPrimaryKey": True},
                {"name": "name", "type": "VARCHAR2(100)", "isUnique": True},
            ],
        },
    ],
}


def _schema(dialect="oracle"):
    return SchemaDef.model_validate({**HR_PROJECT, "dialect": dialect})


def _employees():
    return _schema().tables[0]


def test_generate_database_scripts(caplog):
    """Valid schema produces a script and logs the run."""
    print('=== TEST 1: Database script ===')
    with caplog.at_level(logging.INFO, logger="ddlforge"):
        script = generate_database_scripts(_schema(), generated_on=date(2024, 1, 15))

    assert "2024-01-15" in script
    assert script.index("CREATE TABLE departments") < script.index("CREATE TABLE employees")
    assert any("Generating Oracle script for 2 table(s)" in r.getMessage() for r in caplog.records)
    print('✓ Script generated')


def test_invalid_schema_generates_nothing():
    """Validation errors are raised together; no script is produced."""
    schema = SchemaDef.model_validate({
        "tables": [{"name": "broken", "fields": [{"name": "flag", "type": "BOOLEAN"}]}],
    })
    with pytest.raises(SchemaValidationError) as exc_info:
        generate_database_scripts(schema)
    assert len(exc_info.value.errors) >= 2


def test_unsupported_dialect_first():
    """Unsupported dialects fail before validation."""
    schema = SchemaDef.model_validate({"dialect": "postgres", "tables": []})
    with pytest.raises(UnsupportedDialectError):
        generate_database_scripts(schema)
    with pytest.raises(UnsupportedDialectError):
        validate_schema(schema)
    assert supported_dialects() == ["oracle"]
    assert is_dialect_supported("ORACLE")
    assert not is_dialect_supported("mysql")


def test_validate_schema_facade():
    """Validation via the facade returns messages rather than raising."""
    assert validate_schema(_schema()) == []


def test_generate_table_script_skips_reference_checks():
    """A lone table may reference tables outside the call."""
    script = generate_table_script(_employees(), generated_on=date(2024, 1, 15))
    assert "CREATE TABLE employees" in script
    assert "REFERENCES departments (pk);" in script


def test_generate_crud_packages_in_dependency_order():
    """One package per table, keyed by package name, parents first."""
    print('\n=== TEST 2: CRUD packages ===')
    packages = generate_crud_packages(_schema())
    assert list(packages) == ["pkg_departments", "pkg_employees"]
    assert packages["pkg_employees"].startswith("CREATE OR REPLACE PACKAGE pkg_employees AS")
    print('✓ Packages generated:', list(packages))


def test_generate_crud_package_validates():
    """Invalid tables never reach the generator."""
    table = TableDef.model_validate({"name": "notes", "fields": [{"name": "body", "type": "CLOB"}]})
    with pytest.raises(SchemaValidationError) as exc_info:
        generate_crud_package(table)
    assert exc_info.value.errors == ['Table "notes" must have at least one primary key column']


def test_crud_packages_need_oracle():
    """Only Oracle has a package generator."""
    with pytest.raises(UnsupportedDialectError) as exc_info:
        generate_crud_package(_employees(), "postgres")
    assert "postgresql" in str(exc_info.value)


def test_preview_list_query():
    """Page 2 of 10 searching first_name for 'an'."""
    print('\n=== TEST 3: List query preview ===')
    preview = preview_list_query(_employees(), page=2, page_size=10, query="an")
    print('Page SQL:', preview.page_sql)

    assert preview.window.offset == 10
    assert preview.where_clause == "lower(first_name) like '%' || lower('an') || '%'"
    assert preview.count_sql == (
        "SELECT COUNT(*) FROM employees WHERE lower(first_name) like '%' || lower('an') || '%'"
    )
    assert preview.page_sql == (
        "SELECT pk FROM employees WHERE lower(first_name) like '%' || lower('an') || '%' "
        "ORDER BY pk ASC OFFSET 10 ROWS FETCH NEXT 10 ROWS ONLY"
    )
    print('✓ Preview correct')


def test_preview_list_query_rejections():
    """Parameters the utility package would reject."""
    with pytest.raises(UtilityContractError):
        preview_list_query(_employees(), page_size=0)
    with pytest.raises(UtilityContractError):
        preview_list_query(_employees(), sort_by="salary")

    preview = preview_list_query(_employees(), sort_by="HIRED_ON", sort_order="desc")
    assert preview.sort.clause == "hired_on DESC"
    assert preview.where_clause == "1=1"


def test_preview_list_query_composite_key():
    """The page query selects every key column."""
    table = TableDef.model_validate({
        "name": "enrolments",
        "fields": [
            {"name": "student_id", "type": "NUMBER", "isPrimaryKey": True},
            {"name": "course_id", "type": "NUMBER", "isPrimaryKey": True},
            {"name": "grade", "type": "CHAR(1)"},
        ],
    })
    preview = preview_list_query(table)
    assert preview.page_sql.startswith("SELECT student_id, course_id FROM enrolments WHERE 1=1 ")


if __name__ == '__main__':
    test_invalid_schema_generates_nothing()
    test_unsupported_dialect_first()
    test_validate_schema_facade()
    test_generate_table_script_skips_reference_checks()
    test_generate_crud_packages_in_dependency_order()
    test_generate_crud_package_validates()
    test_crud_packages_need_oracle()
    test_preview_list_query()
    test_preview_list_query_rejections()
    test_preview_list_query_composite_key()
    print('\n=== ALL TESTS PASSED ===')
