"""
Test script for DDL Script Generation.
"""
import dataclasses
import sys
sys.path.insert(0, 'src')

from datetime import date

import pytest

from ddlforge import (
    SchemaDef,
    TableDef,
    FieldDef,
    generate_database_scripts,
    generate_table_script,
    SchemaValidationError,
    DependencyCycleError,
    UnsupportedDialectError,
)
from ddlforge.schema_model import (
    AuditColumnNames,
    NamingConvention,
    ConstraintKind,
    GenerationOptions,
    resolve_generation_options,
)
from ddlforge.script_generation import (
    ORACLE,
    ORACLE_NAMING_CONVENTION,
    constraint_name,
    inject_audit_columns,
    get_dialect,
    supported_dialects,
    generate_script_components,
)


def _company_schema(**overrides) -> SchemaDef:
    """employees references departments; declared referencer-first."""
    data = {
        "dialect": "oracle",
        "tables": [
            {
                "name": "employees",
                "comment": "Employee's records",
                "fields": [
                    {"name": "pk", "type": "NUMBER", "isPrimaryKey": True, "nullable": False},
                    {"name": "first_name", "type": "VARCHAR2(50)", "index": True},
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
                    {"name": "pk", "type": "NUMBER", "isPrimaryKey": True, "nullable": False},
                    {"name": "name", "type": "VARCHAR2(100)", "isUnique": True, "index": True},
                ],
            },
        ],
    }
    data.update(overrides)
    return SchemaDef.model_validate(data)


def test_end_to_end_order():
    """Referenced table is created first and dropped last."""
    print('=== TEST 1: End-to-end ordering ===')
    script = generate_database_scripts(_company_schema(), generated_on=date(2024, 1, 15))

    create_departments = script.index("CREATE TABLE departments (")
    create_employees = script.index("CREATE TABLE employees (")
    assert create_departments < create_employees, "Referenced table must be created first"

    drop_employees = script.index("DROP TABLE employees CASCADE CONSTRAINTS PURGE;")
    drop_departments = script.index("DROP TABLE departments CASCADE CONSTRAINTS PURGE;")
    assert drop_employees < drop_departments, "Referencing table must be dropped first"
    print('✓ CREATE and DROP order correct')


def test_single_foreign_key_statement():
    """Exactly one FK constraint, named by the template verbatim."""
    print('\n=== TEST 2: Foreign key statement ===')
    script = generate_database_scripts(_company_schema(), generated_on=date(2024, 1, 15))

    assert script.count("FOREIGN KEY") == 1
    assert (
        "ALTER TABLE employees\n"
        "   ADD CONSTRAINT employees_department_fk_fk FOREIGN KEY (department_fk)\n"
        "      REFERENCES departments (pk);"
    ) in script
    print('✓ One FK referencing departments(pk)')


def test_header_and_sections():
    """Header carries tool, date and dialect; sections appear in fixed order."""
    script = generate_database_scripts(_company_schema(), generated_on=date(2024, 1, 15))

    assert script.startswith(
        "-- Database script generated by ddlforge\n"
        "-- Generated on: 2024-01-15\n"
        "-- Database type: Oracle\n"
        "-- ============================================\n"
    )
    dividers = [
        "-- Drop existing objects",
        "-- Table creation scripts",
        "-- Constraint creation scripts",
        "-- Index creation scripts",
        "-- Trigger creation scripts",
        "-- Table and column comments",
    ]
    positions = [script.index(d) for d in dividers]
    assert positions == sorted(positions)


def test_determinism_apart_from_date():
    """Two runs differ only in the generated-on line."""
    print('\n=== TEST 3: Determinism ===')
    first = generate_database_scripts(_company_schema())
    second = generate_database_scripts(_company_schema(), generated_on=date(1999, 12, 31))

    def strip_date(text):
        return [line for line in text.splitlines() if not line.startswith("-- Generated on:")]

    assert first != second
    assert strip_date(first) == strip_date(second)
    print('✓ Output is deterministic')


def test_create_table_layout():
    """Column names padded to 15, defaults only on non-key columns."""
    script = generate_database_scripts(_company_schema(), generated_on=date(2024, 1, 15))
    expected = "\n".join([
        "CREATE TABLE departments (",
        ",\n".join([
            "   " + "pk".ljust(15) + " NUMBER",
            "   " + "name".ljust(15) + " VARCHAR2(100)",
            "   " + "created_at".ljust(15) + " TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
            "   " + "updated_at".ljust(15) + " TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
        ]),
        ");",
    ])
    assert expected in script


def test_constraints_and_indexes():
    """PK, NOT NULL and UNIQUE constraints; indexes skip unique columns."""
    script = generate_database_scripts(_company_schema(), generated_on=date(2024, 1, 15))

    assert (
        "ALTER TABLE departments\n"
        "   ADD CONSTRAINT departments_pk PRIMARY KEY (pk)\n"
        "      USING INDEX ENABLE;"
    ) in script
    assert "CONSTRAINT departments_created_at_nn NOT NULL" in script
    assert "CONSTRAINT departments_pk_nn" not in script, "PK columns get no NOT NULL constraint"
    assert "ADD CONSTRAINT departments_name_uk UNIQUE (name);" in script

    assert "CREATE INDEX employees_first_name_idx ON employees (\n   first_name\n);" in script
    assert "departments_name_idx" not in script, "Unique columns already have an index"


def test_trigger_and_comments():
    """Update trigger per table; comments escape single quotes."""
    script = generate_database_scripts(_company_schema(), generated_on=date(2024, 1, 15))

    assert "CREATE OR REPLACE TRIGGER trg_departments_updated_at" in script
    assert ":NEW.updated_at := CURRENT_TIMESTAMP;" in script
    assert "COMMENT ON TABLE employees IS 'Employee''s records';" in script
    assert "COMMENT ON COLUMN departments.created_at IS 'Record creation timestamp';" in script


def test_options_disable_sections():
    """Drops, comments and audit columns can be switched off."""
    script = generate_database_scripts(
        _company_schema(),
        options={
            "includeDropStatements": False,
            "includeComments": False,
            "includeAuditColumns": False,
        },
        generated_on=date(2024, 1, 15),
    )
    assert "-- Drop existing objects" not in script
    assert "-- Table and column comments" not in script
    assert "-- Trigger creation scripts" not in script
    assert "created_at" not in script


def test_audit_columns_not_duplicated():
    """An existing updated_at column is kept; only created_at is injected."""
    print('\n=== TEST 4: Audit column injection ===')
    fields = (
        FieldDef(name="pk", type="NUMBER", is_primary_key=True),
        FieldDef(name="UPDATED_AT", type="TIMESTAMP"),
    )
    result = inject_audit_columns(fields, AuditColumnNames(), "TIMESTAMP", "CURRENT_TIMESTAMP")

    names = [f.name.lower() for f in result]
    assert names == ["pk", "updated_at", "created_at"]
    assert result[2].nullable is False
    assert result[2].default == "CURRENT_TIMESTAMP"
    assert len(fields) == 2, "Input must not be modified"
    print('✓ Only created_at injected')


def test_audit_column_custom_names():
    """Configured audit names drive injection and the trigger."""
    schema = SchemaDef(tables=(
        TableDef(name="notes", fields=(
            FieldDef(name="id", type="NUMBER", is_primary_key=True),
        )),
    ))
    script = generate_database_scripts(
        schema,
        options={"auditColumnNames": {"createdAt": "inserted_on", "updatedAt": "changed_on"}},
        generated_on=date(2024, 1, 15),
    )
    assert "inserted_on" in script
    assert "CREATE OR REPLACE TRIGGER trg_notes_changed_on" in script
    assert "updated_at" not in script


def test_constraint_name_template_verbatim():
    """Template literal suffix is kept: department_fk + _fk."""
    name = constraint_name(ORACLE_NAMING_CONVENTION, ConstraintKind.FOREIGN_KEY, "employees", "department_fk")
    assert name == "employees_department_fk_fk"

    repeated = NamingConvention(
        primary_key="{table}_{table}_pk",
        foreign_key="fk_{column}",
        unique="uk_{column}",
        check="ck_{column}",
        not_null="nn_{column}",
        index="ix_{column}",
    )
    assert constraint_name(repeated, "primary_key", "t") == "t_t_pk"

    with pytest.raises(KeyError):
        constraint_name(repeated, "sequence", "t")


def test_custom_naming_convention():
    """A caller convention replaces the dialect default."""
    convention = {
        "primaryKey": "pk_{table}",
        "foreignKey": "fk_{table}_{column}",
        "unique": "uq_{table}_{column}",
        "check": "ck_{table}_{column}",
        "notNull": "nn_{table}_{column}",
        "index": "ix_{table}_{column}",
    }
    script = generate_database_scripts(
        _company_schema(),
        options={"namingConvention": convention},
        generated_on=date(2024, 1, 15),
    )
    assert "ADD CONSTRAINT pk_departments PRIMARY KEY (pk)" in script
    assert "ADD CONSTRAINT fk_employees_department_fk FOREIGN KEY" in script


def test_constraint_naming_convention_key_accepted():
    """Project files name the convention constraintNamingConvention."""
    convention = {
        "primaryKey": "PK_{table}",
        "foreignKey": "FK_{table}_{column}",
        "unique": "UK_{table}_{column}",
        "check": "CK_{table}_{column}",
        "notNull": "NN_{table}_{column}",
        "index": "IX_{table}_{column}",
    }
    options = GenerationOptions.model_validate({"constraintNamingConvention": convention})
    assert options.naming_convention.primary_key == "PK_{table}"

    script = generate_database_scripts(
        _company_schema(),
        options={"constraintNamingConvention": convention},
        generated_on=date(2024, 1, 15),
    )
    assert "ADD CONSTRAINT PK_departments PRIMARY KEY (pk)" in script
    assert "departments_pk" not in script


def test_cycle_aborts():
    """A <-> B foreign keys raise a cycle error and produce no script."""
    print('\n=== TEST 5: Cycle detection ===')
    schema = SchemaDef.model_validate({
        "tables": [
            {"name": "a", "fields": [
                {"name": "id", "type": "NUMBER", "isPrimaryKey": True},
                {"name": "b_id", "type": "NUMBER", "foreignKey": {"referencedTable": "b", "referencedColumn": "id"}},
            ]},
            {"name": "b", "fields": [
                {"name": "id", "type": "NUMBER", "isPrimaryKey": True},
                {"name": "a_id", "type": "NUMBER", "foreignKey": {"referencedTable": "a", "referencedColumn": "id"}},
            ]},
        ]
    })
    with pytest.raises(DependencyCycleError) as exc_info:
        generate_database_scripts(schema)
    assert str(exc_info.value) == "Circular dependency detected involving table: a"
    print('✓ Cycle rejected')


def test_case_insensitive_duplicate_tables_rejected():
    """Users and users are the same table."""
    schema = SchemaDef.model_validate({
        "tables": [
            {"name": "Users", "fields": [{"name": "id", "type": "NUMBER", "isPrimaryKey": True}]},
            {"name": "users", "fields": [{"name": "id", "type": "NUMBER", "isPrimaryKey": True}]},
        ]
    })
    with pytest.raises(SchemaValidationError) as exc_info:
        generate_database_scripts(schema)
    assert "Duplicate table names found: users" in exc_info.value.errors
    assert str(exc_info.value).startswith("Schema validation failed:\n")


def test_unknown_type_rejected():
    """Types outside the Oracle type set fail validation."""
    schema = SchemaDef.model_validate({
        "tables": [
            {"name": "t", "fields": [
                {"name": "id", "type": "NUMBER", "isPrimaryKey": True},
                {"name": "flag", "type": "BOOLEAN"},
            ]},
        ]
    })
    with pytest.raises(SchemaValidationError) as exc_info:
        generate_database_scripts(schema)
    assert 'Invalid Oracle data type "BOOLEAN" for column "flag" in table "t"' in exc_info.value.errors


def test_unsupported_dialect_fails_first():
    """Known-but-unimplemented and unknown dialects fail before validation."""
    with pytest.raises(UnsupportedDialectError) as exc_info:
        generate_database_scripts(SchemaDef(dialect="postgres"))
    assert exc_info.value.dialect == "postgresql"
    assert "is not implemented yet" in str(exc_info.value)

    with pytest.raises(UnsupportedDialectError) as exc_info:
        generate_database_scripts(SchemaDef(dialect="db2"))
    assert "is not supported" in str(exc_info.value)


def test_trigger_blocks_use_dialect_terminator():
    """Each trigger block is closed by the dialect's block terminator."""
    tables = list(_company_schema().tables)
    options = resolve_generation_options(None, ORACLE.default_naming)

    components = generate_script_components(tables, ORACLE, options)
    assert len(components.triggers) == 2
    assert all(t.endswith("END;\n/") for t in components.triggers)

    custom = dataclasses.replace(ORACLE, block_terminator="GO")
    components = generate_script_components(tables, custom, options)
    assert all(t.endswith("END;\nGO") for t in components.triggers)


def test_dialect_registry():
    """Only Oracle has a generator; lookups are case-insensitive."""
    assert supported_dialects() == ["oracle"]
    assert get_dialect(" ORACLE ") is ORACLE


def test_single_table_script():
    """A table script skips the schema-level foreign key checks."""
    table = _company_schema().tables[0]
    script = generate_table_script(table, generated_on=date(2024, 1, 15))
    assert "CREATE TABLE employees (" in script
    assert "REFERENCES departments (pk);" in script
    assert "CREATE TABLE departments" not in script


if __name__ == '__main__':
    test_end_to_end_order()
    test_single_foreign_key_statement()
    test_header_and_sections()
    test_determinism_apart_from_date()
    test_create_table_layout()
    test_constraints_and_indexes()
    test_trigger_and_comments()
    test_options_disable_sections()
    test_audit_columns_not_duplicated()
    test_audit_column_custom_names()
    test_constraint_name_template_verbatim()
    test_custom_naming_convention()
    test_constraint_naming_convention_key_accepted()
    test_cycle_aborts()
    test_case_insensitive_duplicate_tables_rejected()
    test_unknown_type_rejected()
    test_unsupported_dialect_fails_first()
    test_trigger_blocks_use_dialect_terminator()
    test_dialect_registry()
    test_single_table_script()
    print('\n=== ALL TESTS PASSED ===')
