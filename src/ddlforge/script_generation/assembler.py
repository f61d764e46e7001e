"""
Script Assembler
================

Purpose:
--------
Turns a validated list of tables into one complete DDL script using a
dialect capability record.

Public Interface:
-----------------
    def generate_script_components(tables, dialect, options) -> ScriptComponents
    def assemble_script(components, dialect, generated_on=None) -> str

Script Layout:
--------------
    header (tool, generation date, database type)
    -- Drop existing objects        (reverse dependency order)
    -- Table creation scripts       (dependency order)
    -- Constraint creation scripts
    -- Index creation scripts
    -- Trigger creation scripts
    -- Table and column comments

Empty sections are left out together with their divider. A dependency
cycle aborts before any text is produced. For a given input only the
date line differs between runs.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..schema_model import ResolvedGenerationOptions, TableDef
from .audit_columns import inject_audit_columns
from .dependency_resolver import order_tables
from .dialects import DialectCapabilities, Fields


# =============================================================================
# CONSTANTS
# =============================================================================

TOOL_NAME = "ddlforge"
HEADER_RULE = "-- ============================================"

DROP_DIVIDER = "-- Drop existing objects"
CREATE_DIVIDER = "-- Table creation scripts"
CONSTRAINT_DIVIDER = "-- Constraint creation scripts"
INDEX_DIVIDER = "-- Index creation scripts"
TRIGGER_DIVIDER = "-- Trigger creation scripts"
COMMENT_DIVIDER = "-- Table and column comments"


# =============================================================================
# COMPONENTS
# =============================================================================

@dataclass
class ScriptComponents:
    """Statements of a script grouped by section, in output order."""
    drop_statements: list[str] = field(default_factory=list)
    table_creation: list[str] = field(default_factory=list)
    constraints: list[str] = field(default_factory=list)
    indexes: list[str] = field(default_factory=list)
    triggers: list[str] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)

    def sections(self) -> list[tuple[str, list[str]]]:
        return [
            (DROP_DIVIDER, self.drop_statements),
            (CREATE_DIVIDER, self.table_creation),
            (CONSTRAINT_DIVIDER, self.constraints),
            (INDEX_DIVIDER, self.indexes),
            (TRIGGER_DIVIDER, self.triggers),
            (COMMENT_DIVIDER, self.comments),
        ]

    @property
    def statement_count(self) -> int:
        return sum(len(statements) for _, statements in self.sections())


def effective_fields(
    table: TableDef,
    dialect: DialectCapabilities,
    options: ResolvedGenerationOptions,
) -> Fields:
    """The table's fields as emitted: audit columns appended when enabled."""
    if not options.include_audit_columns:
        return table.fields
    return inject_audit_columns(
        table.fields,
        options.audit_column_names,
        dialect.timestamp_type,
        dialect.current_timestamp,
    )


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def generate_script_components(
    tables: list[TableDef],
    dialect: DialectCapabilities,
    options: ResolvedGenerationOptions,
) -> ScriptComponents:
    """
    Produce every statement of the script, grouped by section.

    Raises:
        DependencyCycleError: If the foreign keys form a cycle.
    """
    ordered = order_tables(tables)
    fields_by_table = {
        t.name: effective_fields(t, dialect, options) for t in ordered
    }
    components = ScriptComponents()

    if options.include_drop_statements:
        for table in reversed(ordered):
            components.drop_statements.append(
                dialect.drop_statement(table, fields_by_table[table.name], options)
            )

    for table in ordered:
        fields = fields_by_table[table.name]
        components.table_creation.append(dialect.table_creation(table, fields, options))
        components.constraints.extend(dialect.constraints(table, fields, options))
        components.indexes.extend(dialect.indexes(table, fields, options))
        # PL/SQL blocks need the dialect terminator on its own line
        components.triggers.extend(
            f"{block}\n{dialect.block_terminator}"
            for block in dialect.triggers(table, fields, options)
        )
        if options.include_comments:
            components.comments.extend(dialect.comments(table, fields, options))

    return components


def script_header(dialect: DialectCapabilities, generated_on: Optional[date] = None) -> str:
    generated_on = generated_on or date.today()
    return (
        f"-- Database script generated by {TOOL_NAME}\n"
        f"-- Generated on: {generated_on.isoformat()}\n"
        f"-- Database type: {dialect.display_name}\n"
        f"{HEADER_RULE}\n\n"
    )


def assemble_script(
    components: ScriptComponents,
    dialect: DialectCapabilities,
    generated_on: Optional[date] = None,
) -> str:
    """
    Join the components into the final script text.

    Args:
        components: Statements grouped by section.
        dialect: Capability record, used for the header.
        generated_on: Date written to the header; today when omitted.
    """
    lines = [script_header(dialect, generated_on)]
    for divider, statements in components.sections():
        if not statements:
            continue
        lines.append(divider)
        lines.extend(statements)
        lines.append("")
    return "\n".join(lines)
