"""
Audit Column Injection
======================

Appends the created/updated timestamp columns to a copy of a table's
field list. The table itself is never modified.
"""

from typing import Iterable

from ..schema_model import AuditColumnNames, FieldDef


CREATED_AT_COMMENT = "Record creation timestamp"
UPDATED_AT_COMMENT = "Record last update timestamp"


def inject_audit_columns(
    fields: Iterable[FieldDef],
    names: AuditColumnNames,
    timestamp_type: str,
    current_timestamp: str,
) -> tuple[FieldDef, ...]:
    """
    Return the fields followed by any missing audit timestamp columns.

    A column counts as present when a field with the same name exists,
    compared case-insensitively.
    """
    result = tuple(fields)
    existing = {f.name.lower() for f in result}

    audit_fields = []
    for column_name, comment in (
        (names.created_at, CREATED_AT_COMMENT),
        (names.updated_at, UPDATED_AT_COMMENT),
    ):
        if column_name.lower() in existing:
            continue
        existing.add(column_name.lower())
        audit_fields.append(FieldDef(
            name=column_name,
            type=timestamp_type,
            nullable=False,
            default=current_timestamp,
            comment=comment,
        ))

    return result + tuple(audit_fields)


def is_audit_column(field: FieldDef, names: AuditColumnNames, column: str) -> bool:
    """True if the field is the audit column ``column`` ('created_at'/'updated_at')."""
    return field.name.lower() == getattr(names, column).lower()
