"""
Constraint Namer
================

Expands a naming-convention template into a concrete identifier.
"""

from typing import Optional, Union

from ..schema_model import ConstraintKind, NamingConvention


TABLE_TOKEN = "{table}"
COLUMN_TOKEN = "{column}"


def constraint_name(
    convention: NamingConvention,
    kind: Union[ConstraintKind, str],
    table_name: str,
    column_name: Optional[str] = None,
) -> str:
    """
    Build the name of a constraint or index.

    The template is applied verbatim: ``{table}_{column}_fk`` with table
    ``employees`` and column ``department_fk`` gives
    ``employees_department_fk_fk``.

    Args:
        convention: Naming convention in effect.
        kind: Constraint kind selecting the template.
        table_name: Substituted for every ``{table}`` token.
        column_name: Substituted for every ``{column}`` token, if given.

    Returns:
        The expanded identifier.
    """
    name = convention.template_for(kind).replace(TABLE_TOKEN, table_name)
    if column_name is not None:
        name = name.replace(COLUMN_TOKEN, column_name)
    return name
