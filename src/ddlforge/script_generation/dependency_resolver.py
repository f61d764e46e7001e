"""
Dependency Resolver
===================

Orders tables so that every table referenced by a foreign key is created
before the tables that reference it. The reverse order is the drop order.

Edges come only from field-level foreign keys. The advisory
``referencing_to`` hints on a table never create an edge on their own.

Algorithm:
----------
Depth-first traversal with three states per table (unvisited,
in progress, done). A table first visits every table it references, then
appends itself to the output. Meeting an in-progress table again means
the references form a cycle. The traversal starts from tables in
declaration order, so the result is deterministic for a given input.
"""

import logging
from enum import Enum

from ..schema_model import GenerationError, TableDef


logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class DependencyCycleError(GenerationError):
    """Raised when foreign keys form a cycle between tables."""

    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(
            f"Circular dependency detected involving table: {table_name}"
        )


# =============================================================================
# GRAPH
# =============================================================================

class _VisitState(Enum):
    IN_PROGRESS = 1
    DONE = 2


def build_dependency_graph(tables: list[TableDef]) -> dict[str, list[str]]:
    """
    Build the reference graph of a list of tables.

    Returns:
        dict mapping each lower-cased table name to the lower-cased names
        of the tables it references, in field order without duplicates.
        Self references and references to tables outside ``tables`` are
        not edges.
    """
    known = {t.name.lower() for t in tables}
    graph: dict[str, list[str]] = {}

    for table in tables:
        table_key = table.name.lower()
        parents = graph.setdefault(table_key, [])

        for field in table.foreign_key_fields:
            parent = field.foreign_key.referenced_table.lower()
            if parent == table_key or parent not in known:
                continue
            if parent not in parents:
                parents.append(parent)

        for hint in table.referencing_to:
            if hint.lower() not in parents and hint.lower() != table_key:
                logger.debug(
                    "Ignoring referencing_to hint %s -> %s without a backing foreign key",
                    table.name, hint,
                )

    return graph


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def order_tables(tables: list[TableDef]) -> list[TableDef]:
    """
    Order tables referenced-first (CREATE order).

    Args:
        tables: Tables in declaration order.

    Returns:
        New list with every referenced table before its referencers.

    Raises:
        DependencyCycleError: If the foreign keys form a cycle.
    """
    graph = build_dependency_graph(tables)
    by_key = {t.name.lower(): t for t in tables}
    state: dict[str, _VisitState] = {}
    ordered: list[TableDef] = []

    def visit(key: str) -> None:
        current = state.get(key)
        if current is _VisitState.DONE:
            return
        if current is _VisitState.IN_PROGRESS:
            raise DependencyCycleError(by_key[key].name)

        state[key] = _VisitState.IN_PROGRESS
        for parent in graph[key]:
            visit(parent)
        state[key] = _VisitState.DONE
        ordered.append(by_key[key])

    for table in tables:
        visit(table.name.lower())

    return ordered


def drop_order(tables: list[TableDef]) -> list[TableDef]:
    """Dependents-first order: the exact reverse of ``order_tables``."""
    return list(reversed(order_tables(tables)))
