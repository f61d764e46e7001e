"""
Schema Model
============

Passive Pydantic models describing a relational schema in a
dialect-agnostic way. The models carry no generation behaviour.

Host project files use camelCase keys (``isPrimaryKey``,
``foreignKey.referencedTable``); the models accept those as well as
their snake_case field names.

All models are frozen and hold their sequences as tuples, so declaration
order is preserved and a schema cannot change while it is being turned
into scripts.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# EXCEPTIONS
# =============================================================================

class GenerationError(Exception):
    """Base exception for every schema-to-script generation failure."""
    pass


# =============================================================================
# DIALECTS
# =============================================================================

class Dialect(str, Enum):
    """Target database dialects known to the generator."""
    ORACLE = "oracle"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    SQLSERVER = "sqlserver"


# Alternative spellings found in project definitions
DIALECT_ALIASES: dict[str, Dialect] = {
    "postgres": Dialect.POSTGRESQL,
    "sql server": Dialect.SQLSERVER,
    "mssql": Dialect.SQLSERVER,
}


# =============================================================================
# MODEL BASE
# =============================================================================

class SchemaModel(BaseModel):
    """Common configuration: frozen, camelCase aliases, snake_case accepted."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# FIELDS & TABLES
# =============================================================================

class ForeignKeyRef(SchemaModel):
    """Target of a foreign key: referenced table and column."""
    referenced_table: str
    referenced_column: str


class FieldDef(SchemaModel):
    """A single column of a table."""
    name: str
    type: str
    nullable: bool = True
    is_primary_key: bool = False
    is_foreign_key: bool = False
    is_unique: bool = False
    index: bool = False
    default: Optional[str] = Field(default=None, alias="default")
    comment: Optional[str] = None
    check_constraint: Optional[str] = None
    foreign_key: Optional[ForeignKeyRef] = None


class TableDef(SchemaModel):
    """A table: ordered fields plus optional comment and resolver hints."""
    name: str
    fields: tuple[FieldDef, ...] = ()
    comment: Optional[str] = None
    referencing_to: tuple[str, ...] = ()
    referenced_by: tuple[str, ...] = ()

    @property
    def primary_key_fields(self) -> tuple[FieldDef, ...]:
        return tuple(f for f in self.fields if f.is_primary_key)

    @property
    def foreign_key_fields(self) -> tuple[FieldDef, ...]:
        return tuple(f for f in self.fields if f.foreign_key is not None)


class SchemaDef(SchemaModel):
    """
    A dialect tag plus an ordered sequence of tables.

    ``dialect`` stays a plain string: it is resolved by the dialect
    registry so that an unknown name fails as an unsupported dialect
    rather than as a model error.
    """
    dialect: str = Dialect.ORACLE.value
    tables: tuple[TableDef, ...] = ()
