"""
API Request/Response Schemas
============================

Pydantic models for API request and response validation. Schema and
option bodies reuse the engine models, so host project files can be
posted as they are (camelCase keys accepted).
"""

from datetime import date
from typing import Literal, Optional
from pydantic import BaseModel, Field

from ddlforge.schema_model import GenerationOptions, PackageOptions, SchemaDef, TableDef


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class ScriptRequest(BaseModel):
    """Request body for POST /scripts and POST /scripts/validate."""

    database: SchemaDef = Field(
        ...,
        description="Dialect tag plus ordered tables"
    )
    options: Optional[GenerationOptions] = Field(
        default=None,
        description="Script options; unset values take their defaults"
    )
    generated_on: Optional[date] = Field(
        default=None,
        description="Date written to the script header (defaults to today)"
    )


class PackageRequest(BaseModel):
    """Request body for POST /packages."""

    database: SchemaDef
    options: Optional[PackageOptions] = None


class PreviewQueryRequest(BaseModel):
    """Request body for POST /packages/preview-query."""

    table: TableDef
    page: int = 1
    page_size: int = 20
    sort_by: Optional[str] = Field(
        default=None,
        description="Sort column (defaults to the first primary key)"
    )
    sort_order: str = "ASC"
    query: Optional[str] = None
    search_type: str = "partial"
    options: Optional[PackageOptions] = None


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ScriptResponse(BaseModel):
    """Response for POST /scripts."""

    status: Literal["success"] = "success"
    dialect: str
    table_order: list[str] = Field(default_factory=list)
    script: str


class ValidationResponse(BaseModel):
    """Response for POST /scripts/validate. Warnings never block generation."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class PackageResponse(BaseModel):
    """Response for POST /packages: package name -> PL/SQL source."""

    status: Literal["success"] = "success"
    packages: dict[str, str] = Field(default_factory=dict)


class PreviewQueryResponse(BaseModel):
    """Response for POST /packages/preview-query."""

    table: str
    page: int
    page_size: int
    offset: int
    limit: int
    sort_by: str
    sort_order: str
    where_clause: str
    count_sql: str
    page_sql: str


class DialectsResponse(BaseModel):
    """Response for GET /dialects."""

    supported: list[str]
    known: list[str]
    default: str


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    status: str = "ok"


class VersionResponse(BaseModel):
    """Response for GET /version endpoint."""

    version: str
    name: str = "ddlforge"


class ErrorResponse(BaseModel):
    """Standard error response."""

    status: str = "error"
    message: str
    detail: Optional[str] = None
