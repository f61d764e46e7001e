"""
API Routes
==========

Endpoint definitions for the ddlforge API:
  - POST /scripts                 - Generate a complete DDL script
  - POST /scripts/validate        - Validation errors plus naming warnings
  - POST /packages                - One CRUD package per table
  - POST /packages/preview-query  - SQL a generated list call would run

This module delegates to the orchestration facade without adding
business logic.
"""

from fastapi import APIRouter

from .schemas import (
    ScriptRequest,
    ScriptResponse,
    ValidationResponse,
    PackageRequest,
    PackageResponse,
    PreviewQueryRequest,
    PreviewQueryResponse,
    DialectsResponse,
    HealthResponse,
    VersionResponse,
)

from ddlforge.orchestration import (
    generate_database_scripts,
    validate_schema,
    generate_crud_packages,
    preview_list_query,
    supported_dialects,
    lint_schema,
)
from ddlforge.schema_model import Dialect, SchemaDef
from ddlforge.script_generation import order_tables

from ddlforge.app import config as app_config
from ddlforge.app import exceptions as app_exceptions


# =============================================================================
# ROUTER
# =============================================================================

router = APIRouter()


def _with_default_dialect(schema: SchemaDef) -> SchemaDef:
    """Apply the configured default dialect when the body names none."""
    if "dialect" in schema.model_fields_set:
        return schema
    return schema.model_copy(update={"dialect": app_config.DEFAULT_DIALECT})


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/scripts", response_model=ScriptResponse)
def create_script(request: ScriptRequest) -> ScriptResponse:
    """Validate the schema and return the assembled DDL script."""
    try:
        schema = _with_default_dialect(request.database)
        script = generate_database_scripts(schema, request.options, request.generated_on)
        return ScriptResponse(
            dialect=schema.dialect,
            table_order=[t.name for t in order_tables(list(schema.tables))],
            script=script,
        )

    except Exception as e:
        raise app_exceptions.get_http_exception(e)


@router.post("/scripts/validate", response_model=ValidationResponse)
def validate_script(request: ScriptRequest) -> ValidationResponse:
    """Return validation errors and naming warnings without generating."""
    try:
        schema = _with_default_dialect(request.database)
        errors = validate_schema(schema, request.options)
        return ValidationResponse(
            is_valid=not errors,
            errors=errors,
            warnings=lint_schema(schema),
        )

    except Exception as e:
        raise app_exceptions.get_http_exception(e)


@router.post("/packages", response_model=PackageResponse)
def create_packages(request: PackageRequest) -> PackageResponse:
    """Generate one CRUD package per table, in dependency order."""
    try:
        schema = _with_default_dialect(request.database)
        return PackageResponse(packages=generate_crud_packages(schema, request.options))

    except Exception as e:
        raise app_exceptions.get_http_exception(e)


@router.post("/packages/preview-query", response_model=PreviewQueryResponse)
def preview_query(request: PreviewQueryRequest) -> PreviewQueryResponse:
    """Show the count and page queries for a set of list parameters."""
    try:
        preview = preview_list_query(
            request.table,
            page=request.page,
            page_size=request.page_size,
            sort_by=request.sort_by,
            sort_order=request.sort_order,
            query=request.query,
            search_type=request.search_type,
            options=request.options,
        )
        return PreviewQueryResponse(
            table=preview.table_name,
            page=preview.window.page,
            page_size=preview.window.page_size,
            offset=preview.window.offset,
            limit=preview.window.limit,
            sort_by=preview.sort.sort_by,
            sort_order=preview.sort.sort_order,
            where_clause=preview.where_clause,
            count_sql=preview.count_sql,
            page_sql=preview.page_sql,
        )

    except Exception as e:
        raise app_exceptions.get_http_exception(e)


@router.get("/dialects", response_model=DialectsResponse)
def list_dialects() -> DialectsResponse:
    """Dialects with a generator, and every dialect name that is recognised."""
    return DialectsResponse(
        supported=supported_dialects(),
        known=[d.value for d in Dialect],
        default=app_config.DEFAULT_DIALECT,
    )


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok")


@router.get("/version", response_model=VersionResponse)
def get_version() -> VersionResponse:
    """Get API version."""
    return VersionResponse(version=app_config.VERSION, name=app_config.APP_NAME)
