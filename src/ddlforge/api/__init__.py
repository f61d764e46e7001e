"""
API Module
==========

API routes and schemas.
"""

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
    ErrorResponse,
)

__all__ = [
    "ScriptRequest",
    "ScriptResponse",
    "ValidationResponse",
    "PackageRequest",
    "PackageResponse",
    "PreviewQueryRequest",
    "PreviewQueryResponse",
    "DialectsResponse",
    "HealthResponse",
    "VersionResponse",
    "ErrorResponse",
]
