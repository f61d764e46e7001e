"""
FastAPI Application Entry Point
================================

Main application initialization and wiring.
Run with: uvicorn ddlforge.app.main:app --reload
"""

# Load environment variables FIRST, before any other imports
from dotenv import load_dotenv
load_dotenv()

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ddlforge.api.routes import router
from ddlforge.app.config import VERSION, APP_NAME, LOG_LEVEL, LOG_FORMAT
from ddlforge.app.exceptions import global_exception_handler


logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


# =============================================================================
# APP INITIALIZATION
# =============================================================================

app = FastAPI(
    title=APP_NAME,
    description="Schema-to-DDL and CRUD package generator API",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

app.add_exception_handler(Exception, global_exception_handler)


# =============================================================================
# ROUTES
# =============================================================================

app.include_router(router, tags=["Generation"])


# =============================================================================
# ROOT
# =============================================================================

@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "name": APP_NAME,
        "version": VERSION,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "scripts": "POST /scripts",
            "validate": "POST /scripts/validate",
            "packages": "POST /packages",
            "preview_query": "POST /packages/preview-query",
            "dialects": "GET /dialects",
        }
    }
