"""
Application Configuration
=========================

Central configuration for the API. Values can be overridden through
environment variables (a ``.env`` file is loaded by ``main``).
"""

import os


# =============================================================================
# VERSION
# =============================================================================

VERSION = "1.0.0"
APP_NAME = "ddlforge"


# =============================================================================
# GENERATION DEFAULTS
# =============================================================================

# Dialect used when a request's schema carries no dialect tag
DEFAULT_DIALECT = os.environ.get("DDLFORGE_DEFAULT_DIALECT", "oracle")

LOG_LEVEL = os.environ.get("DDLFORGE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
