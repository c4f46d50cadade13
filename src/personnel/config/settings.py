"""
Configuration settings for the Personnel Registry Backend
"""

import os
import logging

logger = logging.getLogger(__name__)

# Environment configuration
ENV = os.getenv("ENV", "PROD")  # PROD or QA
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./personnel.db")
PORT = int(os.getenv("PORT", 3000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS settings
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# Supported database URL schemes, mapped to the store backend that serves them
DATABASE_SCHEMES = {
    "sqlite": "sqlite",
    "memory": "memory",
    "postgres": "postgres",
    "postgresql": "postgres",
}

logger.info(f"Environment: {ENV}")

# Validate required environment variables
if not DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable is required")
