"""
Personnel Registry API Server
Core functionality: validated registration, listing, editing and deletion of people
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from personnel.config.settings import ALLOWED_ORIGINS
from personnel.database.connection import init_database, close_database
from personnel.api.routes import health, people
from personnel.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    await init_database()
    yield
    await close_database()

# FastAPI app initialization
app = FastAPI(
    title="Personnel Registry Backend",
    description="Backend API for registering people with validated identity data",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Setup centralized error handling
setup_error_handling(app)

# Include API routes
app.include_router(health.router, tags=["Health"])
app.include_router(people.router, prefix="/api/records", tags=["People"])

# FastAPI app instance is exported for use by uvicorn
# Server startup is handled by main.py at the project root
