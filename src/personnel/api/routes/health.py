"""
Health check API route
"""

from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException
from personnel.database.connection import get_person_store

router = APIRouter()

@router.get("/")
async def health_check():
    """Health check"""
    try:
        store = get_person_store()
        await store.ping()
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")

    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected",
        "store": type(store).__name__
    }
