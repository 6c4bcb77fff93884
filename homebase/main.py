"""
Homebase - FastAPI Application Entry Point
"""

import logging

from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.orm import Session

from homebase.config import get_settings
from homebase.database import get_db
from homebase.routers import calendar

# Initialize FastAPI app
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Homebase",
    description="Shared household calendar, availability and conflict checks",
    version="0.1.0",
    debug=settings.debug,
)

# Include routers
app.include_router(calendar.router)


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint that also verifies database connection.
    """
    try:
        # Test database connection
        result = db.execute(text("SELECT 1"))
        result.fetchone()
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {str(e)}"

    return {
        "status": "healthy",
        "database": db_status,
        "debug": settings.debug,
    }
