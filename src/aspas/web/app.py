"""
Aspas Web - FastAPI application.

Serves the onboarding flow for a local frontend.
"""

from fastapi import FastAPI

from aspas import __version__
from onboarding.api import router as onboarding_router

app = FastAPI(title="Aspas", version=__version__)

app.include_router(onboarding_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
