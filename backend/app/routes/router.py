"""API router - aggregates all route modules."""

from fastapi import APIRouter

from app.routes import notes

api_router = APIRouter()

api_router.include_router(notes.router, prefix="/notes", tags=["notes"])
