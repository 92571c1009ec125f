"""API routes."""

from fastapi import APIRouter

from comercios.routes import admin, rankings

api_router = APIRouter()

# Ranking endpoints (Top-10 views)
api_router.include_router(rankings.router, tags=["rankings"])

# Admin endpoints (synthetic data generation)
api_router.include_router(admin.router, tags=["admin"])
