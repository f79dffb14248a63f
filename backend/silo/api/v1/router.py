"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from silo.api.v1.routes import datasets, mapping, query, dashboard, headtohead, champions

api_router = APIRouter()

api_router.include_router(datasets.router, prefix="/datasets", tags=["Datasets"])
api_router.include_router(mapping.router, prefix="/mapping", tags=["Mapping"])
api_router.include_router(query.router, prefix="/query", tags=["Query"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(headtohead.router, prefix="/headtohead", tags=["Head-to-Head"])
api_router.include_router(champions.router, prefix="/champions", tags=["Champions"])
