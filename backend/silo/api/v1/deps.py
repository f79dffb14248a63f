"""
Shared route dependencies.

The AppContext lives on ``app.state.context`` (created in the lifespan).
"""

from fastapi import Depends, HTTPException, Request

from silo.features.dataset.context import AppContext


def get_context(request: Request) -> AppContext:
    """Application context of the running app."""
    return request.app.state.context


def require_dataset(context: AppContext = Depends(get_context)) -> AppContext:
    """Context with a loaded dataset, 404 otherwise."""
    if not context.is_loaded:
        raise HTTPException(status_code=404, detail="No dataset loaded. Upload an .xlsx file first")
    return context
