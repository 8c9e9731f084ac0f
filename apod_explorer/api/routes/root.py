"""Root Route — static API documentation payload."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from apod_explorer.api.request_state import get_request_context
from apod_explorer.config import APP_VERSION
from apod_explorer.core.date_validation import FIRST_APOD_DATE

router = APIRouter(tags=["docs"])

ENDPOINTS = {
    "root": {
        "method": "GET",
        "path": "/",
        "description": "API documentation and welcome message",
    },
    "health": {
        "method": "GET",
        "path": "/health",
        "description": "Health check and server status",
    },
    "apod": {
        "method": "GET",
        "path": "/api/apod",
        "description": "Get today's Astronomy Picture of the Day",
    },
    "apodWithDate": {
        "method": "GET",
        "path": "/api/apod/:date",
        "description": "Get APOD for a specific date (YYYY-MM-DD format)",
        "example": "/api/apod/2024-01-15",
    },
}


@router.get("/")
async def api_documentation(request: Request):
    runtime = request.app.state.runtime
    settings = runtime.settings
    return {
        "success": True,
        "message": "Welcome to NASA APOD Explorer API",
        "version": APP_VERSION,
        "endpoints": ENDPOINTS,
        "documentation": {
            "dateFormat": "YYYY-MM-DD",
            "minDate": FIRST_APOD_DATE.isoformat(),
            "maxDate": "Today",
            "rateLimit": (
                f"{settings.rate_limit_max_requests} requests per "
                f"{settings.rate_limit_window_seconds // 60} minutes per IP"
            ),
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "requestId": get_request_context(request).request_id,
    }
