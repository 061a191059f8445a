"""Root and health endpoints."""

from fastapi import APIRouter

from ..state import get_state

router = APIRouter()


@router.get("/")
def root():
    state = get_state()
    return {
        "name": "Clip Search Gateway",
        "version": "1.0.0",
        "endpoints": {
            "search": ["/search"],
            "analytics": [
                "/api/analytics/page-sessions",
                "/api/analytics/page-sessions/{session_id}/end",
                "/api/analytics/interactions",
                "/api/analytics/intervals",
                "/api/analytics/compilation-sessions",
                "/api/analytics/compilation-sessions/{id}/exit",
            ],
        },
        "auth_mode": state.config.auth_mode,
    }


@router.get("/api/health")
def health():
    state = get_state()
    config_ok, config_errors = state.config.validate()
    return {
        "status": "healthy",
        "config_valid": config_ok,
        "config_errors": config_errors,
        "analytics_store": type(state.analytics_store).__name__,
        "identity_verifier": type(state.identity_verifier).__name__,
    }
