"""
FastAPI dependencies resolving services from the registry.
Tests replace them through app.dependency_overrides.
"""
from typing import Optional

from fastapi import Header, HTTPException

from healthbot.utils.registry import ServiceNotRegistered, registry
from healthbot.utils.settings import settings


def _service(key: str):
    try:
        return registry.require(key)
    except ServiceNotRegistered:
        raise HTTPException(status_code=503, detail=f"Service '{key}' is not ready")


def get_message_controller():
    return _service("message_controller")


def get_scheduler():
    return _service("scheduler")


def get_outbreak_cache():
    return _service("outbreak_cache")


def get_feedback_service():
    return _service("feedback")


def get_alert_preferences():
    return _service("alert_preferences")


def require_admin_key(x_admin_key: Optional[str] = Header(None)):
    """Admin endpoints are open when ADMIN_API_KEY is unset"""
    if settings.ADMIN_API_KEY and x_admin_key != settings.ADMIN_API_KEY:
        raise HTTPException(status_code=401, detail="Invalid admin key")
