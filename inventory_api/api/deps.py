# inventory_api/api/deps.py
from fastapi import Request

from inventory_api.core.config import Settings
from inventory_api.core.metrics import Metrics
from inventory_api.services.product_service.inventory import UNKNOWN_CLIENT


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_metrics(request: Request) -> Metrics:
    return request.app.state.metrics


def get_user_info(request: Request) -> str:
    """Client descriptor stored with each stock change."""
    return request.headers.get("user-agent") or UNKNOWN_CLIENT
