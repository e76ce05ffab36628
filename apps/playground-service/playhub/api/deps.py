"""
FastAPI dependencies shared by the routers.
"""
from fastapi import Request

from playhub.services.controller import Controller


def get_controller(request: Request) -> Controller:
    """Return the controller built at startup for this app."""
    return request.app.state.controller
