"""HTTP backend for strategy analysis."""
from .server import app, create_app, get_strategist

__all__ = ["app", "create_app", "get_strategist"]
