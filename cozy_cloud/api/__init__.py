"""HTTP API for Cozy Cloud."""
from .routes import router

__all__ = ["router"]
