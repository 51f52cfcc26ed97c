"""
Shared plumbing for screen services.
"""
import logging
from typing import List, Type, TypeVar

from pydantic import BaseModel

from .backend import BackendClient
from .errors import ValidationFailed

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

SIGN_IN_REQUIRED = "You must be logged in first!"


class ScreenService:
    """A screen's worth of backend access, bound to one client."""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def current_user_id(self, message: str = SIGN_IN_REQUIRED) -> str:
        user = await self.backend.auth.get_user()
        if not user or not user.get("id"):
            raise ValidationFailed(message)
        return user["id"]

    @staticmethod
    def parse(model: Type[M], rows: List[dict]) -> List[M]:
        return [model(**row) for row in rows]

    @staticmethod
    def first(model: Type[M], rows: List[dict]):
        """First returned row as a model, or None when the backend returned nothing."""
        return model(**rows[0]) if rows else None
