"""API middleware modules."""

from .auth import AuthenticatedUser, get_optional_user

__all__ = ["AuthenticatedUser", "get_optional_user"]
