"""Shared API dependencies."""

from datetime import date

from billbook.core.database import get_db
from billbook.core.security import AuthUser, get_current_user


def get_today() -> date:
    """Reference date for period computations (overridden in tests)."""
    return date.today()


__all__ = ["AuthUser", "get_db", "get_current_user", "get_today"]
