"""SQLAlchemy models."""

from billbook.models.base import Base
from billbook.models.bill import Bill

__all__ = [
    "Base",
    "Bill",
]
