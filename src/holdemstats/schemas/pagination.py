# src/holdemstats/schemas/pagination.py

"""Pagination schemas for paged API responses."""

from typing import Generic, TypeVar

from pydantic import Field, model_validator

from .common import WireModel
from .hand_history import HandHistoryEntry

T = TypeVar("T")


class Page(WireModel, Generic[T]):
    """Standard paged response wrapper.

    Attributes:
        content: Items for the current page
        total_pages: Number of pages available for the query
        number: Zero-based index of this page
    """

    content: tuple[T, ...] = ()
    total_pages: int = Field(..., ge=0, description="Pages available")
    number: int = Field(..., ge=0, description="Zero-based page index")

    @model_validator(mode="after")
    def _check_cursor(self) -> "Page[T]":
        # An empty result is reported as page 0 of 0
        if self.total_pages == 0 and self.number == 0:
            return self
        if self.number >= self.total_pages:
            raise ValueError(
                f"page number {self.number} is outside of {self.total_pages} page(s)"
            )
        return self


HandHistoryPage = Page[HandHistoryEntry]
