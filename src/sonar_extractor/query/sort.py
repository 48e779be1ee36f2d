"""Stable sorting of claim rows and the header-click sort state."""

from __future__ import annotations

from enum import Enum
from typing import List, Sequence
from pydantic import BaseModel, ConfigDict

from ..schemas.claims import ClaimRow


class SortKey(str, Enum):
    CLAIM = "claim"
    CATEGORY = "category"
    CONTEXT = "context"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


def sort_rows(rows: Sequence[ClaimRow], key: SortKey, direction: SortDirection = SortDirection.ASC) -> List[ClaimRow]:
    """
    Returns a new list sorted on a text field. Rows with equal keys keep their
    relative order in both directions.
    """
    field = SortKey(key).value
    # sorted() is stable for reverse=True as well
    return sorted(
        rows,
        key=lambda row: getattr(row, field),
        reverse=SortDirection(direction) is SortDirection.DESC,
    )


class SortState(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: SortKey = SortKey.CATEGORY
    direction: SortDirection = SortDirection.ASC

    def toggle(self, key: SortKey) -> "SortState":
        """Same key flips the direction; a new key starts ascending."""
        key = SortKey(key)
        if key is self.key:
            flipped = SortDirection.DESC if self.direction is SortDirection.ASC else SortDirection.ASC
            return SortState(key=key, direction=flipped)
        return SortState(key=key, direction=SortDirection.ASC)

    def apply(self, rows: Sequence[ClaimRow]) -> List[ClaimRow]:
        return sort_rows(rows, self.key, self.direction)
