"""Case-insensitive substring search over claim rows."""

from __future__ import annotations

from typing import List, Sequence, Tuple
from pydantic import BaseModel, ConfigDict

from ..schemas.claims import ClaimRow


def index_text(row: ClaimRow) -> str:
    return f"{row.claim} {row.context} {row.category}".lower()


class SearchIndex(BaseModel):
    """
    Rows paired with their lowercase search text. Build once per dataset;
    changing the query must not rebuild it.
    """
    model_config = ConfigDict(frozen=True)

    rows: Tuple[ClaimRow, ...] = ()
    texts: Tuple[str, ...] = ()

    @classmethod
    def build(cls, rows: Sequence[ClaimRow]) -> "SearchIndex":
        rows = tuple(rows)
        return cls(rows=rows, texts=tuple(index_text(row) for row in rows))


def filter_rows(index: SearchIndex, query: str) -> List[ClaimRow]:
    needle = (query or "").strip().lower()
    if not needle:
        return list(index.rows)
    return [row for row, text in zip(index.rows, index.texts) if needle in text]
