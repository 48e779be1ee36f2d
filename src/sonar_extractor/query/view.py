"""Immutable snapshot of what the claims table shows.

The presentation layer owns one ClaimsView and replaces it on every change.
The search index is rebuilt only when the dataset changes.
"""

from __future__ import annotations

from typing import List, Sequence
from pydantic import BaseModel, ConfigDict

from ..schemas.claims import ClaimRow
from .search import SearchIndex, filter_rows
from .sort import SortKey, SortState


class ClaimsView(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: SearchIndex = SearchIndex()
    # What the user has typed so far, echoed immediately
    search_input: str = ""
    # What the filter actually uses, set when the debounce fires
    query: str = ""
    sort: SortState = SortState()

    @classmethod
    def from_rows(cls, rows: Sequence[ClaimRow]) -> "ClaimsView":
        return cls(index=SearchIndex.build(rows))

    @property
    def rows(self) -> tuple:
        return self.index.rows

    def with_dataset(self, rows: Sequence[ClaimRow]) -> "ClaimsView":
        """A new response replaces the dataset; search and sort reset."""
        return ClaimsView.from_rows(rows)

    def with_search_input(self, text: str) -> "ClaimsView":
        return self.model_copy(update={"search_input": text})

    def with_query(self, query: str) -> "ClaimsView":
        return self.model_copy(update={"query": query})

    def with_sort(self, key: SortKey) -> "ClaimsView":
        return self.model_copy(update={"sort": self.sort.toggle(key)})

    def clear_search(self) -> "ClaimsView":
        return self.model_copy(update={"search_input": "", "query": ""})

    def visible_rows(self) -> List[ClaimRow]:
        return self.sort.apply(filter_rows(self.index, self.query))
