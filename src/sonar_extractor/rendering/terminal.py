"""Rich terminal rendering for extraction results.

Builds renderables only; printing is left to the caller's Console.
"""

from __future__ import annotations

import json
from typing import Sequence

from rich.console import Group
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from ..pipeline.run import ExtractionFailure
from ..query.sort import SortState
from ..schemas.claims import Citation, ClaimRow, ParsedPayload

_SORT_ARROWS = {"asc": "▲", "desc": "▼"}


def _header(label: str, key: str, sort: SortState) -> str:
    if sort.key.value == key:
        return f"{label} {_SORT_ARROWS[sort.direction.value]}"
    return label


def render_claims_table(rows: Sequence[ClaimRow], total: int, sort: SortState, query: str = "") -> Table:
    table = Table(
        title=f"{len(rows)} / {total} claims",
        show_lines=True,
        expand=True,
    )
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column(_header("Claim", "claim", sort), ratio=4)
    table.add_column(_header("Category", "category", sort), style="cyan", no_wrap=True)
    table.add_column(_header("Context", "context", sort), ratio=3, style="dim")
    table.add_column("Sources", ratio=2)

    for row in rows:
        sources = Text()
        for i, source in enumerate(row.sources):
            if i:
                sources.append("\n")
            sources.append(source.domain, style=Style(link=source.url))
        # Text() keeps brackets in model output from being read as markup
        table.add_row(row.id.split("-")[-1], Text(row.claim), Text(row.category), Text(row.context), sources)

    if not rows:
        if query.strip():
            table.caption = "No claims match your search."
        else:
            table.caption = "Topic not found, or the available sources were not enough to extract claims."
    return table


def render_citations(citations: Sequence[Citation]) -> Table:
    table = Table(title="Sources", show_header=False, box=None)
    table.add_column(style="dim", no_wrap=True)
    table.add_column(style="bold")
    table.add_column(overflow="fold")
    for c in citations:
        table.add_row(f"[{c.index}]", Text(c.domain), Text(c.url))
    return table


def render_failure(failure: ExtractionFailure, content: str) -> Group:
    """Error message plus the raw model output so nothing is hidden from the user."""
    return Group(
        Text(f"Could not process structured data ({failure.kind.value}): {failure.message}", style="bold red"),
        Panel(Text(content or "(empty response)"), title="Raw output", border_style="red"),
    )


def payload_to_json(payload: ParsedPayload) -> str:
    return json.dumps(payload.document, indent=2, ensure_ascii=False)
