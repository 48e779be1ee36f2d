"""CSV export of normalized claim rows.

Every field is quoted; multiple keywords and sources are joined with "; ".
"""

from __future__ import annotations

import csv
import io
from typing import Any, List, Sequence

from ..schemas.claims import ClaimRow, SourceRef

CSV_HEADERS = ["Claim", "Context", "Keywords", "Sources", "Category"]


def format_keywords(keywords: Any) -> str:
    if not isinstance(keywords, list):
        return ""
    return "; ".join(str(k) for k in keywords)


def format_source(source: SourceRef) -> str:
    text = source.url
    if source.title:
        text += f" ({source.title})"
    if source.date:
        text += f" [{source.date}]"
    return text


def row_to_csv_fields(row: ClaimRow) -> List[str]:
    sources = "; ".join(format_source(s) for s in row.sources if s.url)
    return [row.claim, row.context, format_keywords(row.keywords), sources, row.category]


def export_csv(rows: Sequence[ClaimRow]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for row in rows:
        writer.writerow(row_to_csv_fields(row))
    return buffer.getvalue()
