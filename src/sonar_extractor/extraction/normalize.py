"""Normalization of raw claim entries into ClaimRow records.

normalize() is total: every entry yields exactly one row, in input order, and
missing or malformed fields fall back to defaults instead of raising.
"""

from typing import Any, List, Mapping, Optional

from ..retrieval.url import resolve_url
from ..schemas.claims import ClaimRow, ParsedPayload, SourceRef

DEFAULT_CATEGORY = "General"

# Single-source placeholders the model writes instead of leaving the field out
NO_SOURCE_MARKERS = ("no source", "tidak ada sumber")


def _text(entry: Mapping[str, Any], key: str, default: str = "") -> str:
    """Lower-case key, then capitalized key, then the default."""
    for candidate in (key, key.capitalize()):
        value = entry.get(candidate)
        if isinstance(value, str) and value:
            return value
    return default


def resolve_claim(entry: Mapping[str, Any]) -> str:
    return _text(entry, "claim")


def resolve_context(entry: Mapping[str, Any]) -> str:
    return _text(entry, "context")


def resolve_category(entry: Mapping[str, Any]) -> str:
    return _text(entry, "category", DEFAULT_CATEGORY)


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _source_from_object(item: Any) -> Optional[SourceRef]:
    if not isinstance(item, dict):
        return None
    url = item.get("url")
    if not isinstance(url, str) or not url:
        return None
    resolved = resolve_url(url)
    return SourceRef(
        url=resolved.url,
        domain=resolved.domain,
        title=_optional_str(item.get("title")),
        date=_optional_str(item.get("date")),
    )


def resolve_sources(entry: Mapping[str, Any]) -> List[SourceRef]:
    """
    A non-empty 'sources' list wins, even when none of its items has a URL.
    Otherwise a single 'source'/'Source' string is used unless it is a
    "no source" placeholder.
    """
    sources = entry.get("sources")
    if isinstance(sources, list) and sources:
        refs = (_source_from_object(item) for item in sources)
        return [ref for ref in refs if ref is not None]

    single = _text(entry, "source")
    if not single:
        return []
    lowered = single.lower()
    if any(marker in lowered for marker in NO_SOURCE_MARKERS):
        return []
    resolved = resolve_url(single)
    return [SourceRef(url=resolved.url, domain=resolved.domain)]


def normalize_entry(entry: Any, index: int) -> ClaimRow:
    fields: Mapping[str, Any] = entry if isinstance(entry, dict) else {}
    return ClaimRow(
        id=f"claim-{index}",
        claim=resolve_claim(fields),
        category=resolve_category(fields),
        context=resolve_context(fields),
        sources=tuple(resolve_sources(fields)),
        keywords=fields.get("keywords"),
    )


def normalize(payload: ParsedPayload) -> List[ClaimRow]:
    return [normalize_entry(entry, i) for i, entry in enumerate(payload.claims)]
