"""Response-level citation list, independent of per-claim sources.

Priority:
1. choices[0].citations (Perplexity field passed through by OpenRouter)
2. citations at the envelope root
3. URLs found in the message text
"""

from typing import Any, List, Mapping, Optional

from ..retrieval.url import extract_urls, resolve_url
from ..schemas.claims import Citation


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item]


def provider_citations(envelope: Optional[Mapping[str, Any]]) -> List[str]:
    if not isinstance(envelope, Mapping):
        return []

    choices = envelope.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], Mapping):
        urls = _string_list(choices[0].get("citations"))
        if urls:
            return urls

    return _string_list(envelope.get("citations"))


def extract_citations(content: str, envelope: Optional[Mapping[str, Any]] = None) -> List[Citation]:
    urls = provider_citations(envelope) or extract_urls(content)

    citations = []
    for i, url in enumerate(urls, start=1):
        resolved = resolve_url(url)
        citations.append(Citation(index=i, url=resolved.url, domain=resolved.domain))
    return citations
