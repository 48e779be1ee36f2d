"""Citation URL helpers.

Unwraps translation-service redirect URLs, resolves display domains and pulls
plain-text URLs out of model output. Nothing here raises on bad input.
"""

import re
from typing import List, Optional
from urllib.parse import parse_qs, urlparse

from ..schemas.claims import ResolvedUrl

UNKNOWN_DOMAIN = "Unknown Source"

REDIRECT_HOSTS = frozenset({
    "translate.google.com",
    "translate.googleusercontent.com",
})
REDIRECT_PARAMS = ("u", "url")

# Stops at quotes and closing brackets so URLs inside JSON strings come out whole
URL_REGEX = re.compile(r"https?://[^\s\]\)\"']+")
TRAILING_PUNCT_RE = re.compile(r"[.,;)]$")


def _hostname(url: str) -> Optional[str]:
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def _unwrap_once(url: str) -> Optional[str]:
    if _hostname(url) not in REDIRECT_HOSTS:
        return None
    try:
        params = parse_qs(urlparse(url).query)
    except ValueError:
        return None
    for name in REDIRECT_PARAMS:
        values = params.get(name)
        if values and values[0]:
            return values[0]
    return None


def clean_url(url: str) -> str:
    """
    Returns the real destination of a translation redirect URL, or the URL
    unchanged. Nested wrappers are unwrapped too, so cleaning is idempotent.
    """
    if not url:
        return ""
    # The inner URL is decoded from the outer query string, so it is always shorter
    while True:
        inner = _unwrap_once(url)
        if inner is None or len(inner) >= len(url):
            return url
        url = inner


def get_domain(url: str) -> str:
    hostname = _hostname(clean_url(url))
    if not hostname:
        return UNKNOWN_DOMAIN
    if hostname.startswith("www."):
        hostname = hostname[len("www."):]
    return hostname or UNKNOWN_DOMAIN


def resolve_url(url: str) -> ResolvedUrl:
    clean = clean_url(url)
    return ResolvedUrl(url=clean, domain=get_domain(clean))


def extract_urls(text: str) -> List[str]:
    """
    Extracts http(s) URLs from text in order of appearance, trims one trailing
    punctuation character and deduplicates.
    """
    clean_urls = []
    seen = set()

    for url in URL_REGEX.findall(text or ""):
        url = TRAILING_PUNCT_RE.sub("", url)

        if url in seen:
            continue

        clean_urls.append(url)
        seen.add(url)

    return clean_urls
