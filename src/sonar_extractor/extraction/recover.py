"""Content recovery: isolate the JSON payload inside a free-form model answer.

Models wrap the object in code fences or surround it with commentary. Slicing
on the outermost braces recovers it without a tokenizer.
"""

import re
from .errors import EmptyResponseError, TopicNotFoundError

_FENCE_JSON_RE = re.compile(r"```json\s*")
_FENCE_RE = re.compile(r"```\s*")

REFUSAL_MARKERS = (
    "sorry",
    "could not find",
    "not found",
    "tidak dapat menemukan",
    "tidak ditemukan",
)


def check_refusal(raw: str) -> None:
    """
    Raises EmptyResponseError for blank content and TopicNotFoundError for a
    natural-language refusal that carries no JSON claims object.
    """
    if not raw or not raw.strip():
        raise EmptyResponseError()

    lowered = raw.lower()
    if any(marker in lowered for marker in REFUSAL_MARKERS):
        # A real payload may mention these words inside a claim
        if "{" not in raw or '"claims"' not in raw:
            raise TopicNotFoundError()


def strip_code_fences(raw: str) -> str:
    cleaned = _FENCE_JSON_RE.sub("", raw)
    cleaned = _FENCE_RE.sub("", cleaned)
    return cleaned.strip()


def recover_json_text(raw: str) -> str:
    """
    Returns the span from the first '{' to the last '}' of the fence-stripped
    text. Without such a span the cleaned text is returned as is, so the parser
    reports a syntax error instead of content disappearing.
    """
    cleaned = strip_code_fences(raw or "")

    first = cleaned.find("{")
    last = cleaned.rfind("}")
    if first != -1 and last != -1 and last > first:
        return cleaned[first:last + 1]
    return cleaned
