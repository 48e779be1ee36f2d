"""One-call processing of a chat model response.

process_response() runs recovery, validation and normalization and returns a
tagged ExtractionResult. Extraction failures are reported in the result, never
raised, so the caller can always fall back to showing the raw content.
"""

from typing import Any, List, Mapping, Optional
from pydantic import BaseModel, ConfigDict

from ..extraction.citations import extract_citations
from ..extraction.errors import ExtractionError, ExtractionErrorKind
from ..extraction.normalize import normalize
from ..extraction.validate import parse_claims_from_response
from ..log import get_logger
from ..schemas.claims import Citation, ClaimRow, ParsedPayload

logger = get_logger("pipeline")


class ExtractionFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ExtractionErrorKind
    message: str


class ExtractionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    rows: List[ClaimRow] = []
    citations: List[Citation] = []
    payload: Optional[ParsedPayload] = None
    error: Optional[ExtractionFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def content_from_envelope(envelope: Mapping[str, Any]) -> str:
    """Returns choices[0].message.content, or an empty string."""
    choices = envelope.get("choices") if isinstance(envelope, Mapping) else None
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], Mapping):
        return ""
    message = choices[0].get("message")
    if not isinstance(message, Mapping):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""


def process_response(content: str, envelope: Optional[Mapping[str, Any]] = None) -> ExtractionResult:
    content = content or ""
    citations = extract_citations(content, envelope)

    try:
        payload = parse_claims_from_response(content)
    except ExtractionError as e:
        logger.warning(f"Extraction failed ({e.kind.value}): {e.message}")
        return ExtractionResult(
            content=content,
            citations=citations,
            error=ExtractionFailure(kind=e.kind, message=e.message),
        )

    rows = normalize(payload)
    if not rows:
        logger.info("Response parsed but contains no claims.")
    else:
        logger.info(f"Extracted {len(rows)} claims, {len(citations)} citations.")

    return ExtractionResult(content=content, rows=rows, citations=citations, payload=payload)


def process_envelope(envelope: Mapping[str, Any]) -> ExtractionResult:
    return process_response(content_from_envelope(envelope), envelope)
