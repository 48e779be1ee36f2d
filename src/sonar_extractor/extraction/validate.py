"""Structural validation of recovered JSON text.

Only ExtractionError subclasses leave this module.
"""

import json
from typing import Any

from ..schemas.claims import ParsedPayload, PayloadMetadata
from .errors import IncompleteSchemaError, InvalidClaimsTypeError, MalformedJsonError
from .recover import check_refusal, recover_json_text


def _coerce_metadata(value: Any) -> PayloadMetadata:
    if isinstance(value, dict):
        return PayloadMetadata.model_validate(value)
    return PayloadMetadata(value=value)


def validate(json_text: str) -> ParsedPayload:
    try:
        parsed = json.loads(json_text)
    except (ValueError, RecursionError) as e:
        raise MalformedJsonError() from e

    if not isinstance(parsed, dict):
        raise IncompleteSchemaError()
    if parsed.get("metadata") is None or parsed.get("claims") is None:
        raise IncompleteSchemaError()

    claims = parsed["claims"]
    if not isinstance(claims, list):
        raise InvalidClaimsTypeError()

    return ParsedPayload(
        metadata=_coerce_metadata(parsed["metadata"]),
        claims=tuple(claims),
        document=parsed,
    )


def parse_claims_from_response(raw: str) -> ParsedPayload:
    """Refusal check, recovery and validation in one call."""
    check_refusal(raw)
    return validate(recover_json_text(raw))
