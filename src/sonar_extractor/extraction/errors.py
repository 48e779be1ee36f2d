"""Typed failures raised by content recovery and structural validation.

Callers branch on ``ExtractionError.kind`` instead of matching message text.
"""

from enum import Enum


class ExtractionErrorKind(str, Enum):
    EMPTY_RESPONSE = "empty_response"
    TOPIC_NOT_FOUND = "topic_not_found"
    MALFORMED_JSON = "malformed_json"
    INCOMPLETE_SCHEMA = "incomplete_schema"
    INVALID_CLAIMS_TYPE = "invalid_claims_type"


class ExtractionError(Exception):
    kind: ExtractionErrorKind
    default_message = "Could not process the model response."

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class EmptyResponseError(ExtractionError):
    kind = ExtractionErrorKind.EMPTY_RESPONSE
    default_message = "The model returned an empty response."


class TopicNotFoundError(ExtractionError):
    kind = ExtractionErrorKind.TOPIC_NOT_FOUND
    default_message = "Topic not found, or the available sources were not enough to extract claims."


class MalformedJsonError(ExtractionError):
    kind = ExtractionErrorKind.MALFORMED_JSON
    default_message = "Could not parse the data (JSON syntax error). The model probably returned invalid formatting."


class IncompleteSchemaError(ExtractionError):
    kind = ExtractionErrorKind.INCOMPLETE_SCHEMA
    default_message = "Incomplete data: 'metadata' or 'claims' was not found."


class InvalidClaimsTypeError(ExtractionError):
    kind = ExtractionErrorKind.INVALID_CLAIMS_TYPE
    default_message = "Invalid data: 'claims' must be a list."
