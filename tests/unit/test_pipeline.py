from sonar_extractor.extraction.errors import ExtractionErrorKind
from sonar_extractor.pipeline.run import content_from_envelope, process_envelope, process_response


def test_process_full_envelope(response_envelope):
    """
    WHY: The normal path: a chat response with fenced JSON and provider citations.
    HOW: Process the whole envelope.
    EXPECTED: ok result with two rows, two citations and the untouched content.
    """
    result = process_envelope(response_envelope)
    assert result.ok
    assert [r.id for r in result.rows] == ["claim-0", "claim-1"]
    assert [c.domain for c in result.citations] == ["med.stanford.edu", "wired.com"]
    assert result.content == response_envelope["choices"][0]["message"]["content"]
    assert result.payload.document["key_phrases"] == ["AI healthcare"]


def test_process_zero_claims_is_ok():
    result = process_response('```json\n{"metadata":{},"claims":[]}\n```')
    assert result.ok
    assert result.rows == []
    assert result.payload is not None


def test_failures_are_tagged_not_raised():
    """
    WHY: The UI must always be able to show the raw text when structure is missing.
    HOW: Process each failure scenario.
    EXPECTED: error.kind set, rows empty, content kept verbatim.
    """
    cases = {
        "": ExtractionErrorKind.EMPTY_RESPONSE,
        "Sorry, I could not find information.": ExtractionErrorKind.TOPIC_NOT_FOUND,
        '{"metadata":{"topic_summary": "x"}': ExtractionErrorKind.MALFORMED_JSON,
        '{"claims": []}': ExtractionErrorKind.INCOMPLETE_SCHEMA,
        '{"metadata": {}, "claims": {}}': ExtractionErrorKind.INVALID_CLAIMS_TYPE,
    }
    for content, kind in cases.items():
        result = process_response(content)
        assert not result.ok
        assert result.error.kind is kind
        assert result.error.message
        assert result.rows == []
        assert result.content == content


def test_failure_still_lists_text_citations():
    content = "Sorry, not found. Try https://example.com/help."
    result = process_response(content)
    assert result.error.kind is ExtractionErrorKind.TOPIC_NOT_FOUND
    assert [c.url for c in result.citations] == ["https://example.com/help"]


def test_none_content_is_empty_response():
    result = process_response(None)
    assert result.error.kind is ExtractionErrorKind.EMPTY_RESPONSE
    assert result.content == ""


def test_content_from_envelope_handles_bad_shapes():
    assert content_from_envelope({"choices": [{"message": {"content": "hi"}}]}) == "hi"
    for envelope in [{}, {"choices": []}, {"choices": [None]}, {"choices": [{"message": None}]},
                     {"choices": [{"message": {"content": 5}}]}]:
        assert content_from_envelope(envelope) == ""
