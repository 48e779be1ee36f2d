from sonar_extractor.retrieval.url import extract_urls, clean_url, get_domain, resolve_url, UNKNOWN_DOMAIN

def test_extract_urls_basic():
    """
    WHY: When the provider strips citation metadata, the URLs in the answer text are the only sources left.
    HOW: Pass text with mixed HTTP/HTTPS links.
    EXPECTED: Return list containing all valid URLs, in order.
    """
    text = "Check this out https://example.com/foo and http://test.org"
    urls = extract_urls(text)
    assert urls == ["https://example.com/foo", "http://test.org"]

def test_deduplication():
    """
    WHY: The same source is often cited several times in one answer.
    HOW: Pass text with duplicate URLs.
    EXPECTED: Return list with unique URLs only.
    """
    text = "Link https://same.com and https://same.com again"
    urls = extract_urls(text)
    assert urls == ["https://same.com"]

def test_punctuation_stripping():
    """
    WHY: Models end sentences with links or put them in parentheses. We need the CLEAN url.
    HOW: Pass text like "(https://foo.com/bar)." and "https://baz.com;".
    EXPECTED: Trailing punctuation is removed.
    """
    assert extract_urls("Here is a link (https://foo.com/bar).") == ["https://foo.com/bar"]
    assert extract_urls("Click here: https://baz.com;") == ["https://baz.com"]
    assert extract_urls("See https://a.com/x, then") == ["https://a.com/x"]

def test_dedup_after_trimming():
    """
    WHY: "https://a.com." and "https://a.com" are the same source.
    HOW: Cite the URL once at the end of a sentence and once mid-sentence.
    EXPECTED: A single entry.
    """
    assert extract_urls("See https://a.com. Also https://a.com here") == ["https://a.com"]

def test_urls_inside_json_strings():
    """
    WHY: The fallback runs over raw JSON text, where URLs are followed by quotes.
    HOW: Extract from a JSON fragment.
    EXPECTED: The closing quote is not part of the URL.
    """
    text = '{"url": "https://example.com/a", "other": \'https://example.org/b\'}'
    assert extract_urls(text) == ["https://example.com/a", "https://example.org/b"]

def test_no_urls():
    assert extract_urls("") == []
    assert extract_urls("no links here, www.example.com is not http") == []

def test_clean_url_unwraps_google_translate():
    """
    WHY: Sonar often cites pages through Google Translate; users want the real site.
    HOW: Pass translate.google.com URLs using the 'u' and the 'url' parameters.
    EXPECTED: The wrapped destination is returned.
    """
    assert clean_url("https://translate.google.com/translate?u=https://example.com/a") == "https://example.com/a"
    assert clean_url("https://translate.googleusercontent.com/translate_c?url=https%3A%2F%2Fexample.com%2Fb&sl=en") == "https://example.com/b"

def test_clean_url_leaves_other_urls_alone():
    assert clean_url("https://example.com/page?u=https://other.com") == "https://example.com/page?u=https://other.com"
    assert clean_url("https://translate.google.com/?sl=en&tl=id") == "https://translate.google.com/?sl=en&tl=id"
    assert clean_url("") == ""

def test_get_domain_strips_www():
    assert get_domain("https://www.wired.com/story/1") == "wired.com"
    assert get_domain("https://med.stanford.edu/x") == "med.stanford.edu"
    assert get_domain("https://translate.google.com/translate?u=https://www.bbc.co.uk/news") == "bbc.co.uk"

def test_get_domain_unknown_source():
    """
    WHY: One unparseable URL must not break the whole table.
    HOW: Pass values that have no hostname or are not valid URLs.
    EXPECTED: The "Unknown Source" sentinel, no exception.
    """
    assert get_domain("not a url") == UNKNOWN_DOMAIN
    assert get_domain("") == UNKNOWN_DOMAIN
    assert get_domain("https://[::1") == UNKNOWN_DOMAIN
    assert get_domain("/relative/path") == UNKNOWN_DOMAIN

def test_resolve_url_is_idempotent():
    """
    WHY: Resolved URLs get resolved again (export, re-normalization); results must not drift.
    HOW: Resolve a set of clean, wrapped, nested-wrapped and broken inputs twice.
    EXPECTED: resolve(resolve(u).url) == resolve(u) for each.
    """
    nested = "https://translate.google.com/translate?u=" + \
        "https%3A%2F%2Ftranslate.google.com%2Ftranslate%3Fu%3Dhttps%253A%252F%252Fexample.com%252Fdeep"
    samples = [
        "https://example.com/a",
        "https://www.wired.com/story/1",
        "https://translate.google.com/translate?u=https://example.com/a",
        nested,
        "not a url",
        "",
        "https://[::1",
    ]
    for u in samples:
        first = resolve_url(u)
        assert resolve_url(first.url) == first

    assert resolve_url(nested).url == "https://example.com/deep"
