import pytest
import os
from dotenv import load_dotenv

@pytest.fixture(scope="session", autouse=True)
def _load_env():
    # Load .env once per session to avoid side-effects on import time
    load_dotenv()

def _truthy(v: str | None) -> bool:
    return v is not None and v.strip().lower() not in ("", "0", "false", "no")

@pytest.fixture(scope="session")
def allow_integration(_load_env) -> bool:
    # Depends on _load_env to ensure .env is loaded first
    return _truthy(os.getenv("RUN_INTEGRATION_TESTS"))

@pytest.fixture(scope="session")
def openrouter_api_key(_load_env) -> str | None:
    key = os.getenv("OPENROUTER_API_KEY")
    if not key or "PLACEHOLDER" in key:
        return None
    return key

@pytest.fixture
def key_store(tmp_path):
    """
    Points the key store at a temporary file and clears the env key.
    Patches the cached settings object, which every module reads through get_settings().
    """
    from sonar_extractor.config import get_settings
    settings = get_settings()

    original = (settings.KEY_STORE_PATH, settings.OPENROUTER_API_KEY)
    settings.KEY_STORE_PATH = str(tmp_path / "config.json")
    settings.OPENROUTER_API_KEY = None

    yield settings

    settings.KEY_STORE_PATH, settings.OPENROUTER_API_KEY = original

@pytest.fixture
def model_content():
    """A typical Sonar answer: prose, a fenced JSON object, and a trailing note."""
    return (
        "Here is the extraction you asked for:\n"
        "```json\n"
        "{\n"
        '  "metadata": {"topic_summary": "AI dalam healthcare.", "total_claims": 2, "extraction_date": "2025-01-10"},\n'
        '  "key_phrases": ["AI healthcare"],\n'
        '  "claims": [\n'
        '    {"claim": "AI tools improve accuracy 94%", "context": "Stanford study", "category": "Empirical",\n'
        '     "keywords": ["AI", "diagnostic"],\n'
        '     "sources": [{"url": "https://med.stanford.edu/news/ai.html", "title": "AI Improves Detection", "date": "2024-03"}]},\n'
        '    {"Claim": "Adoption reached 45%", "Category": "Trend", "Source": "https://www.wired.com/story/1"}\n'
        "  ]\n"
        "}\n"
        "```\n"
        "Let me know if you need more."
    )

@pytest.fixture
def response_envelope(model_content):
    return {
        "id": "gen-123",
        "choices": [
            {
                "message": {"role": "assistant", "content": model_content},
                "finish_reason": "stop",
                "citations": ["https://med.stanford.edu/news/ai.html", "https://www.wired.com/story/1"],
            }
        ],
    }
