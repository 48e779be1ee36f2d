from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from pathlib import Path
from typing import Optional

_REPO_ROOT = Path(__file__).resolve().parents[2]

AVAILABLE_MODELS = [
    {"id": "perplexity/sonar", "name": "Sonar"},
    {"id": "perplexity/sonar-pro", "name": "Sonar Pro"},
    {"id": "perplexity/sonar-pro-search", "name": "Sonar Pro Search"},
    {"id": "perplexity/sonar-reasoning", "name": "Sonar Reasoning"},
    {"id": "perplexity/sonar-reasoning-pro", "name": "Sonar Reasoning Pro"},
    {"id": "perplexity/sonar-deep-research", "name": "Sonar Deep Research"},
]

class Settings(BaseSettings):
    OPENROUTER_API_KEY: Optional[str] = Field(None, description="OpenRouter API key (fallback when no key file is saved)")
    OPENROUTER_BASE_URL: str = Field("https://openrouter.ai/api/v1", description="OpenRouter API base URL")
    OPENROUTER_APP_TITLE: str = "Sonar Source Extractor"
    OPENROUTER_REFERER: str = "http://localhost:3000"
    MODEL: str = "perplexity/sonar"
    TEMPERATURE: float = 0.2
    REQUEST_TIMEOUT: float = Field(120.0, description="Chat request timeout in seconds")
    KEY_STORE_PATH: str = Field("./config.json", description="Where a key saved from the CLI is kept")
    PROMPTS_DIR: str = Field(str(_REPO_ROOT / "data" / "prompts"), description="Directory with prompt YAML files")
    SEARCH_DEBOUNCE_MS: int = Field(300, description="Quiet period before a search input is applied")
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

@lru_cache()
def get_settings() -> Settings:
    return Settings()
