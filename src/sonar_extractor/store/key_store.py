"""API key storage.

A key saved from the CLI lives in a small JSON file and takes priority over
the OPENROUTER_API_KEY environment setting.
"""

import json
from pathlib import Path
from typing import Optional, Dict, Any

import httpx
from ..config import get_settings
from ..log import get_logger

logger = get_logger("key_store")

PLACEHOLDER_MARKER = "PLACEHOLDER"


class KeyVerificationError(Exception):
    pass


def is_valid_key(key: Optional[str]) -> bool:
    return bool(key) and bool(key.strip()) and PLACEHOLDER_MARKER not in key


def _store_path() -> Path:
    return Path(get_settings().KEY_STORE_PATH)


def read_stored_key() -> Optional[str]:
    path = _store_path()
    if not path.exists():
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        logger.exception(f"Error reading {path}")
        return None
    key = data.get("apiKey") if isinstance(data, dict) else None
    return key if is_valid_key(key) else None


def get_api_key() -> Optional[str]:
    """Key file first, then the environment."""
    stored = read_stored_key()
    if stored:
        return stored
    env_key = get_settings().OPENROUTER_API_KEY
    return env_key if is_valid_key(env_key) else None


def _error_message(resp: httpx.Response) -> Optional[str]:
    try:
        data = resp.json()
    except ValueError:
        return None
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return None


def verify_key(api_key: str) -> None:
    """Asks OpenRouter whether the key exists. Raises KeyVerificationError if not."""
    settings = get_settings()
    url = f"{settings.OPENROUTER_BASE_URL.rstrip('/')}/auth/key"
    try:
        with httpx.Client(timeout=15.0) as client:
            resp = client.get(url, headers={"Authorization": f"Bearer {api_key}"})
    except httpx.RequestError as e:
        raise KeyVerificationError(f"Failed to verify the API key: {e}") from e

    if resp.status_code != 200:
        message = _error_message(resp) or "Invalid API key. Verification failed."
        if "User not found" in message:
            message = "The API key is invalid or does not exist. Make sure the key is correct."
        raise KeyVerificationError(message)


def save_key(api_key: str, verify: bool = True) -> Path:
    if not is_valid_key(api_key):
        raise KeyVerificationError("API key is required")
    api_key = api_key.strip()
    if verify:
        verify_key(api_key)

    path = _store_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"apiKey": api_key}, f, indent=2)
    logger.info(f"API key saved to {path}")
    return path


def delete_key() -> bool:
    path = _store_path()
    if not path.exists():
        return False
    path.unlink()
    logger.info(f"API key removed from {path}")
    return True


def key_status() -> Dict[str, Any]:
    return {
        "is_configured": get_api_key() is not None,
        "source": "json" if _store_path().exists() else "env",
    }
