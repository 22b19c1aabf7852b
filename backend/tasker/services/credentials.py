"""Credential store used before any call to the model provider."""
from __future__ import annotations

from functools import lru_cache
from threading import Lock
from typing import Dict, Optional, Protocol

from tasker.core.config import settings

OPENAI_API_KEY_SECRET = "openai_api_key"


class CredentialStore(Protocol):
    def get_secret(self, name: str) -> Optional[str]:
        ...

    def set_secret(self, name: str, value: str) -> None:
        ...

    def delete_secret(self, name: str) -> None:
        ...


class InMemoryCredentialStore:
    """Thread-safe secret map; values are never logged."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._lock = Lock()
        self._secrets: Dict[str, str] = {}
        for name, value in (initial or {}).items():
            self.set_secret(name, value)

    def get_secret(self, name: str) -> Optional[str]:
        with self._lock:
            return self._secrets.get(name)

    def set_secret(self, name: str, value: str) -> None:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("secret value must not be empty")
        with self._lock:
            self._secrets[name] = cleaned

    def delete_secret(self, name: str) -> None:
        with self._lock:
            self._secrets.pop(name, None)

    def has_secret(self, name: str) -> bool:
        return self.get_secret(name) is not None


@lru_cache
def get_credential_store() -> InMemoryCredentialStore:
    """Process credential store, seeded from OPENAI_API_KEY when present."""
    initial: Dict[str, str] = {}
    if settings.openai_api_key and settings.openai_api_key.strip():
        initial[OPENAI_API_KEY_SECRET] = settings.openai_api_key
    return InMemoryCredentialStore(initial)
