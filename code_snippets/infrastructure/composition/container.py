from __future__ import annotations

import threading
from typing import Optional


_environment_singleton = None  # type: Optional["SettingsSnippetEnvironment"]
_snippet_service_singleton = None  # type: Optional["SnippetService"]
_singleton_lock = threading.Lock()


def get_snippet_environment():
    """
    Composition Root: build and return the singleton hosting environment.
    Keeps construction inside infrastructure, so callers only depend on the domain interface.
    """
    global _environment_singleton
    if _environment_singleton is not None:
        return _environment_singleton

    # Ensure singleton creation is thread-safe under concurrent first requests
    with _singleton_lock:
        if _environment_singleton is not None:
            return _environment_singleton

        # Lazy imports to avoid hard coupling at import time and ease tests/mocks
        from code_snippets.infrastructure.environment.settings_environment import (
            SettingsSnippetEnvironment,
        )
        from config import config

        _environment_singleton = SettingsSnippetEnvironment(config)
        return _environment_singleton


def get_snippet_service():
    """Composition Root: build and return a singleton SnippetService."""
    global _snippet_service_singleton
    if _snippet_service_singleton is not None:
        return _snippet_service_singleton

    environment = get_snippet_environment()
    with _singleton_lock:
        if _snippet_service_singleton is not None:
            return _snippet_service_singleton

        from code_snippets.application.services.snippet_service import SnippetService
        from code_snippets.domain.services.tag_parser import TagParser

        _snippet_service_singleton = SnippetService(
            environment=environment,
            tag_parser=TagParser(),
        )
        return _snippet_service_singleton


def reset_container() -> None:
    """Drop the cached singletons (tests, config reloads)."""
    global _environment_singleton, _snippet_service_singleton
    with _singleton_lock:
        _environment_singleton = None
        _snippet_service_singleton = None
