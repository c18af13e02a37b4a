from __future__ import annotations

from typing import Any, Dict, Optional

from code_snippets.domain.entities.snippet import SHARED_NETWORK_OPTION
from code_snippets.domain.interfaces.snippet_environment_interface import ISnippetEnvironment


class SettingsSnippetEnvironment(ISnippetEnvironment):
    """Environment adapter backed by the application settings.

    The settings object only needs the MULTISITE, NETWORK_ADMIN and
    SHARED_NETWORK_SNIPPETS attributes, so tests may pass a simple namespace.
    """

    def __init__(self, settings: Any) -> None:
        self._settings = settings
        self._site_options: Dict[str, Any] = {
            SHARED_NETWORK_OPTION: list(getattr(settings, "SHARED_NETWORK_SNIPPETS", None) or []),
        }

    def network_admin_context(self) -> Optional[bool]:
        return getattr(self._settings, "NETWORK_ADMIN", None)

    def is_multisite(self) -> bool:
        return bool(getattr(self._settings, "MULTISITE", False))

    def get_site_option(self, key: str, default: Any = None) -> Any:
        return self._site_options.get(key, default)
