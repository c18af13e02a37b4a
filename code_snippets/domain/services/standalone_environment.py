from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from code_snippets.domain.interfaces.snippet_environment_interface import ISnippetEnvironment


class StandaloneEnvironment(ISnippetEnvironment):
    """Single-site environment without an admin screen.

    Used when a snippet is built outside of a hosting system, e.g. in scripts
    and tests. Site options live in a plain in-memory mapping.
    """

    def __init__(
        self,
        *,
        multisite: bool = False,
        network_admin: Optional[bool] = None,
        site_options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._multisite = bool(multisite)
        self._network_admin = network_admin
        self._site_options: Dict[str, Any] = dict(site_options or {})

    def network_admin_context(self) -> Optional[bool]:
        return self._network_admin

    def is_multisite(self) -> bool:
        return self._multisite

    def get_site_option(self, key: str, default: Any = None) -> Any:
        return self._site_options.get(key, default)

    def update_site_option(self, key: str, value: Any) -> None:
        self._site_options[key] = value
