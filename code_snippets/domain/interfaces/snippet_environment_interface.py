from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class ISnippetEnvironment(ABC):
    """Hosting environment consulted by snippet records.

    Domain defines the contract; the hosting system implements it.
    """

    @abstractmethod
    def network_admin_context(self) -> Optional[bool]:
        """Whether the current admin screen is network-wide.

        Returns None when there is no admin screen to consult.
        """
        raise NotImplementedError

    @abstractmethod
    def is_multisite(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_site_option(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError
