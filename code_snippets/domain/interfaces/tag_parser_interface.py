from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List


class ITagParser(ABC):
    @abstractmethod
    def parse(self, tags: Any) -> List[str]:  # ordered, trimmed, non-empty
        raise NotImplementedError
