from __future__ import annotations

# Public API of the composition root
from .container import get_snippet_environment, get_snippet_service, reset_container  # noqa: F401
