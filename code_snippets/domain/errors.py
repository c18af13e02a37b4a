from __future__ import annotations


class SnippetError(Exception):
    """Base class for snippet record errors."""

    pass


class InvalidFieldError(SnippetError):
    """Raised when a field name is not part of the snippet record."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Trying to access invalid field on Snippet: {field}")
