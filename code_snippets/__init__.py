"""Validated snippet records for the code-snippets plugin."""

from .domain.entities.snippet import Scope, Snippet, SnippetField
from .domain.errors import InvalidFieldError, SnippetError

__all__ = [
    "Scope",
    "Snippet",
    "SnippetField",
    "SnippetError",
    "InvalidFieldError",
]
