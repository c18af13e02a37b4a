from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from code_snippets.domain.entities.snippet import Snippet, SnippetField
from code_snippets.domain.interfaces.snippet_environment_interface import ISnippetEnvironment
from code_snippets.domain.interfaces.tag_parser_interface import ITagParser
from observability import emit_event


class SnippetService:
    """Application service building and updating snippet records.

    Thin orchestration over the domain entity. No DB/HTTP here: callers hand
    in raw rows or form data and take exported fields back to their store.
    """

    def __init__(
        self,
        environment: Optional[ISnippetEnvironment] = None,
        tag_parser: Optional[ITagParser] = None,
    ) -> None:
        self._environment = environment
        self._tag_parser = tag_parser

    def build(self, source: Any = None) -> Snippet:
        """Create a snippet from a row mapping or object; unknown keys are dropped."""
        snippet = Snippet(source, environment=self._environment, tag_parser=self._tag_parser)

        if isinstance(source, Mapping):
            ignored = [str(key) for key in source if not snippet.is_allowed_field(Snippet.resolve_field(key))]
            if ignored:
                emit_event("snippet_fields_ignored", severity="debug", fields=ignored, snippet_id=snippet.id)
        return snippet

    def apply_changes(self, snippet: Snippet, changes: Mapping[str, Any]) -> List[str]:
        """Write each change with try_set and return the rejected field names."""
        rejected: List[str] = []
        for field, value in changes.items():
            if not snippet.try_set(field, value):
                rejected.append(str(field))

        if rejected:
            emit_event("snippet_invalid_fields", severity="warn", fields=rejected, snippet_id=snippet.id)
        return rejected

    def export(self, snippet: Snippet) -> Dict[str, Any]:
        """Stored fields ready for an external store; the shared-network cache is not persisted."""
        fields = snippet.get_fields()
        fields.pop(SnippetField.SHARED_NETWORK.value, None)
        return fields

    def form_fields(self) -> List[str]:
        return Snippet(environment=self._environment, tag_parser=self._tag_parser).get_allowed_fields()
