from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any, List

from code_snippets.domain.interfaces.tag_parser_interface import ITagParser


class TagParser(ITagParser):
    """
    Build the tags list of a snippet.
    Accepted input:
    - comma-delimited text ("a, b ,c"), HTML markup is stripped first
    - any iterable of tags (list/tuple/set/generator; mapping values)
    - a single scalar, treated as one tag
    Result keeps the input order; items are trimmed and empty items dropped.
    """

    _HTML_TAG = re.compile(r"<[^>]*>")

    def parse(self, tags: Any) -> List[str]:
        if tags is None or tags == "" or tags is False:
            return []

        if isinstance(tags, bytes):
            tags = tags.decode("utf-8", errors="replace")

        if isinstance(tags, str):
            items: Iterable[Any] = self._HTML_TAG.sub("", tags).split(",")
        elif isinstance(tags, Mapping):
            items = tags.values()
        elif isinstance(tags, Iterable):
            items = tags
        else:
            items = [tags]

        result: List[str] = []
        for item in items:
            if item is None:
                continue
            tag = str(item).strip()
            if tag:
                result.append(tag)
        return result
