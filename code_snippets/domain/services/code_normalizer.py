"""
Domain service: normalize snippet code bodies.

Snippets are stored without the PHP open/close markers so that the code can
be evaluated as-is:
- strip a leading "<?php" or "<?" together with any whitespace before it
- strip a trailing "?>" together with any whitespace after it

Everything between the markers is kept byte for byte.
"""

from __future__ import annotations

import re
from typing import Any


class CodeNormalizer:
    """Remove open/close code markers from snippet code.

    The implementation avoids any framework or I/O dependencies.
    """

    _OPEN_MARKER = re.compile(r"^\s*<\?(php)?")
    _CLOSE_MARKER = re.compile(r"\?>\s*$")

    def normalize(self, code: Any) -> str:
        """Normalize code text.

        None becomes an empty string; other non-string values are converted with str().
        """
        if code is None:
            return ""
        if not isinstance(code, str):
            code = str(code)

        out = self._OPEN_MARKER.sub("", code, count=1)
        out = self._CLOSE_MARKER.sub("", out, count=1)
        return out
