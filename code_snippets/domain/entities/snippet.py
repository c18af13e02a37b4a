from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from enum import Enum, IntEnum
from typing import Any, Callable, ClassVar, Dict, List, Optional

from code_snippets.domain.errors import InvalidFieldError
from code_snippets.domain.interfaces.snippet_environment_interface import ISnippetEnvironment
from code_snippets.domain.interfaces.tag_parser_interface import ITagParser
from code_snippets.domain.services.code_normalizer import CodeNormalizer
from code_snippets.domain.services.standalone_environment import StandaloneEnvironment
from code_snippets.domain.services.tag_parser import TagParser


class SnippetField(str, Enum):
    """Field names understood by a snippet record."""

    ID = "id"
    NAME = "name"
    DESC = "desc"
    CODE = "code"
    TAGS = "tags"
    SCOPE = "scope"
    ACTIVE = "active"
    NETWORK = "network"
    SHARED_NETWORK = "shared_network"
    # read-only views
    TAGS_LIST = "tags_list"
    SCOPE_NAME = "scope_name"


class Scope(IntEnum):
    GLOBAL = 0
    ADMIN = 1
    FRONT_END = 2


SCOPE_NAMES: Dict[int, str] = {
    Scope.ADMIN: "admin",
    Scope.FRONT_END: "front-end",
}

# Site option holding the ids of network snippets shared with single sites
SHARED_NETWORK_OPTION = "shared_network_snippets"

FIELD_ALIASES: Dict[str, str] = {
    "description": SnippetField.DESC.value,
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _default_fields() -> Dict[str, Any]:
    return {
        SnippetField.ID.value: 0,
        SnippetField.NAME.value: "",
        SnippetField.DESC.value: "",
        SnippetField.CODE.value: "",
        SnippetField.TAGS.value: [],
        SnippetField.SCOPE.value: int(Scope.GLOBAL),
        SnippetField.ACTIVE.value: False,
        SnippetField.NETWORK.value: None,
        SnippetField.SHARED_NETWORK.value: None,
    }


def _to_int(value: Any) -> Optional[int]:
    """Integer-cast a raw field value, truncating toward zero.

    Numeric strings are accepted ("2", " 3.9", "12abc" -> 12). Returns None
    when nothing integer-like can be read from the value.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            match = _LEADING_INT.match(text)
            return int(match.group(1)) if match else None
        return int(number) if math.isfinite(number) else None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _field_property(field: SnippetField, doc: str) -> property:
    def fget(self: "Snippet") -> Any:
        return self.get(field)

    def fset(self: "Snippet", value: Any) -> None:
        self.set(field, value)

    return property(fget, fset, doc=doc)


class Snippet:
    """Domain entity: a single code snippet record.

    Holds a fixed set of fields. Every write goes through the field's
    normalizer (if it has one); some fields also have computed views that
    are produced on read. Persistence is left to the caller: a snippet
    never reads or writes any store itself.

    Collaborators (both optional):
    - environment: hosting environment (admin screen, multisite, site options)
    - tag_parser: turns raw tag input into a list of tags
    """

    def __init__(
        self,
        fields: Any = None,
        *,
        environment: Optional[ISnippetEnvironment] = None,
        tag_parser: Optional[ITagParser] = None,
    ) -> None:
        self._fields: Dict[str, Any] = _default_fields()
        self._environment: ISnippetEnvironment = environment or StandaloneEnvironment()
        self._tag_parser: ITagParser = tag_parser or TagParser()
        self._code_normalizer = CodeNormalizer()
        self.set_fields(fields)

    def set_fields(self, fields: Any) -> None:
        """Set fields from a mapping or an object's attributes.

        Anything else (None, strings, scalars) is ignored, as are unknown keys.
        """
        if not fields or isinstance(fields, (str, bytes)):
            return

        if not isinstance(fields, Mapping):
            try:
                fields = vars(fields)
            except TypeError:
                return

        for field, value in fields.items():
            self.try_set(field, value)

    # ------------------------------------------------------------------
    # Field names
    # ------------------------------------------------------------------

    @staticmethod
    def resolve_field(field: Any) -> Any:
        """Map an alias (or a SnippetField member) to the canonical field name."""
        if isinstance(field, SnippetField):
            return field.value
        if isinstance(field, str):
            return FIELD_ALIASES.get(field, field)
        return field

    def get_allowed_fields(self) -> List[str]:
        return list(self._fields) + list(FIELD_ALIASES)

    def is_allowed_field(self, field: Any) -> bool:
        if isinstance(field, SnippetField):
            field = field.value
        if not isinstance(field, str):
            return False
        return field in self._fields or field in FIELD_ALIASES

    # ------------------------------------------------------------------
    # Generic access
    # ------------------------------------------------------------------

    def has(self, field: Any) -> bool:
        field = self.resolve_field(field)
        if not isinstance(field, str):
            return False
        return field in self._fields or field in self._GETTERS

    __contains__ = has

    def get(self, field: Any) -> Any:
        """Return a field value, or the computed view registered for the name.

        Raises InvalidFieldError for names that are neither stored nor computed.
        """
        field = self.resolve_field(field)

        if not isinstance(field, str):
            raise InvalidFieldError(repr(field))

        getter = self._GETTERS.get(field)
        if getter is not None:
            return getter(self)

        if field == SnippetField.TAGS.value:
            return list(self._fields[field])
        if field in self._fields:
            return self._fields[field]

        raise InvalidFieldError(str(field))

    def set(self, field: Any, value: Any) -> None:
        """Normalize and store a field value.

        Raises InvalidFieldError when the field is not allowed.
        """
        field = self.resolve_field(field)

        if not self.is_allowed_field(field):
            raise InvalidFieldError(str(field))

        normalizer = self._NORMALIZERS.get(field)
        if normalizer is not None:
            value = normalizer(self, value)

        self._fields[field] = value

    def try_set(self, field: Any, value: Any) -> bool:
        """Like set(), but report an invalid field by returning False."""
        if not self.is_allowed_field(self.resolve_field(field)):
            return False

        self.set(field, value)
        return True

    def get_fields(self) -> Dict[str, Any]:
        """Copy of the stored fields (computed views excluded)."""
        fields = dict(self._fields)
        fields[SnippetField.TAGS.value] = list(fields[SnippetField.TAGS.value])
        return fields

    # ------------------------------------------------------------------
    # Normalizers
    # ------------------------------------------------------------------

    def _prepare_id(self, value: Any) -> int:
        return abs(_to_int(value) or 0)

    def _prepare_code(self, value: Any) -> str:
        return self._code_normalizer.normalize(value)

    def _prepare_scope(self, value: Any) -> int:
        scope = _to_int(value)
        if scope in (Scope.GLOBAL, Scope.ADMIN, Scope.FRONT_END):
            return int(scope)
        return self._fields[SnippetField.SCOPE.value]

    def _prepare_tags(self, value: Any) -> List[str]:
        return list(self._tag_parser.parse(value))

    def _prepare_active(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        # database rows carry the flag as "0"/"1"
        if isinstance(value, str):
            return value not in ("", "0")
        return bool(value)

    def _prepare_network(self, value: Any) -> bool:
        if value is None:
            in_network_admin = self._environment.network_admin_context()
            if in_network_admin is not None:
                return bool(in_network_admin)
        return value is True

    # ------------------------------------------------------------------
    # Computed views
    # ------------------------------------------------------------------

    def _get_tags_list(self) -> str:
        return ", ".join(self._fields[SnippetField.TAGS.value])

    def get_scope_name(self, default: str = "global") -> str:
        """Name of the scope; `default` names the global scope."""
        scope = _to_int(self._fields[SnippetField.SCOPE.value])
        return SCOPE_NAMES.get(scope, default)

    def _get_scope_name(self) -> str:
        return self.get_scope_name()

    def _get_shared_network(self) -> bool:
        cached = self._fields[SnippetField.SHARED_NETWORK.value]
        if cached is not None:
            return cached

        if not self._environment.is_multisite() or not self._fields[SnippetField.NETWORK.value]:
            shared = False
        else:
            shared_ids = self._environment.get_site_option(SHARED_NETWORK_OPTION, [])
            shared = self._fields[SnippetField.ID.value] in _id_set(shared_ids)

        self._fields[SnippetField.SHARED_NETWORK.value] = shared
        return shared

    _NORMALIZERS: ClassVar[Dict[str, Callable[["Snippet", Any], Any]]] = {
        SnippetField.ID.value: _prepare_id,
        SnippetField.CODE.value: _prepare_code,
        SnippetField.SCOPE.value: _prepare_scope,
        SnippetField.TAGS.value: _prepare_tags,
        SnippetField.ACTIVE.value: _prepare_active,
        SnippetField.NETWORK.value: _prepare_network,
    }

    _GETTERS: ClassVar[Dict[str, Callable[["Snippet"], Any]]] = {
        SnippetField.TAGS_LIST.value: _get_tags_list,
        SnippetField.SCOPE_NAME.value: _get_scope_name,
        SnippetField.SHARED_NETWORK.value: _get_shared_network,
    }

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------

    id = _field_property(SnippetField.ID, "The database ID")
    name = _field_property(SnippetField.NAME, "The display name")
    desc = _field_property(SnippetField.DESC, "The formatted description")
    description = desc
    code = _field_property(SnippetField.CODE, "The executable code")
    tags = _field_property(SnippetField.TAGS, "The tags, as a list")
    scope = _field_property(SnippetField.SCOPE, "The scope number")
    active = _field_property(SnippetField.ACTIVE, "The active status")
    network = _field_property(
        SnippetField.NETWORK, "True for a multisite-wide snippet, False for a site-wide one"
    )
    shared_network = _field_property(
        SnippetField.SHARED_NETWORK, "Whether the snippet is a shared network snippet"
    )

    @property
    def tags_list(self) -> str:
        """The tags in string list format."""
        return self.get(SnippetField.TAGS_LIST)

    @property
    def scope_name(self) -> str:
        return self.get(SnippetField.SCOPE_NAME)

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        """Compare stored fields; the shared-network cache is left out."""
        if not isinstance(other, Snippet):
            return NotImplemented
        cache = SnippetField.SHARED_NETWORK.value
        mine = {k: v for k, v in self._fields.items() if k != cache}
        theirs = {k: v for k, v in other._fields.items() if k != cache}
        return mine == theirs

    def __repr__(self) -> str:
        return (
            f"Snippet(id={self._fields['id']!r}, name={self._fields['name']!r}, "
            f"scope={self._fields['scope']!r}, active={self._fields['active']!r})"
        )


def _id_set(ids: Any) -> set:
    if not ids or isinstance(ids, (str, bytes)) or not isinstance(ids, Iterable):
        return set()
    result = set()
    for raw in ids:
        value = _to_int(raw)
        if value is not None:
            result.add(value)
    return result


