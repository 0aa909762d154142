"""Base model and primitive coercions shared by every DSN section schema."""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, model_validator
from pydantic.fields import FieldInfo

# Boolean words accepted by Specctra; anything else is rejected
BOOL_WORDS = {
    "true": True,
    "yes": True,
    "on": True,
    "false": False,
    "no": False,
    "off": False,
}


def _dsn_bool(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value in BOOL_WORDS:
        return BOOL_WORDS[value]
    raise ValueError(f"expected one of {', '.join(BOOL_WORDS)}")


def _as_list(value: Any) -> Any:
    """Wrap a lone scalar so list fields accept ``(key a)`` and ``(key a b)`` alike."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


DsnBool = Annotated[bool, BeforeValidator(_dsn_bool)]
TextList = Annotated[list[str], BeforeValidator(_as_list)]
NumberList = Annotated[list[float], BeforeValidator(_as_list)]


class SexpModel(BaseModel):
    """Immutable record built from an S-expression node.

    Class-level hints tell :func:`dsn_json.mapper.parse_object` how a node
    maps onto fields:

    - ``positional``: fields bound, in order, to the node's leading atoms.
    - ``rest``: list field receiving leading atoms left after ``positional``.
    - ``repeated``: fields whose key may occur several times; each
      occurrence contributes one item.

    A bare ``[key, value...]`` sequence whose key names a field validates as
    that single field, so ``(index 0)`` reads as ``{"index": 0}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    positional: ClassVar[tuple[str, ...]] = ()
    rest: ClassVar[Optional[str]] = None
    repeated: ClassVar[frozenset[str]] = frozenset()

    @classmethod
    def field_for_key(cls, key: str) -> Optional[tuple[str, FieldInfo]]:
        """Find the field a DSN key populates, matching alias first then name."""
        for name, field in cls.model_fields.items():
            if key == field.alias:
                return name, field
        field = cls.model_fields.get(key)
        if field is not None and field.alias is None:
            return key, field
        return None

    @model_validator(mode="before")
    @classmethod
    def _from_keyed_pair(cls, data: Any) -> Any:
        if not isinstance(data, (list, tuple)) or not data:
            return data
        head = data[0]
        if not isinstance(head, str):
            return data
        match = cls.field_for_key(head)
        if match is None:
            return data
        values = list(data[1:])
        return {match[0]: values[0] if len(values) == 1 else values}
