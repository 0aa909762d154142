"""Schema-guided mapping of S-expression children onto section models."""

from __future__ import annotations

import types
from typing import Annotated, Any, Optional, TypeVar, Union, get_args, get_origin

from pydantic import ValidationError

from dsn_json.diagnostics import Diagnostics
from dsn_json.models.base import SexpModel
from dsn_json.models.errors import SectionValidationError

M = TypeVar("M", bound=SexpModel)


def is_atom(node: Any) -> bool:
    return not isinstance(node, list)


def nested_model(annotation: Any) -> Optional[type[SexpModel]]:
    """Return the section model a field annotation refers to, if any."""
    if get_origin(annotation) is None:
        if isinstance(annotation, type) and issubclass(annotation, SexpModel):
            return annotation
        return None
    for arg in get_args(annotation):
        found = nested_model(arg)
        if found is not None:
            return found
    return None


def is_list_annotation(annotation: Any) -> bool:
    origin = get_origin(annotation)
    if origin is list:
        return True
    if origin is Annotated:
        return is_list_annotation(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        return any(
            is_list_annotation(arg) for arg in get_args(annotation) if arg is not type(None)
        )
    return False


def section_error(path: tuple[str, ...], error: ValidationError) -> SectionValidationError:
    """Turn the first pydantic error into a located section failure."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in (*path[1:], *first["loc"]))
    value = None if first["type"] == "missing" else first.get("input")
    return SectionValidationError(
        section=path[0] if path else error.title,
        location=location,
        value=value,
        reason=first["msg"],
    )


def validate(schema: type[M], data: Any, path: tuple[str, ...]) -> M:
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise section_error(path, e) from e


def _unwrap(values: list[Any]) -> Any:
    if len(values) > 1:
        return values
    if values:
        return values[0]
    return None


def parse_object(
    schema: type[M],
    values: list[Any],
    *,
    diagnostics: Optional[Diagnostics] = None,
    path: tuple[str, ...] = (),
) -> M:
    """Map a node's values onto ``schema``.

    ``values`` is what follows a section key: leading atoms, then children
    shaped ``[key, value...]``. The flat tuple form applies only to schemas
    that declare neither ``positional`` nor ``rest``: when such a schema
    receives a list starting with an atom, the whole list is handed to it
    unchanged (``(resolution mm 2)``). Schemas with those hints always bind
    leading atoms by name instead.

    An empty child of a list-typed field (``(pins)``) yields an empty list.

    Args:
        schema: Section model to build.
        values: Node contents after the key.
        diagnostics: Collector for skipped keys. A private one is used if omitted.
        path: Location of the node, used in warnings and errors.

    Returns:
        The validated model instance.

    Raises:
        SectionValidationError: If the assembled mapping does not match the schema.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    where = ".".join(path) or schema.__name__

    if values and is_atom(values[0]) and not schema.positional and schema.rest is None:
        return validate(schema, values, path)

    result: dict[str, Any] = {}
    index = 0
    for name in schema.positional:
        if index < len(values) and is_atom(values[index]):
            result[name] = values[index]
            index += 1
    if schema.rest is not None:
        leftover = []
        while index < len(values) and is_atom(values[index]):
            leftover.append(values[index])
            index += 1
        result[schema.rest] = leftover

    for child in values[index:]:
        if is_atom(child) or not child or not is_atom(child[0]):
            diagnostics.warn(where, str(child), f"Ignoring stray value {child!r} in {where}")
            continue
        key, *child_values = child
        match = schema.field_for_key(key)
        if match is None:
            diagnostics.warn(where, key)
            continue
        name, field = match
        sub = nested_model(field.annotation)
        child_path = (*path, key)

        if name in schema.repeated:
            bucket = result.setdefault(name, [])
            if sub is not None:
                bucket.append(
                    parse_object(sub, child_values, diagnostics=diagnostics, path=child_path)
                )
            elif child_values and not any(is_atom(v) for v in child_values):
                bucket.extend(child_values)
            else:
                bucket.append(_unwrap(child_values))
            continue

        if sub is not None and child_values and not any(is_atom(v) for v in child_values):
            if is_list_annotation(field.annotation):
                result[name] = [
                    parse_object(sub, v, diagnostics=diagnostics, path=child_path)
                    for v in child_values
                ]
            else:
                result[name] = parse_object(
                    sub, child_values, diagnostics=diagnostics, path=child_path
                )
        elif not child_values and is_list_annotation(field.annotation):
            result[name] = []
        elif sub is not None and (sub.positional or sub.rest is not None):
            result[name] = parse_object(
                sub, child_values, diagnostics=diagnostics, path=child_path
            )
        else:
            result[name] = _unwrap(child_values)

    return validate(schema, result, path)
