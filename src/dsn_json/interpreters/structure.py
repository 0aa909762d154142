"""Interpreter for the ``(structure ...)`` section."""

from __future__ import annotations

from typing import Any, Optional

from dsn_json.diagnostics import Diagnostics
from dsn_json.interpreters.library import parse_keepout, parse_shape
from dsn_json.mapper import is_atom, parse_object, validate
from dsn_json.models.errors import SectionValidationError
from dsn_json.models.types import Layer, Rule, Structure


def parse_structure(
    elements: list[Any],
    *,
    diagnostics: Optional[Diagnostics] = None,
    path: tuple[str, ...] = ("structure",),
) -> Structure:
    """Build the board structure: layers, boundary, keepouts, vias and rules.

    Layers and rules go through the generic mapper. Boundary and keepout
    carry a bare shape node, which the mapper cannot key on, so they are
    handled here. Autorouter settings (``control``, ``autoroute_settings``,
    ``grid``, ``plane``, ...) are not modelled and are skipped with a warning.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    where = ".".join(path)

    structure: dict[str, Any] = {"layers": [], "keepouts": [], "vias": [], "rules": []}
    for element in elements:
        if is_atom(element) or not element or not is_atom(element[0]):
            diagnostics.warn(where, str(element), f"Ignoring stray value {element!r} in {where}")
            continue
        key, *value = element
        if key == "layer":
            structure["layers"].append(
                parse_object(Layer, value, diagnostics=diagnostics, path=(*path, "layer"))
            )
        elif key == "boundary":
            if not value:
                raise SectionValidationError(where, "boundary", reason="boundary has no shape")
            structure["boundary"] = parse_shape(value[0], path=(*path, "boundary"))
        elif key == "keepout":
            structure["keepouts"].append(
                parse_keepout(value, diagnostics=diagnostics, path=(*path, "keepout"))
            )
        elif key == "via":
            for v in value:
                if is_atom(v):
                    structure["vias"].append(v)
                else:
                    diagnostics.warn(f"{where}.via", str(v[0] if v else v))
        elif key == "rule":
            structure["rules"].append(
                parse_object(Rule, value, diagnostics=diagnostics, path=(*path, "rule"))
            )
        else:
            diagnostics.warn(where, key)

    return validate(Structure, structure, path)
