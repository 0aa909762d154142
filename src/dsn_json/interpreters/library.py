"""Interpreter for the ``(library ...)`` section: images, pins and padstacks."""

from __future__ import annotations

from typing import Any, Optional

from dsn_json.diagnostics import Diagnostics
from dsn_json.mapper import is_atom, parse_object, validate
from dsn_json.models.errors import SectionValidationError
from dsn_json.models.types import Image, Keepout, Library, Padstack, Pin, Shape


def _split(element: Any) -> tuple[Optional[str], list[Any]]:
    if is_atom(element) or not element or not is_atom(element[0]):
        return None, []
    return element[0], list(element[1:])


def parse_library(
    elements: list[Any],
    *,
    diagnostics: Optional[Diagnostics] = None,
    path: tuple[str, ...] = ("library",),
) -> Library:
    if diagnostics is None:
        diagnostics = Diagnostics()

    images: list[Image] = []
    padstacks: list[Padstack] = []
    for element in elements:
        key, value = _split(element)
        if key == "image":
            images.append(parse_image(value, diagnostics=diagnostics, path=(*path, "image")))
        elif key == "padstack":
            padstacks.append(
                parse_padstack(value, diagnostics=diagnostics, path=(*path, "padstack"))
            )
        else:
            diagnostics.warn(".".join(path), str(key if key is not None else element))

    return validate(Library, {"images": images, "padstacks": padstacks}, path)


def parse_image(
    value: list[Any],
    *,
    diagnostics: Optional[Diagnostics] = None,
    path: tuple[str, ...] = ("image",),
) -> Image:
    """Build an image from ``(image <name> (side ..) (outline ..) (pin ..) (keepout ..)...)``."""
    if diagnostics is None:
        diagnostics = Diagnostics()
    if not value or not is_atom(value[0]):
        raise SectionValidationError(".".join(path), "name", reason="image has no name")

    name, *elements = value
    where = ".".join(path)
    image: dict[str, Any] = {"name": name, "outlines": [], "pins": [], "keepouts": []}

    for element in elements:
        key, data = _split(element)
        if key == "side":
            image["side"] = data[0] if data else None
        elif key == "outline":
            if not data:
                raise SectionValidationError(where, "outline", reason="outline has no shape")
            image["outlines"].append(parse_shape(data[0], path=(*path, "outline")))
        elif key == "pin":
            image["pins"].append(parse_pin(data, diagnostics=diagnostics, path=(*path, "pin")))
        elif key == "keepout":
            image["keepouts"].append(
                parse_keepout(data, diagnostics=diagnostics, path=(*path, "keepout"))
            )
        else:
            diagnostics.warn(where, str(key if key is not None else element))

    return validate(Image, image, path)


def parse_pin(
    data: list[Any],
    *,
    diagnostics: Optional[Diagnostics] = None,
    path: tuple[str, ...] = ("pin",),
) -> Pin:
    """Build a pin from ``<type> [(rotate <angle>)] <id> <x> <y>``.

    The rotation sub-node is optional and sits before the identifier, so the
    positions of id, x and y depend on whether it is present.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    where = ".".join(path)
    if not data or not is_atom(data[0]):
        raise SectionValidationError(where, "type", reason="pin has no padstack type")

    pin: dict[str, Any] = {"type": data[0]}
    remaining = list(data[1:])
    if remaining and not is_atom(remaining[0]) and remaining[0][:1] == ["rotate"]:
        rotation = remaining.pop(0)
        if len(rotation) != 2:
            raise SectionValidationError(
                where, "rotate", value=rotation, reason="expected (rotate <angle>)"
            )
        pin["rotate"] = rotation[1]

    if len(remaining) < 3:
        raise SectionValidationError(
            where, value=data, reason="expected <type> [(rotate <angle>)] <id> <x> <y>"
        )
    pin["id"], pin["x"], pin["y"] = remaining[:3]
    for extra in remaining[3:]:
        diagnostics.warn(where, str(extra[0] if not is_atom(extra) and extra else extra))

    return validate(Pin, pin, path)


def parse_padstack(
    value: list[Any],
    *,
    diagnostics: Optional[Diagnostics] = None,
    path: tuple[str, ...] = ("padstack",),
) -> Padstack:
    if diagnostics is None:
        diagnostics = Diagnostics()
    if not value or not is_atom(value[0]):
        raise SectionValidationError(".".join(path), "name", reason="padstack has no name")

    name, *elements = value
    where = ".".join(path)
    padstack: dict[str, Any] = {"name": name, "shapes": []}

    for element in elements:
        key, data = _split(element)
        if key == "shape":
            if not data:
                raise SectionValidationError(where, "shape", reason="shape is empty")
            padstack["shapes"].append(parse_shape(data[0], path=(*path, "shape")))
        elif key == "attach":
            padstack["attach"] = data[0] if data else None
        else:
            diagnostics.warn(where, str(key if key is not None else element))

    return validate(Padstack, padstack, path)


def parse_shape(node: Any, *, path: tuple[str, ...] = ("shape",)) -> Shape:
    """Build a shape from ``(<type> <layer> <number>...)``."""
    if is_atom(node) or not node or not is_atom(node[0]):
        raise SectionValidationError(
            ".".join(path), value=node, reason="expected (<shape> <layer> <number>...)"
        )
    return parse_object(Shape, node, path=path)


def parse_keepout(
    data: list[Any],
    *,
    diagnostics: Optional[Diagnostics] = None,
    path: tuple[str, ...] = ("keepout",),
) -> Keepout:
    """Build a keepout from ``[<name>] (<shape> ...)``; extra sub-nodes are skipped."""
    if diagnostics is None:
        diagnostics = Diagnostics()
    where = ".".join(path)

    name = data[0] if data and is_atom(data[0]) else None
    nodes = [node for node in data if not is_atom(node)]
    if not nodes:
        raise SectionValidationError(where, "shape", reason="keepout has no shape")

    shape = parse_shape(nodes[0], path=(*path, "shape"))
    for extra in nodes[1:]:
        diagnostics.warn(where, str(extra[0] if extra else extra))

    return validate(Keepout, {"name": name, "shape": shape}, path)
