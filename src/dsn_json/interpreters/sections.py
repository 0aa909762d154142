"""Sections whose shape the generic mapper handles on its own."""

from __future__ import annotations

from typing import Any, Optional

from dsn_json.diagnostics import Diagnostics
from dsn_json.mapper import parse_object
from dsn_json.models.types import Network, Placement, Wiring


def parse_placement(
    elements: list[Any], *, diagnostics: Optional[Diagnostics] = None
) -> Placement:
    """``(placement (component <image> (place <ref> <x> <y> <side> <rot> (PN ..))...)...)``"""
    return parse_object(Placement, elements, diagnostics=diagnostics, path=("placement",))


def parse_network(
    elements: list[Any], *, diagnostics: Optional[Diagnostics] = None
) -> Network:
    """``(network (net <name> (pins ..))... (class <name> <net>... (circuit ..) (rule ..))...)``"""
    return parse_object(Network, elements, diagnostics=diagnostics, path=("network",))


def parse_wiring(
    elements: list[Any], *, diagnostics: Optional[Diagnostics] = None
) -> Wiring:
    """``(wiring (wire (path ..) (net ..) (type ..))... (via <padstack> <x> <y> ..)...)``"""
    return parse_object(Wiring, elements, diagnostics=diagnostics, path=("wiring",))
