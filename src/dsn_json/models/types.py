"""Pydantic schemas for each DSN section and the assembled document."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field, model_validator

from dsn_json.models.base import DsnBool, NumberList, SexpModel, TextList
from dsn_json.utils.units import DEFAULT_UNIT, to_mm

DsnUnit = Literal["inch", "mil", "cm", "mm", "um"]
ShapeType = Literal["path", "polygon", "circle", "rect", "qarc"]
Side = Literal["front", "back", "both"]
RouteInclude = Literal["testpoint", "guides", "image_conductor"]


# --- Header sections ---

class ParserOptions(SexpModel):
    repeated = frozenset({"constant", "write_resolution"})

    string_quote: Optional[str] = None
    space_in_quoted_tokens: Optional[DsnBool] = None
    host_cad: Optional[str] = None
    host_version: Optional[str] = None
    constant: Optional[list[tuple[str, str]]] = None
    write_resolution: Optional[list[tuple[str, float]]] = None
    routes_include: Optional[list[RouteInclude]] = None
    wires_include: Optional[str] = None
    case_sensitive: Optional[DsnBool] = None
    rotate_first: Optional[DsnBool] = None

    @model_validator(mode="before")
    @classmethod
    def _wrap_routes_include(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("routes_include"), str):
            data = {**data, "routes_include": [data["routes_include"]]}
        return data


class Resolution(SexpModel):
    """``(resolution <unit> <value>)``, written as a flat tuple."""

    unit: DsnUnit
    value: float

    @model_validator(mode="before")
    @classmethod
    def _from_tuple(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError("expected (resolution <unit> <value>)")
            return {"unit": data[0], "value": data[1]}
        return data


# --- Geometry ---

class Shape(SexpModel):
    """``(path|polygon|circle|rect|qarc <layer> <number>...)``."""

    positional = ("type", "layer")
    rest = "dimensions"

    type: ShapeType
    layer: str
    dimensions: NumberList = Field(default_factory=list)


class Keepout(SexpModel):
    name: Optional[str] = None
    shape: Shape


# --- Library ---

class Pin(SexpModel):
    type: str = Field(description="Padstack used by the pin")
    id: str = Field(description="Pin identifier within the image")
    x: float
    y: float
    rotate: Optional[float] = None


class Image(SexpModel):
    name: str
    side: Optional[Side] = None
    outlines: list[Shape] = Field(default_factory=list)
    pins: list[Pin] = Field(default_factory=list)
    keepouts: list[Keepout] = Field(default_factory=list)


class Padstack(SexpModel):
    name: str
    shapes: list[Shape] = Field(default_factory=list)
    attach: Optional[str] = None


class Library(SexpModel):
    images: list[Image] = Field(default_factory=list)
    padstacks: list[Padstack] = Field(default_factory=list)


# --- Structure ---

class LayerProperty(SexpModel):
    index: Optional[int] = None


class Layer(SexpModel):
    positional = ("name",)
    repeated = frozenset({"properties"})

    name: str
    type: Optional[Literal["signal", "power", "mixed", "jumper"]] = None
    properties: list[LayerProperty] = Field(default_factory=list, alias="property")


class Clearance(SexpModel):
    positional = ("value",)

    value: float
    type: Optional[str] = None


class Rule(SexpModel):
    repeated = frozenset({"clearances"})

    width: Optional[float] = None
    clearances: list[Clearance] = Field(default_factory=list, alias="clearance")


class Structure(SexpModel):
    layers: list[Layer] = Field(default_factory=list)
    boundary: Optional[Shape] = None
    keepouts: list[Keepout] = Field(default_factory=list)
    vias: TextList = Field(default_factory=list)
    rules: list[Rule] = Field(default_factory=list)


# --- Placement ---

class Place(SexpModel):
    positional = ("reference", "x", "y", "side", "rotation")

    reference: str
    x: float
    y: float
    side: Literal["front", "back"]
    rotation: float
    part_number: Optional[str] = Field(default=None, alias="PN")


class Component(SexpModel):
    positional = ("name",)
    repeated = frozenset({"places"})

    name: str
    places: list[Place] = Field(default_factory=list, alias="place")


class Placement(SexpModel):
    repeated = frozenset({"components"})

    components: list[Component] = Field(default_factory=list, alias="component")


# --- Network ---

class Net(SexpModel):
    positional = ("name",)

    name: str
    pins: TextList = Field(default_factory=list)


class Circuit(SexpModel):
    use_via: Optional[str] = None


class NetClass(SexpModel):
    positional = ("name",)
    rest = "nets"

    name: str
    nets: TextList = Field(default_factory=list)
    circuit: Optional[Circuit] = None
    rule: Optional[Rule] = None


class Network(SexpModel):
    repeated = frozenset({"nets", "classes"})

    nets: list[Net] = Field(default_factory=list, alias="net")
    classes: list[NetClass] = Field(default_factory=list, alias="class")


# --- Wiring ---

class WirePath(SexpModel):
    positional = ("layer", "width")
    rest = "coordinates"

    layer: str
    width: float
    coordinates: NumberList = Field(default_factory=list)


class Wire(SexpModel):
    path: WirePath
    net: Optional[str] = None
    type: Optional[str] = None


class WiringVia(SexpModel):
    positional = ("name", "x", "y")

    name: str
    x: float
    y: float
    net: Optional[str] = None
    type: Optional[str] = None


class Wiring(SexpModel):
    repeated = frozenset({"wires", "vias"})

    wires: list[Wire] = Field(default_factory=list, alias="wire")
    vias: list[WiringVia] = Field(default_factory=list, alias="via")


# --- Document ---

class PcbDesign(SexpModel):
    """Assembled DSN document.

    Every field is optional: sections the parser does not cover yet are
    simply absent rather than invalid.
    """

    pcb: Optional[str] = None
    file: Optional[str] = None
    parser: Optional[ParserOptions] = None
    resolution: Optional[Resolution] = None
    unit: Optional[str] = None
    structure: Optional[Structure] = None
    placement: Optional[Placement] = None
    library: Optional[Library] = None
    network: Optional[Network] = None
    wiring: Optional[Wiring] = None

    @property
    def coordinate_unit(self) -> str:
        """Unit in which coordinates are written (``unit``, else resolution's)."""
        if self.unit:
            return self.unit
        if self.resolution is not None:
            return self.resolution.unit
        return DEFAULT_UNIT

    def to_mm(self, value: float) -> float:
        """Convert a coordinate from this document's unit to millimeters."""
        return to_mm(value, self.coordinate_unit)
