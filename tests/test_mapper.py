"""Tests for the schema-guided object mapper."""

from __future__ import annotations

from typing import Optional

import pytest

from dsn_json.diagnostics import Diagnostics
from dsn_json.mapper import is_list_annotation, nested_model, parse_object
from dsn_json.models.errors import SectionValidationError
from dsn_json.models.types import (
    Circuit,
    Layer,
    LayerProperty,
    Net,
    ParserOptions,
    Resolution,
    Rule,
    Shape,
    Structure,
)


class TestFlatTupleForm:
    def test_resolution_tuple(self):
        resolution = parse_object(Resolution, ["mm", "2"], path=("resolution",))
        assert resolution.unit == "mm"
        assert resolution.value == 2
        assert isinstance(resolution.value, float)

    def test_resolution_dump(self):
        resolution = parse_object(Resolution, ["um", "10"])
        assert resolution.model_dump() == {"unit": "um", "value": 10.0}

    def test_resolution_unknown_unit(self):
        with pytest.raises(SectionValidationError) as exc:
            parse_object(Resolution, ["furlong", "2"], path=("resolution",))
        assert exc.value.section == "resolution"
        assert exc.value.location == "unit"
        assert exc.value.value == "furlong"

    def test_resolution_wrong_arity(self):
        with pytest.raises(SectionValidationError):
            parse_object(Resolution, ["mm"], path=("resolution",))

    def test_resolution_non_numeric(self):
        with pytest.raises(SectionValidationError) as exc:
            parse_object(Resolution, ["mm", "two"], path=("resolution",))
        assert exc.value.location == "value"


class TestMappingForm:
    def test_single_scalar_unwrapped(self):
        options = parse_object(ParserOptions, [["host_cad", "KiCad's Pcbnew"]])
        assert options.host_cad == "KiCad's Pcbnew"

    @pytest.mark.parametrize(
        "word,expected",
        [("yes", True), ("on", True), ("true", True), ("no", False), ("off", False), ("false", False)],
    )
    def test_boolean_words(self, word: str, expected: bool):
        options = parse_object(ParserOptions, [["space_in_quoted_tokens", word]])
        assert options.space_in_quoted_tokens is expected

    def test_boolean_rejects_other_words(self):
        with pytest.raises(SectionValidationError) as exc:
            parse_object(ParserOptions, [["case_sensitive", "maybe"]], path=("parser",))
        assert exc.value.section == "parser"
        assert exc.value.location.startswith("case_sensitive")
        assert exc.value.value == "maybe"
        assert "case_sensitive" in str(exc.value)

    def test_multiple_scalars_kept_in_order(self):
        options = parse_object(
            ParserOptions, [["routes_include", "testpoint", "guides", "image_conductor"]]
        )
        assert options.routes_include == ["testpoint", "guides", "image_conductor"]

    def test_single_scalar_wrapped_for_list_field(self):
        options = parse_object(ParserOptions, [["routes_include", "guides"]])
        assert options.routes_include == ["guides"]

    def test_enum_membership(self):
        with pytest.raises(SectionValidationError):
            parse_object(ParserOptions, [["routes_include", "everything"]], path=("parser",))

    def test_repeated_key_accumulates(self):
        options = parse_object(
            ParserOptions,
            [["constant", "A", "1"], ["constant", "B", "2"], ["write_resolution", "mm", "1000"]],
        )
        assert options.constant == [("A", "1"), ("B", "2")]
        assert options.write_resolution == [("mm", 1000.0)]

    def test_unknown_key_warned_and_skipped(self, diagnostics: Diagnostics):
        options = parse_object(
            ParserOptions,
            [["generated_by_freeroute"], ["host_cad", "KiCad"]],
            diagnostics=diagnostics,
            path=("parser",),
        )
        assert options.host_cad == "KiCad"
        assert diagnostics.keys() == ["generated_by_freeroute"]
        assert list(diagnostics)[0].path == "parser"

    def test_empty_values(self):
        assert parse_object(ParserOptions, []) == ParserOptions()


class TestNestedSchemas:
    def test_layer_positional_and_nested_list(self):
        layer = parse_object(
            Layer, ["F.Cu", ["type", "signal"], ["property", ["index", "0"]]]
        )
        assert layer.name == "F.Cu"
        assert layer.type == "signal"
        assert layer.properties == [LayerProperty(index=0)]

    def test_repeated_rows(self):
        rule = parse_object(
            Rule,
            [["width", "250"], ["clearance", "200.1"], ["clearance", "50", ["type", "smd_smd"]]],
        )
        assert rule.width == 250.0
        assert [c.value for c in rule.clearances] == [200.1, 50.0]
        assert rule.clearances[0].type is None
        assert rule.clearances[1].type == "smd_smd"

    def test_property_block_is_one_object(self, diagnostics: Diagnostics):
        layer = parse_object(
            Layer,
            ["F.Cu", ["type", "signal"], ["property", ["index", "0"], ["foo", "1"]]],
            diagnostics=diagnostics,
            path=("structure", "layer"),
        )
        assert layer.properties == [LayerProperty(index=0)]
        assert diagnostics.keys() == ["foo"]
        assert list(diagnostics)[0].path == "structure.layer.property"

    def test_property_blocks_accumulate(self):
        layer = parse_object(
            Layer, ["In1.Cu", ["property", ["index", "1"]], ["property", ["index", "2"]]]
        )
        assert [p.index for p in layer.properties] == [1, 2]

    def test_empty_property_block(self):
        layer = parse_object(Layer, ["F.Cu", ["property"]], path=("structure", "layer"))
        assert layer.properties == [LayerProperty()]

    def test_empty_list_fields(self):
        assert parse_object(Net, ["NC", ["pins"]]).pins == []
        assert parse_object(Structure, [["layers"]]).layers == []

    def test_rest_atoms(self):
        shape = parse_object(Shape, ["path", "signal", "120", "0", "0", "10", "10"])
        assert shape.type == "path"
        assert shape.layer == "signal"
        assert shape.dimensions == [120.0, 0.0, 0.0, 10.0, 10.0]

    def test_nested_error_location(self):
        with pytest.raises(SectionValidationError) as exc:
            parse_object(
                Layer,
                ["F.Cu", ["property", ["index", "zero"]]],
                path=("structure", "layer"),
            )
        assert exc.value.section == "structure"
        assert exc.value.location.startswith("layer.property")
        assert exc.value.value == "zero"

    def test_nested_unknown_key_path(self, diagnostics: Diagnostics):
        parse_object(Layer, ["In1.Cu", ["mystery", "1"]], diagnostics=diagnostics, path=("structure", "layer"))
        assert diagnostics.keys() == ["mystery"]
        assert list(diagnostics)[0].path == "structure.layer"


class TestAnnotationHelpers:
    def test_nested_model(self):
        assert nested_model(Optional[Circuit]) is Circuit
        assert nested_model(list[Shape]) is Shape
        assert nested_model(Optional[str]) is None
        assert nested_model(list[tuple[str, str]]) is None

    def test_is_list_annotation(self):
        assert is_list_annotation(list[Shape])
        assert is_list_annotation(Optional[list[str]])
        assert not is_list_annotation(Optional[Circuit])
        assert not is_list_annotation(str)
