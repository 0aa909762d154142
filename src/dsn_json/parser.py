"""Top-level assembly of a DSN document from its root sections."""

from __future__ import annotations

from typing import Any, Callable, Optional

from dsn_json.config import DsnJsonConfig, SectionErrorPolicy
from dsn_json.diagnostics import Diagnostics
from dsn_json.interpreters.library import parse_library
from dsn_json.interpreters.sections import parse_network, parse_placement, parse_wiring
from dsn_json.interpreters.structure import parse_structure
from dsn_json.logging_config import get_logger
from dsn_json.mapper import is_atom, parse_object, validate
from dsn_json.models.errors import DsnReadError, SectionValidationError
from dsn_json.models.types import ParserOptions, PcbDesign, Resolution
from dsn_json.utils.sexp_parser import normalize_atoms, read_sexp, strip_known_defects

logger = get_logger("parser")

SectionHandler = Callable[..., Any]


def _parse_parser(values: list[Any], *, diagnostics: Diagnostics) -> ParserOptions:
    return parse_object(ParserOptions, values, diagnostics=diagnostics, path=("parser",))


def _parse_resolution(values: list[Any], *, diagnostics: Diagnostics) -> Resolution:
    return parse_object(Resolution, values, diagnostics=diagnostics, path=("resolution",))


def _parse_unit(values: list[Any], *, diagnostics: Diagnostics) -> Optional[str]:
    return values[0] if values else None


SECTION_HANDLERS: dict[str, SectionHandler] = {
    "parser": _parse_parser,
    "resolution": _parse_resolution,
    "unit": _parse_unit,
    "structure": parse_structure,
    "placement": parse_placement,
    "library": parse_library,
    "network": parse_network,
    "wiring": parse_wiring,
}


def parse_dsn(
    content: str,
    *,
    diagnostics: Optional[Diagnostics] = None,
    config: Optional[DsnJsonConfig] = None,
) -> PcbDesign:
    """Parse DSN text into a validated :class:`PcbDesign`.

    Sections are read in source order. Keys with no handler are recorded in
    ``diagnostics`` and skipped. A malformed section either aborts the parse
    or is dropped with a diagnostic, per ``config.on_section_error``.

    Args:
        content: Raw DSN text.
        diagnostics: Collector for skipped keys and dropped sections.
        config: Parser configuration. Uses defaults/env vars if not provided.

    Returns:
        The assembled document; sections that were absent or skipped are ``None``.

    Raises:
        DsnReadError: If the text cannot be read as one S-expression.
        SectionValidationError: If a section is malformed and the policy is ``raise``.
    """
    if config is None:
        config = DsnJsonConfig()
    if diagnostics is None:
        diagnostics = Diagnostics()

    root = normalize_atoms(read_sexp(strip_known_defects(content), max_depth=config.max_depth))
    if not root or not is_atom(root[0]):
        raise DsnReadError("Expected a (pcb <file> ...) root expression")

    result: dict[str, Any] = {"pcb": root[0]}
    sections = root[1:]
    if sections and is_atom(sections[0]):
        result["file"] = sections[0]
        sections = sections[1:]

    for section in sections:
        if is_atom(section) or not section or not is_atom(section[0]):
            diagnostics.warn("pcb", str(section), f"Ignoring stray value {section!r} in pcb")
            continue
        key, *values = section
        handler = SECTION_HANDLERS.get(key)
        if handler is None:
            diagnostics.warn("pcb", key, f"Ignoring key {key}")
            continue
        try:
            result[key] = handler(values, diagnostics=diagnostics)
        except SectionValidationError as e:
            if config.on_section_error == SectionErrorPolicy.RAISE:
                raise
            diagnostics.warn("pcb", key, f"Dropping section '{key}': {e}")

    design = validate(PcbDesign, result, ("pcb",))
    logger.debug(
        "Parsed DSN design %s with sections: %s",
        design.file,
        ", ".join(name for name in SECTION_HANDLERS if getattr(design, name) is not None),
    )
    return design


def parse_dsn_to_json(
    content: str,
    *,
    diagnostics: Optional[Diagnostics] = None,
    config: Optional[DsnJsonConfig] = None,
) -> dict[str, Any]:
    """Parse DSN text into a JSON-ready dict; absent fields are omitted."""
    design = parse_dsn(content, diagnostics=diagnostics, config=config)
    return design.model_dump(mode="json", exclude_none=True)
