"""S-expression reader for Specctra DSN text."""

from __future__ import annotations

import re
from pathlib import Path
from string import whitespace
from typing import Any

import sexpdata

from dsn_json.models.errors import DepthLimitError, DsnReadError, InvalidFileFormatError

# Many exporters write `(string_quote ")` to declare the quote character.
# The lone quote opens a string that never closes, so it is removed verbatim.
STRING_QUOTE_DEFECT = '(string_quote ")'

DEFAULT_MAX_DEPTH = 256

# Characters that end an unquoted atom in Specctra text
ATOM_END = frozenset({"(", ")", '"'} | set(whitespace))

# Parser attributes read by sexpdata's parse_sexp/parse_atom and replaced below
PARSER_HOOKS = (
    "brackets",
    "closing_brackets",
    "line_comment",
    "atom_end",
    "atom_end_or_escape_re",
)


class DsnSexpParser(sexpdata.Parser):
    """sexpdata parser restricted to what Specctra text needs.

    Only parentheses delimit lists: padstack and net names such as
    ``Round[A]Pad_1524_um`` carry square brackets. DSN has no comment
    syntax, so ``;`` is an ordinary atom character (``A;B`` is one net
    name). Atoms are always kept as symbols, so ``t``, ``nil`` and numerals
    reach the schema as text.
    """

    def __init__(self, string: str) -> None:
        super().__init__(string)
        self.brackets = {"(": ")"}
        self.closing_brackets = {")"}
        # parse_sexp compares each character against line_comment
        self.line_comment = None
        self.atom_end = set(ATOM_END)
        self.atom_end_or_escape_re = re.compile(
            "|".join(re.escape(ch) for ch in sorted(ATOM_END | {"\\"}))
        )

    def atom(self, token: str) -> sexpdata.Symbol:
        return sexpdata.Symbol(token)


def strip_known_defects(content: str) -> str:
    """Remove token sequences known to corrupt bracket balance."""
    return content.replace(STRING_QUOTE_DEFECT, "")


def measure_depth(content: str) -> int:
    """Return the deepest parenthesis nesting, ignoring quoted text."""
    depth = 0
    deepest = 0
    i = 0
    while i < len(content):
        ch = content[i]
        if ch == '"':
            i += 1
            while i < len(content):
                if content[i] == "\\" and i + 1 < len(content):
                    i += 2
                    continue
                if content[i] == '"':
                    break
                i += 1
        elif ch == "(":
            depth += 1
            deepest = max(deepest, depth)
        elif ch == ")":
            depth -= 1
        i += 1
    return deepest


def read_sexp(content: str, max_depth: int = DEFAULT_MAX_DEPTH) -> list[Any]:
    """Read DSN text into a nested list tree.

    The caller is expected to have applied :func:`strip_known_defects`.

    Args:
        content: Raw DSN text.
        max_depth: Maximum nesting depth accepted before reading.

    Returns:
        The root expression. Atoms are still ``sexpdata`` wrappers; pass the
        tree through :func:`normalize_atoms` before interpreting it.

    Raises:
        DepthLimitError: If nesting exceeds ``max_depth``.
        DsnReadError: If the text is not exactly one balanced S-expression.
    """
    if not content.strip():
        raise DsnReadError("Empty DSN document")

    depth = measure_depth(content)
    if depth > max_depth:
        raise DepthLimitError(
            f"S-expression nesting depth {depth} exceeds limit {max_depth}",
            details={"depth": depth, "max_depth": max_depth},
        )

    try:
        expressions = DsnSexpParser(content).parse()
    except (sexpdata.ExpectClosingBracket, sexpdata.ExpectNothing, sexpdata.ExpectSExp) as e:
        raise DsnReadError(f"Cannot parse DSN text: {e}") from e
    except (AttributeError, IndexError) as e:
        # sexpdata reports an unterminated string or trailing escape this way
        raise DsnReadError(f"Cannot parse DSN text: unterminated token ({e})") from e

    if len(expressions) != 1 or not isinstance(expressions[0], list):
        raise DsnReadError(
            f"Expected a single top-level expression, found {len(expressions)}",
            details={"count": len(expressions)},
        )
    return expressions[0]


def normalize_atoms(data: Any) -> Any:
    """Replace sexpdata wrappers with plain strings, in place.

    Lists and dict values are rewritten where they stand; the same object is
    returned so an atom root can be normalized too. Running this on an
    already-normalized tree changes nothing.
    """
    if isinstance(data, list):
        for i, item in enumerate(data):
            data[i] = normalize_atoms(item)
        return data
    if isinstance(data, dict):
        for key, value in data.items():
            data[key] = normalize_atoms(value)
        return data
    if isinstance(data, sexpdata.Quoted):
        inner = normalize_atoms(data.x)
        return "'" + inner if isinstance(inner, str) else inner
    if isinstance(data, bool):
        return "t" if data else "nil"
    return str(data)


def load_dsn_file(path: Path) -> str:
    """Read a DSN file and return its text.

    Raises:
        InvalidFileFormatError: If the file cannot be read or is not an
            S-expression document.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidFileFormatError(f"Cannot read file: {e}")

    if not content.strip().startswith("("):
        raise InvalidFileFormatError(f"Not a valid S-expression file: {path}")
    return content
