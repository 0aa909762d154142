"""Checks on the board file named on the command line."""

from __future__ import annotations

from pathlib import Path

from dsn_json.models.errors import InvalidPathError

# Design files and the routed session files FreeRouting writes back
DSN_EXTENSIONS = frozenset({".dsn", ".ses"})


def validate_dsn_path(path: str, check_extension: bool = True) -> Path:
    """Resolve ``path`` to an existing Specctra design or session file.

    Suffixes are compared case-insensitively since Windows exporters write
    ``BOARD.DSN``. Pass ``check_extension=False`` for files saved under
    another name.

    Raises:
        InvalidPathError: With ``details["reason"]`` set to ``empty``,
            ``missing``, ``not_a_file`` or ``extension``.
    """
    if not path:
        raise InvalidPathError("No DSN file given", details={"reason": "empty"})

    resolved = Path(path).expanduser().resolve()
    if not resolved.exists():
        raise InvalidPathError(
            f"File not found: {resolved}", details={"reason": "missing", "path": str(resolved)}
        )
    if not resolved.is_file():
        raise InvalidPathError(
            f"Not a file: {resolved}", details={"reason": "not_a_file", "path": str(resolved)}
        )

    suffix = resolved.suffix.lower()
    if check_extension and suffix not in DSN_EXTENSIONS:
        raise InvalidPathError(
            f"Expected a .dsn or .ses file, got '{resolved.suffix}': {resolved}",
            details={"reason": "extension", "path": str(resolved)},
        )
    return resolved
