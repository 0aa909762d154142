"""Parse Specctra DSN printed-circuit-board designs into validated records."""

from dsn_json.diagnostics import Diagnostic, Diagnostics
from dsn_json.parser import parse_dsn, parse_dsn_to_json

__version__ = "0.1.0"

__all__ = [
    "Diagnostic",
    "Diagnostics",
    "__version__",
    "parse_dsn",
    "parse_dsn_to_json",
]
