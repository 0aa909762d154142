"""Collected warnings for keys and sections the parser skips."""

from __future__ import annotations

from typing import Iterator

from pydantic import BaseModel

from dsn_json.logging_config import get_logger

logger = get_logger("diagnostics")


class Diagnostic(BaseModel):
    model_config = {"frozen": True}

    path: str
    key: str
    message: str


class Diagnostics:
    """Record of every warn-and-skip decision made during one parse.

    Each entry is also logged at WARNING so command-line users see it.
    """

    def __init__(self) -> None:
        self.entries: list[Diagnostic] = []

    def warn(self, path: str, key: str, message: str | None = None) -> Diagnostic:
        entry = Diagnostic(
            path=path,
            key=key,
            message=message or f"Ignoring unrecognized key '{key}' in {path}",
        )
        self.entries.append(entry)
        logger.warning("%s", entry.message)
        return entry

    def keys(self) -> list[str]:
        return [entry.key for entry in self.entries]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
