"""Filesystem adapter — implements the OutputStore port."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

logger = logging.getLogger(__name__)

_ANY = TypeAdapter(Any)


class JsonFileStore:
    """Writes pretty-printed JSON documents into one output directory.

    Payloads may mix plain dicts and domain dataclasses; pydantic handles
    the conversion.
    """

    def __init__(self, output_dir: str | Path) -> None:
        self._dir = Path(output_dir)

    @property
    def directory(self) -> Path:
        return self._dir

    def ensure_directory(self) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)

    def write(self, filename: str, payload: Any) -> None:
        self.ensure_directory()
        path = self._dir / filename
        path.write_bytes(_ANY.dump_json(payload, indent=2))
        logger.info("Wrote %s", path.name)
