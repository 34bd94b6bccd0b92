"""Port: output store — where harvested documents end up."""

from __future__ import annotations

from typing import Any, Protocol


class OutputStore(Protocol):
    """Abstract contract for persisting one named JSON document."""

    def write(self, filename: str, payload: Any) -> None:
        ...
