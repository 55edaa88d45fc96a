"""Cart storage port and adapters.

The cart lives on the shopper's device. ``CartStorage`` is the seam: the
store hands it plain dicts and never cares where they end up.
"""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path


class CartStorage(ABC):
    """Durable client-side storage for the serialised cart."""

    @abstractmethod
    def load(self) -> list[dict] | None:
        """Return the saved lines, or None when nothing was saved.

        Raises ValueError when the stored data cannot be decoded.
        """

    @abstractmethod
    def save(self, lines: list[dict]) -> None:
        """Replace the saved lines. May raise OSError."""


class InMemoryCartStorage(CartStorage):
    def __init__(self, initial: list[dict] | None = None) -> None:
        self.saved = initial
        self.save_count = 0

    def load(self) -> list[dict] | None:
        return self.saved

    def save(self, lines: list[dict]) -> None:
        self.saved = list(lines)
        self.save_count += 1


class JsonFileCartStorage(CartStorage):
    """Cart persisted as a JSON document on the local filesystem."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> list[dict] | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Cart file {self.path} is not valid JSON") from exc
        if data is None:
            return None
        if not isinstance(data, list):
            raise ValueError(f"Cart file {self.path} does not hold a list of lines")
        return data

    def save(self, lines: list[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(lines), encoding="utf-8")
        os.replace(tmp_path, self.path)
