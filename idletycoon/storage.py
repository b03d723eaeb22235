from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Durable string key-value store, the shape of browser localStorage."""

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    def keys(self) -> list[str]: ...


class MemoryStore(KeyValueStore):
    """In-process store; contents vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileStore(KeyValueStore):
    """A single JSON file mapping keys to string values.

    Writes go to a temporary file in the same directory and are moved into
    place with ``os.replace`` so a crash mid-write never leaves a truncated
    store. A file that cannot be parsed is treated as empty. A file that
    cannot be read reads as empty, but ``set`` raises the ``OSError``
    instead of replacing it.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self, strict: bool = False) -> dict[str, str]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except OSError as exc:
            if strict:
                raise
            logger.warning("Could not read store %s: %s", self.path, exc)
            return {}
        except (ValueError, RecursionError) as exc:
            logger.warning("Could not parse store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store %s does not hold a JSON object; ignoring it", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        # An unreadable file may still hold other keys; refuse to overwrite it.
        data = self._read(strict=True)
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(
            dir=self.path.parent, prefix=self.path.name, suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    def keys(self) -> list[str]:
        return list(self._read())
