"""In-memory async preference store."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping


class InMemorySettingsStore:
    """Key/value store with the host storage's async read surface."""

    def __init__(self, values: Mapping[str, object] | None = None) -> None:
        self._values: dict[str, object] = dict(values or {})
        self.reads: list[str] = []

    async def get(self, key: str) -> object | None:
        self.reads.append(key)
        # Yield like a real storage round trip.
        await asyncio.sleep(0)
        return self._values.get(key)

    async def set(self, key: str, value: object) -> None:
        await asyncio.sleep(0)
        self._values[key] = value

    def snapshot(self) -> dict[str, object]:
        return dict(self._values)
