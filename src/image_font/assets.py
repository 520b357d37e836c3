"""Handle-keyed asset stores and the raw RGBA8 image type."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Dict, Generic, List, Optional, TypeVar

from PIL import Image as PILImage

T = TypeVar("T")

RGBA8_SRGB = "rgba8_srgb"
BYTES_PER_PIXEL = 4

_store_ids = itertools.count(1)


@dataclass(frozen=True)
class Handle(Generic[T]):
    """Opaque reference to a value held by one `Assets` store."""

    store_id: int
    index: int

    def __repr__(self) -> str:
        return f"Handle({self.store_id}:{self.index})"


@dataclass(frozen=True)
class AssetEvent(Generic[T]):
    kind: str  # "added", "modified" or "removed"
    handle: Handle[T]


class Assets(Generic[T]):
    """A store of values keyed by `Handle`.

    Every mutation is recorded as an `AssetEvent` until `drain_events` is
    called, which lets callers find out which fonts changed since the last
    pass.
    """

    def __init__(self) -> None:
        self._store_id = next(_store_ids)
        self._next_index = 0
        self._values: Dict[Handle[T], T] = {}
        self._events: List[AssetEvent[T]] = []

    def reserve_handle(self) -> Handle[T]:
        handle: Handle[T] = Handle(self._store_id, self._next_index)
        self._next_index += 1
        return handle

    def add(self, value: T) -> Handle[T]:
        handle = self.reserve_handle()
        self.insert(handle, value)
        return handle

    def insert(self, handle: Handle[T], value: T) -> None:
        if handle.store_id != self._store_id:
            raise ValueError(f"{handle!r} does not belong to this store")
        kind = "modified" if handle in self._values else "added"
        self._values[handle] = value
        self._events.append(AssetEvent(kind, handle))

    def get(self, handle: Handle[T]) -> Optional[T]:
        return self._values.get(handle)

    def remove(self, handle: Handle[T]) -> Optional[T]:
        value = self._values.pop(handle, None)
        if value is not None:
            self._events.append(AssetEvent("removed", handle))
        return value

    def contains(self, handle: Handle[T]) -> bool:
        return handle in self._values

    def drain_events(self) -> List[AssetEvent[T]]:
        events, self._events = self._events, []
        return events

    def __len__(self) -> int:
        return len(self._values)


@dataclass
class Image:
    """Raw RGBA8 pixel buffer, rows top to bottom."""

    width: int
    height: int
    data: bytes = field(repr=False)
    sampler: str = "default"
    format: str = RGBA8_SRGB

    @classmethod
    def empty(cls) -> Image:
        return cls(width=0, height=0, data=b"", sampler="nearest")

    @classmethod
    def from_pil(cls, image: PILImage.Image, sampler: str = "default") -> Image:
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        width, height = image.size
        return cls(width=width, height=height, data=image.tobytes(), sampler=sampler)

    def to_pil(self) -> PILImage.Image:
        return PILImage.frombytes("RGBA", (self.width, self.height), self.data)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        offset = (y * self.width + x) * BYTES_PER_PIXEL
        r, g, b, a = self.data[offset : offset + BYTES_PER_PIXEL]
        return r, g, b, a
