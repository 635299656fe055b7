from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence, Tuple

Color = Tuple[int, int, int]

UNPAINTED_TOKEN = "none"


class InvalidIndex(IndexError):
    """Raised when a palette index is outside the palette."""


@dataclass(frozen=True)
class PaletteEntry:
    name: str
    value: Color


def _validate_entries(entries: Sequence[PaletteEntry]) -> None:
    if not entries:
        raise ValueError("palette must contain at least one color")
    seen = set()
    for entry in entries:
        name = entry.name
        if not name:
            raise ValueError("palette color names must be non-empty")
        if any(ch in name for ch in (",", "\n", "\r")):
            raise ValueError(f"palette color name {name!r} contains a separator")
        if name == UNPAINTED_TOKEN:
            raise ValueError(f"palette color name {name!r} is reserved for unpainted cells")
        if name in seen:
            raise ValueError(f"duplicate palette color name {name!r}")
        if len(entry.value) != 3 or not all(0 <= int(c) <= 255 for c in entry.value):
            raise ValueError(f"palette color {name!r} must be an RGB triplet in 0-255")
        seen.add(name)


class PaletteStore:
    """Fixed ordered palette plus the currently selected index."""

    def __init__(self, entries: Iterable[PaletteEntry]) -> None:
        self._entries: Tuple[PaletteEntry, ...] = tuple(entries)
        _validate_entries(self._entries)
        self._selection = 0

    @classmethod
    def from_config(cls, entries: Iterable[Mapping[str, Any]]) -> "PaletteStore":
        parsed = []
        for raw in entries:
            color = raw.get("color", ())
            parsed.append(
                PaletteEntry(
                    name=str(raw.get("name", "")),
                    value=tuple(int(c) for c in color),
                )
            )
        return cls(parsed)

    def __len__(self) -> int:
        return len(self._entries)

    def colors(self) -> Tuple[PaletteEntry, ...]:
        return self._entries

    def _check(self, index: int) -> int:
        if not 0 <= index < len(self._entries):
            raise InvalidIndex(f"palette index {index} out of range 0..{len(self._entries) - 1}")
        return index

    def select(self, index: int) -> None:
        self._selection = self._check(index)

    def current_selection(self) -> int:
        return self._selection

    def current_entry(self) -> PaletteEntry:
        return self._entries[self._selection]

    def name_of(self, index: int) -> str:
        return self._entries[self._check(index)].name

    def value_of(self, index: int) -> Color:
        return self._entries[self._check(index)].value
