from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Generic, List, Optional, Protocol, Sequence, TypeVar

from .types import GlyphVariant, HolidayDefinition

T = TypeVar("T")


class HolidayProvider(Protocol):
    """External holiday-data collaborator."""
    def holidays(self, year: int, set_id: str) -> Sequence[HolidayDefinition]: ...


class GlyphLookup(Protocol):
    """External glyph-asset collaborator; returns a GlyphAsset or None."""
    def lookup(self, symbol: str, variant: GlyphVariant = GlyphVariant.COLOR): ...


@dataclass
class Registry(Generic[T]):
    kind: str
    _items: Dict[str, T] = field(default_factory=dict)

    def get(self, name: str) -> T:
        if name not in self._items:
            raise KeyError(f"Unknown {self.kind} '{name}'. Available: {sorted(self._items)}")
        return self._items[name]

    def find(self, name: str) -> Optional[T]:
        return self._items.get(name)

    def list(self) -> List[str]:
        return sorted(self._items.keys())

    def register(self, name: str, item: T, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._items):
            raise KeyError(f"{self.kind.capitalize()} '{name}' already exists. Use overwrite=True to replace.")
        self._items[name] = item

    def __contains__(self, name: object) -> bool:
        return name in self._items
