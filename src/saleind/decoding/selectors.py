"""Event selectors and the per-indexer dispatch table.

A selector is the starknet keccak of the declared event name: keccak256 of
the name, truncated to 250 bits so it fits a felt. Selectors are computed
once at import (`SELECTOR_KEYS`) and never per event.

- `get_selector_from_name(name)` → int selector
- `SELECTOR_KEYS` → EventKind → selector
- `SelectorTable` → selector → EventKind, restricted to the kinds one indexer handles
"""

from __future__ import annotations

from collections.abc import Iterable

from eth_utils import keccak

from saleind.constants import SELECTOR_MASK, EventKind
from saleind.core.models import RawEvent
from saleind.decoding.utils import felt_to_int


def starknet_keccak(data: bytes) -> int:
    """keccak256 of `data` masked to the low 250 bits."""
    return int.from_bytes(keccak(data), "big") & SELECTOR_MASK


def get_selector_from_name(name: str) -> int:
    return starknet_keccak(name.encode("ascii"))


def format_felt(value: int) -> str:
    """Render an integer felt as unpadded lowercase 0x-hex."""
    return hex(value)


SELECTOR_KEYS: dict[EventKind, int] = {kind: get_selector_from_name(kind.value) for kind in EventKind}


class SelectorTable:
    """Lookup table from selector to event kind, built once per indexer."""

    def __init__(self, kinds: Iterable[EventKind]) -> None:
        self._by_selector: dict[int, EventKind] = {SELECTOR_KEYS[kind]: kind for kind in kinds}

    def __contains__(self, kind: object) -> bool:
        return kind in self._by_selector.values()

    def __len__(self) -> int:
        return len(self._by_selector)

    def kinds(self) -> list[EventKind]:
        return list(self._by_selector.values())

    def selectors(self) -> list[str]:
        """Hex selectors in declaration order, as the host filter expects them."""
        return [format_felt(selector) for selector in self._by_selector]

    def kind_of(self, event: RawEvent) -> EventKind | None:
        """Classify an event by its leading key; None when it has no key or an unknown one."""
        if not event.keys:
            return None
        return self._by_selector.get(felt_to_int(event.keys[0]))
