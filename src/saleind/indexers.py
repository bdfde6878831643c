"""Host-facing indexer definitions.

Each indexer pairs a transform with what the host runtime needs to drive it:
the event filter (emitter address + selector per event kind), the target
collection and whether the sink upserts entities or appends rows.

Filters are built from the same `SelectorTable` the transform dispatches on,
so the delivered selectors and the handled kinds cannot drift apart.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from saleind.constants import EventKind
from saleind.core.config import IndexerConfig
from saleind.core.interfaces import IBlockTransform
from saleind.decoding.selectors import SELECTOR_KEYS, SelectorTable, format_felt
from saleind.transforms import auto_renew_updates, sales, tax_txs

Sources = Callable[[IndexerConfig], list[tuple[int, EventKind]]]


@dataclass(frozen=True)
class IndexerDefinition:
    name: str
    collection_name: str
    entity_mode: bool
    selectors: SelectorTable
    sources: Sources  # (emitter address, event kind) pairs to subscribe to
    transform: IBlockTransform


def _sales_sources(cfg: IndexerConfig) -> list[tuple[int, EventKind]]:
    return [
        (cfg.naming_contract, EventKind.DOMAIN_UPDATE),
        (cfg.naming_contract, EventKind.SALE_METADATA),
        (cfg.eth_contract, EventKind.TRANSFER),
        (cfg.referral_contract, EventKind.REFERRAL),
        (cfg.renewal_contract, EventKind.AUTO_RENEW),
    ]


def _auto_renew_sources(cfg: IndexerConfig) -> list[tuple[int, EventKind]]:
    return [
        (cfg.renewal_contract, EventKind.UPDATE_AUTO_RENEW),
        (cfg.renewal_contract, EventKind.DISABLE_AUTO_RENEW),
    ]


def _tax_sources(cfg: IndexerConfig) -> list[tuple[int, EventKind]]:
    return [(token, EventKind.TRANSFER) for token in cfg.token_contracts]


INDEXERS: dict[str, IndexerDefinition] = {
    d.name: d
    for d in (
        IndexerDefinition(
            name="sales",
            collection_name="sales",
            entity_mode=False,
            selectors=sales.SELECTORS,
            sources=_sales_sources,
            transform=sales.transform,
        ),
        IndexerDefinition(
            name="auto_renew_updates",
            collection_name="auto_renew_updates",
            entity_mode=True,
            selectors=auto_renew_updates.SELECTORS,
            sources=_auto_renew_sources,
            transform=auto_renew_updates.transform,
        ),
        IndexerDefinition(
            name="tax_txs",
            collection_name="tax_txs",
            entity_mode=False,
            selectors=tax_txs.SELECTORS,
            sources=_tax_sources,
            transform=tax_txs.transform,
        ),
    )
}


def get_indexer(name: str) -> IndexerDefinition:
    try:
        return INDEXERS[name]
    except KeyError:
        raise ValueError(f"unknown indexer {name!r}; expected one of {sorted(INDEXERS)}") from None


def build_filter(definition: IndexerDefinition, config: IndexerConfig) -> dict[str, Any]:
    """Event filter declaration consumed by the host stream."""
    events = []
    for address, kind in definition.sources(config):
        if kind not in definition.selectors:
            raise ValueError(f"{definition.name} subscribes to {kind.value} but does not handle it")
        events.append(
            {
                "fromAddress": format_felt(address),
                "keys": [format_felt(SELECTOR_KEYS[kind])],
                "includeTransaction": True,
                "includeReceipt": False,
            }
        )
    return {"header": {"weak": True}, "events": events}


def host_config(definition: IndexerDefinition, config: IndexerConfig) -> dict[str, Any]:
    """Full runtime declaration for the host: stream, filter and sink options."""
    return {
        "streamUrl": config.stream_url,
        "startingBlock": config.starting_block,
        "network": "starknet",
        "finality": config.finality,
        "filter": build_filter(definition, config),
        "sinkType": "mongo",
        "sinkOptions": {
            "connectionString": config.mongo_connection_string,
            "database": config.db_name,
            "collectionName": definition.collection_name,
            "entityMode": definition.entity_mode,
        },
    }
