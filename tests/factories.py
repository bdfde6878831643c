"""Builders for host payloads used across the transform tests."""

from __future__ import annotations

from saleind.constants import EventKind
from saleind.core.config import IndexerConfig
from saleind.core.models import Block
from saleind.decoding.selectors import SELECTOR_KEYS

NAMING_CONTRACT = 0x6AC597F8116F886FA1C97A23FA4E08299975ECAF6B598873CA6792B9BBFB678
ETH_CONTRACT = 0x49D36570D4E46F48E99674BD3FCC84644DDD6B96F7C741B1562B82F9E004DC7
REFERRAL_CONTRACT = 0x2B6F1FEA4A0ACF9F2B1F0E9D7E1F9E0C5C5E7B0C7E8D1F4A3B2C1D0E9F8A7B6
RENEWAL_CONTRACT = 0x1C5F2A8E3B4D6C7A9E0F1B2C3D4E5F6A7B8C9D0E1F2A3B4C5D6E7F8A9B0C1D2
TAX_CONTRACT = 0x3F2E1D0C9B8A7F6E5D4C3B2A1F0E9D8C7B6A5F4E3D2C1B0A9F8E7D6C5B4A3
USDC_CONTRACT = 0x53C91253BC9682C04929CA02ED00B3E423F6710D2EE7E0D5EBB06F3ECF368A8

BUYER = "0x" + "0ab1" * 16
OTHER_BUYER = "0x" + "0cd2" * 16

ONE_ETH = 10**18


def felt(value: int) -> str:
    return hex(value)


def make_config(**overrides) -> IndexerConfig:
    fields = dict(
        naming_contract=NAMING_CONTRACT,
        eth_contract=ETH_CONTRACT,
        referral_contract=REFERRAL_CONTRACT,
        renewal_contract=RENEWAL_CONTRACT,
        tax_contract=TAX_CONTRACT,
        token_contracts=(ETH_CONTRACT, USDC_CONTRACT),
        stream_url="https://mainnet.starknet.a5a.ch",
        starting_block=400_000,
        db_name="starknetid",
        mongo_connection_string="mongodb://localhost:27017",
    )
    fields.update(overrides)
    return IndexerConfig(**fields)


def make_event(
    kind: EventKind | None,
    data: list[str],
    *,
    tx_hash: str = "0x1",
    from_address: int = 0,
    extra_keys: tuple[str, ...] = (),
    selector: int | None = None,
) -> dict:
    """Wire-shaped event + transaction, as the host streams it."""
    key = selector if selector is not None else SELECTOR_KEYS[kind]
    return {
        "event": {
            "fromAddress": felt(from_address),
            "keys": [felt(key), *extra_keys],
            "data": list(data),
        },
        "transaction": {"hash": tx_hash},
    }


def make_block(events: list[dict], timestamp_ms: int = 1_700_000_000_000) -> Block:
    return Block.model_validate({"header": {"timestamp": timestamp_ms}, "events": events})


def transfer(payer: str, to: int, amount: int, *, tx_hash: str = "0x1", token: int = ETH_CONTRACT) -> dict:
    low, high = amount & (2**128 - 1), amount >> 128
    return make_event(
        EventKind.TRANSFER,
        [payer, felt(to), felt(low), felt(high)],
        tx_hash=tx_hash,
        from_address=token,
    )


def domain_update(labels: list[int], expiry: int, *, tx_hash: str = "0x1", owner: int = 0x42) -> dict:
    data = [felt(len(labels)), *(felt(label) for label in labels), felt(owner), "0x0", felt(expiry)]
    return make_event(EventKind.DOMAIN_UPDATE, data, tx_hash=tx_hash, from_address=NAMING_CONTRACT)


def sale_metadata(label: int, meta_hash: str, *, tx_hash: str = "0x1") -> dict:
    return make_event(EventKind.SALE_METADATA, [felt(label), meta_hash], tx_hash=tx_hash, from_address=NAMING_CONTRACT)


def referral(comm: int, sponsor: int, *, tx_hash: str = "0x1") -> dict:
    # on_commission(timestamp, amount: u256, sponsor_addr)
    data = [felt(1_700_000_000), felt(comm), "0x0", felt(sponsor)]
    return make_event(EventKind.REFERRAL, data, tx_hash=tx_hash, from_address=REFERRAL_CONTRACT)


def auto_renewed(label: int, renewer: str, *, tx_hash: str = "0x1") -> dict:
    return make_event(EventKind.AUTO_RENEW, [felt(label), renewer, "0x16d", "0x0"], tx_hash=tx_hash, from_address=RENEWAL_CONTRACT)
